"""
Tests for the version catalog — ordering, validation, lookup.
"""

import pytest
from pydantic import ValidationError

from pyaltinstall.core.errors import CatalogError
from pyaltinstall.core.models.catalog import VersionCatalog, VersionEntry, version_key


class TestVersionEntry:
    def test_executable_name(self):
        entry = VersionEntry(short_label="3.12", full_version="3.12.1")
        assert entry.executable == "python3.12"

    def test_frozen(self):
        entry = VersionEntry(short_label="3.12", full_version="3.12.1")
        with pytest.raises(ValidationError):
            entry.full_version = "3.12.2"

    def test_rejects_mismatched_release(self):
        with pytest.raises(ValueError):
            VersionEntry(short_label="3.12", full_version="3.11.7")

    def test_rejects_bad_short_label(self):
        with pytest.raises(ValueError):
            VersionEntry(short_label="3", full_version="3.0.1")

    def test_accepts_prerelease(self):
        entry = VersionEntry(short_label="3.14", full_version="3.14.0rc1")
        assert entry.full_version == "3.14.0rc1"


class TestVersionKey:
    def test_numeric_not_lexical(self):
        assert version_key("3.9") < version_key("3.10")
        assert sorted(["3.10", "3.9", "3.13"], key=version_key) == ["3.9", "3.10", "3.13"]


class TestVersionCatalog:
    def test_default_catalog(self):
        catalog = VersionCatalog.default()
        assert catalog.labels() == ["3.9", "3.10", "3.11", "3.12", "3.13"]
        assert catalog.get("3.12").full_version == "3.12.1"
        assert len(catalog) == 5

    def test_sorted_at_construction(self):
        catalog = VersionCatalog.from_mapping({"3.13": "3.13.0", "3.9": "3.9.18", "3.10": "3.10.13"})
        assert [e.short_label for e in catalog] == ["3.9", "3.10", "3.13"]

    def test_latest(self):
        catalog = VersionCatalog.from_mapping({"3.10": "3.10.13", "3.9": "3.9.18"})
        assert catalog.latest().short_label == "3.10"

    def test_latest_empty(self):
        assert VersionCatalog([]).latest() is None

    def test_duplicate_labels_rejected(self):
        entries = [
            VersionEntry(short_label="3.12", full_version="3.12.1"),
            VersionEntry(short_label="3.12", full_version="3.12.2"),
        ]
        with pytest.raises(CatalogError, match="Duplicate"):
            VersionCatalog(entries)

    def test_invalid_mapping_raises_catalog_error(self):
        with pytest.raises(CatalogError):
            VersionCatalog.from_mapping({"3.12": "not-a-version"})

    def test_contains_and_get_missing(self):
        catalog = VersionCatalog.default()
        assert "3.11" in catalog
        assert "2.7" not in catalog
        assert catalog.get("2.7") is None

    def test_to_dict_preserves_order(self):
        catalog = VersionCatalog.from_mapping({"3.11": "3.11.7", "3.9": "3.9.18"})
        assert list(catalog.to_dict()) == ["3.9", "3.11"]
