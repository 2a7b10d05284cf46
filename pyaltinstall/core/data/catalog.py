"""
L0 Data — built-in catalog, packages and build flags.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Short label → exact patch version fetched from python.org.
DEFAULT_VERSIONS: dict[str, str] = {
    "3.9": "3.9.18",
    "3.10": "3.10.13",
    "3.11": "3.11.7",
    "3.12": "3.12.1",
    "3.13": "3.13.0",
}

SOURCE_URL_TEMPLATE = (
    "https://www.python.org/ftp/python/{full_version}/Python-{full_version}.tgz"
)

DEFAULT_PREFIX = "/usr/local"
DEFAULT_WORKSPACE_ROOT = "/tmp"

# Interpreter executables are named <EXECUTABLE_STEM><short label>.
EXECUTABLE_STEM = "python"

# Debian/Ubuntu packages needed to build CPython with every optional
# stdlib module (ssl, readline, sqlite3, ctypes, lzma, tkinter, uuid, …).
BUILD_PACKAGES: list[str] = [
    "build-essential",
    "zlib1g-dev",
    "libncurses5-dev",
    "libgdbm-dev",
    "libnss3-dev",
    "libssl-dev",
    "libreadline-dev",
    "libffi-dev",
    "libsqlite3-dev",
    "wget",
    "libbz2-dev",
    "libxmlsec1-dev",
    "libxml2-dev",
    "liblzma-dev",
    "tk-dev",
    "uuid-dev",
]

# --prefix is appended separately from the configured prefix.
CONFIGURE_FLAGS: list[str] = [
    "--enable-optimizations",
    "--with-lto",
    "--enable-shared",
    "--with-system-ffi",
    "--with-computed-gotos",
    "--enable-loadable-sqlite-extensions",
]

# Shown in the interactive prompt for each version.
BUILD_TIME_HINT = "~5-15 minutes depending on your system"
DISK_SPACE_HINT = "~100MB"
