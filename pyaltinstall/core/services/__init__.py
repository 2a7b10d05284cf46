"""Services — presence checks, dependency install, builds, orchestration."""
