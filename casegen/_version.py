"""Centralized version constant for casegen."""

# Note: CASEGEN_GIT_COMMIT should be populated at build time so wheels/sdists
# carry the commit even when git metadata is unavailable at runtime.
CASEGEN_VERSION = "1.0.0"
CASEGEN_GIT_COMMIT = "unknown"

__all__ = ["CASEGEN_VERSION", "CASEGEN_GIT_COMMIT"]
