"""Exceptions raised by gcr_cleanup."""


class CleanupError(Exception):
    """Base class for every error gcr_cleanup raises itself."""


class ConfigError(CleanupError):
    """Bad --repository / --keep value. Raised before any network activity."""


class CredentialError(CleanupError):
    """The gcloud token command failed or wrote anything to stderr."""
