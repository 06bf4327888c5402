"""Exceptions raised while preparing or removing a NoCloud seed."""


class CloudSeedError(Exception):
    """Base class for cloudseed failures."""


class ConfigError(CloudSeedError):
    """Raised when a configuration file cannot be loaded."""


class SourceReadError(CloudSeedError):
    """Raised when a document's source file cannot be read."""


class DirectoryCreateError(CloudSeedError):
    """Raised when the seed directory cannot be created."""


class SeedWriteError(CloudSeedError):
    """Raised when a document cannot be written to the seed directory."""


class CleanupError(CloudSeedError):
    """Raised when the seed directory cannot be removed."""
