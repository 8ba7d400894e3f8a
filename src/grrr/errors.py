"""Errors surfaced to callers of the bundle pipeline."""


class GrrrError(Exception):
    pass


class CollectionError(GrrrError):
    """Raised when the dropped paths cannot be collected at all."""


class ManifestWriteError(GrrrError):
    """Raised when the manifest file cannot be replaced or written."""


class LaunchError(GrrrError):
    """Raised when the resource compiler cannot be started."""
