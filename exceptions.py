# Exception hierarchy for the archiver
#
# Network and URL-resolution failures are not exceptions here: they are
# isolated at the page, asset or link level and reported through logging.
# Only failures that must reach the caller are modelled below.


class ArchiverError(Exception):
    """Base exception for all archiver errors."""


class ArchiveWriteError(ArchiverError):
    """A directory or file for the archive could not be written."""

    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")


class ManifestError(ArchiverError):
    """A session manifest is missing, unreadable or malformed."""


class DuplicateSnapshotError(ArchiverError):
    """A page was added to the snapshot store more than once."""
