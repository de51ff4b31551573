class ManagerioError(Exception):
    """Base exception for all Managerio errors."""
    pass

class RecoverableError(ManagerioError):
    """An error that can be recovered from without data loss."""
    pass

class FatalError(ManagerioError):
    """An error that leaves the in-memory or persisted data unusable."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in the stored blob, to records that fail the schema"""
    pass

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    pass
