"""
Error taxonomy for guest mutations and synchronization
"""


class GuestSyncError(Exception):
    """Base class for every error raised by the guest core"""


class ValidationError(GuestSyncError):
    """A required field is blank; rejected before any I/O"""


class ConflictError(GuestSyncError):
    """A guest with the same id already exists locally"""

    def __init__(self, guest_id: str):
        super().__init__("Guest already exists")
        self.guest_id = guest_id


class RemoteUnavailable(GuestSyncError):
    """The remote collection could not be reached or rejected a call"""


class BatchCommitFailed(RemoteUnavailable):
    """A batched remote write was not applied"""


class LocalStoreError(GuestSyncError):
    """The local store failed to read or write"""
