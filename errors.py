class SweepError(Exception):
    """Base class for failures raised while sweeping rooms."""


class FetchError(SweepError):
    """The room snapshot could not be read; nothing was deleted."""


class DeleteError(SweepError):
    """A single room could not be removed."""

    def __init__(self, room_code: str, message: str = None):
        self.room_code = room_code
        super().__init__(message or f"Failed to delete room {room_code}")
