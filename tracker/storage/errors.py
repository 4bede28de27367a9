"""
Error types raised by the storage layer.

NotFound errors are raised before any mutation, so persisted state is never
touched when one is raised. Backend errors carry the original exception as
``__cause__``.
"""

from pathlib import Path


class TrackerError(Exception):
    """Base class for every error the tracker reports to the user."""
    pass


class NotFound(TrackerError):
    """Referenced epic or story does not exist."""
    pass


class EpicNotFound(NotFound):

    def __init__(self, epic_id: int):
        self.epic_id = epic_id
        super().__init__(f"Epic {epic_id} not found")


class StoryNotFound(NotFound):

    def __init__(self, story_id: int):
        self.story_id = story_id
        super().__init__(f"Story {story_id} not found")


class StoryNotInEpic(NotFound):
    """Story id is not listed by the given epic (it may exist under another)."""

    def __init__(self, epic_id: int, story_id: int):
        self.epic_id = epic_id
        self.story_id = story_id
        super().__init__(f"Story {story_id} not found in epic {epic_id}")


class StorageIOError(TrackerError):
    """Underlying resource could not be opened, read, or written."""

    def __init__(self, path: Path | str | None, message: str):
        self.path = path
        super().__init__(message + (f": {path}" if path else ""))


class StateFormatError(TrackerError):
    """Persisted payload does not decode into a valid State."""

    def __init__(self, path: Path | str | None, message: str):
        self.path = path
        super().__init__((f"{path}: " if path else "") + message)
