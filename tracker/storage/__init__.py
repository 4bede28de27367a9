"""
Storage layer for the tracker.

Holds the backends that persist the database snapshot and the store that
applies epic/story operations on top of them.
"""

from tracker.storage.backend import Database, JSONFileDatabase, MemoryDatabase
from tracker.storage.errors import (
    EpicNotFound,
    NotFound,
    StateFormatError,
    StorageIOError,
    StoryNotFound,
    StoryNotInEpic,
    TrackerError,
)
from tracker.storage.store import ProjectsDatabase

__all__ = [
    "Database",
    "JSONFileDatabase",
    "MemoryDatabase",
    "ProjectsDatabase",
    "TrackerError",
    "NotFound",
    "EpicNotFound",
    "StoryNotFound",
    "StoryNotInEpic",
    "StorageIOError",
    "StateFormatError",
]
