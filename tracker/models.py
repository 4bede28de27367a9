"""
Data models for the tracker.

Epics and stories share a single id namespace drawn from
``State.last_item_id``. Ownership is recorded on the epic side only.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum


class Status(str, Enum):
    """Lifecycle tag for epics and stories. Any status may follow any other."""

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def display(self) -> str:
        return _STATUS_DISPLAY[self]

    def __str__(self) -> str:
        return self.display

    @classmethod
    def parse(cls, text: str) -> "Status":
        """Parse a tag ("InProgress"), display text ("in progress", "in-progress")
        or menu number ("2").

        Raises:
            ValueError: text names no status
        """
        key = text.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        if key in _STATUS_ALIASES:
            return _STATUS_ALIASES[key]
        raise ValueError(f"Unknown status '{text}'")


_STATUS_DISPLAY = {
    Status.OPEN: "OPEN",
    Status.IN_PROGRESS: "IN PROGRESS",
    Status.RESOLVED: "RESOLVED",
    Status.CLOSED: "CLOSED",
}

_STATUS_ALIASES = {
    "open": Status.OPEN,
    "inprogress": Status.IN_PROGRESS,
    "resolved": Status.RESOLVED,
    "closed": Status.CLOSED,
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}


@dataclass
class Story:
    """A leaf unit of work. Does not know which epic owns it."""
    name: str
    description: str
    status: Status = Status.OPEN

    @classmethod
    def new(cls, name: str, description: str) -> "Story":
        return cls(name=name, description=description, status=Status.OPEN)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
        )


@dataclass
class Epic:
    """A top-level unit of work grouping stories.

    ``stories`` holds story ids in insertion order.
    """
    name: str
    description: str
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list)

    @classmethod
    def new(cls, name: str, description: str) -> "Epic":
        return cls(name=name, description=description, status=Status.OPEN, stories=[])

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "stories": list(self.stories),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Epic":
        return cls(
            name=data["name"],
            description=data["description"],
            status=Status(data["status"]),
            stories=[int(s) for s in data["stories"]],
        )


@dataclass
class State:
    """Root aggregate persisted as one JSON document."""
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "State":
        return cls(last_item_id=0, epics={}, stories={})

    def next_id(self) -> int:
        """Advance the shared counter and return the new id."""
        self.last_item_id += 1
        return self.last_item_id

    def copy(self) -> "State":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        # JSON object keys must be strings
        return {
            "last_item_id": self.last_item_id,
            "epics": {str(k): v.to_dict() for k, v in sorted(self.epics.items())},
            "stories": {str(k): v.to_dict() for k, v in sorted(self.stories.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "State":
        return cls(
            last_item_id=int(data["last_item_id"]),
            epics={int(k): Epic.from_dict(v) for k, v in data["epics"].items()},
            stories={int(k): Story.from_dict(v) for k, v in data["stories"].items()},
        )
