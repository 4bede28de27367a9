"""
Storage backends for the tracker database.

A backend round-trips a whole State snapshot. There is no partial update
path: ``write_db`` always replaces everything ``read_db`` would return.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from tracker.lib.validate import ValidationError, validate_state, validate_state_before_write
from tracker.models import State
from tracker.storage.errors import StateFormatError, StorageIOError

logger = logging.getLogger(__name__)


class Database(ABC):
    """Read-whole / write-whole capability consumed by ProjectsDatabase."""

    @abstractmethod
    def read_db(self) -> State:
        """Return the full persisted state.

        Raises:
            StorageIOError: resource could not be opened or read
            StateFormatError: payload does not decode into a State
        """

    @abstractmethod
    def write_db(self, state: State) -> None:
        """Replace the persisted state.

        Raises:
            StorageIOError: resource could not be written
        """


class JSONFileDatabase(Database):
    """Database stored as a single JSON document on disk.

    Writes go to a sibling ``.tmp`` file which is then renamed over the
    target, so a reader never observes a half-written document.
    """

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)

    def __repr__(self) -> str:
        return f"JSONFileDatabase({str(self.file_path)!r})"

    @classmethod
    def init(cls, file_path: Path | str) -> "JSONFileDatabase":
        """Create an empty database at file_path unless one already exists."""
        db = cls(file_path)
        if db.file_path.exists():
            return db

        try:
            db.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(db.file_path.parent, f"Cannot create database directory ({e.strerror})") from e

        db.write_db(State.empty())
        logger.info(f"Initialized empty database at {db.file_path}")
        return db

    def read_db(self) -> State:
        try:
            text = self.file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StateFormatError(self.file_path, f"Database is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageIOError(self.file_path, f"Cannot read database ({e.strerror})") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StateFormatError(self.file_path, f"Invalid JSON: {e}") from e

        try:
            validate_state(data)
        except ValidationError as e:
            raise StateFormatError(self.file_path, str(e)) from e

        try:
            state = State.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StateFormatError(self.file_path, f"Malformed database: {e}") from e

        logger.debug(
            f"Read {len(state.epics)} epic(s), {len(state.stories)} story(s) from {self.file_path}"
        )
        return state

    def write_db(self, state: State) -> None:
        data = state.to_dict()
        try:
            validate_state_before_write(data, self.file_path)
        except ValidationError as e:
            raise StateFormatError(self.file_path, str(e)) from e

        tmp = self.file_path.with_name(self.file_path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp.replace(self.file_path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageIOError(self.file_path, f"Cannot write database ({e.strerror})") from e

        logger.debug(f"Wrote database to {self.file_path} (last_item_id={state.last_item_id})")


class MemoryDatabase(Database):
    """Volatile backend holding the last written snapshot.

    Reads and writes are deep copies, so callers can never alias the stored
    state. ``reads`` and ``writes`` count backend calls.
    """

    def __init__(self, state: State | None = None):
        self._state = state.copy() if state is not None else State.empty()
        self.reads = 0
        self.writes = 0

    def read_db(self) -> State:
        self.reads += 1
        return self._state.copy()

    def write_db(self, state: State) -> None:
        self.writes += 1
        self._state = state.copy()
