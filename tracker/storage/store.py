"""
Epic and story operations.

Every public operation reads the whole state from the backend, validates the
request, mutates the in-memory copy and writes the whole state back. Nothing
is cached between calls, so the backend is the single source of truth.
"""

import logging
from pathlib import Path

from tracker.models import Epic, State, Status, Story
from tracker.storage.backend import Database, JSONFileDatabase
from tracker.storage.errors import EpicNotFound, StoryNotFound, StoryNotInEpic

logger = logging.getLogger(__name__)


class ProjectsDatabase:
    """Owns id allocation and referential integrity between epics and stories."""

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def from_path(cls, file_path: Path | str) -> "ProjectsDatabase":
        """Build a store over the JSON file at file_path."""
        return cls(JSONFileDatabase(file_path))

    def read_db(self) -> State:
        return self.database.read_db()

    def _get_epic(self, state: State, epic_id: int) -> Epic:
        epic = state.epics.get(epic_id)
        if epic is None:
            logger.warning(f"Epic {epic_id} not found")
            raise EpicNotFound(epic_id)
        return epic

    def create_epic(self, epic: Epic) -> int:
        """Insert a new epic with no stories.

        Any stories listed on the passed epic are ignored.

        Returns:
            The id allocated for the epic
        """
        state = self.read_db()
        epic_id = state.next_id()
        state.epics[epic_id] = Epic(
            name=epic.name,
            description=epic.description,
            status=epic.status,
            stories=[],
        )
        self.database.write_db(state)
        logger.info(f"Created epic {epic_id}")
        return epic_id

    def create_story(self, story: Story, epic_id: int) -> int:
        """Insert a new story and append it to its epic.

        Args:
            story: Story to insert
            epic_id: Owning epic

        Returns:
            The id allocated for the story

        Raises:
            EpicNotFound: epic_id does not exist (nothing is persisted)
        """
        state = self.read_db()
        epic = self._get_epic(state, epic_id)

        story_id = state.next_id()
        state.stories[story_id] = Story(
            name=story.name,
            description=story.description,
            status=story.status,
        )
        epic.stories.append(story_id)
        self.database.write_db(state)
        logger.info(f"Created story {story_id} in epic {epic_id}")
        return story_id

    def delete_epic(self, epic_id: int) -> None:
        """Delete an epic together with every story it lists.

        Raises:
            EpicNotFound: epic_id does not exist
        """
        state = self.read_db()
        epic = self._get_epic(state, epic_id)

        for story_id in epic.stories:
            # Duplicate ids in a hand-edited file are already gone on the second pass
            state.stories.pop(story_id, None)
        del state.epics[epic_id]

        self.database.write_db(state)
        logger.info(f"Deleted epic {epic_id} and {len(epic.stories)} story(s)")

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story from an epic and from the global story map.

        Raises:
            EpicNotFound: epic_id does not exist
            StoryNotInEpic: story_id is not listed by this epic
        """
        state = self.read_db()
        epic = self._get_epic(state, epic_id)

        if story_id not in epic.stories:
            logger.warning(f"Story {story_id} not found in epic {epic_id}")
            raise StoryNotInEpic(epic_id, story_id)

        epic.stories.remove(story_id)
        state.stories.pop(story_id, None)

        self.database.write_db(state)
        logger.info(f"Deleted story {story_id} from epic {epic_id}")

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        """Overwrite an epic's status. Stories keep their own status.

        Raises:
            EpicNotFound: epic_id does not exist
        """
        state = self.read_db()
        self._get_epic(state, epic_id).status = status
        self.database.write_db(state)
        logger.info(f"Epic {epic_id} status -> {status.value}")

    def update_story_status(self, story_id: int, status: Status) -> None:
        """Overwrite a story's status.

        Raises:
            StoryNotFound: story_id does not exist
        """
        state = self.read_db()
        story = state.stories.get(story_id)
        if story is None:
            logger.warning(f"Story {story_id} not found")
            raise StoryNotFound(story_id)

        story.status = status
        self.database.write_db(state)
        logger.info(f"Story {story_id} status -> {status.value}")
