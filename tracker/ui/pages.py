"""
Pages shown by the interactive tracker.

Each page renders a fresh snapshot from the store and maps one line of
input to an Action, or None when the input means nothing on that page.
"""

from tracker.storage import EpicNotFound, ProjectsDatabase, StoryNotFound, StoryNotInEpic
from tracker.ui.actions import (
    Action,
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Exit,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    UpdateEpicStatus,
    UpdateStoryStatus,
)

RULE = "─" * 60


def truncate(text: str, width: int) -> str:
    """Fit text into width columns, marking cut text with '...'."""
    if len(text) <= width:
        return text
    return text[:width - 3] + "..."


def parse_id(text: str) -> int | None:
    text = text.strip()
    if not text.isdigit():
        return None
    return int(text)


def format_row(item_id, name: str, status: str) -> str:
    return f"  {str(item_id):<8} {truncate(name, 32):<32} {status:<12}"


class Page:
    """Base page: subclasses implement draw_page and handle_input."""

    def __init__(self, db: ProjectsDatabase):
        self.db = db

    def draw_page(self) -> None:
        raise NotImplementedError

    def handle_input(self, text: str) -> Action | None:
        raise NotImplementedError


class HomePage(Page):
    """List of every epic."""

    def draw_page(self) -> None:
        state = self.db.read_db()

        print("EPICS")
        print(RULE)
        print(format_row("ID", "NAME", "STATUS"))
        print(RULE)
        for epic_id, epic in sorted(state.epics.items()):
            print(format_row(epic_id, epic.name, epic.status.display))
        print(RULE)
        print()
        print("[q] quit | [c] create epic | [:id:] navigate to epic")
        print()

    def handle_input(self, text: str) -> Action | None:
        text = text.strip()
        if text == "q":
            return Exit()
        if text == "c":
            return CreateEpic()

        epic_id = parse_id(text)
        if epic_id is not None and epic_id in self.db.read_db().epics:
            return NavigateToEpicDetail(epic_id)
        return None


class EpicDetail(Page):
    """One epic and the stories it lists."""

    def __init__(self, db: ProjectsDatabase, epic_id: int):
        super().__init__(db)
        self.epic_id = epic_id

    def draw_page(self) -> None:
        state = self.db.read_db()
        epic = state.epics.get(self.epic_id)
        if epic is None:
            raise EpicNotFound(self.epic_id)

        print("EPIC")
        print(RULE)
        print(f"  ID:          {self.epic_id}")
        print(f"  Name:        {truncate(epic.name, 45)}")
        print(f"  Description: {truncate(epic.description, 45)}")
        print(f"  Status:      {epic.status.display}")
        print()
        print("STORIES")
        print(RULE)
        print(format_row("ID", "NAME", "STATUS"))
        print(RULE)
        for story_id in epic.stories:
            story = state.stories.get(story_id)
            if story is None:
                continue
            print(format_row(story_id, story.name, story.status.display))
        print(RULE)
        print()
        print("[p] previous | [u] update epic | [d] delete epic | [c] create story | [:id:] navigate to story")
        print()

    def handle_input(self, text: str) -> Action | None:
        text = text.strip()
        if text == "p":
            return NavigateToPreviousPage()
        if text == "u":
            return UpdateEpicStatus(self.epic_id)
        if text == "d":
            return DeleteEpic(self.epic_id)
        if text == "c":
            return CreateStory(self.epic_id)

        story_id = parse_id(text)
        if story_id is None:
            return None
        epic = self.db.read_db().epics.get(self.epic_id)
        if epic is not None and story_id in epic.stories:
            return NavigateToStoryDetail(self.epic_id, story_id)
        return None


class StoryDetail(Page):
    """One story within its epic."""

    def __init__(self, db: ProjectsDatabase, epic_id: int, story_id: int):
        super().__init__(db)
        self.epic_id = epic_id
        self.story_id = story_id

    def draw_page(self) -> None:
        state = self.db.read_db()
        epic = state.epics.get(self.epic_id)
        if epic is None:
            raise EpicNotFound(self.epic_id)
        if self.story_id not in epic.stories:
            raise StoryNotInEpic(self.epic_id, self.story_id)
        story = state.stories.get(self.story_id)
        if story is None:
            raise StoryNotFound(self.story_id)

        print("STORY")
        print(RULE)
        print(f"  ID:          {self.story_id}")
        print(f"  Epic:        {self.epic_id}")
        print(f"  Name:        {truncate(story.name, 45)}")
        print(f"  Description: {truncate(story.description, 45)}")
        print(f"  Status:      {story.status.display}")
        print(RULE)
        print()
        print("[p] previous | [u] update story | [d] delete story")
        print()

    def handle_input(self, text: str) -> Action | None:
        text = text.strip()
        if text == "p":
            return NavigateToPreviousPage()
        if text == "u":
            return UpdateStoryStatus(self.story_id)
        if text == "d":
            return DeleteStory(self.epic_id, self.story_id)
        return None
