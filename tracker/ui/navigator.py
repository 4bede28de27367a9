"""Page navigation for the interactive tracker using the transitions library.

Pages form a strict hierarchy (home -> epic -> story), so the page stack is
modelled as a state machine:

    home --open_epic--> epic_detail --open_story--> story_detail
    home <----back----- epic_detail <----back------ story_detail
    any  --quit--> exited

Usage:
    from tracker.ui.navigator import Navigator

    nav = Navigator(db)
    page = nav.get_current_page()
    action = page.handle_input("1")
    nav.handle_action(action)
"""

import logging

from transitions import Machine

from tracker.storage import ProjectsDatabase
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
from tracker.ui.pages import EpicDetail, HomePage, Page, StoryDetail
from tracker.ui.prompts import Prompts

logger = logging.getLogger(__name__)


STATES = ["home", "epic_detail", "story_detail", "exited"]

TRANSITIONS = [
    {"trigger": "open_epic", "source": "home", "dest": "epic_detail", "before": "_select"},
    {"trigger": "open_story", "source": "epic_detail", "dest": "story_detail", "before": "_select"},
    {"trigger": "back", "source": "story_detail", "dest": "epic_detail"},
    {"trigger": "back", "source": "epic_detail", "dest": "home"},
    {"trigger": "quit", "source": "*", "dest": "exited"},
]

PAGE_DEPTH = {"home": 1, "epic_detail": 2, "story_detail": 3, "exited": 0}


class Navigator:
    """Tracks the current page and applies actions against the store.

    Store errors (NotFound, storage failures) propagate to the caller, which
    is expected to report them and keep the loop running.
    """

    def __init__(self, db: ProjectsDatabase, prompts: Prompts | None = None):
        self.db = db
        self.prompts = prompts or Prompts()
        self.epic_id: int | None = None
        self.story_id: int | None = None

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="home",
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",
        )

    def _select(self, event) -> None:
        """Remember the ids passed to open_epic / open_story."""
        if "epic_id" in event.kwargs:
            self.epic_id = event.kwargs["epic_id"]
        if "story_id" in event.kwargs:
            self.story_id = event.kwargs["story_id"]

    def on_state_change(self, event) -> None:
        """Drop selections that no longer apply and log the transition."""
        if self.state in ("home", "exited"):
            self.epic_id = None
            self.story_id = None
        elif self.state == "epic_detail":
            self.story_id = None

        logger.info(f"[NAV] {event.transition.source} -> {event.transition.dest} ({event.event.name})")

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)

    def get_current_page(self) -> Page | None:
        if self.state == "home":
            return HomePage(self.db)
        if self.state == "epic_detail":
            return EpicDetail(self.db, self.epic_id)
        if self.state == "story_detail":
            return StoryDetail(self.db, self.epic_id, self.story_id)
        return None

    def get_page_count(self) -> int:
        return PAGE_DEPTH[self.state]

    def handle_action(self, action: Action) -> None:
        if isinstance(action, NavigateToEpicDetail):
            self.open_epic(epic_id=action.epic_id)
        elif isinstance(action, NavigateToStoryDetail):
            self.open_story(epic_id=action.epic_id, story_id=action.story_id)
        elif isinstance(action, NavigateToPreviousPage):
            if self.can("back"):
                self.back()
        elif isinstance(action, CreateEpic):
            epic = self.prompts.create_epic()
            self.db.create_epic(epic)
        elif isinstance(action, UpdateEpicStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.db.update_epic_status(action.epic_id, status)
        elif isinstance(action, DeleteEpic):
            if self.prompts.delete_epic():
                self.db.delete_epic(action.epic_id)
                if self.state == "epic_detail":
                    self.back()
        elif isinstance(action, CreateStory):
            story = self.prompts.create_story()
            self.db.create_story(story, action.epic_id)
        elif isinstance(action, UpdateStoryStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.db.update_story_status(action.story_id, status)
        elif isinstance(action, DeleteStory):
            if self.prompts.delete_story():
                self.db.delete_story(action.epic_id, action.story_id)
                if self.state == "story_detail":
                    self.back()
        elif isinstance(action, Exit):
            self.quit()
        else:
            raise TypeError(f"Unknown action: {action!r}")
