"""Tests for tracker.ui.pages module."""

import pytest

from tracker.models import Epic, State, Status, Story
from tracker.storage import (
    EpicNotFound,
    MemoryDatabase,
    ProjectsDatabase,
    StoryNotFound,
    StoryNotInEpic,
)
from tracker.ui.actions import (
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
from tracker.ui.pages import EpicDetail, HomePage, StoryDetail, truncate


@pytest.fixture
def db():
    return ProjectsDatabase(MemoryDatabase())


@pytest.fixture
def populated(db):
    """Epic 1 with stories 2 and 3; epic 4 with story 5."""
    db.create_epic(Epic.new("Epic one", "The first epic"))
    db.create_story(Story.new("Story two", "desc"), 1)
    db.create_story(Story.new("Story three", "desc"), 1)
    db.create_epic(Epic.new("Epic four", ""))
    db.create_story(Story.new("Story five", ""), 4)
    db.update_story_status(3, Status.IN_PROGRESS)
    return db


class TestTruncate:
    """Tests for truncate helper."""

    def test_short_text_unchanged(self):
        assert truncate("abc", 10) == "abc"

    def test_exact_width_unchanged(self):
        assert truncate("abcde", 5) == "abcde"

    def test_long_text_marked(self):
        result = truncate("a" * 40, 10)
        assert result == "aaaaaaa..."
        assert len(result) == 10


class TestHomePage:
    """Tests for HomePage."""

    def test_draw_lists_epics(self, populated, capsys):
        HomePage(populated).draw_page()
        out = capsys.readouterr().out
        assert "EPICS" in out
        assert "Epic one" in out
        assert "Epic four" in out
        assert "OPEN" in out
        assert "[q] quit | [c] create epic | [:id:] navigate to epic" in out

    def test_draw_truncates_long_names(self, db, capsys):
        db.create_epic(Epic.new("x" * 100, ""))
        HomePage(db).draw_page()
        out = capsys.readouterr().out
        assert "x" * 29 + "..." in out
        assert "x" * 33 not in out

    def test_handle_input(self, populated):
        page = HomePage(populated)
        assert page.handle_input("q") == Exit()
        assert page.handle_input("c") == CreateEpic()
        assert page.handle_input("1") == NavigateToEpicDetail(1)
        assert page.handle_input(" 4\n") == NavigateToEpicDetail(4)

    def test_handle_input_ignores_unknown(self, populated):
        page = HomePage(populated)
        assert page.handle_input("j73kjfd") is None
        assert page.handle_input("") is None
        assert page.handle_input("-1") is None

    def test_handle_input_ignores_story_and_missing_ids(self, populated):
        page = HomePage(populated)
        assert page.handle_input("2") is None
        assert page.handle_input("999") is None


class TestEpicDetail:
    """Tests for EpicDetail."""

    def test_draw_shows_epic_and_its_stories(self, populated, capsys):
        EpicDetail(populated, 1).draw_page()
        out = capsys.readouterr().out
        assert "Epic one" in out
        assert "The first epic" in out
        assert "Story two" in out
        assert "Story three" in out
        assert "IN PROGRESS" in out
        assert "Story five" not in out

    def test_draw_lists_stories_in_epic_order(self, populated, capsys):
        EpicDetail(populated, 1).draw_page()
        out = capsys.readouterr().out
        assert out.index("Story two") < out.index("Story three")

    def test_draw_missing_epic_raises(self, db):
        with pytest.raises(EpicNotFound):
            EpicDetail(db, 99).draw_page()

    def test_handle_input(self, populated):
        page = EpicDetail(populated, 1)
        assert page.handle_input("p") == NavigateToPreviousPage()
        assert page.handle_input("u") == UpdateEpicStatus(1)
        assert page.handle_input("d") == DeleteEpic(1)
        assert page.handle_input("c") == CreateStory(1)
        assert page.handle_input("2") == NavigateToStoryDetail(1, 2)

    def test_handle_input_rejects_story_of_other_epic(self, populated):
        page = EpicDetail(populated, 1)
        assert page.handle_input("5") is None
        assert page.handle_input("1") is None
        assert page.handle_input("q") is None


class TestStoryDetail:
    """Tests for StoryDetail."""

    def test_draw_shows_story(self, populated, capsys):
        StoryDetail(populated, 1, 3).draw_page()
        out = capsys.readouterr().out
        assert "Story three" in out
        assert "IN PROGRESS" in out
        assert "[p] previous | [u] update story | [d] delete story" in out

    def test_draw_missing_story_raises(self, populated):
        with pytest.raises(StoryNotInEpic):
            StoryDetail(populated, 1, 99).draw_page()

    def test_draw_story_of_other_epic_raises(self, populated, capsys):
        with pytest.raises(StoryNotInEpic, match="Story 5 not found in epic 1"):
            StoryDetail(populated, 1, 5).draw_page()
        assert "Story five" not in capsys.readouterr().out

    def test_draw_missing_epic_raises(self, populated):
        with pytest.raises(EpicNotFound):
            StoryDetail(populated, 9, 2).draw_page()

    def test_draw_dangling_story_reference_raises(self):
        state = State(last_item_id=2, epics={1: Epic("e", "", Status.OPEN, [2])})
        db = ProjectsDatabase(MemoryDatabase(state))
        with pytest.raises(StoryNotFound):
            StoryDetail(db, 1, 2).draw_page()

    def test_handle_input(self, populated):
        page = StoryDetail(populated, 1, 2)
        assert page.handle_input("p") == NavigateToPreviousPage()
        assert page.handle_input("u") == UpdateStoryStatus(2)
        assert page.handle_input("d") == DeleteStory(1, 2)
        assert page.handle_input("c") is None
        assert page.handle_input("3") is None
