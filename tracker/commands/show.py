"""
tracker list / tracker show - Print epics and stories.
"""

from tracker.storage import NotFound, ProjectsDatabase
from tracker.ui.pages import RULE, EpicDetail, StoryDetail, truncate


def cmd_list(args, db: ProjectsDatabase) -> int:
    """List epics with their story counts."""
    state = db.read_db()

    if not state.epics:
        print("Epics: none")
        print()
        print("Get started:")
        print("  tracker epic create <name>   - Create an epic")
        print("  tracker run                  - Interactive mode")
        return 0

    print(f"  {'ID':<8} {'NAME':<32} {'STATUS':<12} STORIES")
    print(RULE)
    for epic_id, epic in sorted(state.epics.items()):
        print(f"  {epic_id:<8} {truncate(epic.name, 32):<32} {epic.status.display:<12} {len(epic.stories)}")
    print(RULE)
    print(f"{len(state.epics)} epic(s), {len(state.stories)} story(s)")
    return 0


def cmd_show(args, db: ProjectsDatabase) -> int:
    """Show an epic, or one story of an epic."""
    if args.story_id is None:
        page = EpicDetail(db, args.epic_id)
    else:
        page = StoryDetail(db, args.epic_id, args.story_id)

    try:
        page.draw_page()
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1
    return 0
