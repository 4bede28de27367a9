"""
tracker story - Create, delete, and update stories.
"""

from tracker.models import Status, Story
from tracker.storage import NotFound, ProjectsDatabase
from tracker.ui.prompts import delete_story_prompt


def cmd_story_create(args, db: ProjectsDatabase) -> int:
    """Create a story under an epic and print its id."""
    story = Story.new(args.name.strip(), (args.description or "").strip())
    try:
        story_id = db.create_story(story, args.epic_id)
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Created story {story_id} in epic {args.epic_id}: {story.name}")
    return 0


def cmd_story_delete(args, db: ProjectsDatabase) -> int:
    if not args.yes and not delete_story_prompt():
        print("Aborted.")
        return 0

    try:
        db.delete_story(args.epic_id, args.id)
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Deleted story {args.id} from epic {args.epic_id}")
    return 0


def cmd_story_status(args, db: ProjectsDatabase) -> int:
    try:
        status = Status.parse(args.status)
        db.update_story_status(args.id, status)
    except (ValueError, NotFound) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Story {args.id}: {status.display}")
    return 0
