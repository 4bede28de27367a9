"""
tracker epic - Create, delete, and update epics.
"""

from tracker.models import Epic, Status
from tracker.storage import NotFound, ProjectsDatabase
from tracker.ui.prompts import delete_epic_prompt


def cmd_epic_create(args, db: ProjectsDatabase) -> int:
    """Create an epic and print its id."""
    epic = Epic.new(args.name.strip(), (args.description or "").strip())
    epic_id = db.create_epic(epic)
    print(f"Created epic {epic_id}: {epic.name}")
    return 0


def cmd_epic_delete(args, db: ProjectsDatabase) -> int:
    """Delete an epic and every story in it."""
    if not args.yes and not delete_epic_prompt():
        print("Aborted.")
        return 0

    try:
        db.delete_epic(args.id)
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Deleted epic {args.id}")
    return 0


def cmd_epic_status(args, db: ProjectsDatabase) -> int:
    """Set the status of an epic."""
    try:
        status = Status.parse(args.status)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    try:
        db.update_epic_status(args.id, status)
    except NotFound as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Epic {args.id}: {status.display}")
    return 0
