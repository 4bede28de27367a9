"""
tracker run - Interactive epic/story browser.
"""

import logging
import sys

from tracker.storage import NotFound, ProjectsDatabase, TrackerError
from tracker.ui.navigator import Navigator
from tracker.ui.prompts import Prompts

logger = logging.getLogger(__name__)


def clear_screen() -> None:
    if sys.stdout.isatty():
        print("\033[2J\033[H", end="", flush=True)


def report_error(e: TrackerError) -> bool:
    """Print e and wait for Enter. Returns False if the user quits or input has ended."""
    logger.error(f"{type(e).__name__}: {e}")
    print(f"ERROR: {e}")
    try:
        answer = input("Press Enter to continue, q to quit... ")
    except EOFError:
        return False
    return answer.strip().lower() != "q"


def cmd_run(args, db: ProjectsDatabase, prompts: Prompts | None = None) -> int:
    """Run the page loop until the user quits or input ends."""
    navigator = Navigator(db, prompts)

    while navigator.get_page_count() > 0:
        page = navigator.get_current_page()
        clear_screen()

        try:
            page.draw_page()
        except TrackerError as e:
            if not report_error(e):
                navigator.quit()
            elif isinstance(e, NotFound) and navigator.can("back"):
                # Page target vanished, e.g. the file was edited elsewhere
                navigator.back()
            continue

        try:
            text = input()
        except EOFError:
            navigator.quit()
            continue

        try:
            action = page.handle_input(text)
            if action is not None:
                navigator.handle_action(action)
        except TrackerError as e:
            if not report_error(e):
                navigator.quit()

    return 0
