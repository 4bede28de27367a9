"""
Interactive prompts for the tracker UI.

Prompts turn raw terminal input into model values. The navigator receives
them as a Prompts bundle so tests can swap in plain lambdas.
"""

from dataclasses import dataclass
from typing import Callable

from tracker.models import Epic, Status, Story

SEPARATOR = "-" * 30

STATUS_CHOICES = {
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}


def read_line(message: str = "") -> str:
    """Read one line of input. EOF counts as an empty answer."""
    try:
        return input(message)
    except EOFError:
        return ""


def prompt(message: str) -> str:
    """Print message on its own line and return the trimmed answer."""
    print(f"{message}: ")
    return read_line().strip()


def prompt_confirm(message: str) -> bool:
    """Only an exact 'Y' confirms."""
    print(f"{message} [Y/n]: ")
    return read_line().strip() == "Y"


def create_epic_prompt() -> Epic:
    print(SEPARATOR)
    name = prompt("Epic name")
    description = prompt("Epic description")
    return Epic.new(name, description)


def create_story_prompt() -> Story:
    print(SEPARATOR)
    name = prompt("Story name")
    description = prompt("Story description")
    return Story.new(name, description)


def delete_epic_prompt() -> bool:
    print(SEPARATOR)
    return prompt_confirm(
        "Are you sure you want to delete this epic? All stories in this epic will be deleted too"
    )


def delete_story_prompt() -> bool:
    print(SEPARATOR)
    return prompt_confirm("Are you sure you want to delete this story?")


def update_status_prompt() -> Status | None:
    """Ask for a status by menu number. Returns None for anything else."""
    print(SEPARATOR)
    answer = prompt("New status (1 - OPEN, 2 - IN-PROGRESS, 3 - RESOLVED, 4 - CLOSED)")
    return STATUS_CHOICES.get(answer)


@dataclass
class Prompts:
    create_epic: Callable[[], Epic] = create_epic_prompt
    create_story: Callable[[], Story] = create_story_prompt
    delete_epic: Callable[[], bool] = delete_epic_prompt
    delete_story: Callable[[], bool] = delete_story_prompt
    update_status: Callable[[], Status | None] = update_status_prompt
