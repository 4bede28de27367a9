"""
Parser for tracker.env configuration files.

Reads KEY=value lines without shell execution. Values that look like shell
expansions are rejected instead of being silently passed through, since a
tracker.env is often copied from a real shell profile.

Keys outside ``known_keys`` and keys set twice are kept but logged, so a
typo such as ``DBPATH=`` does not silently fall back to the default
database.
"""

import logging
import re
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

FORBIDDEN_PATTERNS = [
    (re.compile(r'`'), "backtick"),
    (re.compile(r'\$\(|\$\{'), "shell expansion"),
    (re.compile(r';|&&|\|'), "command chaining"),
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env(
    text: str,
    known_keys: Iterable[str] | None = None,
    source: str = "<env>",
) -> dict[str, str]:
    """
    Parse env-file text into a dict.

    Args:
        text: File contents
        known_keys: Keys the caller understands. Others are logged as
            warnings. None disables the check.
        source: Name used in errors and warnings (usually the file path)

    Raises:
        ValueError: if syntax invalid or forbidden pattern found
    """
    known = set(known_keys) if known_keys is not None else None
    result = {}

    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()

        if not line or line.startswith('#'):
            continue

        if '=' not in line:
            raise ValueError(f"{source} line {lineno}: Invalid syntax (no '=')")

        key, _, value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export '):].strip()

        if not KEY_PATTERN.match(key):
            raise ValueError(f"{source} line {lineno}: Invalid key '{key}'")

        value = _unquote(value.strip())

        for pattern, what in FORBIDDEN_PATTERNS:
            if pattern.search(value):
                raise ValueError(f"{source} line {lineno}: Forbidden {what} in value for {key}")

        if known is not None and key not in known:
            logger.warning(f"Unknown key '{key}' in {source} line {lineno}, ignoring")
        if key in result:
            logger.warning(f"{key} set more than once in {source}, line {lineno} wins")

        result[key] = value

    return result


def load_env(filepath: Path | str, known_keys: Iterable[str] | None = None) -> dict[str, str]:
    """
    Read a tracker.env file, return dict.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if syntax invalid or forbidden pattern found
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")
    return parse_env(path.read_text(encoding="utf-8"), known_keys, source=str(path))
