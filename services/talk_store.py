"""Loading the read-only talk data file"""

import logging
import re
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from api.schemas import Talk

logger = logging.getLogger(__name__)

TALKS_ERROR_MESSAGE = "Could not read talks data"

_talk_list = TypeAdapter(list[Talk])
_slug_pattern = re.compile(r"[a-z0-9]+")


class TalkDataError(Exception):
    """Raised when the talk data file cannot be read or parsed"""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"{TALKS_ERROR_MESSAGE} from {path}: {cause}")


def slugify(title: str) -> str:
    """Lowercase slug of a talk title, e.g. "Intro to ASGI!" -> "intro-to-asgi"."""
    slug = "-".join(_slug_pattern.findall(title.lower()))
    return slug or "talk"


def assign_talk_ids(talks: list[Talk]) -> tuple[Talk, ...]:
    """
    Give every talk a unique id.

    Explicit ids from the data file are kept. Talks without one get a slug of
    their title. A repeated id gets "-2", "-3", ... in file order.

    Args:
        talks: Talks in file order

    Returns:
        Immutable snapshot of talks, each with a unique id
    """
    seen: set[str] = set()
    result = []

    for talk in talks:
        base = talk.id or slugify(talk.title)
        talk_id = base
        suffix = 2
        while talk_id in seen:
            talk_id = f"{base}-{suffix}"
            suffix += 1

        if talk_id != base:
            logger.warning(f"Duplicate talk id '{base}' for '{talk.title}', using '{talk_id}'")

        seen.add(talk_id)
        result.append(talk if talk.id == talk_id else talk.model_copy(update={"id": talk_id}))

    return tuple(result)


def read_talks_bytes(path: Path) -> bytes:
    """Read the raw talk data file."""
    try:
        return path.read_bytes()
    except OSError as e:
        raise TalkDataError(path, e) from e


def parse_talks(raw: bytes | str) -> tuple[Talk, ...]:
    """Parse talk JSON into an immutable snapshot with unique ids."""
    return assign_talk_ids(_talk_list.validate_json(raw))


def load_talks(path: Path) -> tuple[Talk, ...]:
    """
    Read and validate the talk data file.

    Raises:
        TalkDataError: file unreadable, not JSON, or not a list of talks
    """
    raw = read_talks_bytes(path)
    try:
        return parse_talks(raw)
    except ValidationError as e:
        raise TalkDataError(path, e) from e
