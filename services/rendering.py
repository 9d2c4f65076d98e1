"""HTML display nodes for schedule entries and search filtering"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from html import escape

from api.schemas import Talk
from services.schedule import ScheduleEntry, matching_talk_ids


@dataclass(frozen=True)
class ScheduleNode:
    """Rendered schedule item. Only talk nodes carry a talk id."""

    entry: ScheduleEntry
    html: str
    talk_id: str | None = None
    hidden: bool = False


def _render_talk(entry: ScheduleEntry) -> str:
    talk = entry.talk
    tags = "".join(
        f'<span class="category-tag">{escape(category)}</span>' for category in talk.categories
    )
    return (
        f'<div class="schedule-item" data-talk-id="{escape(talk.id or "")}">'
        '<div class="schedule-item-meta">'
        f'<span class="time">{entry.time_range}</span>'
        f'<span class="speakers">By: {escape(", ".join(talk.speakers))}</span>'
        "</div>"
        f"<h2>{escape(talk.title)}</h2>"
        f"<p>{escape(talk.description)}</p>"
        f'<div class="categories">{tags}</div>'
        "</div>"
    )


def _render_break(entry: ScheduleEntry) -> str:
    return (
        '<div class="schedule-item break">'
        '<div class="schedule-item-meta">'
        f'<span class="time">{entry.time_range}</span>'
        "</div>"
        f"<h2>{escape(entry.label)}</h2>"
        "</div>"
    )


def render_entry(entry: ScheduleEntry) -> ScheduleNode:
    """Build the display node for one entry."""
    if entry.talk is not None:
        return ScheduleNode(entry=entry, html=_render_talk(entry), talk_id=entry.talk_id)
    return ScheduleNode(entry=entry, html=_render_break(entry))


def render_schedule(entries: Sequence[ScheduleEntry]) -> list[ScheduleNode]:
    """Build display nodes in chronological order."""
    return [render_entry(entry) for entry in entries]


def apply_filter(
    nodes: Sequence[ScheduleNode],
    talks: Sequence[Talk],
    search_term: str,
) -> list[ScheduleNode]:
    """
    Toggle visibility of already-rendered talk nodes by category search.

    A talk node is visible when the term is empty or one of its talk's
    categories contains the term. Nodes without a talk id are left as they are.

    Args:
        nodes: Nodes from render_schedule
        talks: Talk snapshot the nodes were rendered from
        search_term: Raw search input

    Returns:
        Nodes in the same order with updated hidden flags
    """
    visible_ids = matching_talk_ids(talks, search_term)
    result = []

    for node in nodes:
        if node.talk_id is None:
            result.append(node)
            continue
        hidden = not (search_term == "" or node.talk_id in visible_ids)
        result.append(node if node.hidden == hidden else replace(node, hidden=hidden))

    return result
