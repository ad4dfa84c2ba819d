"""
Schemaless traversal of YouTube's embedded JSON data model.

``ytInitialData`` has no stable schema: the same renderer shapes appear at
different depths depending on the page, the tab and the experiment bucket
a request lands in. Instead of navigating fixed paths, the helpers here
walk the whole tree and match shapes with small predicate functions.

Traversal uses an explicit stack rather than recursion so deeply nested
documents cannot exhaust the interpreter stack. Its order is deterministic
for a given document but is not document order; when several nodes match,
callers get one of them, not necessarily the first in the page.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, TypeGuard, Union

from tubepulse.models.youtube_types import is_channel_id

JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
"""Any value produced by ``json.loads``."""

RENDERER_KEYS: tuple[str, ...] = ("gridVideoRenderer", "videoRenderer", "reelItemRenderer")
"""Keys whose values describe one displayable video, stream or short."""

CHANNEL_ID_KEYS: frozenset[str] = frozenset({"channelId", "externalId", "browseId"})

SUBSCRIBER_TEXT_KEY = "subscriberCountText"


# ----------------------------------------------------------------------------
# Predicates
# ----------------------------------------------------------------------------


def is_object(node: JsonValue) -> TypeGuard[dict[str, Any]]:
    """Whether a JSON value is an object."""
    return isinstance(node, dict)


def is_array(node: JsonValue) -> TypeGuard[list[Any]]:
    """Whether a JSON value is an array."""
    return isinstance(node, list)


def is_string(node: JsonValue) -> TypeGuard[str]:
    """Whether a JSON value is a string."""
    return isinstance(node, str)


def is_blank(text: str | None) -> bool:
    """Whether text is missing or only whitespace."""
    return text is None or not text.strip()


# ----------------------------------------------------------------------------
# Traversal
# ----------------------------------------------------------------------------


def _children(node: JsonValue) -> Iterable[JsonValue]:
    if is_object(node):
        return node.values()
    if is_array(node):
        return node
    return ()


def iter_nodes(root: JsonValue) -> Iterator[JsonValue]:
    """
    Yield every value in a JSON tree, each exactly once.

    Uses an explicit work stack, so later siblings are visited before
    earlier ones.
    """
    stack: list[JsonValue] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(_children(node))


def find_renderers(root: JsonValue) -> Iterator[dict[str, Any]]:
    """
    Lazily yield every video renderer object in a JSON tree.

    Every object is tested for each renderer key, and traversal continues
    into all children whether or not a renderer was found, so renderers
    nested inside other renderers are also yielded.

    Parameters
    ----------
    root : JsonValue
        Parsed ``ytInitialData`` document.

    Yields
    ------
    dict[str, Any]
        The value stored under ``gridVideoRenderer``, ``videoRenderer`` or
        ``reelItemRenderer``.
    """
    for node in iter_nodes(root):
        if not is_object(node):
            continue
        for key in RENDERER_KEYS:
            renderer = node.get(key)
            if is_object(renderer):
                yield renderer


# ----------------------------------------------------------------------------
# Path lookups and rich text
# ----------------------------------------------------------------------------


def get_at_path(node: JsonValue, path: Sequence[str]) -> JsonValue | None:
    """
    Descend through object keys in order.

    Returns ``None`` as soon as an intermediate value is not an object or
    lacks the next key. An empty path returns ``node`` itself.
    """
    current = node
    for key in path:
        if not is_object(current) or key not in current:
            return None
        current = current[key]
    return current


def get_string(node: JsonValue, path: Sequence[str]) -> str | None:
    """Look up a path and return the value only when it is a plain string."""
    value = get_at_path(node, path)
    return value if is_string(value) else None


def get_text(node: JsonValue, path: Sequence[str] = ()) -> str | None:
    """
    Resolve display text from a rich text value.

    A plain string is returned as is. An object with a string
    ``simpleText`` returns that; an object with a ``runs`` array returns the
    concatenated ``text`` of each run, skipping runs without one (an empty
    array gives ``""``). Anything else is ``None``.

    Examples
    --------
    >>> get_text({"title": {"runs": [{"text": "Hello "}, {"text": "world"}]}}, ["title"])
    'Hello world'
    >>> get_text({"title": {"simpleText": "Hi"}}, ["title"])
    'Hi'
    """
    value = get_at_path(node, path)
    if is_string(value):
        return value
    if is_object(value):
        simple = value.get("simpleText")
        if is_string(simple):
            return simple
        runs = value.get("runs")
        if is_array(runs):
            return "".join(
                run["text"]
                for run in runs
                if is_object(run) and is_string(run.get("text"))
            )
    return None


def first_text(node: JsonValue, paths: Iterable[Sequence[str]]) -> str | None:
    """
    Try text lookups in order and return the first non-blank result.

    ``paths`` is an ordered fallback chain, e.g.
    ``[("title",), ("headline",)]``.
    """
    for path in paths:
        text = get_text(node, path)
        if not is_blank(text):
            return text
    return None


# ----------------------------------------------------------------------------
# Tree-wide searches
# ----------------------------------------------------------------------------


def find_first_by_keys(root: JsonValue, keys: Iterable[str]) -> str | None:
    """
    Find non-blank text stored under any of the given property names.

    Every object in the tree is checked; the value under a matching key is
    resolved with :func:`get_text`.
    """
    wanted = frozenset(keys)
    for node in iter_nodes(root):
        if not is_object(node):
            continue
        for key, value in node.items():
            if key in wanted:
                text = get_text(value)
                if not is_blank(text):
                    return text
    return None


def find_first_string_containing(
    root: JsonValue, needles: Iterable[str]
) -> str | None:
    """
    Find a string leaf containing any of the given substrings.

    Matching is case-insensitive; the original string is returned.
    """
    lowered_needles = tuple(n.lower() for n in needles)
    for node in iter_nodes(root):
        if is_string(node) and node:
            lowered = node.lower()
            if any(needle in lowered for needle in lowered_needles):
                return node
    return None


def find_channel_id(root: JsonValue) -> str | None:
    """
    Find a channel identifier anywhere in a page's data model.

    Only string values under ``channelId``, ``externalId`` or ``browseId``
    that start with ``UC`` are accepted; browse IDs of other pages
    (playlists, topics) are skipped.
    """
    for node in iter_nodes(root):
        if not is_object(node):
            continue
        for key, value in node.items():
            if key in CHANNEL_ID_KEYS and is_channel_id(value):
                return value
    return None


def find_subscriber_text(root: JsonValue) -> str | None:
    """Find the channel header's subscriber count text, e.g. ``"구독자 1.2만명"``."""
    for node in iter_nodes(root):
        if is_object(node) and SUBSCRIBER_TEXT_KEY in node:
            text = get_text(node[SUBSCRIBER_TEXT_KEY])
            if not is_blank(text):
                return text
    return None
