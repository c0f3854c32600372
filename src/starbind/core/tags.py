"""
Field binding tags.

A field opts in, out, or renames itself through a directive string::

    count: Annotated[int, Bind("count")] = 0
    total: Annotated[int, Bind(",alias:sum,onchange:recount")] = 0
    cache: Annotated[dict, Bind("-")] = {}
    label: str = Field("", json_schema_extra={"bind": ",ignore"})

Fields without a directive bind under their own name.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Set, Tuple

from ..config import get_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bind:
    """``Annotated`` marker carrying a directive string."""
    tag: str


@dataclass(frozen=True)
class Directive:
    """Parsed binding configuration for one field."""
    name: str
    alias: str
    handler: str
    ignored: bool = False


# Registry for all types to be ignored when processing binding tags.
# A field annotated with one of these types never binds, whatever its tag.
IGNORED_TAG_TYPES: Set[type] = set()


def ignore_type(*types: type) -> None:
    """Add infrastructure types to the ignore set."""
    IGNORED_TAG_TYPES.update(types)


def is_ignored_type(annotation: Any) -> bool:
    return any(annotation is typ for typ in IGNORED_TAG_TYPES)


def field_tag(field_info) -> Optional[str]:
    """Return the raw directive string attached to a pydantic ``FieldInfo``."""
    for item in field_info.metadata:
        if isinstance(item, Bind):
            return item.tag
    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        return extra.get(get_config().binding.tag_key)
    return None


def parse_tag(field_name: str, tag: Optional[str]) -> Tuple[Directive, bool]:
    """
    Parse a directive string into a ``Directive``.

    Returns the directive and whether the field participates in binding.
    """
    if tag == "-":
        return Directive(field_name, field_name, _default_handler(field_name), ignored=True), False

    alias = field_name
    handler = _default_handler(field_name)

    parts = (tag or "").strip().split(",")

    # first segment is the alias iff it doesn't look like a pair
    start = 0
    first = parts[0].strip()
    if first and ":" not in first:
        alias = first
        start = 1

    for segment in parts[start:]:
        key, _, value = segment.partition(":")
        key = key.strip()
        value = value.strip()

        if key == "ignore":
            return Directive(field_name, alias, handler, ignored=True), False
        elif key == "alias" and value:
            alias = value
        elif key == "onchange" and value:
            handler = value
        elif key:
            logger.debug("Skipping directive segment %r on field %s", segment, field_name)

    return Directive(field_name, alias, handler), True


def _default_handler(field_name: str) -> str:
    return field_name + get_config().binding.handler_suffix
