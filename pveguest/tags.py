"""Guest tag lists: splitting, de-duplication, ordering and formatting."""

from __future__ import annotations

import re

ROOT = "tags"

_SEPARATORS = re.compile(r"[;,]")


def remove_duplicates(tags: list[str] | None) -> list[str] | None:
    """Return the unique tags, or None when there are none."""
    if not tags:
        return None
    return list(dict.fromkeys(tags))


def sort_tags(tags: list[str] | None) -> list[str] | None:
    """Return the tags in ascending order, or None when there are none."""
    if not tags:
        return None
    return sorted(tags)


def split_tags(raw_tags: str) -> list[str]:
    """Split a tag string on ';' and ','."""
    if raw_tags == "":
        return []
    return _SEPARATORS.split(raw_tags)


def tags_to_string(tags: list[str] | None) -> str:
    """Join tags with ';'; an empty or missing list gives ''."""
    if not tags:
        return ""
    return ";".join(tags)


def tags_equivalent(old: str, new: str) -> bool:
    """True when two tag strings hold the same set of tags."""

    def normal(raw: str) -> str:
        return tags_to_string(sort_tags(remove_duplicates(split_tags(raw))))

    return normal(old) == normal(new)


def tags_from_config(raw_tags: str | None) -> list[str]:
    """Tags to send to the API from the configured string."""
    if raw_tags:
        return remove_duplicates(split_tags(raw_tags)) or []
    return []