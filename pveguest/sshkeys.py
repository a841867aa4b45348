"""SSH public key lists as entered in configuration."""

from __future__ import annotations

import re
from collections.abc import Iterable

ROOT = "sshkeys"

_WHITESPACE_RUN = re.compile(r"[\t\n\f\r ]+")


def trim_keys(raw_keys: str) -> str:
    """Strip the ends and collapse every whitespace run to one space."""
    return _WHITESPACE_RUN.sub(" ", raw_keys.strip())


def keys_equivalent(old: str, new: str) -> bool:
    """True when two key lists differ only in whitespace."""
    return trim_keys(old) == trim_keys(new)


def split_keys(raw_keys: str) -> list[str]:
    """Split a key list into one entry per line."""
    return raw_keys.split("\n")


def join_keys(keys: Iterable[str]) -> str:
    """Join keys, each followed by a newline."""
    return "".join(f"{key}\n" for key in keys)