"""Stand-alone LXC mount points: validation and request parameters."""

from __future__ import annotations

from typing import Any

from pveguest.diagnostics import Diagnostic

_SIZE_MARKERS = ("T", "G", "M", "n")


def validate_mountpoint_size(value: str) -> list[Diagnostic]:
    """Check a mount point size; an empty list means it is accepted."""
    if any(marker in value for marker in _SIZE_MARKERS):
        return []
    return [Diagnostic.error(f"disk size must end in T, G, M, or K, got {value}")]


def extract_disk_options(options: dict[str, Any]) -> dict[str, Any]:
    """Return the options with the mount option block unwrapped.

    A non-empty 'mountoptions' list is replaced by its first entry; an empty
    or missing one is removed.
    """
    result = dict(options)
    mount_options = result.pop("mountoptions", None)
    if mount_options:
        result["mountoptions"] = mount_options[0]
    return result


def mountpoint_key(slot: int) -> str:
    """The configuration key of the mount point in the given slot."""
    return f"mp{slot}"


def mountpoint_delete_params(slot: int) -> dict[str, str]:
    """Parameters that delete the mount point in the given slot."""
    return {"delete": mountpoint_key(slot)}