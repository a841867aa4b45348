"""Changes to LXC root and mount point disks between two configurations.

Disk sets are mappings from a stable key to a disk description such as
``{"type": "mp", "slot": 0, "storage": "local", "size": "8G", "volume": ...}``.
A disk without an integer ``slot`` is the root file system.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pveguest.diagnostics import Diagnostic

ROOTFS = "rootfs"
DEFAULT_DISK_TYPE = "mp"

_SIZE_MARKERS = ("T", "G", "M", "K")

Disk = Mapping[str, Any]
DiskSet = Mapping[Any, Disk]


def validate_disk_size(value: str) -> list[Diagnostic]:
    """Check a disk size; an empty list means it is accepted."""
    if any(marker in value for marker in _SIZE_MARKERS):
        return []
    return [Diagnostic.error(f"disk size must end in T, G, M, or K, got {value}")]


def disk_slot_name(disk: Disk) -> str:
    """The configuration key of a disk, such as 'mp0' or 'rootfs'."""
    disk_type = disk.get("type")
    if not isinstance(disk_type, str) or disk_type == "":
        disk_type = DEFAULT_DISK_TYPE
    slot = disk.get("slot")
    if not isinstance(slot, int) or isinstance(slot, bool):
        return ROOTFS
    return f"{disk_type}{slot}"


def disks_to_delete(previous: DiskSet, new: DiskSet) -> list[str]:
    """Slot names of disks to detach before applying the new set.

    A disk goes when its key is gone, when the new set names a different
    volume for it, or when it moved to another slot. The root file system is
    never deleted.
    """
    names = []
    for key, prev_disk in previous.items():
        new_disk = new.get(key)
        if new_disk is not None and disk_slot_name(new_disk) == ROOTFS:
            continue
        if (
            new_disk is None
            or (
                new_disk.get("volume") != ""
                and prev_disk.get("volume") != new_disk.get("volume")
            )
            or prev_disk.get("slot") != new_disk.get("slot")
        ):
            names.append(disk_slot_name(prev_disk))
    return names


def disks_to_create(previous: DiskSet, new: DiskSet) -> dict[str, dict[str, Any]]:
    """Disks to attach, by slot name.

    New disks are attached as given. Disks that changed slot are attached
    again in the new slot, with any setting missing from the new description
    taken from the previous one.
    """
    created: dict[str, dict[str, Any]] = {}
    for key, new_disk in new.items():
        prev_disk = previous.get(key)
        merged = dict(new_disk)
        if prev_disk is not None:
            for name, value in prev_disk.items():
                merged.setdefault(name, value)
        if prev_disk is None or new_disk.get("slot") != prev_disk.get("slot"):
            created[disk_slot_name(new_disk)] = merged
    return created


def disks_to_move(previous: DiskSet, new: DiskSet) -> list[tuple[str, str]]:
    """(slot name, target storage) for disks whose storage changed."""
    moves = []
    for key, prev_disk in previous.items():
        new_disk = new.get(key)
        if new_disk is None:
            continue
        storage = new_disk.get("storage")
        if isinstance(storage, str) and storage != prev_disk.get("storage"):
            moves.append((disk_slot_name(prev_disk), storage))
    return moves


def disks_to_resize(previous: DiskSet, new: DiskSet) -> list[tuple[str, str]]:
    """(slot name, new size) for disks whose size changed."""
    resizes = []
    for key, prev_disk in previous.items():
        new_disk = new.get(key)
        if new_disk is None or "size" not in new_disk:
            continue
        if new_disk["size"] != prev_disk.get("size"):
            resizes.append((disk_slot_name(new_disk), new_disk["size"]))
    return resizes