"""Guests in a cluster: picking a clone source and describing HA groups."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


class GuestType(enum.Enum):
    """The kind of guest: a QEMU virtual machine or an LXC container."""

    QEMU = "qemu"
    LXC = "lxc"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GuestResource:
    """A guest as listed by the cluster resources endpoint."""

    id: int
    name: str
    node: str
    guest_type: GuestType


@dataclass(frozen=True)
class VmRef:
    """A reference to a guest on a particular node."""

    id: int
    node: str
    guest_type: GuestType

    @classmethod
    def from_resource(cls, resource: GuestResource) -> VmRef:
        return cls(id=resource.id, node=resource.node, guest_type=resource.guest_type)


@dataclass
class HAGroup:
    """A high-availability group and the state it is reported with."""

    group: str
    nodes: list[str] = field(default_factory=list)
    type: str = ""
    restricted: bool = False
    nofailback: bool = False
    comment: str = ""

    def to_state(self) -> dict[str, Any]:
        """The group as reported to the user, with nodes in sorted order."""
        return {
            "id": self.group,
            "nodes": sorted(self.nodes),
            "type": self.type,
            "restricted": self.restricted,
            "nofailback": self.nofailback,
            "comment": self.comment,
        }


def select_source_by_name(
    resources: Iterable[GuestResource],
    name: str,
    preferred_node: str,
    guest_type: GuestType,
) -> VmRef:
    """Find a guest by name, preferring one on the given node.

    When no guest with the name lives on the preferred node, the first match
    is used. Raises LookupError when there is no match at all.
    """
    first: VmRef | None = None
    for resource in resources:
        if resource.name != name or resource.guest_type != guest_type:
            continue
        if resource.node == preferred_node:
            return VmRef.from_resource(resource)
        if first is None:
            first = VmRef.from_resource(resource)
    if first is None:
        raise LookupError(f"no guest with name '{name}' found")
    return first


def select_source_guest(
    resources: Iterable[GuestResource],
    name: str,
    guest_id: int,
    preferred_node: str,
    guest_type: GuestType,
    field_name: str,
    field_id: str,
) -> VmRef:
    """Find the guest to clone from, by name if given, otherwise by ID."""
    if name != "":
        return select_source_by_name(resources, name, preferred_node, guest_type)
    if guest_id != 0:
        match = next((r for r in resources if r.id == guest_id), None)
        if match is None:
            raise LookupError(f"guest with ID '{guest_id}' does not exist")
        if match.guest_type != guest_type:
            raise ValueError(
                f"guest with ID '{guest_id}' is not of type '{guest_type.value}'"
            )
        return VmRef.from_resource(match)
    raise ValueError(f"either '{field_name}' or '{field_id}' must be specified")