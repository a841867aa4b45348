"""Resource identifiers of the form <node>/<type>/<vmid>."""

from __future__ import annotations

import re
from dataclasses import dataclass

GUEST_LXC = "lxc"
GUEST_QEMU = "qemu"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class GuestResourceId:
    """Identifies a guest by node, guest type and numeric ID."""

    id: int
    node: str
    guest_type: str

    @classmethod
    def parse(cls, resource_id: str) -> GuestResourceId:
        """Parse '<node>/<type>/<vmid>'; raise ValueError if malformed."""
        parts = resource_id.split("/")
        if len(parts) != 3:
            raise ValueError(
                f"failed to get resource format: '{resource_id}'. "
                "Must be <node>/<type>/<vmid>"
            )
        node, guest_type, raw_id = parts
        if node == "":
            raise ValueError(f"failed to get node name: '{node}'")
        if guest_type not in (GUEST_LXC, GUEST_QEMU):
            raise ValueError(
                f"failed to get guest type: '{guest_type}'. Must be 'lxc' or 'qemu'"
            )
        if not _INTEGER.fullmatch(raw_id):
            raise ValueError(f"failed to get vmid: '{raw_id}'. Must be an integer")
        return cls(id=int(raw_id), node=node, guest_type=guest_type)

    def __str__(self) -> str:
        return f"{self.node}/{self.guest_type}/{self.id}"