"""Changes to LXC network interfaces between two configurations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

NETWORK_KEY_PREFIX = "net"

Network = Mapping[str, Any]


def network_keys_to_delete(
    previous: Iterable[Network], new: Iterable[Network]
) -> list[str]:
    """Configuration keys of interfaces whose ID is gone from the new set.

    Keys come out in the order of the previous set.
    """
    new_ids = {network["id"] for network in new}
    return [
        f"{NETWORK_KEY_PREFIX}{network['id']}"
        for network in previous
        if network["id"] not in new_ids
    ]


def network_delete_params(
    previous: Iterable[Network], new: Iterable[Network]
) -> dict[str, str]:
    """Parameters that remove dropped interfaces; empty when none are dropped."""
    keys = network_keys_to_delete(previous, new)
    if not keys:
        return {}
    return {"delete": ", ".join(keys)}


def strip_network_ids(networks: Iterable[Network]) -> dict[int, dict[str, Any]]:
    """Interfaces by position, without the 'id' that the API does not accept."""
    return {
        index: {key: value for key, value in network.items() if key != "id"}
        for index, network in enumerate(networks)
    }