"""LXC container settings gathered from configuration."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pveguest.tags import tags_from_config, tags_to_string


def _first(value: Any) -> dict[str, Any] | None:
    if value:
        return dict(value[0])
    return None


@dataclass
class LxcConfig:
    """The settings of an LXC container as sent to the API."""

    ostemplate: str = ""
    arch: str = "amd64"
    bwlimit: int = 0
    clone: str = ""
    clone_storage: str = ""
    cmode: str = "tty"
    console: bool = True
    cores: int = 0
    cpulimit: int = 0
    cpuunits: int = 1024
    description: str = ""
    features: dict[str, Any] | None = None
    force: bool = False
    hastate: str = ""
    hagroup: str = ""
    hookscript: str = ""
    hostname: str = ""
    ignore_unpack_errors: bool = False
    lock: str = ""
    memory: int = 512
    nameserver: str = ""
    onboot: bool = False
    ostype: str = ""
    password: str = ""
    pool: str = ""
    protection: bool = False
    restore: bool = False
    searchdomain: str = ""
    ssh_public_keys: str = ""
    start: bool = False
    startup: str = ""
    swap: int = 0
    tags: str = ""
    template: bool = False
    tty: int = 2
    unique: bool = False
    unprivileged: bool = False
    vmid: int = 0
    networks: dict[int, dict[str, Any]] = field(default_factory=dict)
    rootfs: dict[str, Any] | None = None
    mountpoints: dict[int, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> LxcConfig:
        """Build the configuration; missing settings take their defaults.

        Only the first feature block is used, since a container has one set
        of features. Networks are keyed by position, mount points by slot.
        """
        defaults = cls()
        values: dict[str, Any] = {}
        for name in (
            "ostemplate", "arch", "bwlimit", "clone", "clone_storage", "cmode",
            "console", "cores", "cpulimit", "cpuunits", "description", "force",
            "hastate", "hagroup", "hookscript", "hostname", "ignore_unpack_errors",
            "lock", "memory", "nameserver", "onboot", "ostype", "password", "pool",
            "protection", "restore", "searchdomain", "ssh_public_keys", "start",
            "startup", "swap", "template", "tty", "unique", "unprivileged", "vmid",
        ):
            values[name] = settings.get(name, getattr(defaults, name))
        values["features"] = _first(settings.get("features"))
        values["rootfs"] = _first(settings.get("rootfs"))
        values["tags"] = tags_to_string(tags_from_config(settings.get("tags")))
        values["networks"] = {
            index: dict(network)
            for index, network in enumerate(settings.get("network") or [])
        }
        values["mountpoints"] = {
            int(mount["slot"]): dict(mount)
            for mount in settings.get("mountpoint") or []
        }
        return cls(**values)


def lxc_tags_from_config(raw_tags: str) -> str:
    """Tags as reported to the user from the comma separated API value."""
    return tags_to_string(raw_tags.split(","))


def find_pool_for_guest(
    pools: Mapping[str, Iterable[int] | None], guest_id: int
) -> str | None:
    """Name of the first pool that has the guest as a member, if any."""
    for name, members in pools.items():
        if members is not None and guest_id in members:
            return name
    return None