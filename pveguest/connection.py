"""Finding the primary IP addresses a guest can be reached on."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Union

from pveguest.diagnostics import Diagnostic

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ERROR_GUEST_AGENT_NOT_RUNNING = "500 QEMU guest agent is not running"
ERROR_GUEST_AGENT_NO_IP_SUMMARY = "Qemu Guest Agent is enabled but no IP config is found"
ERROR_GUEST_AGENT_NO_IPV4_SUMMARY = (
    "Qemu Guest Agent is enabled but no IPv4 address is found"
)
ERROR_GUEST_AGENT_NO_IPV6_SUMMARY = (
    "Qemu Guest Agent is enabled but no IPv6 address is found"
)

SCHEMA_AGENT_TIMEOUT = "agent_timeout"
SCHEMA_SKIP_IPV4 = "skip_ipv4"
SCHEMA_SKIP_IPV6 = "skip_ipv6"

_MAC_SEPARATORS = re.compile(r"[:-]")
_IPV4_BROADCAST = ipaddress.IPv4Address("255.255.255.255")


def _normalize_mac(mac: str) -> str:
    """Canonical lower-case, colon separated form of a MAC address."""
    parts = _MAC_SEPARATORS.split(mac.strip())
    try:
        octets = [int(part, 16) for part in parts]
    except ValueError:
        raise ValueError(f"invalid MAC address: '{mac}'") from None
    if len(octets) not in (6, 8, 20) or any(not 0 <= o <= 0xFF for o in octets):
        raise ValueError(f"invalid MAC address: '{mac}'")
    return ":".join(f"{octet:02x}" for octet in octets)


def _unmap(address: IPAddress) -> IPAddress:
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def _is_global_unicast(address: IPAddress) -> bool:
    if address.is_unspecified or address.is_loopback or address.is_multicast:
        return False
    if address.is_link_local:
        return False
    return address != _IPV4_BROADCAST


@dataclass(frozen=True)
class IPConfig:
    """Cloud-init settings of one address family."""

    address: str | None = None
    dhcp: bool = False


@dataclass(frozen=True)
class CloudInitNetworkConfig:
    """Cloud-init settings of one network interface."""

    ipv4: IPConfig | None = None
    ipv6: IPConfig | None = None


@dataclass
class AgentNetworkInterface:
    """A network interface as reported by the guest agent."""

    mac_address: str
    name: str = ""
    ip_addresses: list[IPAddress] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ip_addresses = [ipaddress.ip_address(a) for a in self.ip_addresses]


@dataclass(frozen=True)
class PrimaryIPs:
    """The first usable IPv4 and IPv6 address; empty when not found."""

    ipv4: str = ""
    ipv6: str = ""


@dataclass(frozen=True)
class ConnectionInfo:
    """Addresses found for a guest and which families need not be waited for."""

    ips: PrimaryIPs = field(default_factory=PrimaryIPs)
    skip_ipv4: bool = False
    skip_ipv6: bool = False

    def agent_diagnostics(self) -> list[Diagnostic]:
        """Warnings about address families the guest agent did not report."""
        if self.ips.ipv4 == "":
            if self.ips.ipv6 == "":
                return [
                    Diagnostic.warning(
                        ERROR_GUEST_AGENT_NO_IP_SUMMARY,
                        "Qemu Guest Agent is enabled in your configuration but no IP "
                        "address was found before the time ran out, increasing "
                        f"'{SCHEMA_AGENT_TIMEOUT}' could resolve this issue.",
                    )
                ]
            if not self.skip_ipv4:
                return [
                    Diagnostic.warning(
                        ERROR_GUEST_AGENT_NO_IPV4_SUMMARY,
                        "Qemu Guest Agent is enabled in your configuration but no IPv4 "
                        "address was found before the time ran out, increasing "
                        f"'{SCHEMA_AGENT_TIMEOUT}' could resolve this issue. To "
                        f"suppress this warning set '{SCHEMA_SKIP_IPV4}' to true.",
                    )
                ]
            return []
        if self.ips.ipv6 == "" and not self.skip_ipv6:
            return [
                Diagnostic.warning(
                    ERROR_GUEST_AGENT_NO_IPV6_SUMMARY,
                    "Qemu Guest Agent is enabled in your configuration but no IPv6 "
                    "address was found before the time ran out, increasing "
                    f"'{SCHEMA_AGENT_TIMEOUT}' could resolve this issue. To "
                    f"suppress this warning set '{SCHEMA_SKIP_IPV6}' to true.",
                )
            ]
        return []

    def has_required_ip(self) -> bool:
        """True when every family that is not skipped has an address."""
        missing_v4 = self.ips.ipv4 == "" and not self.skip_ipv4
        missing_v6 = self.ips.ipv6 == "" and not self.skip_ipv6
        return not (missing_v4 or missing_v6)

    def parse_primary_ips(
        self, interfaces: Iterable[AgentNetworkInterface], mac: str
    ) -> ConnectionInfo:
        """Fill in missing addresses from the interface with the given MAC.

        Only global unicast addresses count; addresses already known are kept.
        """
        wanted = _normalize_mac(mac)
        ipv4, ipv6 = self.ips.ipv4, self.ips.ipv6
        for interface in interfaces:
            if _normalize_mac(interface.mac_address) != wanted:
                continue
            for raw in interface.ip_addresses:
                address = _unmap(raw)
                if not _is_global_unicast(address):
                    continue
                if isinstance(address, ipaddress.IPv4Address):
                    if ipv4 == "":
                        ipv4 = str(address)
                elif ipv6 == "":
                    ipv6 = str(address)
        return replace(self, ips=PrimaryIPs(ipv4=ipv4, ipv6=ipv6))


def parse_cloud_init_interface(
    ip_config: CloudInitNetworkConfig,
    ci_custom: bool,
    skip_ipv4: bool,
    skip_ipv6: bool,
) -> ConnectionInfo:
    """Connection info known from the cloud-init settings of an interface.

    Static addresses are taken without their prefix length. A family that is
    not configured at all is skipped unless a custom cloud-init is in use.
    """
    ipv4 = ipv6 = ""
    if ip_config.ipv4 is not None:
        if ip_config.ipv4.address is not None:
            ipv4 = ip_config.ipv4.address.split("/")[0]
    elif not ci_custom:
        skip_ipv4 = True
    if ip_config.ipv6 is not None:
        if ip_config.ipv6.address is not None:
            ipv6 = ip_config.ipv6.address.split("/")[0]
    elif not ci_custom:
        skip_ipv6 = True
    return ConnectionInfo(
        ips=PrimaryIPs(ipv4=ipv4, ipv6=ipv6), skip_ipv4=skip_ipv4, skip_ipv6=skip_ipv6
    )