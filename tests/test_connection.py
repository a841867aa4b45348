import ipaddress

import pytest

from pveguest.connection import (
    ERROR_GUEST_AGENT_NO_IP_SUMMARY,
    ERROR_GUEST_AGENT_NO_IPV4_SUMMARY,
    ERROR_GUEST_AGENT_NO_IPV6_SUMMARY,
    SCHEMA_SKIP_IPV4,
    SCHEMA_SKIP_IPV6,
    AgentNetworkInterface,
    CloudInitNetworkConfig,
    ConnectionInfo,
    IPConfig,
    PrimaryIPs,
    parse_cloud_init_interface,
)
from pveguest.diagnostics import Severity

IPV6 = "2001:0db8:85a3:0000:0000:8a2e:0370:7334"


def conn(ipv4, ipv6, skip4, skip6):
    return ConnectionInfo(PrimaryIPs(ipv4, ipv6), skip4, skip6)


def parse_ip(cidr):
    return ipaddress.ip_interface(cidr).ip


def format_ip(ip):
    return str(ipaddress.ip_address(ip))


@pytest.mark.parametrize(
    "info, summary",
    [
        (conn("", "", False, False), ERROR_GUEST_AGENT_NO_IP_SUMMARY),
        (conn("", "", False, True), ERROR_GUEST_AGENT_NO_IP_SUMMARY),
        (conn("", "", True, False), ERROR_GUEST_AGENT_NO_IP_SUMMARY),
        (conn("", "", True, True), ERROR_GUEST_AGENT_NO_IP_SUMMARY),
        (conn("", "set", False, False), ERROR_GUEST_AGENT_NO_IPV4_SUMMARY),
        (conn("", "set", False, True), ERROR_GUEST_AGENT_NO_IPV4_SUMMARY),
        (conn("", "set", True, False), ""),
        (conn("", "set", True, True), ""),
        (conn("set", "", False, False), ERROR_GUEST_AGENT_NO_IPV6_SUMMARY),
        (conn("set", "", False, True), ""),
        (conn("set", "", True, False), ERROR_GUEST_AGENT_NO_IPV6_SUMMARY),
        (conn("set", "", True, True), ""),
        (conn("set", "set", False, False), ""),
        (conn("set", "set", False, True), ""),
        (conn("set", "set", True, False), ""),
        (conn("set", "set", True, True), ""),
    ],
)
def test_agent_diagnostics(info, summary):
    result = info.agent_diagnostics()
    if summary:
        assert len(result) == 1
        assert result[0].summary == summary
        assert result[0].severity is Severity.WARNING
    else:
        assert result == []


def test_agent_diagnostics_detail_names_skip_settings():
    assert SCHEMA_SKIP_IPV4 in conn("", "set", False, False).agent_diagnostics()[0].detail
    assert SCHEMA_SKIP_IPV6 in conn("set", "", False, False).agent_diagnostics()[0].detail


@pytest.mark.parametrize(
    "info, expected",
    [
        (ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1")), False),
        (ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"), skip_ipv4=True), False),
        (ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"), skip_ipv6=True), True),
        (ConnectionInfo(), False),
        (ConnectionInfo(PrimaryIPs(ipv6=IPV6)), False),
        (ConnectionInfo(PrimaryIPs(ipv6=IPV6), skip_ipv4=True), True),
        (ConnectionInfo(PrimaryIPs(ipv6=IPV6), skip_ipv6=True), False),
        (ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6)), True),
        (ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6), skip_ipv4=True), True),
        (ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6), skip_ipv6=True), True),
        (ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6), True, True), True),
    ],
)
def test_has_required_ip(info, expected):
    assert info.has_required_ip() is expected


V4_DHCP = CloudInitNetworkConfig(ipv4=IPConfig(dhcp=True))
V6_DHCP = CloudInitNetworkConfig(ipv6=IPConfig(dhcp=True))
V4_STATIC = CloudInitNetworkConfig(ipv4=IPConfig(address="192.168.1.1/24"))
V6_STATIC = CloudInitNetworkConfig(ipv6=IPConfig(address=IPV6 + "/64"))
BOTH_STATIC = CloudInitNetworkConfig(
    ipv4=IPConfig(address="192.168.1.1/24"), ipv6=IPConfig(address=IPV6 + "/64")
)


@pytest.mark.parametrize(
    "config, ci_custom, skip4, skip6, expected",
    [
        (V4_DHCP, False, False, False, ConnectionInfo(skip_ipv6=True)),
        (V4_DHCP, True, False, False, ConnectionInfo()),
        (V4_DHCP, False, True, False, ConnectionInfo(skip_ipv4=True, skip_ipv6=True)),
        (V4_DHCP, True, True, False, ConnectionInfo(skip_ipv4=True)),
        (
            V4_STATIC, False, False, False,
            ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"), skip_ipv6=True),
        ),
        (V4_STATIC, True, False, False, ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"))),
        (BOTH_STATIC, False, False, False, ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6))),
        (BOTH_STATIC, True, False, False, ConnectionInfo(PrimaryIPs("192.168.1.1", IPV6))),
        (
            V4_STATIC, False, True, False,
            ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"), True, True),
        ),
        (
            V4_STATIC, True, True, False,
            ConnectionInfo(PrimaryIPs(ipv4="192.168.1.1"), skip_ipv4=True),
        ),
        (V6_DHCP, False, False, False, ConnectionInfo(skip_ipv4=True)),
        (V6_DHCP, True, False, False, ConnectionInfo()),
        (V6_DHCP, False, False, True, ConnectionInfo(skip_ipv4=True, skip_ipv6=True)),
        (V6_DHCP, True, False, True, ConnectionInfo(skip_ipv6=True)),
        (V6_STATIC, False, False, False, ConnectionInfo(PrimaryIPs(ipv6=IPV6), skip_ipv4=True)),
        (V6_STATIC, True, False, False, ConnectionInfo(PrimaryIPs(ipv6=IPV6))),
        (V6_STATIC, False, False, True, ConnectionInfo(PrimaryIPs(ipv6=IPV6), True, True)),
        (V6_STATIC, True, False, True, ConnectionInfo(PrimaryIPs(ipv6=IPV6), skip_ipv6=True)),
    ],
)
def test_parse_cloud_init_interface(config, ci_custom, skip4, skip6, expected):
    assert parse_cloud_init_interface(config, ci_custom, skip4, skip6) == expected


MAC_A = "02:00:5E:00:00:0A"
MAC_B = "02:00:5E:00:00:0B"
MAC_C = "02:00:5E:00:00:0C"


@pytest.mark.parametrize(
    "interfaces, mac, start, expected",
    [
        (
            [AgentNetworkInterface(MAC_A, "eth1", [parse_ip("127.0.0.1/8"), parse_ip("::1/128")])],
            MAC_A.lower(),
            ConnectionInfo(),
            ConnectionInfo(),
        ),
        (
            [
                AgentNetworkInterface(
                    MAC_B,
                    "eth1",
                    [parse_ip("127.0.0.1/8"), parse_ip("192.168.1.1/24"), parse_ip("::1/128")],
                )
            ],
            MAC_B,
            ConnectionInfo(),
            ConnectionInfo(PrimaryIPs(ipv4=format_ip("192.168.1.1"))),
        ),
        (
            [
                AgentNetworkInterface(
                    MAC_C,
                    "eth1",
                    [parse_ip("127.0.0.1/8"), parse_ip("::1/128"), parse_ip(IPV6 + "/64")],
                )
            ],
            MAC_C,
            ConnectionInfo(),
            ConnectionInfo(PrimaryIPs(ipv6=format_ip(IPV6))),
        ),
        (
            [
                AgentNetworkInterface(MAC_C, "lo", [parse_ip("127.0.0.1/8"), parse_ip("::1/128")]),
                AgentNetworkInterface(
                    MAC_A, "eth0", [parse_ip("192.168.1.1/24"), parse_ip(IPV6 + "/64")]
                ),
                AgentNetworkInterface(
                    MAC_B,
                    "wth1",
                    [parse_ip("10.10.10.1/16"), parse_ip("3ffe:1900:4545:3:200:f8ff:fe21:67cf/64")],
                ),
            ],
            MAC_B,
            ConnectionInfo(),
            ConnectionInfo(
                PrimaryIPs(
                    ipv4=format_ip("10.10.10.1"),
                    ipv6=format_ip("3ffe:1900:4545:3:200:f8ff:fe21:67cf"),
                )
            ),
        ),
        (
            [AgentNetworkInterface(MAC_B, ip_addresses=[parse_ip("192.168.1.1/24")])],
            MAC_B,
            ConnectionInfo(PrimaryIPs(ipv4=format_ip("10.10.1.1"))),
            ConnectionInfo(PrimaryIPs(ipv4=format_ip("10.10.1.1"))),
        ),
        (
            [AgentNetworkInterface(MAC_B, ip_addresses=[parse_ip(IPV6 + "/64")])],
            MAC_B,
            ConnectionInfo(PrimaryIPs(ipv6=format_ip("3ffe:1900:4545:3:200:f8ff:fe21:67cf"))),
            ConnectionInfo(PrimaryIPs(ipv6=format_ip("3ffe:1900:4545:3:200:f8ff:fe21:67cf"))),
        ),
    ],
)
def test_parse_primary_ips(interfaces, mac, start, expected):
    assert start.parse_primary_ips(interfaces, mac) == expected


def test_parse_primary_ips_skips_link_local_and_keeps_flags():
    interfaces = [
        AgentNetworkInterface(MAC_A, ip_addresses=["169.254.1.1", "fe80::1", "10.0.0.5"])
    ]
    result = ConnectionInfo(skip_ipv6=True).parse_primary_ips(interfaces, MAC_A)
    assert result == ConnectionInfo(PrimaryIPs(ipv4="10.0.0.5"), skip_ipv6=True)


def test_parse_primary_ips_rejects_bad_mac():
    with pytest.raises(ValueError):
        ConnectionInfo().parse_primary_ips([], "not-a-mac")