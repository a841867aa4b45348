# pveguest

Pure-Python building blocks for managing Proxmox VE guests (LXC containers
and QEMU virtual machines). The package has no runtime dependencies and
works on plain Python values: strings, dictionaries, lists and a few
dataclasses.

## Modules

- `pveguest.diagnostics`: `Severity` (`ERROR`, `WARNING`), the frozen
  `Diagnostic` dataclass with `Diagnostic.error(...)` and
  `Diagnostic.warning(...)`, and `has_error(diagnostics)`.
- `pveguest.guest_id`: `GuestResourceId.parse("<node>/<lxc|qemu>/<vmid>")`
  raises `ValueError` for a malformed ID. `str()` formats it back.
- `pveguest.tags`: `split_tags` splits on `;` and `,`. `remove_duplicates`
  keeps the first occurrence of each tag. `sort_tags` and `tags_to_string`
  join with `;`. `tags_equivalent` tells whether two tag strings hold the same
  set. `tags_from_config` gives the de-duplicated tags of a configured string.
- `pveguest.sshkeys`: `split_keys` (one entry per line), `join_keys` (each key
  followed by a newline), `trim_keys` and `keys_equivalent` (whitespace-only
  differences are ignored).
- `pveguest.guest`: `GuestType`, `GuestResource`, `VmRef` and `HAGroup`.
  `HAGroup.to_state()` returns the group's settings with its nodes sorted.
  - `select_source_by_name` picks a clone source by name and prefers the given
    node. If no guest with that name is on the node, it takes the first match.
  - `select_source_guest` looks the source up by name, or by ID when no name
    is given.
  - A guest that cannot be found raises `LookupError`. A wrong guest type or
    missing arguments raise `ValueError`.
- `pveguest.lxc_disks`: planning changes to root and mount point disks.
  - `validate_disk_size` checks a size.
  - `disk_slot_name` gives the configuration key, such as `mp0` or `rootfs`.
  - `disks_to_delete`, `disks_to_create`, `disks_to_move` and
    `disks_to_resize` compare two disk sets.
- `pveguest.lxc_mountpoint`: helpers for a single mount point.
  - `validate_mountpoint_size`.
  - `extract_disk_options` unwraps the `mountoptions` block.
  - `mountpoint_key(slot)` and `mountpoint_delete_params(slot)`.
- `pveguest.lxc_networks`: `network_keys_to_delete` and
  `network_delete_params` find interfaces that were dropped.
  `strip_network_ids` keys interfaces by position and removes their `id`.
- `pveguest.lxc_config`: `LxcConfig.from_settings(mapping)` builds a
  container configuration. Settings that are left out take their defaults.
  - `lxc_tags_from_config` converts the comma separated tags read back from
    the API.
  - `find_pool_for_guest` finds the pool a guest belongs to.
- `pveguest.connection`: the IP addresses a guest can be reached on.
  - `parse_cloud_init_interface` reads addresses from cloud-init settings,
    given as `CloudInitNetworkConfig` and `IPConfig`.
  - `ConnectionInfo.parse_primary_ips` fills in missing addresses from
    guest-agent interfaces (`AgentNetworkInterface`) that match a MAC address.
    Only global unicast addresses count.
  - `ConnectionInfo.has_required_ip` tells whether every address family that
    is not skipped has an address.
  - `ConnectionInfo.agent_diagnostics` returns warnings about the address
    families that are missing.
- `pveguest.storage`: `volume_id(storage, file_name)` gives
  `<storage>:iso/<file>`.
  - `content_delete_path(node, volid)` gives the API path that deletes a
    volume.
  - `find_volume_size(contents, volid)` finds a volume's size in a storage
    listing.
  - `download_file(url, destination)` copies a URL's body into a binary file.
    It follows redirects, and it copies the body whatever the response status.

## Examples

```python
from pveguest.guest_id import GuestResourceId
from pveguest.tags import split_tags, tags_equivalent

guest = GuestResourceId.parse("pve1/lxc/105")
print(guest.node, guest.guest_type, guest.id)   # pve1 lxc 105
print(str(guest))                               # pve1/lxc/105

print(split_tags("b,a;c"))                      # ['b', 'a', 'c']
print(tags_equivalent("a;b;a", "b,a"))          # True
```

```python
from pveguest.guest import GuestResource, GuestType, select_source_by_name

guests = [
    GuestResource(100, "template", "node1", GuestType.LXC),
    GuestResource(101, "template", "node2", GuestType.LXC),
]
ref = select_source_by_name(guests, "template", "node2", GuestType.LXC)
print(ref.id, ref.node)                         # 101 node2
```

```python
from pveguest.connection import (
    CloudInitNetworkConfig,
    IPConfig,
    parse_cloud_init_interface,
)

conn = parse_cloud_init_interface(
    CloudInitNetworkConfig(ipv4=IPConfig(address="192.168.1.1/24")),
    ci_custom=False,
    skip_ipv4=False,
    skip_ipv6=False,
)
print(conn.ips.ipv4, conn.skip_ipv6)            # 192.168.1.1 True
print(conn.has_required_ip())                   # True
```

## What it does not do

- It does not talk to a Proxmox VE server. There is no API client, and no
  guest is ever created, changed or deleted. The functions only work out what
  to send, and you make the requests yourself.
- It does not build cloud-init ISO images.
- It does not convert QEMU USB settings.
- It has no check of the allowed range of guest IDs.
- It has no reboot-severity handling.
- It installs no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```