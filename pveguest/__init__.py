"""Helpers for Proxmox VE guests: IDs, tags, SSH keys, clone sources, disks, networks and IPs."""

__version__ = "0.1.0"