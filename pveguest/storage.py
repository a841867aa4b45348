"""ISO images on node storage: volume IDs, API paths and downloads."""

from __future__ import annotations

import shutil
import urllib.error
import urllib.request
from collections.abc import Iterable, Mapping
from typing import Any, BinaryIO

ISO_CONTENT_TYPE = "iso"

_CHUNK_SIZE = 64 * 1024


def volume_id(storage: str, file_name: str) -> str:
    """The volume ID of an uploaded ISO: '<storage>:iso/<file name>'."""
    return f"{storage}:{ISO_CONTENT_TYPE}/{file_name}"


def content_delete_path(node: str, volid: str) -> str:
    """API path that deletes a volume from the storage it lives on."""
    storage = volid.split(":", 1)[0]
    return f"/nodes/{node}/storage/{storage}/content/{volid}"


def find_volume_size(contents: Iterable[Mapping[str, Any]], volid: str) -> int | None:
    """Size in bytes of the volume in a storage listing, or None if absent."""
    for entry in contents:
        if entry["volid"] == volid:
            return int(entry["size"])
    return None


def download_file(url: str, destination: BinaryIO) -> None:
    """Copy the body served at a URL into a binary file.

    Redirects are followed. The body is copied whatever the response status.
    """
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as exc:
        response = exc
    with response:
        shutil.copyfileobj(response, destination, _CHUNK_SIZE)