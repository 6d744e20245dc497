"""Media helpers for pagedoc."""

from .image_probe import content_hash, find_asset_by_hash, get_image_info, probe_image, probe_image_file

__all__ = [
    "content_hash",
    "find_asset_by_hash",
    "get_image_info",
    "probe_image",
    "probe_image_file",
]
