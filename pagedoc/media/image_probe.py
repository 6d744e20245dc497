"""
Image asset probing.

Builds :class:`~pagedoc.models.document.ImageAsset` descriptors from raw image
bytes: format, intrinsic pixel size and a content hash used to deduplicate
assets.
"""

import hashlib
import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import DocumentFormatError
from ..models.document import AssetLibrary, ImageAsset

logger = logging.getLogger(__name__)


def content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def get_image_info(data: bytes) -> Dict[str, Any]:
    """
    Get image information.

    Args:
        data: Image data to analyze

    Returns:
        Image information dictionary

    Raises:
        DocumentFormatError: if the data is not an image Pillow can read
    """
    if not isinstance(data, (bytes, bytearray)):
        raise DocumentFormatError("Image data must be bytes", type(data).__name__)

    try:
        with Image.open(io.BytesIO(data)) as image:
            return {
                'format': image.format,
                'mime': Image.MIME.get(image.format) if image.format else None,
                'mode': image.mode,
                'width': image.width,
                'height': image.height,
                'has_transparency': image.mode in ('RGBA', 'LA', 'P'),
                'file_size': len(data),
            }
    except UnidentifiedImageError as e:
        raise DocumentFormatError("Unsupported image data", str(e)) from e


def probe_image(data: bytes, src: Optional[str] = None, asset_id: Optional[str] = None) -> ImageAsset:
    """
    Describe an image as a document asset.

    The asset id defaults to ``img-`` plus the first 12 hex digits of the
    content hash, so probing the same bytes twice yields the same id.
    """
    info = get_image_info(data)
    digest = content_hash(bytes(data))
    asset = ImageAsset(
        id=asset_id or f"img-{digest[:12]}",
        src=src or f"sha256:{digest}",
        mime=info['mime'],
        width=info['width'],
        height=info['height'],
        hash=digest,
    )
    logger.debug(f"Probed image {asset.id}: {asset.mime} {asset.width}x{asset.height}")
    return asset


def probe_image_file(path: Union[str, Path], asset_id: Optional[str] = None) -> ImageAsset:
    path = Path(path)
    return probe_image(path.read_bytes(), src=path.as_posix(), asset_id=asset_id)


def find_asset_by_hash(library: Optional[AssetLibrary], digest: str) -> Optional[ImageAsset]:
    """Return an asset of ``library`` with the given content hash, if any."""
    if library is None:
        return None
    for asset_id in library.image_order:
        asset = library.images_by_id.get(asset_id)
        if asset is not None and asset.hash == digest:
            return asset
    return None
