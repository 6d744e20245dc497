"""Image asset and guide commands."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..models.document import AssetLibrary, Guide, GuideSet, ImageAsset
from ..models.draft import DocumentDraft
from ..models.nodes import ImageNode

logger = logging.getLogger(__name__)


def add_image_asset(draft: DocumentDraft, asset: ImageAsset) -> str:
    """Register an image asset (replacing one with the same id)."""
    library = draft.assets or AssetLibrary()
    order = library.image_order if asset.id in library.image_order else library.image_order + (asset.id,)
    draft.set("assets", AssetLibrary(image_order=order, images_by_id={**library.images_by_id, asset.id: asset}))
    return asset.id


def remove_image_asset(draft: DocumentDraft, asset_id: str) -> bool:
    """
    Remove an unused image asset.

    Returns:
        False when the asset is missing or still referenced by an image node
    """
    library = draft.assets
    if library is None or asset_id not in library.images_by_id:
        return False

    users = [n.id for n in draft.nodes_by_id.values() if isinstance(n, ImageNode) and n.asset_id == asset_id]
    if users:
        logger.warning(f"Asset {asset_id} still used by {len(users)} node(s); not removed")
        return False

    images = dict(library.images_by_id)
    del images[asset_id]
    draft.set("assets", AssetLibrary(
        image_order=tuple(i for i in library.image_order if i != asset_id),
        images_by_id=images,
    ))
    return True


def add_guide(draft: DocumentDraft, guide: Guide) -> Optional[str]:
    """Add a guide; page guides must point at an existing page."""
    if guide.page_id is not None and draft.get_page(guide.page_id) is None:
        return None

    guides = draft.guides or GuideSet()
    order = guides.order if guide.id in guides.order else guides.order + (guide.id,)
    draft.set("guides", GuideSet(order=order, by_id={**guides.by_id, guide.id: guide}))
    return guide.id


def update_guide(draft: DocumentDraft, guide_id: str, patch: Mapping[str, Any]) -> None:
    guides = draft.guides
    if guides is None or guide_id not in guides.by_id:
        return
    allowed = {"pos", "axis", "name", "locked", "visible", "snap"}
    values = {k: v for k, v in patch.items() if k in allowed}
    if not values:
        return
    updated = replace(guides.by_id[guide_id], **values)
    draft.set("guides", GuideSet(order=guides.order, by_id={**guides.by_id, guide_id: updated}))


def remove_guide(draft: DocumentDraft, guide_id: str) -> None:
    guides = draft.guides
    if guides is None or guide_id not in guides.by_id:
        return
    by_id = dict(guides.by_id)
    del by_id[guide_id]
    draft.set("guides", GuideSet(order=tuple(g for g in guides.order if g != guide_id), by_id=by_id))
