"""
JSON importer for pagedoc documents.

Reads the camelCase structure written by
:mod:`pagedoc.export.json_exporter` and older variants of it:

* list based documents (``pagePresets``, ``pages`` with ``index`` and
  ``override.margin``, ``nodes`` with ``pageId``)
* header/footer nodes stored inline under
  ``headerFooterByPresetId.<preset>.<zone>.nodesById``; they are moved into
  the shared node map with an owner pointing at their zone

Structural problems that cannot be repaired raise
:class:`~pagedoc.exceptions.DocumentFormatError`. Everything else (margin
sources, header/footer heights, missing zones) is left to
:func:`~pagedoc.commands.normalize.bootstrap_document`.
"""

import json
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

from ..commands.margins import to_full_margin
from ..commands.normalize import bootstrap_document
from ..config import DEFAULT_CONFIG, EditorConfig
from ..exceptions import DocumentFormatError
from ..export.json_exporter import camel_case
from ..models.document import (
    AssetLibrary,
    Document,
    DocumentMeta,
    Guide,
    GuideSet,
    GuideSnap,
    HeaderFooter,
    HeaderFooterZone,
    ImageAsset,
    Page,
    PagePreset,
)
from ..models.geometry import Margin, Size
from ..models.nodes import (
    BoxNode,
    BoxStyle,
    CropRect,
    FieldNode,
    ImageNode,
    NodeBase,
    NodeOwner,
    PinConstraints,
    TextAutosize,
    TextNode,
    TextStyle,
    node_class_for,
)
from ..utils.enums import (
    DocumentUnit,
    GuideAxis,
    ImageFit,
    MarginSource,
    PresetSource,
    TextAlign,
    VerticalAlign,
    ZoneKind,
)

logger = logging.getLogger(__name__)

Converter = Callable[[Any], Any]


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DocumentFormatError(f"{what} must be an object", f"got {type(value).__name__}")
    return value


def _build(cls: Type, data: Mapping[str, Any], converters: Optional[Dict[str, Converter]] = None,
           renames: Optional[Dict[str, str]] = None) -> Any:
    """Instantiate a dataclass from camelCase data, converting nested values."""
    converters = converters or {}
    renames = renames or {}
    kwargs = {}
    for name in (f.name for f in fields(cls)):
        key = renames.get(name, camel_case(name))
        if key not in data or data[key] is None:
            continue
        value = data[key]
        convert = converters.get(name)
        kwargs[name] = convert(value) if convert else value
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise DocumentFormatError(f"Invalid {cls.__name__}", str(e)) from e


def _enum(enum_cls, fallback=None) -> Converter:
    def convert(value):
        try:
            return enum_cls(value)
        except ValueError:
            if fallback is None:
                raise DocumentFormatError(f"Unknown {enum_cls.__name__} value", repr(value))
            logger.warning(f"Unknown {enum_cls.__name__} {value!r}; using {fallback.value!r}")
            return fallback
    return convert


def _margin(value: Any) -> Margin:
    return Margin.from_mapping(_mapping(value, "margin"))


def _size(value: Any) -> Size:
    data = _mapping(value, "size")
    try:
        return Size(data["width"], data["height"])
    except KeyError as e:
        raise DocumentFormatError("size needs width and height", str(e)) from e


###############################################################################
# Entities
###############################################################################


def read_preset(data: Mapping[str, Any]) -> PagePreset:
    return _build(PagePreset, data, {
        "size": _size,
        "margin": _margin,
        "source": _enum(PresetSource, PresetSource.CUSTOM),
    })


def read_page(data: Mapping[str, Any], presets: Optional[Mapping[str, PagePreset]] = None) -> Page:
    page = _build(Page, data, {
        "margin_source": _enum(MarginSource, MarginSource.PRESET),
        "margin_override": _margin,
    })

    # list based documents keep a partial override under override.margin
    legacy = (data.get("override") or {}).get("margin")
    if legacy and page.margin_override is None:
        preset = (presets or {}).get(page.preset_id)
        base = preset.margin if preset is not None else Margin()
        page = replace(page, margin_source=MarginSource.PAGE, margin_override=to_full_margin(base, legacy))
    return page


def _text_style(value: Any) -> TextStyle:
    return _build(TextStyle, _mapping(value, "text style"), {
        "align": _enum(TextAlign, TextAlign.LEFT),
        "vertical_align": _enum(VerticalAlign, VerticalAlign.TOP),
    })


def _owner(value: Any) -> NodeOwner:
    data = _mapping(value, "owner")
    kind = _enum(ZoneKind)(data.get("kind"))
    return NodeOwner(kind, page_id=data.get("pageId"), preset_id=data.get("presetId"))


_NODE_CONVERTERS: Dict[Type[NodeBase], Dict[str, Converter]] = {
    TextNode: {
        "style": _text_style,
        "autosize": lambda v: _build(TextAutosize, _mapping(v, "autosize"), renames={"min_h": "minH", "max_h": "maxH"}),
    },
    FieldNode: {"style": _text_style},
    BoxNode: {"style": lambda v: _build(BoxStyle, _mapping(v, "box style"))},
    ImageNode: {
        "fit": _enum(ImageFit, ImageFit.CONTAIN),
        "crop": lambda v: _build(CropRect, _mapping(v, "crop")),
    },
}

_COMMON_NODE_CONVERTERS: Dict[str, Converter] = {
    "owner": _owner,
    "constraints": lambda v: _build(PinConstraints, _mapping(v, "constraints")),
    "children": tuple,
}


def read_node(data: Mapping[str, Any], default_owner: Optional[NodeOwner] = None) -> NodeBase:
    """
    Decode one node.

    A node without ``owner`` belongs to ``default_owner`` or, failing that,
    to the page named by its ``pageId``.

    Raises:
        DocumentFormatError: unknown ``type`` or no way to resolve the owner
    """
    data = _mapping(data, "node")
    try:
        cls = node_class_for(data.get("type"))
    except ValueError as e:
        raise DocumentFormatError("Unknown node type", f"{data.get('id')}: {data.get('type')!r}") from e

    converters = {**_COMMON_NODE_CONVERTERS, **_NODE_CONVERTERS.get(cls, {})}
    if "owner" not in data:
        if default_owner is None and not data.get("pageId"):
            raise DocumentFormatError("Node has no owner", str(data.get("id")))
        owner = default_owner or NodeOwner.page(data["pageId"])
        data = {**data, "owner": {"kind": owner.kind.value, "pageId": owner.page_id, "presetId": owner.preset_id}}

    node = _build(cls, data, converters)
    if node.owner.is_page and node.page_id is None:
        node = replace(node, page_id=node.owner.page_id)
    return node


def _zone(data: Mapping[str, Any]) -> HeaderFooterZone:
    return _build(HeaderFooterZone, data, {"node_order": tuple}, renames={
        "height": "heightPx", "min_height": "minHeightPx", "max_height": "maxHeightPx",
    })


def read_guide(data: Mapping[str, Any]) -> Guide:
    return _build(Guide, data, {
        "axis": _enum(GuideAxis, GuideAxis.X),
        "snap": lambda v: _build(GuideSnap, _mapping(v, "snap")),
    })


###############################################################################
# Document
###############################################################################


def _keyed(data: Mapping[str, Any], order_key: str, map_key: str, list_key: str,
           reader: Callable[[Mapping[str, Any]], Any]) -> Tuple[Tuple[str, ...], Dict[str, Any]]:
    """Read an id-keyed collection from either the map or the list form."""
    if map_key in data:
        by_id = {key: reader(item) for key, item in _mapping(data[map_key], map_key).items()}
        order = tuple(data.get(order_key) or by_id.keys())
        return order, by_id

    items = data.get(list_key) or []
    if not isinstance(items, list):
        raise DocumentFormatError(f"{list_key} must be a list")
    if items and all(isinstance(item, Mapping) and "index" in item for item in items):
        items = sorted(items, key=lambda item: item["index"])
    decoded = [reader(item) for item in items]
    return tuple(item.id for item in decoded), {item.id: item for item in decoded}


def _read_header_footer(data: Mapping[str, Any], nodes: Dict[str, NodeBase]) -> Dict[str, HeaderFooter]:
    result = {}
    for preset_id, raw in _mapping(data.get("headerFooterByPresetId") or {}, "headerFooterByPresetId").items():
        raw = _mapping(raw, f"header/footer of {preset_id}")
        zones = {}
        for kind in ("header", "footer"):
            zone_data = {
                "id": f"hf-{preset_id}-{kind}",
                "name": kind.capitalize(),
                "heightPx": 0,
                **_mapping(raw.get(kind) or {}, f"{kind} of {preset_id}"),
            }

            inline = zone_data.get("nodesById") or {}
            if inline:
                logger.info(f"Migrating {len(inline)} inline {kind} node(s) of preset {preset_id}")
            owner = NodeOwner(ZoneKind(kind), preset_id=preset_id)
            for node_id, node_data in inline.items():
                if node_data:
                    nodes[node_id] = read_node(node_data, default_owner=owner)

            zone = _zone(zone_data)
            if inline and not zone.node_order:
                zone = replace(zone, node_order=tuple(inline))
            zones[kind] = zone
        result[preset_id] = HeaderFooter(header=zones["header"], footer=zones["footer"])
    return result


def read_document(data: Mapping[str, Any]) -> Document:
    """
    Decode a document without repairing it.

    Raises:
        DocumentFormatError: when ``data`` is not a document
    """
    data = _mapping(data, "document")
    if not data.get("id"):
        raise DocumentFormatError("Document has no id")

    unit = _enum(DocumentUnit)(data.get("unit", DocumentUnit.PT.value))

    preset_order, presets = _keyed(data, "pagePresetOrder", "pagePresetsById", "pagePresets", read_preset)
    page_order, pages = _keyed(data, "pageOrder", "pagesById", "pages",
                               lambda item: read_page(item, presets))

    nodes: Dict[str, NodeBase] = {}
    raw_nodes = data.get("nodesById")
    if raw_nodes is not None:
        for node_id, node_data in _mapping(raw_nodes, "nodesById").items():
            nodes[node_id] = read_node(node_data)
    for node_data in data.get("nodes") or []:
        node = read_node(node_data)
        nodes[node.id] = node

    node_orders: Dict[str, Tuple[str, ...]] = {
        page_id: tuple(order or ())
        for page_id, order in _mapping(data.get("nodeOrderByPageId") or {}, "nodeOrderByPageId").items()
    }
    if "nodeOrderByPageId" not in data and nodes:
        by_page: Dict[str, List[NodeBase]] = {}
        for node in nodes.values():
            if node.owner.is_page:
                by_page.setdefault(node.owner.page_id, []).append(node)
        node_orders = {pid: tuple(n.id for n in sorted(items, key=lambda n: n.z)) for pid, items in by_page.items()}

    header_footer = _read_header_footer(data, nodes)

    assets = None
    if data.get("assets") is not None:
        raw = _mapping(data["assets"], "assets")
        order, images = _keyed(raw, "imageOrder", "imagesById", "images",
                               lambda item: _build(ImageAsset, _mapping(item, "image")))
        assets = AssetLibrary(image_order=order, images_by_id=images)

    guides = None
    raw_guides = data.get("guides")
    if isinstance(raw_guides, list):
        decoded = [read_guide(item) for item in raw_guides]
        guides = GuideSet(order=tuple(g.id for g in decoded), by_id={g.id: g for g in decoded})
    elif raw_guides is not None:
        raw_guides = _mapping(raw_guides, "guides")
        by_id = {key: read_guide(item) for key, item in (raw_guides.get("byId") or {}).items()}
        guides = GuideSet(order=tuple(raw_guides.get("order") or by_id.keys()), by_id=by_id)

    meta = None
    if data.get("meta") is not None:
        meta = _build(DocumentMeta, _mapping(data["meta"], "meta"))

    return Document(
        id=str(data["id"]),
        name=data.get("name") or "Untitled",
        version=int(data.get("version", 1)),
        unit=unit,
        preset_order=preset_order,
        presets_by_id=presets,
        page_order=page_order,
        pages_by_id=pages,
        nodes_by_id=nodes,
        node_order_by_page_id=node_orders,
        header_footer_by_preset_id=header_footer,
        assets=assets,
        guides=guides,
        meta=meta,
    )


def import_document(data: Mapping[str, Any], repair: bool = True,
                    config: EditorConfig = DEFAULT_CONFIG) -> Document:
    """
    Decode a document and, by default, run the load-time repair pass.

    Args:
        data: Parsed JSON object
        repair: Run :func:`bootstrap_document` (unit migration, margins,
            header/footer zones and heights)
        config: Defaults used by the repair pass
    """
    doc = read_document(data)
    if repair:
        doc = bootstrap_document(doc, config)
    logger.debug(f"Imported document {doc.id}: {len(doc.page_order)} page(s), {len(doc.nodes_by_id)} node(s)")
    return doc


def document_from_json(text: Union[str, bytes], repair: bool = True,
                       config: EditorConfig = DEFAULT_CONFIG) -> Document:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError("Invalid JSON", str(e)) from e
    return import_document(data, repair=repair, config=config)


def load_document(path: Union[str, Path], repair: bool = True,
                  config: EditorConfig = DEFAULT_CONFIG) -> Document:
    """Read and import a JSON document file."""
    path = Path(path)
    logger.info(f"Loading document: {path}")
    return document_from_json(path.read_text(encoding="utf-8"), repair=repair, config=config)
