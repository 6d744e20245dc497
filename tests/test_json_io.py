"""
Tests for JSON export and import, including legacy document shapes.
"""

import json

import pytest

from pagedoc.commands import add_node, add_node_to_target, set_page_margin_override
from pagedoc.exceptions import DocumentFormatError
from pagedoc.export import JSONExporter, document_to_json, export_document
from pagedoc.export.json_exporter import camel_case
from pagedoc.importers import document_from_json, import_document, load_document, read_node
from pagedoc.models import ImageNode, Margin, NodeOwner, Size, TextAutosize
from pagedoc.utils.enums import DocumentUnit, MarginSource, ZoneKind
from pagedoc.validator import ValidationLevel, validate_document

from .conftest import run


@pytest.fixture
def legacy_data():
    """List based document with inline header nodes and a partial page override."""
    return {
        "id": "legacy",
        "unit": "pt",
        "pagePresets": [{
            "id": "p1",
            "name": "A4",
            "size": {"width": 59500, "height": 84200},
            "margin": {"top": 1000, "right": 1000, "bottom": 1000, "left": 1000},
        }],
        "pages": [
            {"id": "b", "presetId": "p1", "index": 1},
            {"id": "a", "presetId": "p1", "index": 0, "override": {"margin": {"top": 0}}},
        ],
        "nodes": [
            {"id": "n1", "type": "text", "pageId": "a", "text": "hi", "z": 2},
            {"id": "n2", "type": "box", "pageId": "a", "z": 1},
        ],
        "headerFooterByPresetId": {
            "p1": {
                "header": {
                    "heightPx": 120,
                    "nodesById": {"logo": {"id": "logo", "type": "image", "assetId": "img", "w": 50, "h": 50}},
                },
            },
        },
    }


class TestExport:
    """Test cases for the JSON exporter."""

    def test_camel_case(self):
        assert camel_case("node_order_by_page_id") == "nodeOrderByPageId"
        assert camel_case("id") == "id"

    def test_wire_shape(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1", autosize=TextAutosize("height", 10, None)))
        data = export_document(doc)

        assert data["pagePresetOrder"] == ["preset-1"]
        assert data["pagePresetsById"]["preset-1"]["size"] == {"width": 59500, "height": 84200}
        assert data["pagesById"]["page-1"]["marginSource"] == "preset"
        assert "marginOverride" not in data["pagesById"]["page-1"]
        assert "meta" not in data

        header = data["headerFooterByPresetId"]["preset-1"]["header"]
        assert header["heightPx"] == 100
        assert header["anchorToMargins"] is True

        node = data["nodesById"]["t1"]
        assert node["type"] == "text"
        assert node["owner"] == {"kind": "page", "pageId": "page-1"}
        assert node["autosize"] == {"mode": "height", "minH": 10}
        assert data["nodeOrderByPageId"] == {"page-1": ["t1"]}

    def test_json_text(self, one_page_doc):
        text = document_to_json(one_page_doc, indent=None)
        assert json.loads(text)["id"] == "doc-test"

    def test_exporter_writes_file(self, one_page_doc, tmp_path):
        output = tmp_path / "out" / "doc.json"
        exporter = JSONExporter(one_page_doc)
        assert exporter.export(output) is True
        assert json.loads(output.read_text(encoding="utf-8")) == exporter.to_dict()

    def test_exporter_reports_failure(self, one_page_doc, tmp_path):
        assert JSONExporter(one_page_doc).export(tmp_path) is False


class TestImport:
    """Test cases for the JSON importer."""

    def test_exported_document_reads_back(self, one_page_doc, make_text):
        doc, _ = run(one_page_doc, add_node, "page-1", make_text("t1", text="hello"))
        doc, _ = run(doc, add_node_to_target, "page-1", "footer", make_text("f1"))
        doc, _ = run(doc, set_page_margin_override, "page-1", Margin(1, 2, 3, 4))
        assert import_document(export_document(doc)) == doc

    def test_equal_documents_are_not_hashable(self, one_page_doc):
        copy = import_document(export_document(one_page_doc))
        assert copy == one_page_doc and copy is not one_page_doc
        with pytest.raises(TypeError):
            hash(copy)

    def test_legacy_list_document(self, legacy_data):
        doc = import_document(legacy_data)

        assert doc.preset_order == ("p1",)
        assert doc.page_order == ("a", "b")
        page = doc.pages_by_id["a"]
        assert page.margin_source == MarginSource.PAGE
        assert page.margin_override == Margin(0, 1000, 1000, 1000)

        assert doc.node_order_by_page_id["a"] == ("n2", "n1")
        assert doc.node_order_by_page_id["b"] == ()
        assert doc.nodes_by_id["n1"].page_id == "a"

        logo = doc.nodes_by_id["logo"]
        assert isinstance(logo, ImageNode)
        assert logo.owner == NodeOwner(ZoneKind.HEADER, preset_id="p1")
        hf = doc.header_footer_by_preset_id["p1"]
        assert hf.header.node_order == ("logo",)
        assert hf.header.height == 120
        assert hf.footer.height == 0

        errors = [i for i in validate_document(doc) if i.level == ValidationLevel.ERROR]
        assert errors == []

    def test_px_document_is_migrated(self):
        doc = import_document({
            "id": "px",
            "unit": "px",
            "pagePresets": [{"id": "p", "name": "P", "size": {"width": 800, "height": 1000},
                             "margin": {"top": 40, "right": 40, "bottom": 40, "left": 40}}],
            "pages": [{"id": "page", "presetId": "p"}],
        })
        assert doc.unit == DocumentUnit.PT
        assert doc.presets_by_id["p"].size == Size(60000, 75000)

    def test_without_repair(self):
        doc = import_document({"id": "raw", "unit": "px"}, repair=False)
        assert doc.unit == DocumentUnit.PX
        assert doc.assets is None

    def test_unknown_enum_falls_back(self, legacy_data):
        legacy_data["pages"][0]["marginSource"] = "sideways"
        doc = import_document(legacy_data)
        assert doc.pages_by_id["b"].margin_source == MarginSource.PRESET

    def test_guides_as_list(self, legacy_data):
        legacy_data["guides"] = [{"id": "g1", "pos": 100, "axis": "y", "pageId": "a"}]
        doc = import_document(legacy_data)
        assert doc.guides.order == ("g1",)
        assert doc.guides.by_id["g1"].page_id == "a"

    def test_read_node_default_owner(self):
        node = read_node({"id": "f", "type": "field", "fieldKey": "page_count"},
                         default_owner=NodeOwner.footer("p"))
        assert node.owner.kind == ZoneKind.FOOTER
        assert node.field_key == "page_count"

    def test_load_document(self, one_page_doc, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(document_to_json(one_page_doc), encoding="utf-8")
        assert load_document(path) == one_page_doc


class TestImportErrors:
    """Test cases for malformed input."""

    def test_invalid_json(self):
        with pytest.raises(DocumentFormatError):
            document_from_json("{not json")

    @pytest.mark.parametrize("data", [
        [],
        {"name": "no id"},
        {"id": "d", "unit": "inches"},
        {"id": "d", "nodes": [{"id": "n", "type": "circle", "pageId": "p"}]},
        {"id": "d", "nodes": [{"id": "n", "type": "text"}]},
        {"id": "d", "pagePresets": [{"id": "p", "name": "P", "size": {"width": 1}}]},
        {"id": "d", "pages": {"id": "p"}},
    ])
    def test_malformed_documents(self, data):
        with pytest.raises(DocumentFormatError):
            import_document(data)

    def test_error_message_has_details(self):
        with pytest.raises(DocumentFormatError) as exc_info:
            import_document({"id": "d", "nodes": [{"id": "n", "type": "circle", "pageId": "p"}]})
        assert exc_info.value.details == "n: 'circle'"
