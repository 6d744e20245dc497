"""Configuration objects for the pagedoc command layer."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from .models.geometry import Margin
from .utils.enums import DocumentUnit


@dataclass(frozen=True, slots=True)
class HeaderFooterConstraints:
    """
    Limits applied when clamping header/footer heights.

    ``*_max_pct`` caps a zone relative to the page height and ``min_body``
    is the height the body band must keep once both zones are placed.
    """

    header_max_pct: float = 0.25
    footer_max_pct: float = 0.20
    header_min: float = 0
    footer_min: float = 0
    min_body: float = 120

    def max_pct(self, kind: str) -> float:
        return self.header_max_pct if kind == "header" else self.footer_max_pct

    def kind_min(self, kind: str) -> float:
        return self.header_min if kind == "header" else self.footer_min


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Defaults used when commands create presets and header/footer zones."""

    default_margin: Margin = field(default_factory=lambda: Margin(10, 10, 10, 10))
    default_header_height: float = 100
    default_footer_height: float = 80
    constraints: HeaderFooterConstraints = field(default_factory=HeaderFooterConstraints)
    default_unit: DocumentUnit = DocumentUnit.PT
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EditorConfig":
        """
        Build a config from a plain mapping (e.g. parsed JSON settings).

        Unknown keys are ignored; ``default_margin`` and ``constraints`` may
        be given as nested mappings.
        """
        config = cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {k: v for k, v in data.items() if k in known}

        if isinstance(values.get("default_margin"), Mapping):
            values["default_margin"] = Margin.from_mapping(values["default_margin"])
        if isinstance(values.get("constraints"), Mapping):
            allowed = {f.name for f in fields(HeaderFooterConstraints)}
            values["constraints"] = HeaderFooterConstraints(
                **{k: v for k, v in values["constraints"].items() if k in allowed}
            )
        if "default_unit" in values:
            values["default_unit"] = DocumentUnit(values["default_unit"])
        return replace(config, **values)


DEFAULT_HF_CONSTRAINTS = HeaderFooterConstraints()
DEFAULT_CONFIG = EditorConfig()
