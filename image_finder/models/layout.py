"""
Page layout configuration models.

Selector sets that describe where product tables live on the host page and
which DOM regions the change watcher cares about. Loaded from
config/page_layouts.yaml.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TableLayout:
    """Selector triple for one table layout, plus cosmetic column hiding."""
    name: str
    cells_selector: str                       # Row-name cells
    sku_cell_selector: Optional[str] = None   # Relative to the row
    image_target_selector: str = "td:first-child"
    table_selector: Optional[str] = None
    hidden_columns: List[int] = field(default_factory=list)  # 1-based

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableLayout":
        return cls(
            name=data["name"],
            cells_selector=data["cells_selector"],
            sku_cell_selector=data.get("sku_cell_selector"),
            image_target_selector=data.get("image_target_selector") or "td:first-child",
            table_selector=data.get("table_selector"),
            hidden_columns=list(data.get("hidden_columns", [])),
        )


@dataclass
class AlternateTableRule:
    """Column hiding for tables outside the known layouts, keyed on a SKU header."""
    table_selector: str
    sku_header_markers: List[str] = field(default_factory=list)
    sku_columns: List[int] = field(default_factory=list)
    hidden_columns: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlternateTableRule":
        return cls(
            table_selector=data["table_selector"],
            sku_header_markers=list(data.get("sku_header_markers", [])),
            sku_columns=list(data.get("sku_columns", [])),
            hidden_columns=list(data.get("hidden_columns", [])),
        )


@dataclass
class WatchConfig:
    """DOM regions and attributes whose changes should trigger a rescan."""
    observer_roots: List[str] = field(default_factory=lambda: ["#app", ".page-content"])
    container_ids: List[str] = field(default_factory=list)
    container_classes: List[str] = field(default_factory=list)
    relevant_node_selector: str = ""
    relevant_descendant_selector: str = ""
    watched_table_selector: str = ""
    tracked_attributes: List[str] = field(default_factory=list)
    highlight_classes: List[str] = field(default_factory=list)
    title_markers: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WatchConfig":
        defaults = cls()
        return cls(
            observer_roots=list(data.get("observer_roots", defaults.observer_roots)),
            container_ids=list(data.get("container_ids", [])),
            container_classes=list(data.get("container_classes", [])),
            relevant_node_selector=data.get("relevant_node_selector", ""),
            relevant_descendant_selector=data.get("relevant_descendant_selector", ""),
            watched_table_selector=data.get("watched_table_selector", ""),
            tracked_attributes=list(data.get("tracked_attributes", [])),
            highlight_classes=list(data.get("highlight_classes", [])),
            title_markers=list(data.get("title_markers", [])),
        )
