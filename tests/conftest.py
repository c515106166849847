"""Shared test fixtures."""

import pytest
from bs4 import BeautifulSoup

from image_finder.catalog import CatalogParser
from image_finder.models import TableLayout, WatchConfig

CATALOG_CSV = """SKUs,Image URL,Product URL,Product Name
"7290011, 7290012",https://cdn.modulus.co.il/img/food.jpg?w=100,https://www.anipet.co.il/food,Cat Food
55,https://d3m9l0v76dty0.cloudfront.net/show/leash.jpg,https://supplier.example.com/leash,Dog Leash
"AN-100",https://www.all4pet.co.il/toy_small.png,,"Toy ""Mouse"", Large"
,https://example.com/bowl.jpg,https://www.anipet.co.il/bowl,Water Bowl
"""


def make_row(name, sku="", original_sku=None, extra_cells=3):
    """Build one task-table row: image cell, SKU cell, name cell, extras."""
    attr = f' data-original-sku="{original_sku}"' if original_sku is not None else ''
    extras = ''.join(f'<td>x{i}</td>' for i in range(extra_cells))
    return f'<tr><td class="img-cell"></td><td class="sku"{attr}>{sku}</td><td class="name">{name}</td>{extras}</tr>'


def make_page(rows, table_id="tasks"):
    """Build a page with one product table."""
    return f"""
    <html><body>
    <div id="app">
      <div id="taskOverview">
        <table id="{table_id}" class="table table-hover">
          <thead><tr><th>Image</th><th>SKU</th><th>Name</th><th>A</th><th>B</th><th>C</th></tr></thead>
          <tbody>{''.join(rows)}</tbody>
        </table>
      </div>
    </div>
    </body></html>
    """


@pytest.fixture
def catalog_csv():
    """Catalog feed with quoted fields and an SKU-less entry."""
    return CATALOG_CSV


@pytest.fixture
def catalog(catalog_csv):
    """Parsed catalog from the sample feed."""
    return CatalogParser().parse(catalog_csv)


@pytest.fixture
def task_layout():
    """Layout matching make_page()."""
    return TableLayout(
        name="tasks",
        cells_selector="#taskOverview table > tbody > tr > td:nth-child(3)",
        sku_cell_selector="td.sku",
        image_target_selector="td:first-child",
        table_selector="#taskOverview table.table-hover",
        hidden_columns=[4, 6],
    )


@pytest.fixture
def watch_config():
    """Watch config equivalent to config/page_layouts.yaml."""
    return WatchConfig(
        observer_roots=["#app", ".page-content"],
        container_ids=["taskOverview", "kt_content"],
        container_classes=["table-hover"],
        relevant_node_selector="#taskOverview table, #taskOverview tr, table.table-hover, table.table-hover tr",
        relevant_descendant_selector="#taskOverview table, table.table-hover",
        watched_table_selector="#taskOverview table, #kt_content table, table.table-hover",
        tracked_attributes=["data-original-sku"],
        highlight_classes=["barcode-highlight"],
        title_markers=["ברקוד הוחלף"],
    )


@pytest.fixture
def page_soup():
    """Page with three rows: SKU match, edited SKU, name-only match."""
    html = make_page([
        make_row("Something", sku="7290011"),
        make_row("Leash", sku="X9", original_sku="55"),
        make_row("  cat food  "),
    ])
    return BeautifulSoup(html, "lxml")
