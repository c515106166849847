"""End-to-end tests for augment_page.py"""

import logging
import sys

import pytest

import augment_page
from conftest import CATALOG_CSV

TASK_PAGE = """<html><body><div id="app">
<div id="taskOverview"><div>
  <div>Header</div>
  <div><div class="row"><div><div>
    <table class="table table-hover">
      <thead><tr><th>Image</th><th>SKU</th><th>Name</th><th>Qty</th></tr></thead>
      <tbody>
        <tr><td></td><td class="text-nowrap">7290011</td><td>Cat Food</td><td>2</td></tr>
        <tr><td></td><td class="text-nowrap">999</td><td>Unknown</td><td>1</td></tr>
      </tbody>
    </table>
  </div></div></div></div>
</div></div>
</div></body></html>"""


@pytest.fixture
def page_files(tmp_path):
    page = tmp_path / "task.html"
    page.write_text(TASK_PAGE, encoding="utf-8")
    catalog = tmp_path / "catalog.csv"
    catalog.write_text(CATALOG_CSV, encoding="utf-8")
    return page, catalog, tmp_path / "out.html"


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["augment_page.py", *args])
    with pytest.raises(SystemExit) as excinfo:
        augment_page.main()
    return excinfo.value.code


def test_writes_augmented_page(monkeypatch, page_files):
    page, catalog, out = page_files

    code = run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(catalog),
                   "--output", str(out), "--quiet")

    assert code == 0
    html = out.read_text(encoding="utf-8")
    assert html.count('class="image-finder-sku-image"') == 1
    assert "https://cdn.modulus.co.il/img/food.jpg?w=100" in html
    assert 'href="https://www.anipet.co.il/food"' in html


def test_no_hide_columns(monkeypatch, page_files):
    page, catalog, out = page_files

    run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(catalog),
            "--output", str(out), "--no-hide-columns", "--quiet")

    assert "display: none" not in out.read_text(encoding="utf-8")


def test_hides_columns_by_default(monkeypatch, page_files):
    page, catalog, out = page_files

    run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(catalog),
            "--output", str(out), "--quiet")

    assert "display: none" in out.read_text(encoding="utf-8")


def test_missing_catalog_file_leaves_page_untouched(monkeypatch, page_files, tmp_path):
    page, _, out = page_files

    code = run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(tmp_path / "nope.csv"),
                   "--output", str(out), "--no-hide-columns", "--quiet")

    assert code == 0
    assert "image-finder-sku-image" not in out.read_text(encoding="utf-8")


def test_missing_input_exits_with_error(monkeypatch, tmp_path):
    code = run_cli(monkeypatch, "--input", str(tmp_path / "missing.html"), "--quiet")
    assert code == 1


def test_writes_to_stdout(monkeypatch, page_files, capsys):
    page, catalog, _ = page_files

    run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(catalog), "--quiet")

    assert "image-finder-sku-image" in capsys.readouterr().out


def test_log_file(monkeypatch, page_files, tmp_path):
    page, catalog, out = page_files
    log_path = tmp_path / "run.log"

    run_cli(monkeypatch, "--input", str(page), "--catalog-file", str(catalog),
            "--output", str(out), "--log-file", str(log_path))

    for handler in logging.getLogger("image_finder").handlers:
        handler.close()
    assert "Augmented 1 rows" in log_path.read_text(encoding="utf-8")
