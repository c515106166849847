"""Tests for image_finder/catalog/client.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from image_finder.catalog.client import CatalogClient, FileCatalogClient
from image_finder.exceptions import CatalogTransportError

URL = "https://example.com/catalog.csv"


@pytest.fixture
def client():
    return CatalogClient(URL, timeout=5)


def make_response(status_code, text="", encoding="utf-8"):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.encoding = encoding
    return response


class TestFetchText:
    def test_success(self, client):
        with patch.object(client.session, "get", return_value=make_response(200, "SKUs,Image URL")) as get:
            assert client.fetch_text() == "SKUs,Image URL"
        get.assert_called_once_with(URL, timeout=5)

    def test_non_2xx_raises(self, client):
        with patch.object(client.session, "get", return_value=make_response(404)):
            with pytest.raises(CatalogTransportError) as excinfo:
                client.fetch_text()
        assert excinfo.value.status_code == 404
        assert excinfo.value.url == URL

    def test_timeout_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.Timeout):
            with pytest.raises(CatalogTransportError):
                client.fetch_text()

    def test_connection_error_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(CatalogTransportError, match="down"):
                client.fetch_text()

    def test_latin1_default_decoded_as_utf8(self, client):
        response = make_response(200, "ok", encoding="ISO-8859-1")
        with patch.object(client.session, "get", return_value=response):
            client.fetch_text()
        assert response.encoding == "utf-8"

    def test_context_manager_closes_session(self):
        c = CatalogClient(URL)
        with patch.object(c.session, "close") as close:
            with c:
                pass
        close.assert_called_once()


class TestFileCatalogClient:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text("SKUs,Image URL\n1,http://img", encoding="utf-8")
        assert FileCatalogClient(str(path)).fetch_text().startswith("SKUs")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CatalogTransportError):
            FileCatalogClient(str(tmp_path / "missing.csv")).fetch_text()
