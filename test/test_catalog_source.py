"""Tests for storefront.catalog_source module."""

import io
import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from storefront.catalog_source import CatalogClient, extract_items, load_catalog_file

BOOKS = [
    {"id": 1, "name": "The Silent Orchard", "oldPrice": 24.99},
    {"id": 2, "name": "Norse Tales Retold", "oldPrice": "$12.00"},
]


def make_response(payload=None, status_code=200, json_error=None):
    """Create a mock requests response."""
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestExtractItems(unittest.TestCase):
    """Test payload unwrapping."""

    def test_bare_list(self):
        """Test a list payload is returned as is."""
        self.assertEqual(extract_items(BOOKS), BOOKS)

    def test_wrapped_list(self):
        """Test lists under known keys are unwrapped."""
        for key in ("books", "packages", "items", "data"):
            self.assertEqual(extract_items({"success": True, key: BOOKS}), BOOKS)

    def test_unrecognized_payload(self):
        """Test payloads without a list yield None."""
        self.assertIsNone(extract_items({"books": "none"}))
        self.assertIsNone(extract_items("text"))
        self.assertIsNone(extract_items(None))


@patch("sys.stderr", new_callable=io.StringIO)
@patch("storefront.catalog_source.time.sleep")
class TestCatalogClient(unittest.TestCase):
    """Test fetching catalog collections over HTTP."""

    def setUp(self):
        """Create a client with a mocked session."""
        self.client = CatalogClient(api_url="http://api.test/api/v1/", timeout=5, max_retries=2)
        self.client.session = MagicMock()

    def test_fetch_books_success(self, _mock_sleep, _mock_stderr):
        """Test a successful fetch returns a ready snapshot."""
        self.client.session.get.return_value = make_response({"success": True, "books": BOOKS})

        snapshot = self.client.fetch_books()

        self.assertTrue(snapshot.is_ready)
        self.assertEqual(snapshot.items, BOOKS)
        self.client.session.get.assert_called_once_with(
            "http://api.test/api/v1/books", headers={"Accept": "application/json"}, timeout=5
        )

    def test_fetch_packages_path(self, _mock_sleep, _mock_stderr):
        """Test packages are fetched from their own path."""
        self.client.session.get.return_value = make_response([])

        snapshot = self.client.fetch_packages()

        self.assertEqual(snapshot.items, [])
        self.assertEqual(self.client.session.get.call_args[0][0], "http://api.test/api/v1/packages")

    def test_client_error_not_retried(self, mock_sleep, _mock_stderr):
        """Test a 404 fails immediately with an error snapshot."""
        self.client.session.get.return_value = make_response(status_code=404)

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.error, "Could not load catalog (HTTP 404)")
        self.assertEqual(snapshot.items, [])
        self.assertEqual(self.client.session.get.call_count, 1)
        mock_sleep.assert_not_called()

    def test_server_error_retried(self, mock_sleep, _mock_stderr):
        """Test a 503 is retried and a later success is returned."""
        self.client.session.get.side_effect = [make_response(status_code=503), make_response(BOOKS)]

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.items, BOOKS)
        self.assertEqual(self.client.session.get.call_count, 2)
        self.assertEqual(mock_sleep.call_count, 1)

    def test_connection_error_exhausts_retries(self, mock_sleep, _mock_stderr):
        """Test persistent network errors give up after max_retries."""
        self.client.session.get.side_effect = requests.exceptions.ConnectionError("refused")

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.error, "Could not reach the catalog service")
        self.assertEqual(self.client.session.get.call_count, 3)
        self.assertEqual(mock_sleep.call_count, 2)

    def test_timeout_then_success(self, _mock_sleep, _mock_stderr):
        """Test a timeout is retried."""
        self.client.session.get.side_effect = [requests.exceptions.Timeout("slow"), make_response(BOOKS)]

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.items, BOOKS)

    def test_invalid_json(self, _mock_sleep, _mock_stderr):
        """Test an undecodable body gives an error snapshot."""
        self.client.session.get.return_value = make_response(json_error=ValueError("Expecting value"))

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.error, "Catalog service returned an invalid response")

    def test_unexpected_payload(self, _mock_sleep, _mock_stderr):
        """Test a payload without a list gives an error snapshot."""
        self.client.session.get.return_value = make_response({"message": "ok"})

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.error, "Catalog service returned an invalid response")

    def test_unexpected_exception(self, _mock_sleep, _mock_stderr):
        """Test other failures are reported, not raised."""
        self.client.session.get.side_effect = RuntimeError("boom")

        snapshot = self.client.fetch_books()

        self.assertEqual(snapshot.error, "Could not load catalog: boom")
        self.assertEqual(self.client.session.get.call_count, 1)

    def test_context_manager_closes_session(self, _mock_sleep, _mock_stderr):
        """Test leaving the context closes the session."""
        session = self.client.session
        with self.client as client:
            self.assertIs(client, self.client)
        session.close.assert_called_once()


@patch("sys.stderr", new_callable=io.StringIO)
class TestLoadCatalogFile(unittest.TestCase):
    """Test loading catalog snapshots from files."""

    def _write(self, content, suffix=".yml"):
        with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False, encoding="utf-8") as f:
            f.write(content)
            path = f.name
        self.addCleanup(os.unlink, path)
        return path

    def test_yaml_list(self, _mock_stderr):
        """Test a YAML list of items."""
        path = self._write("- name: The Silent Orchard\n  oldPrice: 24.99\n- name: Quiet\n  oldPrice: '$9'\n")

        snapshot = load_catalog_file(path)

        self.assertTrue(snapshot.is_ready)
        self.assertEqual(snapshot.items, [{"name": "The Silent Orchard", "oldPrice": 24.99}, {"name": "Quiet", "oldPrice": "$9"}])

    def test_json_wrapped_items(self, _mock_stderr):
        """Test a JSON document with the list under "items"."""
        path = self._write(json.dumps({"items": BOOKS}), suffix=".json")
        self.assertEqual(load_catalog_file(path).items, BOOKS)

    def test_missing_file(self, _mock_stderr):
        """Test a missing file gives an error snapshot."""
        snapshot = load_catalog_file("nonexistent_catalog.yml")
        self.assertEqual(snapshot.error, "Catalog file 'nonexistent_catalog.yml' not found")

    def test_malformed_yaml(self, _mock_stderr):
        """Test malformed YAML gives an error snapshot."""
        path = self._write("invalid: yaml: syntax: [unclosed")
        self.assertIn("not valid YAML or JSON", load_catalog_file(path).error)

    def test_empty_file(self, _mock_stderr):
        """Test an empty file is an empty catalog, not an error."""
        snapshot = load_catalog_file(self._write(""))
        self.assertIsNone(snapshot.error)
        self.assertEqual(snapshot.items, [])

    def test_scalar_document(self, _mock_stderr):
        """Test a document without a list gives an error snapshot."""
        snapshot = load_catalog_file(self._write("just some text"))
        self.assertIn("has no list of items", snapshot.error)


if __name__ == "__main__":
    unittest.main(verbosity=2)
