"""Tests for the command-line interface."""

import json
from unittest.mock import Mock, patch

import pytest

from conftest import make_document, make_entry
from ghostsheet import cli
from ghostsheet.errors import FetchError
from ghostsheet.feed import ALL_TYPES, FeedReconstructor


@pytest.fixture
def feed_file(tmp_path, sample_document):
    """Write the sample feed document to disk."""
    path = tmp_path / "feed.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path


class TestParseCommand:
    """Test the parse command."""

    def test_parse_to_stdout(self, feed_file, capsys):
        """Test reconstructing a saved feed to stdout."""
        status = cli.main(["parse", str(feed_file)])

        assert status == 0
        data = json.loads(capsys.readouterr().out)
        assert data["id"] == "test-feed-123"
        assert data["items"][0]["Age"] == 30
        assert data["items"][1]["Score"] is None

    def test_parse_to_file(self, feed_file, tmp_path):
        """Test writing the result to a file."""
        dest = tmp_path / "out" / "sheet.json"

        status = cli.main(["parse", str(feed_file), "-o", str(dest), "--beautify"])

        assert status == 0
        assert json.loads(dest.read_text(encoding="utf-8"))["title"] == "Sheet1"

    def test_parse_with_callback(self, feed_file, capsys):
        """Test JSONP output."""
        cli.main(["parse", str(feed_file), "--callback", "loadSheet"])

        assert capsys.readouterr().out.startswith("loadSheet(")

    def test_parse_no_nullfill(self, feed_file, capsys):
        """Test turning nullfill off from the command line."""
        cli.main(["parse", str(feed_file), "--no-nullfill"])

        data = json.loads(capsys.readouterr().out)
        assert data["items"][1]["Score"] == 0

    def test_parse_missing_file(self, tmp_path):
        """Test that an unreadable file fails."""
        assert cli.main(["parse", str(tmp_path / "missing.json")]) == 1

    def test_parse_malformed_feed(self, tmp_path):
        """Test that a feed with a non-list entry fails."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(make_document(make_entry("A1", "Name"))), encoding="utf-8")

        assert cli.main(["parse", str(path)]) == 1

    def test_parse_strict(self, tmp_path):
        """Test that strict mode rejects stray cells."""
        path = tmp_path / "stray.json"
        document = make_document([make_entry("A1", "Name"), make_entry("B2", "stray")])
        path.write_text(json.dumps(document), encoding="utf-8")

        assert cli.main(["parse", str(path)]) == 0
        assert cli.main(["parse", str(path), "--strict"]) == 1

    def test_parse_unwritable_output(self, feed_file, tmp_path):
        """Test that a destination that cannot be written fails cleanly."""
        dest = tmp_path / "existing-dir"
        dest.mkdir()

        assert cli.main(["parse", str(feed_file), "-o", str(dest)]) == 1


class TestFetchCommand:
    """Test the fetch command."""

    def _mock_client(self, sample_document):
        client = Mock()
        reconstructor = FeedReconstructor(ALL_TYPES, nullfill=True, header_row_offset=1)
        client.get = Mock(
            side_effect=lambda spreadsheet_id: reconstructor.reconstruct_document(sample_document)
        )
        return client

    def test_fetch_to_files(self, tmp_path, sample_document):
        """Test fetching several sheets into matching files."""
        client = self._mock_client(sample_document)
        first, second = tmp_path / "a.json", tmp_path / "b.json"

        with patch("ghostsheet.cli.FeedClient", return_value=client) as client_cls:
            status = cli.main(["fetch", "id-a", "id-b", "-o", str(first), "-o", str(second)])

        assert status == 0
        assert client_cls.call_args.kwargs["url_template"] is None
        assert [c.args[0] for c in client.get.call_args_list] == ["id-a", "id-b"]
        assert json.loads(first.read_text(encoding="utf-8"))["items"][0]["Name"] == "Alice"
        assert second.exists()

    def test_fetch_passes_options(self, sample_document, capsys):
        """Test that command-line options reach the client."""
        client = self._mock_client(sample_document)

        with patch("ghostsheet.cli.FeedClient", return_value=client) as client_cls:
            cli.main(
                ["fetch", "id-a", "--offset", "2", "--url-template", "https://example.test/{id}"]
            )

        kwargs = client_cls.call_args.kwargs
        assert kwargs["url_template"] == "https://example.test/{id}"
        assert kwargs["reconstructor"].header_row_offset == 2
        assert json.loads(capsys.readouterr().out)["id"] == "test-feed-123"

    def test_fetch_output_count_mismatch(self, tmp_path):
        """Test that outputs must match the number of sheets."""
        status = cli.main(["fetch", "id-a", "id-b", "-o", str(tmp_path / "a.json")])

        assert status == 1

    def test_fetch_skips_invalid_id(self, sample_document, capsys):
        """Test that blank IDs are reported and the rest still fetched."""
        client = self._mock_client(sample_document)

        with patch("ghostsheet.cli.FeedClient", return_value=client):
            status = cli.main(["fetch", " ", "id-b"])

        assert status == 1
        assert [c.args[0] for c in client.get.call_args_list] == ["id-b"]
        assert json.loads(capsys.readouterr().out)["id"] == "test-feed-123"

    def test_fetch_error_reported(self):
        """Test that a failed download sets the exit status."""
        client = Mock()
        client.get = Mock(side_effect=FetchError("Failed to load remote data: id-a"))

        with patch("ghostsheet.cli.FeedClient", return_value=client):
            assert cli.main(["fetch", "id-a"]) == 1

    def test_fetch_write_error_continues(self, tmp_path, sample_document):
        """Test that a failed write is reported and later sheets are still written."""
        client = self._mock_client(sample_document)
        blocked = tmp_path / "blocked"
        blocked.mkdir()
        second = tmp_path / "b.json"

        with patch("ghostsheet.cli.FeedClient", return_value=client):
            status = cli.main(["fetch", "id-a", "id-b", "-o", str(blocked), "-o", str(second)])

        assert status == 1
        assert json.loads(second.read_text(encoding="utf-8"))["id"] == "test-feed-123"


class TestMain:
    """Test the entry point."""

    def test_no_command_prints_help(self, capsys):
        """Test that running without a command shows usage."""
        assert cli.main([]) == 1
        assert "usage" in capsys.readouterr().out
