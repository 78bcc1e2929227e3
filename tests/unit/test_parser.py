"""Unit tests for the Atom feed parser."""

import pytest

from release_aggregation.core.errors import FeedErrorKind
from release_aggregation.core.parser import FeedParser, ParseResult, as_entry_list, create_parser


@pytest.fixture
def parser():
    """Create a feed parser."""
    return create_parser()


class TestAsEntryList:
    """Tests for as_entry_list."""

    def test_single_mapping_wrapped(self):
        """Test that a lone entry becomes a one-element list."""
        entry = {"title": "v1"}

        assert as_entry_list(entry) == [entry]

    def test_list_kept(self):
        """Test that a list of entries is kept as is."""
        entries = [{"title": "v1"}, {"title": "v2"}]

        assert as_entry_list(entries) == entries

    def test_tuple_converted(self):
        """Test other sequences."""
        assert as_entry_list(({"title": "v1"},)) == [{"title": "v1"}]

    def test_none(self):
        """Test missing entries."""
        assert as_entry_list(None) == []


class TestFeedParser:
    """Tests for FeedParser."""

    def test_parse_multiple_entries(self, parser, make_feed, make_release_html):
        """Test a feed with several entries."""
        body = make_feed(make_release_html(release_id=1), make_release_html(release_id=2))

        result = parser.parse(body, feed_index=0)

        assert result.success is True
        assert result.entries_count == 2
        assert result.error is None

    def test_parse_single_entry(self, parser, make_feed, make_release_html):
        """Test a feed with exactly one entry."""
        result = parser.parse(make_feed(make_release_html()), feed_index=1)

        assert result.success is True
        assert result.entries_count == 1
        assert result.feed_index == 1

    def test_entry_content_available(self, parser, make_feed):
        """Test that entry HTML survives parsing."""
        result = parser.parse(make_feed("<p>ID: 99</p>"))

        content = result.entries[0]["content"][0]["value"]
        assert "ID: 99" in content

    def test_feed_without_entries(self, parser, make_feed):
        """Test a feed container with no entries."""
        result = parser.parse(make_feed(), feed_index=2)

        assert result.success is False
        assert result.entries == []
        assert result.error.kind == FeedErrorKind.STRUCTURAL
        assert result.error.feed_index == 2
        assert "index 2" in result.error.message

    def test_not_a_feed(self, parser):
        """Test a body that is not a syndication document."""
        result = parser.parse(b"<html><body><p>Rate limited</p></body></html>", feed_index=0)

        assert result.success is False
        assert result.error.kind == FeedErrorKind.STRUCTURAL

    def test_rss_feed_rejected(self, parser):
        """Test that an RSS document with items is not accepted as a release feed."""
        body = (
            b"<rss version='2.0'><channel><title>Releases</title>"
            b"<item><description>ID: 4</description></item></channel></rss>"
        )

        result = parser.parse(body, feed_index=1)

        assert result.success is False
        assert result.entries == []
        assert result.error.kind is FeedErrorKind.STRUCTURAL
        assert result.error.feed_index == 1

    def test_rdf_feed_rejected(self, parser):
        """Test an RSS 1.0 (RDF) document."""
        body = (
            b'<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"'
            b' xmlns="http://purl.org/rss/1.0/">'
            b'<channel rdf:about="https://example.com/"><title>Releases</title></channel>'
            b'<item rdf:about="https://example.com/1"><title>v1</title>'
            b"<description>ID: 4</description></item></rdf:RDF>"
        )

        result = parser.parse(body, feed_index=0)

        assert result.success is False
        assert result.error.kind is FeedErrorKind.STRUCTURAL

    def test_empty_body(self, parser):
        """Test an empty body."""
        result = parser.parse(b"", feed_index=0)

        assert result.success is False
        assert result.error.kind == FeedErrorKind.STRUCTURAL

    def test_parse_document_single_entry_mapping(self, parser):
        """Test a document whose entry collection is a single mapping."""
        document = {"version": "atom10", "entries": {"content": "<p>ID: 1</p>"}}

        result = parser.parse_document(document, feed_index=0)

        assert result.success is True
        assert result.entries == [{"content": "<p>ID: 1</p>"}]

    def test_parse_document_missing_feed(self, parser):
        """Test a document without a feed container."""
        result = parser.parse_document({"entries": [{"title": "v1"}]}, feed_index=4)

        assert result.success is False
        assert result.error.feed_index == 4

    def test_parse_document_non_atom_version(self, parser):
        """Test a document detected as another syndication format."""
        document = {"version": "rss20", "feed": {"title": "x"}, "entries": [{"title": "v1"}]}

        result = parser.parse_document(document, feed_index=0)

        assert result.success is False
        assert result.error.kind == FeedErrorKind.STRUCTURAL


class TestParseResult:
    """Tests for ParseResult."""

    def test_entries_count(self):
        """Test entry counting."""
        result = ParseResult(success=True, feed_index=0, entries=[{}, {}])

        assert result.entries_count == 2

    def test_default_entries(self):
        """Test defaults."""
        result = ParseResult(success=False, feed_index=0)

        assert result.entries == []
        assert result.error is None


def test_create_parser():
    """Test parser factory."""
    assert isinstance(create_parser(), FeedParser)
