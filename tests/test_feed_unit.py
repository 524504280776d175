"""Unit tests for feed validation, processing and loading."""

from unittest.mock import Mock

import pytest
import requests

from rss_aggregator.config import FetchConfig, RenderConfig
from rss_aggregator.errors import InvalidFeedError, SinkError, SourceFetchError
from rss_aggregator.feed import FeedAggregator, process_feed, validate_root
from rss_aggregator.models import RenderResult
from rss_aggregator.tree import parse_xml

VALID_RSS = b"""\
<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Test Blog</title>
    <link>https://test.com</link>
    <description>Posts about testing</description>
    <item>
      <title>Hello World</title>
      <link>https://test.com/hello</link>
      <pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second Post</title>
      <link>https://test.com/second</link>
    </item>
  </channel>
</rss>
"""


class TestValidateRoot:
    """Unit tests for RSS 2.0 root validation."""

    def test_accepts_rss_2_0(self):
        validate_root(parse_xml('<rss version="2.0"><channel/></rss>'))

    @pytest.mark.parametrize(
        "document",
        [
            '<rss version="1.0"><channel/></rss>',
            "<rss><channel/></rss>",
            '<feed version="2.0"/>',
            '<RSS version="2.0"/>',
        ],
    )
    def test_rejects(self, document):
        with pytest.raises(InvalidFeedError):
            validate_root(parse_xml(document))


class TestProcessFeed:
    """Unit tests for processing one parsed feed."""

    def test_valid_feed_writes_file(self, tmp_path):
        result = process_feed(parse_xml(VALID_RSS), "blog.html", output_dir=tmp_path)

        assert result == RenderResult.processed("blog.html")
        assert result.message == "blog.html is successfully processed!"

        html = (tmp_path / "blog.html").read_text(encoding="utf-8")
        assert html.startswith("<html>\n<head>\n<title>Test Blog</title>\n")
        assert html.endswith("</table>\n</body>\n</html>\n")
        assert html.count("  <tr>\n") == 3  # header row + 2 items
        assert html.index("Hello World") < html.index("Second Post")

    def test_wrong_version_is_rejected(self, tmp_path):
        root = parse_xml('<rss version="1.0"><channel/></rss>')

        result = process_feed(root, "old.html", output_dir=tmp_path)

        assert not result.success
        assert result.message == "rss is not a valid RSS 2.0 feed!"
        assert not (tmp_path / "old.html").exists()

    def test_atom_feed_is_rejected(self, tmp_path):
        root = parse_xml(
            '<feed xmlns="http://www.w3.org/2005/Atom"><title>Atom</title></feed>'
        )

        result = process_feed(root, "atom.html", output_dir=tmp_path)

        assert result.message == "feed is not a valid RSS 2.0 feed!"
        assert list(tmp_path.iterdir()) == []

    def test_missing_channel_element_leaves_no_file(self, tmp_path):
        root = parse_xml(
            '<rss version="2.0"><channel><title>t</title>'
            "<link>https://e.com</link><description>d</description>"
            "<item><link>https://e.com/1</link></item></channel></rss>"
        )

        result = process_feed(root, "broken.html", output_dir=tmp_path)

        assert not result.success
        assert result.message.startswith("broken.html could not be processed: ")
        assert not (tmp_path / "broken.html").exists()

    def test_root_without_channel(self, tmp_path):
        result = process_feed(parse_xml('<rss version="2.0"/>'), "x.html", output_dir=tmp_path)

        assert not result.success
        assert "<channel>" in result.reason

    def test_unwritable_sink(self, tmp_path):
        with pytest.raises(SinkError):
            process_feed(
                parse_xml(VALID_RSS), "blog.html", output_dir=tmp_path / "missing"
            )


class TestFeedAggregator:
    """Unit tests for loading sources through FeedAggregator."""

    def _aggregator(self, tmp_path, legacy=True):
        return FeedAggregator(
            FetchConfig(timeout=5, user_agent="TestAgent/1.0"),
            RenderConfig(legacy_quirks=legacy),
            output_dir=tmp_path,
        )

    def test_session_user_agent(self, tmp_path):
        aggregator = self._aggregator(tmp_path)

        assert aggregator.session.headers["User-Agent"] == "TestAgent/1.0"

    def test_load_tree_from_url(self, tmp_path):
        aggregator = self._aggregator(tmp_path)
        response = Mock(content=VALID_RSS)
        aggregator.session = Mock()
        aggregator.session.get.return_value = response

        root = aggregator.load_tree("https://test.com/feed.xml")

        aggregator.session.get.assert_called_once_with(
            "https://test.com/feed.xml", timeout=5
        )
        response.raise_for_status.assert_called_once()
        assert root.label == "rss"

    def test_load_tree_from_path(self, tmp_path):
        source = tmp_path / "feed.xml"
        source.write_bytes(VALID_RSS)

        root = self._aggregator(tmp_path).load_tree(str(source))

        assert root.attribute("version") == "2.0"

    def test_download_failure(self, tmp_path):
        aggregator = self._aggregator(tmp_path)
        aggregator.session = Mock()
        aggregator.session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(SourceFetchError) as exc_info:
            aggregator.load_tree("https://down.example.com/rss")

        assert exc_info.value.source == "https://down.example.com/rss"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceFetchError):
            self._aggregator(tmp_path).load_tree(str(tmp_path / "nope.xml"))

    def test_malformed_xml(self, tmp_path):
        source = tmp_path / "bad.xml"
        source.write_text("<rss><channel></rss>")

        with pytest.raises(SourceFetchError) as exc_info:
            self._aggregator(tmp_path).load_tree(str(source))

        assert "malformed XML" in str(exc_info.value)

    def test_process_writes_into_output_dir(self, tmp_path):
        source = tmp_path / "feed.xml"
        source.write_bytes(VALID_RSS)

        result = self._aggregator(tmp_path).process(str(source), "out.html")

        assert result.success
        assert result.label == "out.html"
        assert (tmp_path / "out.html").exists()
