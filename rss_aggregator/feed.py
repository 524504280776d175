"""RSS 2.0 feed processing for RSS Aggregator."""

import os
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import urlparse

import requests

from .config import FetchConfig, RenderConfig
from .errors import (
    InvalidFeedError,
    MissingRequiredElementError,
    SinkError,
    SourceFetchError,
)
from .logging_config import create_execution_logger
from .models import RenderResult, TagNode
from .render import render_channel
from .tree import parse_xml


def validate_root(root: TagNode) -> None:
    """Check that ``root`` is an ``<rss version="2.0">`` element.

    Raises:
        InvalidFeedError: If the label or version does not match
    """
    if root.label != "rss" or not root.has_attribute("version"):
        raise InvalidFeedError(root.label)
    if root.attribute("version") != "2.0":
        raise InvalidFeedError(root.label)


def channel_of(root: TagNode) -> TagNode:
    """Return the ``channel`` element, which must be the root's first child."""
    if root.children:
        channel = root.children[0]
        if isinstance(channel, TagNode) and channel.label == "channel":
            return channel
    raise MissingRequiredElementError(root.label, "channel")


def write_fragments(path: str | os.PathLike, fragments: Iterable[str]) -> None:
    """Write fragments to ``path`` in order.

    Raises:
        SinkError: If the file cannot be opened or written
    """
    try:
        with open(path, "w", encoding="utf-8") as sink:
            for fragment in fragments:
                sink.write(fragment)
    except OSError as e:
        raise SinkError(str(path), str(e)) from e


def process_feed(
    root: TagNode,
    output_file: str,
    legacy: bool = True,
    output_dir: str | os.PathLike | None = None,
) -> RenderResult:
    """Convert one parsed RSS 2.0 document into an HTML file.

    Nothing is written unless the root validates and the channel renders
    completely.

    Args:
        root: Root node of the parsed document
        output_file: Name of the HTML file to create
        legacy: Keep the last-match lookup and the empty-title quirk
        output_dir: Directory for ``output_file`` (current directory if None)

    Returns:
        RenderResult describing the outcome

    Raises:
        SinkError: If the output file cannot be written
    """
    try:
        validate_root(root)
    except InvalidFeedError as e:
        return RenderResult.invalid(e.label)

    try:
        fragments = render_channel(channel_of(root), legacy)
    except MissingRequiredElementError as e:
        return RenderResult.failed(output_file, str(e))

    path = Path(output_dir) / output_file if output_dir else Path(output_file)
    write_fragments(path, fragments)
    return RenderResult.processed(output_file)


class FeedAggregator:
    """Loads XML sources and renders RSS feeds to HTML files."""

    def __init__(
        self,
        fetch_config: FetchConfig | None = None,
        render_config: RenderConfig | None = None,
        output_dir: str | os.PathLike | None = None,
        execution_id: str | None = None,
    ):
        """Initialize FeedAggregator with configuration.

        Args:
            fetch_config: HTTP settings for remote sources
            render_config: Rendering settings
            output_dir: Directory receiving the per-feed HTML files
            execution_id: Execution ID for logging context
        """
        self.fetch_config = fetch_config or FetchConfig()
        self.render_config = render_config or RenderConfig()
        self.output_dir = output_dir
        self.logger = create_execution_logger("aggregator", execution_id)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.fetch_config.user_agent})

        self.logger.info(
            "FeedAggregator initialized",
            timeout=self.fetch_config.timeout,
            legacy_quirks=self.render_config.legacy_quirks,
        )

    def _read_source(self, source: str) -> bytes:
        if urlparse(source).scheme in ("http", "https"):
            self.logger.info("Downloading XML source", feed_url=source)
            try:
                response = self.session.get(source, timeout=self.fetch_config.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                self.logger.error(
                    f"Failed to download {source}: {e}", feed_url=source, error=str(e)
                )
                raise SourceFetchError(source, str(e)) from e
            return response.content

        self.logger.info("Reading XML source from disk", feed_url=source)
        try:
            return Path(source).read_bytes()
        except OSError as e:
            self.logger.error(f"Failed to read {source}: {e}", feed_url=source)
            raise SourceFetchError(source, str(e)) from e

    def load_tree(self, source: str) -> TagNode:
        """Retrieve and parse an XML document from a URL or local path.

        Raises:
            SourceFetchError: If the source cannot be retrieved or parsed
        """
        content = self._read_source(source)
        try:
            root = parse_xml(content)
        except ET.ParseError as e:
            self.logger.error(f"Failed to parse {source}: {e}", feed_url=source)
            raise SourceFetchError(source, f"malformed XML ({e})") from e
        self.logger.debug(
            f"Parsed {len(content)} bytes", feed_url=source, root=root.label
        )
        return root

    def process(self, url: str, output_file: str) -> RenderResult:
        """Load the feed at ``url`` and render it to ``output_file``."""
        root = self.load_tree(url)
        result = process_feed(
            root,
            output_file,
            legacy=self.render_config.legacy_quirks,
            output_dir=self.output_dir,
        )
        self.logger.log_feed_result(url, result)
        return result
