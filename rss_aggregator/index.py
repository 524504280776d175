"""Index page rendering for a list of RSS feeds."""

from collections.abc import Callable
from typing import TextIO

from .feed import FeedAggregator
from .logging_config import create_execution_logger
from .models import FeedDescriptor, RenderResult, TagNode


def feed_descriptors(feeds: TagNode) -> list[FeedDescriptor]:
    """Extract one descriptor per direct tag child, in document order."""
    return [
        FeedDescriptor(
            url=child.attribute("url"),
            file=child.attribute("file"),
            name=child.attribute("name"),
        )
        for child in feeds.children
        if isinstance(child, TagNode)
    ]


def render_index(
    feeds: TagNode,
    out: TextIO,
    progress: Callable[[str], None],
    aggregator: FeedAggregator,
) -> list[RenderResult]:
    """Render the index page and every feed it lists.

    All feeds are processed before anything is written to ``out``, so a
    fatal error on one feed leaves ``out`` untouched. List items follow the
    order of the index document.

    Args:
        feeds: Root node of the index document
        out: Stream receiving the index HTML
        progress: Callback receiving one progress line per feed
        aggregator: Processor used for each listed feed

    Returns:
        One RenderResult per feed, in document order
    """
    logger = create_execution_logger("index", aggregator.logger.execution_id)
    descriptors = feed_descriptors(feeds)
    logger.log_execution_start(feed_count=len(descriptors))

    results = []
    entries = []
    for descriptor in descriptors:
        result = aggregator.process(descriptor.url, descriptor.file)
        progress(result.message)
        results.append(result)
        entries.extend(
            [
                "  <li>",
                f'   <a href="{descriptor.file}" style="color: blue;">{descriptor.name}</a>',
                "  </li>",
            ]
        )

    title = feeds.attribute("title")
    lines = [
        "<html>",
        "<head>",
        f"<title>{title}</title>",
        "</head>",
        "<body>",
        f' <h1 style="text-align:center;">{title}</h1>',
        ' <ul style="list-style-type:disc">',
        *entries,
        " </ul>",
        "</body>",
        "</html>",
    ]
    out.write("".join(f"{line}\n" for line in lines))

    logger.log_metrics(
        {
            "feeds_listed": len(results),
            "feeds_processed": sum(1 for r in results if r.success),
            "feeds_failed": sum(1 for r in results if not r.success),
        }
    )
    logger.log_execution_end(success=True)
    return results
