"""Command-line entry point for RSS Aggregator."""

import io
from datetime import UTC, datetime
from pathlib import Path

import click

from .config import Config
from .errors import SinkError, SourceFetchError
from .feed import FeedAggregator, write_fragments
from .index import render_index
from .logging_config import create_execution_logger, setup_structured_logging

FEEDS_PROMPT = (
    "Please enter the name of an XML file containing a list of URLs for RSS v2.0 feeds"
)
OUTPUT_PROMPT = "Enter the name of an output file"


def with_default_extension(name: str, extension: str) -> str:
    """Append ``extension`` when ``name`` contains no dot."""
    if "." not in name:
        return name + extension
    return name


def _load_config() -> Config:
    try:
        return Config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _run_index(aggregator: FeedAggregator, feeds_file: str, output_file: str):
    feeds = aggregator.load_tree(feeds_file)
    page = io.StringIO()
    render_index(feeds, page, click.echo, aggregator)
    write_fragments(output_file, [page.getvalue()])


def _run_single(aggregator: FeedAggregator, url: str, output_file: str):
    result = aggregator.process(url, output_file)
    click.echo(result.message)


@click.command()
@click.option(
    "--feeds",
    "feeds_file",
    help="XML file listing the feeds (.xml added when no extension).",
)
@click.option(
    "--output",
    "output_file",
    help="HTML file to write (.html added when no extension).",
)
@click.option(
    "--single",
    "single_url",
    metavar="URL",
    help="Render one feed from URL or path instead of an index file.",
)
@click.option("--fix-quirks", is_flag=True, help="Disable legacy rendering quirks.")
def main(feeds_file, output_file, single_url, fix_quirks):
    """Render RSS 2.0 feeds as HTML pages.

    Without --single, reads an index file of feeds, renders each feed and
    writes a page linking to them. Missing names are prompted for.
    """
    config = _load_config()
    if fix_quirks:
        config.legacy_quirks = False
    setup_structured_logging(config.log_level)

    if single_url is None and feeds_file is None:
        feeds_file = click.prompt(FEEDS_PROMPT)
    if output_file is None:
        output_file = click.prompt(OUTPUT_PROMPT)
    output_file = with_default_extension(output_file, config.DEFAULT_OUTPUT_EXTENSION)

    if single_url is None:
        feeds_file = with_default_extension(feeds_file, config.DEFAULT_FEEDS_EXTENSION)
        output_dir = config.output_dir or Path(output_file).parent
    else:
        output_dir = config.output_dir or None

    execution_id = f"cli_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start(
        feeds_file=feeds_file, single_url=single_url, output_file=output_file
    )

    aggregator = FeedAggregator(
        config.get_fetch_config(),
        config.get_render_config(),
        output_dir=output_dir,
        execution_id=execution_id,
    )
    try:
        if single_url is None:
            _run_index(aggregator, feeds_file, output_file)
        else:
            _run_single(aggregator, single_url, output_file)
    except (SourceFetchError, SinkError) as e:
        main_logger.error(str(e))
        main_logger.log_execution_end(success=False)
        raise click.ClickException(str(e)) from e

    main_logger.log_execution_end(success=True)
