"""HTML rendering of RSS channel and item nodes."""

from collections.abc import Iterator

from .errors import MissingRequiredElementError
from .models import TagNode
from .tree import find_child, first_text

NO_DATE = "No date available"
NO_SOURCE = "No source available"
NO_TITLE = "No title available"
EMPTY_TITLE = "Empty Title"
NO_DESCRIPTION = "No description"


def _anchor(href: str, label: str) -> str:
    return f'<a href="{href}" style="color: blue;">{label}</a>'


def _lines(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


def _link_cell(link: TagNode | None, label: str) -> list[str]:
    """Cell holding ``label``, wrapped in an anchor when a link exists."""
    if link is None:
        return [f"   <td>{label}</td>"]
    href = first_text(link) or ""
    return ["   <td>", f"    {_anchor(href, label)}", "   </td>"]


def _title_cell(item: TagNode, legacy: bool) -> list[str]:
    title = find_child(item, "title", legacy)
    link = find_child(item, "link", legacy)

    if title is not None:
        title_text = first_text(title)
        if title_text is not None:
            return _link_cell(link, title_text)

    description = find_child(item, "description", legacy)
    if description is None:
        if title is None:
            raise MissingRequiredElementError("item", "title or description")
        if legacy:
            # An empty <title> with nothing to fall back on produces no cell
            return []
        return _link_cell(link, NO_TITLE)

    description_text = first_text(description)
    if description_text is not None:
        return _link_cell(link, description_text)
    return _link_cell(link, NO_TITLE)


def render_item(item: TagNode, legacy: bool = True) -> str:
    """Render one news item as a three-cell table row.

    Args:
        item: The ``item`` tag node
        legacy: Keep the last-match lookup and the empty-title quirk

    Returns:
        HTML fragment for the row

    Raises:
        MissingRequiredElementError: If the item has neither title nor description
    """
    lines = ["  <tr>"]

    date = first_text(find_child(item, "pubDate", legacy))
    lines.append(f"   <td>{date if date is not None else NO_DATE}</td>")

    source = find_child(item, "source", legacy)
    if source is not None:
        lines.extend(
            [
                "   <td>",
                f"    {_anchor(source.attribute('url'), first_text(source) or '')}",
                "   </td>",
            ]
        )
    else:
        lines.append(f"   <td>{NO_SOURCE}</td>")

    lines.extend(_title_cell(item, legacy))
    lines.append("  </tr>")
    return _lines(*lines)


def _required(channel: TagNode, tag: str, legacy: bool) -> TagNode:
    child = find_child(channel, tag, legacy)
    if child is None:
        raise MissingRequiredElementError(channel.label, tag)
    return child


def render_header(channel: TagNode, legacy: bool = True) -> str:
    """Render the document opening from channel metadata.

    The page title and heading come from the channel title, the heading links
    to the channel link, and the description becomes a paragraph. The fragment
    ends with an open table and its Date/Source/News header row.

    Raises:
        MissingRequiredElementError: If title, link or description is absent
    """
    title = first_text(_required(channel, "title", legacy))
    if title is None:
        title = EMPTY_TITLE
    link = first_text(_required(channel, "link", legacy)) or ""
    description = first_text(_required(channel, "description", legacy))
    if description is None:
        description = NO_DESCRIPTION

    return _lines(
        "<html>",
        "<head>",
        f"<title>{title}</title>",
        "</head>",
        "<body>",
        ' <h1 style="text-align:center;">',
        f"  {_anchor(link, title)}",
        " </h1>",
        "<hr></hr>",
        f" <p>{description}</p>",
        ' <table border="1">',
        "  <tr>",
        "   <th>Date</th>",
        "   <th>Source</th>",
        "   <th>News</th>",
        "  </tr>",
    )


def render_footer() -> str:
    """Close the table, body and document."""
    return _lines("</table>", "</body>", "</html>")


def iter_items(channel: TagNode) -> Iterator[TagNode]:
    """Yield the channel's direct ``item`` children in document order."""
    for child in channel.children:
        if isinstance(child, TagNode) and child.label == "item":
            yield child


def render_channel(channel: TagNode, legacy: bool = True) -> list[str]:
    """Render a whole channel as header, one row per item, and footer."""
    fragments = [render_header(channel, legacy)]
    fragments.extend(render_item(item, legacy) for item in iter_items(channel))
    fragments.append(render_footer())
    return fragments
