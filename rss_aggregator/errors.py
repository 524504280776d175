"""Exceptions raised by RSS Aggregator."""


class AggregatorError(Exception):
    """Base class for all aggregator errors."""


class InvalidFeedError(AggregatorError):
    """Raised when a document root is not an RSS 2.0 ``rss`` element."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"{label} is not a valid RSS 2.0 feed!")


class MissingRequiredElementError(AggregatorError):
    """Raised when an element the renderer depends on is absent."""

    def __init__(self, parent: str, element: str):
        self.parent = parent
        self.element = element
        super().__init__(f"<{parent}> has no <{element}> element")


class SourceFetchError(AggregatorError):
    """Raised when an XML source cannot be retrieved or parsed."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"Failed to load {source}: {detail}")


class SinkError(AggregatorError):
    """Raised when an output file cannot be opened or written."""

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {detail}")
