"""Data models for RSS Aggregator."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextNode:
    """A leaf node holding literal character content."""

    content: str


@dataclass(frozen=True)
class TagNode:
    """An XML element with a label, attributes and ordered children."""

    label: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: tuple["TagNode | TextNode", ...] = ()

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def attribute(self, name: str, default: str = "") -> str:
        return self.attributes.get(name, default)


ElementNode = TagNode | TextNode


@dataclass(frozen=True)
class FeedDescriptor:
    """One entry of an index file."""

    url: str
    file: str
    name: str


@dataclass(frozen=True)
class RenderResult:
    """Outcome of processing one feed."""

    success: bool
    label: str  # output file on success, offending label on rejection
    reason: str | None = None
    rejected: bool = False

    @classmethod
    def processed(cls, output_file: str) -> "RenderResult":
        return cls(success=True, label=output_file)

    @classmethod
    def invalid(cls, label: str) -> "RenderResult":
        return cls(
            success=False,
            label=label,
            reason="not a valid RSS 2.0 feed",
            rejected=True,
        )

    @classmethod
    def failed(cls, output_file: str, reason: str) -> "RenderResult":
        return cls(success=False, label=output_file, reason=reason)

    @property
    def message(self) -> str:
        """Progress line reported for this feed."""
        if self.success:
            return f"{self.label} is successfully processed!"
        if self.rejected:
            return f"{self.label} is not a valid RSS 2.0 feed!"
        return f"{self.label} could not be processed: {self.reason}"
