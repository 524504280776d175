"""Configuration management for RSS Aggregator."""

import os
from dataclasses import dataclass


@dataclass
class FetchConfig:
    """Configuration for downloading XML sources."""

    timeout: int = 30
    user_agent: str = "RSS-Aggregator/1.0"


@dataclass
class RenderConfig:
    """Configuration for HTML rendering."""

    legacy_quirks: bool = True


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


class Config:
    """Main configuration manager."""

    DEFAULT_FEEDS_EXTENSION = ".xml"
    DEFAULT_OUTPUT_EXTENSION = ".html"

    def __init__(self):
        """Initialize configuration from environment variables."""
        timeout = os.getenv("RSS_AGGREGATOR_TIMEOUT", "30")
        try:
            self.timeout = int(timeout)
        except ValueError as e:
            raise ValueError(f"Invalid RSS_AGGREGATOR_TIMEOUT: {timeout!r}") from e
        if self.timeout <= 0:
            raise ValueError("RSS_AGGREGATOR_TIMEOUT must be positive")

        self.user_agent = os.getenv("RSS_AGGREGATOR_USER_AGENT", "RSS-Aggregator/1.0")
        self.output_dir = os.getenv("RSS_AGGREGATOR_OUTPUT_DIR", "")
        self.legacy_quirks = _parse_bool(
            "RSS_AGGREGATOR_LEGACY_QUIRKS",
            os.getenv("RSS_AGGREGATOR_LEGACY_QUIRKS", "true"),
        )
        self.log_level = os.getenv("LOG_LEVEL", "WARNING")

    def get_fetch_config(self) -> FetchConfig:
        """Get fetch configuration."""
        return FetchConfig(timeout=self.timeout, user_agent=self.user_agent)

    def get_render_config(self) -> RenderConfig:
        """Get render configuration."""
        return RenderConfig(legacy_quirks=self.legacy_quirks)
