"""Configuration management for the diff review coordinator."""

from pathlib import Path
from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ReviewConfig:
    """Review workflow configuration."""
    # URI scheme for synthetic before/after content
    scheme: str = "coder-diff"
    # Prefix for diff view titles
    title_prefix: str = "Coder"
    # Present incoming proposals as soon as they arrive
    auto_show_diff: bool = True
    encoding: str = "utf-8"


@dataclass
class PathConfig:
    """Path configuration."""
    base: Path = field(default_factory=lambda: Path.home() / ".diff-review")

    @property
    def history(self) -> Path:
        return self.base / "history"


@dataclass
class Config:
    """Main configuration class."""
    review: ReviewConfig = field(default_factory=ReviewConfig)
    paths: PathConfig = field(default_factory=PathConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        base = os.getenv("DIFF_REVIEW_HOME")
        return cls(
            review=ReviewConfig(
                scheme=os.getenv("DIFF_REVIEW_SCHEME", "coder-diff"),
                title_prefix=os.getenv("DIFF_REVIEW_TITLE", "Coder"),
                auto_show_diff=_env_flag("DIFF_REVIEW_AUTO_SHOW", True),
                encoding=os.getenv("DIFF_REVIEW_ENCODING", "utf-8"),
            ),
            paths=PathConfig(base=Path(base).expanduser()) if base else PathConfig(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


# Global config instance
config = Config.from_env()
