"""User interfaces for the review workflow."""

from .cli import ReviewCLI

__all__ = ["ReviewCLI"]
