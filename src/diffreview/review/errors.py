"""Exceptions for the review workflow."""

from dataclasses import dataclass


@dataclass
class ChangeNotFoundError(Exception):
    """An operation referenced a change id that is not pending."""
    change_id: str

    def __str__(self):
        return f"Change {self.change_id} not found"


@dataclass
class ChangeInFlightError(Exception):
    """Another lifecycle operation is already running for this change id."""
    change_id: str

    def __str__(self):
        return f"Change {self.change_id} is already being processed"


@dataclass
class PersistenceError(Exception):
    """
    Writing a change to disk or through the editor failed.

    The pending change is kept so the user can retry.
    """
    path: str
    message: str

    def __str__(self):
        return f"{self.path}: {self.message}"


@dataclass
class ViewNotOpenError(Exception):
    """Raised by an editor host asked to close a view it no longer shows."""
    view: object

    def __str__(self):
        return f"View is not open: {self.view}"


@dataclass
class InvalidProposalError(Exception):
    """An inbound change proposal is missing fields or malformed."""
    message: str

    def __str__(self):
        return f"Invalid change proposal: {self.message}"
