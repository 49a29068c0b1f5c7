"""Review-before-apply workflow for proposed file changes."""

from .change import FileChangeMessage, PendingChange, Stage, SyntheticAddress
from .content_store import SyntheticContentStore
from .coordinator import ChangeLifecycleCoordinator
from .errors import (
    ChangeInFlightError,
    ChangeNotFoundError,
    InvalidProposalError,
    PersistenceError,
    ViewNotOpenError,
)
from .events import CallbackSet, Subscription
from .inbox import ProposalInbox
from .registry import PendingChangeRegistry
from .reporter import ConsoleReporter, Reporter
from .views import (
    DiffView,
    EditorHost,
    PresentationKind,
    TextView,
    ViewHandle,
    ViewLifecycleController,
)
from .workspace import FileWorkspace, Workspace

__all__ = [
    # Data model
    "FileChangeMessage",
    "PendingChange",
    "Stage",
    "SyntheticAddress",
    # Components
    "SyntheticContentStore",
    "PendingChangeRegistry",
    "ViewLifecycleController",
    "ChangeLifecycleCoordinator",
    # Host interfaces
    "EditorHost",
    "ViewHandle",
    "TextView",
    "DiffView",
    "PresentationKind",
    "Workspace",
    "FileWorkspace",
    "Reporter",
    "ConsoleReporter",
    "ProposalInbox",
    # Events
    "CallbackSet",
    "Subscription",
    # Errors
    "ChangeNotFoundError",
    "ChangeInFlightError",
    "PersistenceError",
    "ViewNotOpenError",
    "InvalidProposalError",
]
