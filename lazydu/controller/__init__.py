"""Interactive navigation, selection, and deletion controller."""

from .confirm import ConfirmationWorkflow, PendingAction, PopupState
from .frame import Frame, Row
from .navigation import DisplayOptions, NavigationController
from .selection import SelectionSet
from .sorting import SortKey, SortOrder, compute_permutation
from .viewport import ViewportState, ViewportTracker

__all__ = [
    "ConfirmationWorkflow",
    "DisplayOptions",
    "Frame",
    "NavigationController",
    "PendingAction",
    "PopupState",
    "Row",
    "SelectionSet",
    "SortKey",
    "SortOrder",
    "ViewportState",
    "ViewportTracker",
    "compute_permutation",
]
