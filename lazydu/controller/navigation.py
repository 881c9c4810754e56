"""Navigation controller: the single owner of all interactive UI state.

The controller never caches child data beyond the current listing; every
``set_active_directory`` call re-reads children from the tree, so updates
made by the scanner show up on the next refresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..backend import join_root_path
from ..errors import BackendError
from ..render.help import help_text
from ..scan.tree import Dir
from ..scan.types import Entry, EntryKind
from .confirm import CONFIRM_OPTION, ConfirmationWorkflow, PendingAction
from .frame import Frame, build_frame
from .selection import SelectionSet
from .sorting import SortKey, SortOrder, compute_permutation
from .viewport import ViewportState, ViewportTracker

logger = logging.getLogger(__name__)

WAITING_PATH = "Waiting for root..."


@dataclass
class DisplayOptions:
    """Row-layout toggles, flipped by single-key bindings."""

    show_graph: bool = True
    show_counts: bool = False
    show_average_size: bool = False
    human_readable: bool = True


def delete_entry(backend: Any, entry: Entry) -> None:
    """Delete one entry on the backend using the primitive for its kind."""
    if entry.kind is EntryKind.LEAF:
        backend.delete_leaf(entry)
    elif entry.kind is EntryKind.DIRECTORY:
        backend.purge_directory(entry.remote)


class NavigationController:
    def __init__(
        self,
        backend: Any,
        clipboard: Any = None,
        options: DisplayOptions | None = None,
        sort_order: SortOrder | None = None,
        visible_rows: int = 20,
    ) -> None:
        self.backend = backend
        self.fs_name: str = backend.name
        self.clipboard = clipboard
        self.options = options if options is not None else DisplayOptions()
        self.sort_order = sort_order if sort_order is not None else SortOrder.by(SortKey.SIZE)
        self.root: Dir | None = None
        self.current: Dir | None = None
        self.path = WAITING_PATH
        self.entries: list[Entry] = []
        self.sort_perm: list[int] = []
        self.inv_sort_perm: list[int] = []
        self.viewports = ViewportTracker(visible_rows)
        self.selection = SelectionSet()
        self.popup = ConfirmationWorkflow()
        self.listing = True
        self.visual_select = False

    # -- state accessors -------------------------------------------------

    @property
    def visible_rows(self) -> int:
        return self.viewports.visible_rows

    def set_visible_rows(self, rows: int) -> None:
        self.viewports.visible_rows = max(1, rows)

    @property
    def clipboard_available(self) -> bool:
        return self.clipboard is not None and bool(self.clipboard.available)

    def viewport(self) -> ViewportState:
        return self.viewports.state_for(self.path)

    def cursor_child_index(self) -> int | None:
        """Return the child index under the cursor, or ``None`` for an empty listing."""
        if self.current is None or not self.sort_perm:
            return None
        rank = self.viewport().cursor
        if not 0 <= rank < len(self.sort_perm):
            return None
        return self.sort_perm[rank]

    def cursor_entry(self) -> Entry | None:
        index = self.cursor_child_index()
        return self.entries[index] if index is not None else None

    # -- discovery events -------------------------------------------------

    def set_root(self, root: Dir) -> None:
        self.root = root
        self.set_active_directory(root)

    def finish_listing(self) -> None:
        self.listing = False

    def set_active_directory(self, node: Dir) -> None:
        """Make ``node`` the displayed directory and re-derive everything from it."""
        self.current = node
        self.entries = node.children()
        self.path = join_root_path(self.fs_name, node.path)
        self.selection.clear()
        self.visual_select = False
        self.sort_current_dir()

    def sort_current_dir(self) -> None:
        if self.current is None:
            return
        attrs = [self.current.attrs_at(index)[0] for index in range(len(self.entries))]
        self.sort_perm, self.inv_sort_perm = compute_permutation(self.entries, attrs, self.sort_order)

    # -- navigation -------------------------------------------------------

    def move(self, delta: int) -> None:
        if self.current is None:
            return
        self.viewports.move(self.path, delta, len(self.entries))
        if self.visual_select:
            self.toggle_select_for_cursor()

    def page_down(self) -> None:
        self.move(self.visible_rows)

    def page_up(self) -> None:
        self.move(-self.visible_rows)

    def enter_child(self, rank: int | None = None) -> bool:
        """Enter the directory shown at display ``rank`` (default: the cursor row)."""
        if self.current is None or not self.entries:
            return False
        if rank is None:
            rank = self.viewport().cursor
        if not 0 <= rank < len(self.sort_perm):
            return False
        child = self.current.directory_at(self.sort_perm[rank])
        if child is None:
            return False
        self.set_active_directory(child)
        return True

    def ascend(self) -> bool:
        if self.current is None:
            return False
        parent = self.current.parent
        if parent is None:
            return False
        self.set_active_directory(parent)
        return True

    def toggle_sort(self, key: SortKey) -> None:
        self.sort_order.toggle(key)
        self.sort_current_dir()

    # -- selection ------------------------------------------------------------

    def toggle_select_for_cursor(self) -> None:
        entry = self.cursor_entry()
        if entry is None:
            return
        self.selection.toggle(entry.remote, self.viewport())

    def toggle_visual_select(self) -> None:
        self.visual_select = not self.visual_select

    # -- popups -------------------------------------------------------------

    def display_path(self) -> None:
        self.popup.toggle_info(["Current Path", self.path])

    def toggle_help(self) -> None:
        self.popup.toggle_info(help_text(self.clipboard_available))

    def copy_path(self) -> bool:
        if not self.clipboard_available or self.current is None:
            return False
        return bool(self.clipboard.write_text(self.path))

    def confirm_popup(self) -> bool:
        return self.popup.confirm(self.backend, self.path)

    # -- deletion -----------------------------------------------------------

    def delete_single(self) -> None:
        entry = self.cursor_entry()
        if entry is None or self.current is None:
            return
        node = self.current
        remote = entry.remote
        display = join_root_path(self.fs_name, remote)
        if entry.kind is EntryKind.LEAF:
            title, detail = "Delete this file?", [display]
            done = "Successfully deleted file!"
        else:
            title, detail = "Purge this directory?", ["ALL files in it will be deleted", display]
            done = "Successfully purged folder!"

        def handler(backend: Any, _path: str, option: int) -> str:
            if option != CONFIRM_OPTION:
                return "Aborted!"
            children = node.children()
            index = next((i for i, child in enumerate(children) if child.remote == remote), None)
            if index is None:
                raise BackendError(remote, f"{display} is no longer listed")
            delete_entry(backend, children[index])
            self._remove_from(node, [index])
            return done

        self.popup.stage(PendingAction(title, detail, handler))

    def delete_selected(self) -> None:
        if self.current is None or self.selection.count() == 0:
            return
        node = self.current
        keys = self.selection.keys()

        def handler(backend: Any, _path: str, option: int) -> str:
            if option != CONFIRM_OPTION:
                return "Aborted!"
            children = node.children()
            index_by_key = {child.remote: i for i, child in enumerate(children)}
            indices = [index_by_key[key] for key in keys if key in index_by_key]
            if node is self.current and len(self.inv_sort_perm) == len(children):
                indices.sort(key=lambda index: self.inv_sort_perm[index])
            deleted: list[int] = []
            try:
                for index in indices:
                    delete_entry(backend, children[index])
                    deleted.append(index)
            finally:
                # Whatever the backend already removed must leave the tree too.
                self._remove_from(node, deleted)
            return "Successfully deleted all items!"

        self.popup.stage(
            PendingAction(
                "Delete selected items?",
                [f"ALL {len(keys)} items will be deleted"],
                handler,
            )
        )

    def _remove_from(self, node: Dir, indices: list[int]) -> None:
        """Remove child ``indices`` from ``node`` highest first, then refresh the view."""
        if not indices:
            return
        for index in sorted(indices, reverse=True):
            node.remove_child_at(index)
        logger.info("removed %d entries from %s", len(indices), join_root_path(self.fs_name, node.path))
        if node is not self.current:
            return
        self.set_active_directory(node)
        if self.viewport().cursor >= len(self.entries):
            self.move(-1)

    # -- display toggles ------------------------------------------------------

    def toggle_counts(self) -> None:
        self.options.show_counts = not self.options.show_counts

    def toggle_graph(self) -> None:
        self.options.show_graph = not self.options.show_graph

    def toggle_average_size(self) -> None:
        self.options.show_average_size = not self.options.show_average_size

    def toggle_human_readable(self) -> None:
        self.options.human_readable = not self.options.human_readable

    def frame(self) -> Frame:
        """Build the draw request for the current state."""
        return build_frame(self)
