"""Draw request built from controller state.

This is the contract between the controller and the renderer: plain text
fields plus styling hints, no escape sequences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..format import count_field, count_string, size_field, size_string
from ..scan.types import EntryAttrs

if TYPE_CHECKING:
    from .navigation import NavigationController

HEADER_TEXT = "lazydu - use the arrow keys to navigate, press ? for help"
WAITING_FOOTER = "Waiting for root directory..."
GRAPH_BARS = 10
GRAPH = "#" * GRAPH_BARS + " " * GRAPH_BARS


@dataclass(frozen=True)
class Row:
    """One visible listing row."""

    flag: str
    size: str
    extras: str
    mark: str
    name: str
    message: str
    is_cursor: bool = False
    is_selected: bool = False
    has_error: bool = False
    entries_have_errors: bool = False

    @property
    def text(self) -> str:
        return f"{self.flag} {self.size} {self.extras}{self.mark}{self.name}{self.message}"


@dataclass(frozen=True)
class Frame:
    header: str
    path_line: str
    rows: list[Row]
    footer: str
    popup_lines: list[str] = field(default_factory=list)
    popup_menu: list[str] = field(default_factory=list)
    popup_chosen: int = 0

    @property
    def popup_visible(self) -> bool:
        return bool(self.popup_lines)


def graph_bar(size: int, per_bar: int) -> str:
    bars = (size + per_bar // 2 - 1) // per_bar
    # Sizes can outgrow the biggest entry mid-scan.
    bars = max(0, min(GRAPH_BARS, bars))
    return "[" + GRAPH[GRAPH_BARS - bars : 2 * GRAPH_BARS - bars] + "] "


def _row_message(attrs: EntryAttrs, err: Exception | None) -> tuple[str, str]:
    flag = " "
    message = ""
    if not attrs.readable:
        message = " [not read yet]"
    if attrs.count_unknown_size > 0:
        message = (
            f" [{attrs.count_unknown_size} of {attrs.count} files have unknown size,"
            " size may be underestimated]"
        )
        flag = "~"
    if attrs.entries_have_errors:
        message = " [some subdirectories could not be read, size may be underestimated]"
        flag = "."
    if err is not None:
        message = f" [{err}]"
        flag = "!"
    return flag, message


def build_frame(controller: NavigationController) -> Frame:
    options = controller.options
    human = options.human_readable
    popup = controller.popup
    popup_lines = popup.lines
    popup_menu = popup.menu
    node = controller.current

    if node is None:
        return Frame(
            header=HEADER_TEXT,
            path_line=f"-- {controller.path} ",
            rows=[],
            footer=WAITING_FOOTER,
            popup_lines=popup_lines,
            popup_menu=popup_menu,
            popup_chosen=popup.chosen,
        )

    all_attrs = []
    for index in range(len(controller.entries)):
        try:
            all_attrs.append(node.attrs_at(index))
        except IndexError:
            break
    biggest = max((attrs.size for attrs, _ in all_attrs), default=0)
    per_bar = max(1, biggest // GRAPH_BARS)
    show_empty_dir = any(attrs.is_dir and attrs.count == 0 for attrs, _ in all_attrs)

    viewport = controller.viewport()
    rows: list[Row] = []
    for rank in range(viewport.offset, len(controller.sort_perm)):
        if len(rows) >= controller.visible_rows:
            break
        index = controller.sort_perm[rank]
        if index >= len(all_attrs):
            continue
        entry = controller.entries[index]
        attrs, err = all_attrs[index]
        flag, message = _row_message(attrs, err)

        extras = ""
        if options.show_counts:
            text = count_field(attrs.count, human, 9) + " "
            extras += text if attrs.count > 0 else " " * len(text)
        if options.show_average_size:
            avg = int(attrs.average_size)
            text = size_field(avg, human, 9) + " "
            extras += text if avg > 0 else " " * len(text)
        if show_empty_dir and attrs.is_dir and attrs.count == 0 and flag == " ":
            flag = "e"
        if options.show_graph:
            extras += graph_bar(attrs.size, per_bar)

        rows.append(
            Row(
                flag=flag,
                size=size_field(attrs.size, human, 12),
                extras=extras,
                mark="/" if attrs.is_dir else " ",
                name=entry.name,
                message=message,
                is_cursor=rank == viewport.cursor,
                is_selected=controller.selection.is_selected(entry.remote),
                has_error=err is not None,
                entries_have_errors=attrs.entries_have_errors,
            )
        )

    size, count = node.attrs()
    footer = f"Total usage: {size_string(size, human)}, Objects: {count_string(count, human)}"
    if controller.listing:
        footer += " [listing in progress]"
    if controller.visual_select:
        footer += " [visual select]"
    return Frame(
        header=HEADER_TEXT,
        path_line=f"-- {controller.path} ",
        rows=rows,
        footer=footer,
        popup_lines=popup_lines,
        popup_menu=popup_menu,
        popup_chosen=popup.chosen,
    )
