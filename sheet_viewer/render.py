"""
render.py — Terminal renderers for extracted sheets

Three interchangeable styles share one ``render(data, ctx, console)`` call:

    table  bordered grid inside a titled frame (the default)
    panel  one titled box per row of a two-column key/value sheet
    tree   rows grouped under the values of one column

Panel and tree degrade to the table when their input does not fit; that is
a normal outcome, not an error.
"""

from __future__ import annotations

from typing import IO, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from sheet_viewer.model import RenderContext, TabularData, fold_case

TREE_FALLBACK_NOTICE = "[yellow]No or unknown --group-by column. Falling back to table.[/]"
TREE_ROW_SEPARATOR = " | "


def make_console(file: Optional[IO[str]] = None, width: Optional[int] = None) -> Console:
    return Console(file=file, width=width, highlight=False)


class Renderer:
    style = ""

    def render(self, data: TabularData, ctx: RenderContext, console: Console) -> None:
        raise NotImplementedError


class TableRenderer(Renderer):
    style = "table"

    def build(self, data: TabularData, ctx: RenderContext) -> Panel:
        table = Table(box=box.ROUNDED, expand=True)
        for header in data.headers:
            table.add_column(f"[bold]{escape(header)}[/]", justify="center")
        for row in data.rows:
            table.add_row(*[escape(row.lookup(header)) for header in data.headers])
        return Panel(
            table,
            title=f"[bold]{escape(ctx.title)}[/]",
            box=box.ROUNDED,
            expand=True,
        )

    def render(self, data: TabularData, ctx: RenderContext, console: Console) -> None:
        console.print(self.build(data, ctx))


class PanelRenderer(Renderer):
    """Key/value boxes for exactly two columns; anything else renders as a table."""

    style = "panel"

    def render(self, data: TabularData, ctx: RenderContext, console: Console) -> None:
        if len(data.headers) != 2:
            TableRenderer().render(data, ctx, console)
            return
        key_header, value_header = data.headers
        for row in data.rows:
            console.print(
                Panel(
                    f"[bold]{escape(row.lookup(value_header))}[/]",
                    title=escape(row.lookup(key_header)),
                    title_align="left",
                    box=box.ROUNDED,
                    expand=True,
                )
            )


class TreeRenderer(Renderer):
    style = "tree"

    def __init__(self, group_by: str | None = None) -> None:
        self.group_by = group_by

    def has_group_column(self, data: TabularData) -> bool:
        if self.group_by is None or not self.group_by.strip():
            return False
        folded = fold_case(self.group_by)
        return any(fold_case(header) == folded for header in data.headers)

    def group_rows(self, data: TabularData) -> list[tuple[str, list]]:
        """Rows bucketed by group value, buckets sorted case-insensitively."""
        groups: dict[str, list] = {}
        for row in data.rows:
            groups.setdefault(row.lookup(self.group_by), []).append(row)
        # Keys equal under fold_case() keep first-seen order; sorted() is stable.
        return sorted(groups.items(), key=lambda item: fold_case(item[0]))

    def row_line(self, data: TabularData, row) -> str:
        return TREE_ROW_SEPARATOR.join(
            f"[dim]{escape(header)}[/]=[white]{escape(row.lookup(header))}[/]"
            for header in data.headers
        )

    def build(self, data: TabularData, ctx: RenderContext) -> Tree:
        root = Tree(f"[bold]{escape(ctx.title)}[/]")
        for key, rows in self.group_rows(data):
            node = root.add(f"[green]{escape(key)}[/]")
            for row in rows:
                node.add(self.row_line(data, row))
        return root

    def render(self, data: TabularData, ctx: RenderContext, console: Console) -> None:
        if not self.has_group_column(data):
            console.print(TREE_FALLBACK_NOTICE)
            TableRenderer().render(data, ctx, console)
            return
        console.print(self.build(data, ctx))


RENDERERS = (TableRenderer, PanelRenderer, TreeRenderer)
STYLES = tuple(renderer.style for renderer in RENDERERS)


def select_renderer(style: str | None, group_by: str | None = None) -> Renderer:
    """Renderer for ``style``; unknown or missing styles get the table."""
    name = (style or "").lower()
    if name == TreeRenderer.style:
        return TreeRenderer(group_by)
    if name == PanelRenderer.style:
        return PanelRenderer()
    return TableRenderer()
