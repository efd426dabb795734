"""
Rendering of command results.

Every command produces one of three shapes: a single cat (`add`), a cat that
may be missing (`update`, `delete`) or a list of cats (`get`, `find`). Each
shape has a view implementing the `Renderable` interface, and `render()`
dispatches on the selected output format.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cat_registry.domain.models import Cat

NO_SUCH_CAT = "No such cat exists"
NO_BREED = "<none>"
TITLES = ("ID", "Name", "Age", "Breed")


class OutputFormat(str, enum.Enum):
    TABLE = "table"
    PLAIN = "plain"
    JSON = "json"


def select_format(json_output: bool, is_terminal: bool) -> OutputFormat:
    """JSON when asked for; otherwise a table on a terminal and plain text elsewhere."""
    if json_output:
        return OutputFormat.JSON
    return OutputFormat.TABLE if is_terminal else OutputFormat.PLAIN


def _cells(cat: Cat) -> List[str]:
    return [str(cat.id), cat.name, str(cat.age), cat.breed if cat.breed is not None else NO_BREED]


def _table(cats: Sequence[Cat]) -> Table:
    table = Table(box=box.ROUNDED)
    table.add_column(TITLES[0], justify="right", style="cyan", no_wrap=True)
    table.add_column(TITLES[1], style="bold")
    table.add_column(TITLES[2], justify="right", style="magenta")
    table.add_column(TITLES[3], style="green")
    for cat in cats:
        table.add_row(*(Text(cell) for cell in _cells(cat)))
    return table


def _echo(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _plain_line(cat: Cat) -> str:
    return " ".join(_cells(cat))


def _json(cat: Cat) -> str:
    return json.dumps(cat.model_dump(mode="json"))


@runtime_checkable
class Renderable(Protocol):
    def print_table(self, console: Console) -> None: ...

    def print_plain(self, console: Console) -> None: ...

    def print_json(self, console: Console) -> None: ...


@dataclass(frozen=True)
class CatView:
    cat: Cat

    def print_table(self, console: Console) -> None:
        console.print(_table([self.cat]))

    def print_plain(self, console: Console) -> None:
        _echo(console, _plain_line(self.cat))

    def print_json(self, console: Console) -> None:
        _echo(console, _json(self.cat))


@dataclass(frozen=True)
class MaybeCatView:
    cat: Optional[Cat]

    def print_table(self, console: Console) -> None:
        if self.cat is None:
            _echo(console, NO_SUCH_CAT)
        else:
            CatView(self.cat).print_table(console)

    def print_plain(self, console: Console) -> None:
        if self.cat is None:
            _echo(console, NO_SUCH_CAT)
        else:
            CatView(self.cat).print_plain(console)

    def print_json(self, console: Console) -> None:
        if self.cat is None:
            _echo(console, "{}")
        else:
            CatView(self.cat).print_json(console)


@dataclass(frozen=True)
class CatListView:
    cats: Sequence[Cat]

    def print_table(self, console: Console) -> None:
        if not self.cats:
            MaybeCatView(None).print_table(console)
            return
        console.print(_table(self.cats))

    def print_plain(self, console: Console) -> None:
        for cat in self.cats:
            CatView(cat).print_plain(console)

    def print_json(self, console: Console) -> None:
        payload = "[" + ", ".join(_json(cat) for cat in self.cats) + "]"
        _echo(console, payload)


def render(view: Renderable, fmt: OutputFormat, console: Optional[Console] = None) -> None:
    """Print `view` in the requested format."""
    console = console or Console()
    if fmt is OutputFormat.JSON:
        view.print_json(console)
    elif fmt is OutputFormat.TABLE:
        view.print_table(console)
    else:
        view.print_plain(console)


__all__ = [
    "CatListView",
    "CatView",
    "MaybeCatView",
    "NO_SUCH_CAT",
    "OutputFormat",
    "Renderable",
    "render",
    "select_format",
]
