"""Rendering of command results."""
from typing import Iterable, List, Sequence, Tuple

import typer
from prettytable import PrettyTable


def make_table(field_names: Sequence[str], rows: Iterable[Sequence] = ()) -> PrettyTable:
    table = PrettyTable(list(field_names))
    table.align = "l"
    for row in rows:
        table.add_row(list(row))
    return table


def print_table(field_names: Sequence[str], rows: Iterable[Sequence]) -> None:
    typer.echo(make_table(field_names, rows).get_string())


def print_fields(pairs: List[Tuple[str, object]]) -> None:
    """Print a two column table of field names and values."""
    table = make_table(["Field", "Value"], pairs)
    table.header = False
    typer.echo(table.get_string())


def write_raw(content: bytes) -> None:
    """Write downloaded content to stdout untouched."""
    typer.echo(content, nl=False)
