import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.table import Table
from rich.text import Text

from .. import _conv, document, exceptions

from .console import console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

# Exit codes.
EXIT_IO_ERROR = 1
EXIT_NOT_FOUND = 3
EXIT_PARSE_ERROR = 2

app = typer.Typer(no_args_is_help=True)

File = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]
Output = Annotated[
    Optional[pathlib.Path],
    typer.Option("--output", "-o", dir_okay=False, help="where to write the file to"),
]
Encoding = Annotated[
    Optional[str],
    typer.Option(help="file encoding, detected if not given"),
]


def _open(file: pathlib.Path, encoding: str | None) -> document.Document:
    try:
        return document.Document.open(file, encoding)
    except exceptions.ParseError as e:
        typer.echo(f"{file}: {e}", err=True)
        raise typer.Exit(EXIT_PARSE_ERROR)
    except exceptions.SourceUnavailable as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_IO_ERROR)


def _save(doc: document.Document, path: pathlib.Path):
    try:
        doc.save(path)
    except exceptions.DestinationUnwritable as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_IO_ERROR)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Read, query and edit INI files."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


@app.command()
def show(
    file: File,
    raw: Annotated[bool, typer.Option(help="Print a plain outline instead")] = False,
    encoding: Encoding = None,
):
    """Show the sections and properties in an INI file."""

    doc = _open(file, encoding)

    if raw:
        doc.pprint()
        return

    table = Table(title=str(file))
    table.add_column("Section")
    table.add_column("Key")
    table.add_column("Value")

    for name, section in doc.sections.items():
        if not section:
            table.add_row(Text(name), "", "")

        for key, value in section.items():
            table.add_row(Text(name), Text(key), Text(_conv.to_str(value)))

    console.print(table)


@app.command()
def get(
    file: File,
    section: str,
    key: str,
    encoding: Encoding = None,
):
    """Print the value of a property."""

    value = _open(file, encoding).get(section, key)
    if value is None:
        typer.echo(f"no property '{key}' in section '{section}'", err=True)
        raise typer.Exit(EXIT_NOT_FOUND)

    typer.echo(value)


@app.command("set")
def set_(
    file: File,
    section: str,
    key: str,
    value: str,
    output: Output = None,
    encoding: Encoding = None,
):
    """Set the value of a property, creating its section if needed.
    The file is modified in place unless --output is given.
    """

    doc = _open(file, encoding)
    doc.set(section, key, value)

    _save(doc, output or file)


@app.command()
def fmt(
    file: File,
    output: Output = None,
    encoding: Encoding = None,
):
    """Rewrite an INI file in canonical form.
    The result is printed unless --output is given.
    """

    doc = _open(file, encoding)

    if output is None:
        typer.echo(doc.to_str(), nl=False)
    else:
        _save(doc, output)
