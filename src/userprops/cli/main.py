"""CLI for userprops: list / get / set / where commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from userprops.core.config import AppSettings, ObservabilityConfig
from userprops.core.logging_config import setup_logging
from userprops.exceptions import UserPropsError
from userprops.models import PropertyType
from userprops.persistence.file_backend import FilePropertyPersistence
from userprops.registry import get_user_properties
from userprops.store import UserProperties

app = typer.Typer(name="userprops", help="Inspect and edit persisted user properties")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    config = ObservabilityConfig(log_level="DEBUG") if verbose else ObservabilityConfig()
    setup_logging(config)


def _open_store() -> UserProperties:
    """Return the process-wide store, exiting with a message if it cannot load."""
    try:
        return get_user_properties()
    except UserPropsError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)


@app.command("list")
def list_properties() -> None:
    """Show every property, sorted by key."""
    store = _open_store()
    names = sorted(store.property_names())
    if not names:
        console.print("[yellow]No properties defined[/yellow]")
        return

    table = Table(title="User Properties")
    table.add_column("Key", style="cyan")
    table.add_column("Type")
    table.add_column("Value", style="green")
    for name in names:
        prop = store.property(name)
        if prop is None:
            continue
        table.add_row(escape(name), prop.type.value, escape(prop.type.render(prop.value)))
    console.print(table)


@app.command()
def get(key: str = typer.Argument(..., help="Property key")) -> None:
    """Print a property's value without creating it."""
    store = _open_store()
    prop = store.property(key)
    if prop is None:
        console.print(f"[red]Property {escape(repr(key))} is not defined[/red]")
        raise typer.Exit(code=1)
    console.print(prop.type.render(prop.value), markup=False, highlight=False, soft_wrap=True)


@app.command("set")
def set_property(
    key: str = typer.Argument(..., help="Property key"),
    value: str = typer.Argument(..., help="New value"),
    value_type: Optional[PropertyType] = typer.Option(
        None,
        "--type",
        "-t",
        case_sensitive=False,
        help="Value type for a new key (defaults to the existing type, else String)",
    ),
) -> None:
    """Create or update a property and print its previous value."""
    store = _open_store()
    resolved = value_type or store.get_type(key) or PropertyType.STRING

    try:
        parsed = resolved.parse(value)
    except ValueError:
        console.print(f"[red]{escape(repr(value))} is not a valid {resolved.value}[/red]")
        raise typer.Exit(code=1)

    setters = {
        PropertyType.STRING: store.set_text,
        PropertyType.INTEGER: store.set_int,
        PropertyType.DOUBLE: store.set_double,
    }
    try:
        previous = setters[resolved](key, parsed)
    except UserPropsError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"{key} = {resolved.render(parsed)} (was {resolved.render(previous)!r})",
        markup=False,
        highlight=False,
    )


@app.command()
def where() -> None:
    """Show which persistence backend is configured."""
    settings = AppSettings()
    store = _open_store()
    backend = store.persistence
    console.print(
        f"Backend: {settings.persistence.backend} ({type(backend).__name__})",
        markup=False,
        highlight=False,
    )
    if isinstance(backend, FilePropertyPersistence):
        console.print(f"File: {backend.path}", markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
