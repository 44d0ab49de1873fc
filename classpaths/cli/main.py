"""Classpath CLI - Main commands."""
import logging
from contextlib import contextmanager
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from classpaths.core.config import DB_ENV_VAR, ClasspathConfig
from classpaths.core.exceptions import ClasspathException
from classpaths.core.hierarchy import ClasspathNode, PathResolver
from classpaths.core.logging import get_logger, setup_logging
from classpaths.core.store import ClasspathRecord, SQLiteStore
from classpaths.core.service import ClasspathService

app = typer.Typer(
    name="classpath",
    help="Manage prefix-encoded classpath hierarchies",
    add_completion=False
)
console = Console()
logger = get_logger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(None, "--db", envvar=DB_ENV_VAR, help="SQLite database file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Classpath hierarchy management."""
    config = ClasspathConfig.from_env(
        db,
        log_level=logging.DEBUG if verbose else logging.WARNING
    )
    if verbose:
        logging.basicConfig(
            level=config.log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    setup_logging(config.log_level)
    if config.is_memory:
        logger.warning("Using an in-memory database; changes are discarded on exit")
    ctx.obj = config


@contextmanager
def open_service(ctx: typer.Context):
    """Open the store, yield a service, map classpath errors to exit code 1."""
    config: ClasspathConfig = ctx.obj
    logger.debug(f"Opening classpath store {config.db_path}")
    try:
        with SQLiteStore(config.db_path) as store:
            yield ClasspathService(store, config=config)
    except ClasspathException as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(1)


def add_branch(tree: Tree, node: ClasspathNode) -> None:
    label = f"{escape(node.path)} [dim](id={node.id})[/dim]"
    if node.note:
        label += f" [cyan]{escape(node.note)}[/cyan]"
    branch = tree.add(label)
    for child in node:
        add_branch(branch, child)


@app.command()
def add(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Classpath path"),
    note: str = typer.Option("", "--note", "-n", help="Free-text note"),
    preset: bool = typer.Option(False, "--preset", help="Mark as system-provided"),
    user: str = typer.Option("", "--user", "-u", envvar="USER", help="Acting user"),
):
    """Add a classpath."""
    with open_service(ctx) as service:
        record = service.add(ClasspathRecord(
            path=path,
            note=note,
            preset=1 if preset else 0,
            create_by=user,
            update_by=user,
        ))
        console.print(f"[green]Added {escape(record.path)} (id={record.id})[/green]")


@app.command()
def update(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="New path"),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="New note"),
    user: str = typer.Option("", "--user", "-u", envvar="USER", help="Acting user"),
):
    """Update path and/or note of a classpath."""
    with open_service(ctx) as service:
        record = service.require(classpath_id)
        fields = []
        if path is not None:
            record.path = path
            fields.append('path')
        if note is not None:
            record.note = note
            fields.append('note')
        if not fields:
            console.print("[yellow]Nothing to update[/yellow]")
            return

        record.stamp_updated(user)
        service.update(record, *fields, 'update_at', 'update_by')
        console.print(f"[green]Updated {escape(record.path)} (id={record.id})[/green]")


@app.command()
def rm(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
):
    """Delete a classpath without resources or collect rules."""
    with open_service(ctx) as service:
        record = service.require(classpath_id)
        service.delete(record)
        console.print(f"[green]Deleted {escape(record.path)}[/green]")


@app.command()
def ls(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Substring the path must contain"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    offset: int = typer.Option(0, "--offset", "-o", help="Records to skip"),
):
    """List classpaths ordered by path."""
    with open_service(ctx) as service:
        total = service.total(query)
        records = service.list(query, limit=limit, offset=offset)

        table = Table()
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Path", style="cyan")
        table.add_column("Note")
        table.add_column("Preset", justify="center")

        for record in records:
            table.add_row(
                str(record.id),
                escape(record.path),
                escape(record.note),
                "yes" if record.preset else "",
            )

        console.print(table)
        console.print(f"{len(records)} of {total}")


@app.command()
def tree(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Substring the path must contain"),
    under: Optional[str] = typer.Option(None, "--under", help="Show only the subtree of this path"),
):
    """Show classpaths as a tree."""
    with open_service(ctx) as service:
        roots = service.get_tree(query)
        if under is not None:
            node = PathResolver.resolve(roots, under)
            if node is None:
                console.print(f"[red]Path not found: {escape(under)}[/red]")
                raise typer.Exit(1)
            roots = [node]

        if not roots:
            console.print("[yellow]No classpaths[/yellow]")
            return

        root = Tree("classpaths", guide_style="dim")
        for node in roots:
            add_branch(root, node)
        console.print(root)


@app.command()
def children(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Parent path"),
):
    """List direct children of a path."""
    with open_service(ctx) as service:
        for record in service.get_direct_children(path):
            console.print(f"{escape(record.path)} [dim](id={record.id})[/dim]")


@app.command()
def bind(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
    idents: List[str] = typer.Argument(..., help="Resource identifiers"),
):
    """Bind resources to a classpath."""
    with open_service(ctx) as service:
        service.require(classpath_id)
        service.attach_resources(classpath_id, idents)
        console.print(f"[green]Bound {len(idents)} resource(s)[/green]")


@app.command()
def unbind(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
    idents: List[str] = typer.Argument(..., help="Resource identifiers"),
):
    """Unbind resources from a classpath."""
    with open_service(ctx) as service:
        service.detach_resources(classpath_id, idents)
        console.print(f"[green]Unbound {len(idents)} resource(s)[/green]")


@app.command()
def resources(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
):
    """List resources bound to a classpath."""
    with open_service(ctx) as service:
        for ident in service.resources(classpath_id):
            console.print(escape(ident))


@app.command()
def fav(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
    user: str = typer.Option(..., "--user", "-u", envvar="USER", help="Owner of the favorite"),
):
    """Add a classpath to a user's favorites."""
    with open_service(ctx) as service:
        service.add_favorite(classpath_id, user)
        console.print("[green]Favorite added[/green]")


@app.command()
def unfav(
    ctx: typer.Context,
    classpath_id: int = typer.Argument(..., help="Classpath id"),
    user: str = typer.Option(..., "--user", "-u", envvar="USER", help="Owner of the favorite"),
):
    """Remove a classpath from a user's favorites."""
    with open_service(ctx) as service:
        service.remove_favorite(classpath_id, user)
        console.print("[green]Favorite removed[/green]")


@app.command()
def favs(
    ctx: typer.Context,
    user: str = typer.Option(..., "--user", "-u", envvar="USER", help="Owner of the favorites"),
):
    """List a user's favorite classpaths."""
    with open_service(ctx) as service:
        for record in service.favorites(user):
            console.print(f"{escape(record.path)} [dim](id={record.id})[/dim]")


if __name__ == "__main__":
    app()
