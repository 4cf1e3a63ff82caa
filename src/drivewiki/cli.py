"""CLI for drivewiki (sidebar tree, document outline, folder pages)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from drivewiki.api import DriveApi
from drivewiki.config import resolve_root_id
from drivewiki.core.outline.builder import build_outline
from drivewiki.core.outline.headings import extract_headings
from drivewiki.core.tree.listing import folder_listing
from drivewiki.core.tree.render import (
    outline_as_data,
    render_outline,
    render_view_tree,
    view_tree_as_data,
)
from drivewiki.errors import StoreError
from drivewiki.logging_config import configure_logging
from drivewiki.models.node import LoadState
from drivewiki.protocols import StoreProtocol
from drivewiki.session import NavigationSession
from drivewiki.store import DriveStore

app = typer.Typer(help="drivewiki: browse a Google Drive folder as a wiki.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_store(cache: bool) -> StoreProtocol:
    """Create the Drive-backed store, exiting if no token is configured."""
    try:
        return DriveStore(DriveApi(from_cache=cache))
    except RuntimeError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _root_id(root: str | None) -> str:
    try:
        return resolve_root_id(root)
    except RuntimeError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _expand_all(session: NavigationSession, depth: int) -> None:
    """Expand every loaded folder, ``depth`` levels down."""
    for _ in range(depth):
        folder_ids = [
            node_id
            for node_id, node in session.nodes.items()
            if node.acts_as_folder and node_id not in session.state.expanded
        ]
        if not folder_ids:
            break
        for node_id in folder_ids:
            session.toggle_expand(node_id, True)
        session.process_pending()


@app.command()
def tree(
    root: Annotated[
        str | None,
        typer.Option("--root", "-r", help="Root folder ID (default: $DRIVEWIKI_ROOT_ID)"),
    ] = None,
    reveal: Annotated[
        str | None,
        typer.Option("--reveal", help="Expand the sidebar down to this file ID"),
    ] = None,
    expand: Annotated[
        list[str] | None,
        typer.Option("--expand", "-e", help="Folder ID to expand (repeatable)"),
    ] = None,
    show_files: Annotated[
        list[str] | None,
        typer.Option("--show-files", "-f", help="Folder ID whose files are shown (repeatable)"),
    ] = None,
    depth: int = typer.Option(0, "--depth", "-d", help="Expand all folders this many levels"),
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache requests and use cache"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the sidebar tree of a Drive folder."""
    store = _open_store(cache)
    session = NavigationSession(store, _root_id(root))
    session.process_pending()

    for folder_id in expand or []:
        session.toggle_expand(folder_id, True)
    for folder_id in show_files or []:
        session.toggle_show_files(folder_id)
    session.process_pending()
    _expand_all(session, depth)

    if reveal:
        session.activate(reveal)
        session.process_pending()

    result = session.tree()
    if result.state is LoadState.FAILED:
        logger.error("Cannot list root folder: {}", result.error)
        raise typer.Exit(1)
    if result.state is LoadState.UNKNOWN:
        logger.error("Root folder {} could not be loaded", session.root_id)
        raise typer.Exit(1)

    if output_json:
        data = {
            "root_id": session.root_id,
            "active_id": session.state.active_id,
            "tree": view_tree_as_data(result.nodes),
        }
        typer.echo(json.dumps(data, indent=2))
    elif result.nodes:
        typer.echo(render_view_tree(result.nodes, active_id=session.state.active_id), nl=False)
    else:
        typer.echo("(empty)")


@app.command()
def outline(
    file_id: Annotated[
        str | None,
        typer.Argument(help="Document ID to export and outline"),
    ] = None,
    html: Annotated[
        Path | None,
        typer.Option("--html", help="Outline a local HTML file instead"),
    ] = None,
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache requests and use cache"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the heading outline of a document."""
    if html is not None:
        if not html.exists():
            logger.error("HTML file not found: {}", html)
            raise typer.Exit(1)
        body = html.read_text(encoding="utf-8")
    elif file_id:
        store = _open_store(cache)
        try:
            body = store.export_html(file_id)
        except StoreError as e:
            logger.error("Cannot export {}: {}", file_id, e)
            raise typer.Exit(1) from e
    else:
        typer.echo("Give a document ID or --html.")
        raise typer.Exit(1)

    headings = extract_headings(body)
    forest = build_outline(headings)
    if output_json:
        data = {"count": len(headings), "outline": outline_as_data(forest)}
        typer.echo(json.dumps(data, indent=2))
    elif forest:
        typer.echo(render_outline(forest), nl=False)
    else:
        typer.echo("No headings.")


@app.command()
def folder(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache requests and use cache"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List a folder the way its content page shows it."""
    store = _open_store(cache)
    session = NavigationSession(store, folder_id)
    session.process_pending()

    listing = folder_listing(folder_id, session.nodes, session.children)
    if listing is None:
        error = session.failures.get(folder_id, "children unknown")
        logger.error("Cannot list folder {}: {}", folder_id, error)
        raise typer.Exit(1)

    if output_json:
        data = {
            "folder_id": listing.folder_id,
            "display": listing.display,
            "readme": listing.readme.id if listing.readme else None,
            "files": [
                {"id": f.id, "name": f.name, "kind": f.kind.value} for f in listing.files
            ],
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"{len(listing.files)} files (display: {listing.display}):\n")
    for f in listing.files:
        link = f.link
        if link is not None:
            typer.echo(f"  {link.title} -> {link.url}")
        else:
            typer.echo(f"  {f.name}  [id={f.id}]")
    if listing.readme is not None:
        typer.echo(f"\nREADME: {listing.readme.id}")
