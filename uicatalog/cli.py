"""CLI entry point for uicatalog."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich import print as rprint

from uicatalog.activity import LOG_FILENAME, read_activity_log
from uicatalog.catalog.engine import CatalogEngine
from uicatalog.catalog.registry import COLLECTION_KEYS
from uicatalog.config import Config
from uicatalog.errors import CatalogError
from uicatalog.storage.document import JsonDocumentStore

app = typer.Typer(help="Catalog front-end project conventions for AI coding agents.")


def _engine(db_path: str | None) -> CatalogEngine:
    path = Path(db_path) if db_path else Config.load().db_path
    return CatalogEngine(JsonDocumentStore(path))


def _check_config(config: Config) -> None:
    issues = config.validate()
    if issues:
        for issue in issues:
            rprint(f"[red]Config error: {issue}[/red]")
        raise typer.Exit(1)


def _write_mcp_config(project_dir: Path, db_path: Path) -> None:
    """Create .mcp.json for per-project MCP server configuration."""
    import shutil

    mcp_config_path = project_dir / ".mcp.json"

    uicatalog_bin = shutil.which("uicatalog")
    if uicatalog_bin:
        command, args = uicatalog_bin, ["serve"]
    else:
        # uicatalog/ package dir -> parent is the project root
        source_dir = Path(__file__).resolve().parent.parent
        command, args = "uv", ["run", "--directory", str(source_dir), "uicatalog", "serve"]

    config = {}
    if mcp_config_path.exists():
        config = json.loads(mcp_config_path.read_text())
    config.setdefault("mcpServers", {})["uicatalog"] = {
        "type": "stdio",
        "command": command,
        "args": args,
        "env": {"UICATALOG_DB_PATH": str((project_dir / db_path).resolve())},
    }

    mcp_config_path.write_text(json.dumps(config, indent=2) + "\n")
    rprint(f"MCP config written to {mcp_config_path}")


def _update_gitignore(project_dir: Path, db_path: Path) -> None:
    """Ensure .gitignore lists the catalog file and its activity log."""
    gitignore_path = project_dir / ".gitignore"
    entries_to_add = [db_path.as_posix(), (db_path.parent / LOG_FILENAME).as_posix()]

    existing_lines: set[str] = set()
    if gitignore_path.exists():
        existing_lines = set(gitignore_path.read_text().splitlines())

    new_entries = [e for e in entries_to_add if e not in existing_lines]
    if new_entries:
        with open(gitignore_path, "a") as f:
            if existing_lines and not gitignore_path.read_text().endswith("\n"):
                f.write("\n")
            f.write("\n# uicatalog\n")
            for entry in new_entries:
                f.write(f"{entry}\n")
        rprint(f"Added {', '.join(new_entries)} to .gitignore")


@app.command()
def init(
    db_path: str = typer.Option(None, help="Catalog file path (default: data/db.json)"),
) -> None:
    """Initialize uicatalog in a project directory.

    Creates .mcp.json for Claude Code/Cursor and an empty catalog file if none
    exists. Run in your project root.
    """
    project_dir = Path.cwd()
    path = Path(db_path) if db_path else Config.load().db_path

    store = JsonDocumentStore(project_dir / path)
    if not store.path.exists():
        store.save(store.load())
        rprint(f"Created empty catalog at {store.path}")

    _write_mcp_config(project_dir, path)
    _update_gitignore(project_dir, path)

    rprint("\n[green bold]uicatalog initialized[/green bold]")
    rprint("\nNext steps:")
    rprint("  1. Restart Claude Code so it picks up the MCP server")
    rprint("  2. Run [bold]uicatalog api[/bold] to browse and edit the catalog over HTTP")


@app.command()
def serve() -> None:
    """Start the MCP server (called by Claude Code / Cursor automatically)."""
    import asyncio

    from uicatalog.mcp_server import main as mcp_main

    config = Config.load()
    _check_config(config)
    config.configure_logging()
    asyncio.run(mcp_main())


@app.command()
def api(
    host: str = typer.Option(None, help="Bind address (default: UICATALOG_HOST or 127.0.0.1)"),
    port: int = typer.Option(None, help="Port (default: UICATALOG_PORT or 3001)"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from uicatalog.api.app import create_app

    config = Config.load()
    if host:
        config.host = host
    if port:
        config.port = port
        config.invalid_port = None
    _check_config(config)
    config.configure_logging()

    rprint(f"Serving {config.db_path} on http://{config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())


@app.command()
def stats(
    db_path: str = typer.Option(None, help="Catalog file path"),
) -> None:
    """Show how many records each collection holds."""
    try:
        counts = _engine(db_path).stats()
    except CatalogError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    rprint("[bold]uicatalog statistics:[/bold]")
    for key in COLLECTION_KEYS:
        rprint(f"  {key + ':':<14} {counts[key]}")
    rprint(f"  {'total:':<14} {sum(counts.values())}")


@app.command(name="list")
def list_collection(
    kind: str = typer.Argument(help=f"Collection: {', '.join(COLLECTION_KEYS)}"),
    full: bool = typer.Option(False, "--full", help="Show whole records instead of the list view"),
    db_path: str = typer.Option(None, help="Catalog file path"),
) -> None:
    """Print one collection as JSON."""
    try:
        records = _engine(db_path).list_records(kind, summary=not full)
    except CatalogError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    typer.echo(json.dumps(records, indent=2, ensure_ascii=False))


@app.command()
def activity(
    limit: int = typer.Option(20, help="Number of entries to show"),
    tool: str = typer.Option(None, help="Only show calls to this tool"),
    db_path: str = typer.Option(None, help="Catalog file path; the log is read from beside it"),
) -> None:
    """Show recent MCP tool calls made by your AI agent."""
    entries = read_activity_log(
        limit=limit, tool_name=tool, db_path=Path(db_path) if db_path else None
    )
    if not entries:
        rprint("[yellow]No tool calls logged yet.[/yellow]")
        return

    for entry in entries:
        marker = "[red]✗[/red]" if entry.get("error") else "[green]✓[/green]"
        rprint(
            f"{marker} {entry.get('timestamp', '')}  [bold]{entry.get('tool_name', '')}[/bold]"
            f"  ({entry.get('duration_ms', 0)} ms)"
        )
        if entry.get("error"):
            rprint(f"    {entry['error']}")


if __name__ == "__main__":
    app()
