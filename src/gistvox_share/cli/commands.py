"""CLI commands for the Gistvox share service."""

import asyncio
from typing import Annotated, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from ..backend.client import BackendClient
from ..config import settings
from ..errors import ShareServiceError
from ..rendering.bots import BotDetector
from ..rendering.pages import build_post_meta
from ..utils.logging import setup_logging

app = typer.Typer(
    name="gistvox-share",
    help="Share pages, embeddable player and preview images for Gistvox audio",
    add_completion=False,
)
console = Console()


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", "-h", help="API host"),
    ] = settings.api_host,
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="API port"),
    ] = settings.api_port,
    reload: Annotated[
        bool,
        typer.Option("--reload", "-r", help="Enable auto-reload"),
    ] = False,
) -> None:
    """Start the share service."""
    import uvicorn

    console.print(f"\n[bold blue]Starting Gistvox Share Service[/bold blue]")
    console.print(f"Host: {host}")
    console.print(f"Port: {port}")
    console.print(f"Environment: {settings.environment}")
    console.print()

    uvicorn.run(
        "gistvox_share.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command("check-config")
def check_config() -> None:
    """Show which required settings are present."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Status")

    for name, status in settings.config_status().items():
        style = "green" if status == "SET" else "red"
        table.add_row(name, f"[{style}]{status}[/{style}]")

    console.print(table)


@app.command()
def preview(
    post_id: Annotated[
        str,
        typer.Argument(help="Post to preview"),
    ],
    user_agent: Annotated[
        Optional[str],
        typer.Option("--user-agent", "-u", help="User-Agent to classify"),
    ] = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="Public base URL used in links"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Print the share-page meta tags a crawler would see for a post."""
    log_level = "DEBUG" if verbose else "WARNING"
    setup_logging(log_level)

    try:
        asyncio.run(_preview_async(post_id, user_agent, base_url))
    except ShareServiceError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1)


async def _preview_async(post_id: str, user_agent: str | None, base_url: str | None) -> None:
    """Async implementation of preview command."""
    base = (base_url or settings.public_base_url or "https://share.gistvox.com").rstrip("/")

    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
        backend = BackendClient(http, settings)
        found = await backend.get_post_with_creator(post_id)

    if found is None:
        console.print(f"[yellow]Post {post_id} is missing or not public[/yellow]")
        raise typer.Exit(code=1)

    post, creator = found
    is_bot = BotDetector(settings.bot_user_agent_tokens).is_bot(user_agent)

    console.print(f"\n[bold blue]{post.display_title}[/bold blue] by @{creator.display_handle}")
    console.print(f"Treated as crawler: {'Yes' if is_bot else 'No'}")
    console.print()

    table = Table(title="Meta tags", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Content", style="green")
    for tag in build_post_meta(post, creator, base, settings):
        table.add_row(tag.key, tag.content)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__

    console.print(f"Gistvox Share v{__version__}")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
