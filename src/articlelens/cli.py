"""Terminal surface for inspecting one page at a time."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.panel import Panel

from articlelens import __version__
from articlelens.config import Config, settings
from articlelens.context import DocumentContextExecutor, DocumentSource, HttpDocumentSource, StaticDocumentSource
from articlelens.extractor import ContentExtractor
from articlelens.llm import ModelClient
from articlelens.observability import configure_logging
from articlelens.orchestrator import QueryOrchestrator, QueryState, QueryStatus
from articlelens.storage import FileCredentialStore

console = Console()
logger = structlog.get_logger(__name__)


class RichPresenter:
    """Renders orchestrator updates to the terminal."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.controls_enabled = True

    def update_status(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def display_response(self, text: str) -> None:
        self.console.print(Panel(text, border_style="blue"))

    def display_error(self, message: str) -> None:
        self.console.print(Panel(f"Error: {message}", border_style="red"))

    def set_controls_enabled(self, enabled: bool) -> None:
        self.controls_enabled = enabled


def _document_source(target: str) -> tuple[DocumentSource, str]:
    """A local HTML file is served from memory, anything else is fetched as a URL."""
    path = Path(target)
    if path.is_file():
        return StaticDocumentSource({target: path.read_text(encoding="utf-8", errors="replace")}), target
    return HttpDocumentSource(), target


def _build_orchestrator(config: Config, target: str) -> tuple[QueryOrchestrator, str]:
    source, context_id = _document_source(target)
    orchestrator = QueryOrchestrator(
        DocumentContextExecutor(source),
        RichPresenter(console),
        credential_store=FileCredentialStore.from_config(config.storage),
        extractor=ContentExtractor(config.extraction),
        model_client=ModelClient(config=config.model),
        sanitizer_config=config.sanitizer,
    )
    return orchestrator, context_id


def _exit_with(state: QueryState) -> None:
    if state.status is QueryStatus.FAILED:
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (defaults to the configured one)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """ArticleLens - summarize and question the main content of a web page."""
    ctx.ensure_object(dict)
    loaded = Config.from_yaml(Path(config)) if config else settings
    if log_level:
        loaded.monitoring.log_level = log_level
    configure_logging(loaded.monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("target")
@click.pass_context
def summarize(ctx: click.Context, target: str) -> None:
    """Summarize the page at TARGET (URL or local HTML file)."""

    async def _run() -> QueryState:
        orchestrator, context_id = _build_orchestrator(ctx.obj["config"], target)
        await orchestrator.start(context_id)
        return await orchestrator.summarize()

    _exit_with(asyncio.run(_run()))


@cli.command()
@click.argument("target")
@click.argument("question")
@click.pass_context
def ask(ctx: click.Context, target: str, question: str) -> None:
    """Answer QUESTION using only the page at TARGET."""

    async def _run() -> QueryState:
        orchestrator, context_id = _build_orchestrator(ctx.obj["config"], target)
        await orchestrator.start(context_id)
        return await orchestrator.ask(question)

    _exit_with(asyncio.run(_run()))


@cli.command()
@click.argument("target")
@click.pass_context
def show(ctx: click.Context, target: str) -> None:
    """Print a preview of the content extracted from TARGET."""

    async def _run() -> QueryState:
        orchestrator, context_id = _build_orchestrator(ctx.obj["config"], target)
        await orchestrator.start(context_id)
        state = orchestrator.show_extracted_content()
        return state if orchestrator.content else QueryState.failed("No content extracted")

    _exit_with(asyncio.run(_run()))


@cli.command("set-key")
@click.option("--key", prompt="API key", hide_input=True, help="Provider API key to store")
@click.pass_context
def set_key(ctx: click.Context, key: str) -> None:
    """Store the provider API key."""
    config: Config = ctx.obj["config"]
    store = FileCredentialStore.from_config(config.storage)
    store.save(key.strip())
    console.print(f"[green]API key saved to {store.path}[/green]")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
