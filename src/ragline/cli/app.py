# src/ragline/cli/app.py
"""Command-line interface for ragline.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
4. Maps failures to exit codes by error kind
"""

from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ragline import __version__
from ragline.commands import (
    ask,
    chunks,
    config_cmd,
    delete,
    embed,
    ingest,
    list_cmd,
    search,
    status,
)
from ragline.commands.base import CommandResult, ConfirmRequest, FileIngestResult, SearchHit
from ragline.config import load_env_file
from ragline.exceptions import ErrorKind
from ragline.log import configure_logging

app = typer.Typer(
    name="ragline",
    help="ragline - ingest documents, embed them, and answer questions from them.",
    no_args_is_help=True,
)
console = Console()

EXIT_CODES = {
    ErrorKind.INVALID.value: 2,
    ErrorKind.NOT_FOUND.value: 3,
    ErrorKind.DUPLICATE.value: 4,
    ErrorKind.SERVICE_FAILURE.value: 5,
    ErrorKind.PERSISTENCE_FAILURE.value: 6,
    ErrorKind.EXTRACTION_FAILURE.value: 7,
}

DATA_DIR_OPTION = typer.Option(None, "--data-dir", "-d", help="Data directory (default: from settings)")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config file")


def exit_code_for(result: CommandResult) -> int:
    """Exit code for a failed result, by error kind (1 when unclassified)."""
    return EXIT_CODES.get(result.error_kind or "", 1)


def _fail(result: CommandResult) -> NoReturn:
    console.print(f"[red]Error: {result.error}[/red]")
    raise typer.Exit(exit_code_for(result))


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ragline {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """ragline - retrieval-augmented answers over your documents."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    load_env_file()


def _preview(text: str, width: int = 100) -> str:
    preview = text[:width].replace("\n", " ")
    if len(text) > width:
        preview += "..."
    return preview


def _render_hits(hits: list[SearchHit]) -> None:
    for i, hit in enumerate(hits, 1):
        label = hit.filename or hit.document_id
        console.print(
            f"  [{i}] [cyan]{label}[/cyan] #{hit.chunk_index} [dim](distance: {hit.score:.3f})[/dim]"
        )
        console.print(f"      [dim]{_preview(hit.content)}[/dim]")


@app.command(name="ingest")
def ingest_cmd(
    path: str = typer.Argument(..., help="File or directory to ingest"),
    embed_after: bool = typer.Option(
        False, "--embed", "-e", help="Generate embeddings for new documents afterwards"
    ),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Ingest a file or directory of documents."""

    def on_file_complete(file_result: FileIngestResult) -> None:
        if file_result.skipped:
            console.print(f"[dim]Skipped {file_result.filepath}: {file_result.reason}[/dim]")
        elif file_result.document_id is None:
            console.print(f"[red]Failed {file_result.filepath}: {file_result.reason}[/red]")
        else:
            console.print(
                f"[green]Ingested {file_result.filepath}[/green] "
                f"[dim]({file_result.chunks} chunks, id {file_result.document_id})[/dim]"
            )

    result = ingest.ingest(
        path=path,
        data_dir=data_dir,
        config_path=config_file,
        embed=embed_after,
        on_file_complete=on_file_complete,
    )

    if not result.success:
        _fail(result)

    if result.error:
        console.print(f"[yellow]{result.error}[/yellow]")
        return

    console.print()
    console.print(
        f"[green]Ingested {result.files_processed} files ({result.total_chunks} chunks)[/green]"
    )
    if embed_after:
        console.print(f"[green]Embedded {result.embedded} chunks[/green]")
    if result.files_skipped > 0:
        console.print(f"[dim]Skipped {result.files_skipped} duplicate files[/dim]")
    if result.files_failed > 0:
        console.print(f"[yellow]{result.files_failed} files failed[/yellow]")


@app.command(name="embed")
def embed_cmd(
    document_id: str = typer.Option(
        None, "--document", help="Only embed chunks of this document"
    ),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Generate embeddings for chunks that don't have one yet."""
    result = embed.embed(document_id=document_id, data_dir=data_dir, config_path=config_file)

    for error in result.errors:
        console.print(f"[yellow]Failed {error}[/yellow]")

    if not result.success:
        _fail(result)

    if result.candidates == 0:
        console.print("[dim]Nothing to embed.[/dim]")
        return

    console.print(
        f"[green]Embedded {result.embedded} of {result.candidates} chunks "
        f"in {result.batches} batches[/green]"
    )


@app.command(name="search")
def search_cmd(
    query: str = typer.Argument(..., help="Search query"),
    k: int = typer.Option(None, "--k", "-k", help="Number of results to return"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Find the chunks closest to a query."""
    result = search.search(query=query, k=k, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result)

    if not result.results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print(f"[bold]Top {len(result.results)} results:[/bold]")
    _render_hits(result.results)


@app.command(name="ask")
def ask_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
    top_k: int = typer.Option(None, "--top-k", "-k", help="Chunks to use as context"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Answer a question from the ingested documents."""
    result = ask.ask(question=question, top_k=top_k, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result)

    console.print(Panel(Markdown(result.answer or ""), title="Answer", border_style="green"))

    if result.results:
        console.print()
        console.print("[bold]Sources:[/bold]")
        _render_hits(result.results)


@app.command(name="list")
def list_cmd_handler(
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """List ingested documents."""
    result = list_cmd.list_documents(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result)

    if not result.documents:
        console.print("[dim]No documents ingested.[/dim]")
        return

    table = Table(title=f"Documents ({len(result.documents)})")
    table.add_column("ID", style="dim")
    table.add_column("Filename", style="cyan")
    table.add_column("Chunks", justify="right")
    table.add_column("Embedded", justify="right", style="green")
    table.add_column("Created")

    for doc in result.documents:
        table.add_row(
            doc.document_id,
            doc.filename,
            str(doc.chunk_count),
            str(doc.embedded_count),
            doc.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)


@app.command(name="chunks")
def chunks_cmd(
    document_id: str = typer.Argument(..., help="Document ID"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Show a document's chunks in order."""
    result = chunks.chunks(document_id=document_id, data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result)

    table = Table(title=f"{result.filename} ({len(result.chunks)} chunks)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Words", justify="right")
    table.add_column("Embedded", justify="center")
    table.add_column("Content", style="cyan")

    for chunk in result.chunks:
        span = (
            f"{chunk.start_index}-{chunk.end_index}" if chunk.start_index is not None else ""
        )
        table.add_row(str(chunk.index), span, "yes" if chunk.embedded else "no", _preview(chunk.content))

    console.print(table)


@app.command(name="delete")
def delete_cmd(
    document_id: str = typer.Argument(..., help="Document ID to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Delete a document and all its chunks."""

    def cli_confirm(request: ConfirmRequest) -> bool:
        if request.details:
            console.print(f"[yellow]{request.details}[/yellow]")
        return typer.confirm(request.message)

    result = delete.delete(
        document_id=document_id,
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else cli_confirm,
    )

    if not result.success:
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        _fail(result)

    console.print(
        f"[green]Deleted {result.filename} and {result.chunks_deleted} chunks[/green]"
    )


@app.command(name="status")
def status_cmd(
    data_dir: str = DATA_DIR_OPTION,
    config_file: str = CONFIG_OPTION,
) -> None:
    """Show database statistics."""
    result = status.status(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result)

    if result.total_documents == 0:
        console.print("[dim]No documents found. Run 'ragline ingest' first.[/dim]")
        return

    table = Table(title="Database Status")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Data directory", result.data_dir)
    table.add_row("Documents", str(result.total_documents))
    table.add_row("Chunks", str(result.total_chunks))
    table.add_row("Embedded chunks", str(result.embedded_chunks))
    table.add_row("Pending chunks", str(result.pending_chunks))

    console.print(table)


@app.command(name="config")
def config_cmd_handler(
    config_file: str = CONFIG_OPTION,
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if not result.success:
        _fail(result)

    table = Table(title="ragline Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("provider", result.provider, "yaml" if result.config_path else "default")
    table.add_row("llm_model", result.llm_model or "(not set)", "")
    table.add_row("embedding_model", result.embedding_model or "(not set)", "")
    table.add_row("data_dir", result.data_dir, "")
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")
