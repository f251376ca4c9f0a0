"""Main CLI interface using Typer."""

import typer
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.table import Table
from bs4 import BeautifulSoup

from inlinetrans.core.annotations import inject_stylesheet, strip_annotations
from inlinetrans.core.exceptions import InlineTransError
from inlinetrans.core.host import RenderedView
from inlinetrans.core.session import TranslationSession
from inlinetrans.translation.backends import create_backend
from inlinetrans.utils.config_loader import load_settings
from inlinetrans.utils.logger import setup_logger

app = typer.Typer(
    name="inlinetrans",
    help="InlineTrans: inline translation overlays for rendered HTML documents",
    add_completion=False
)

console = Console()


def _read_html(path: Path) -> BeautifulSoup:
    if not path.exists():
        console.print(f"[red]Error: Input file not found: {path}[/red]")
        raise typer.Exit(1)
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@app.command()
def translate(
    input_file: Path = typer.Argument(..., help="Input HTML file"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file path"),
    source_lang: Optional[str] = typer.Option(None, "-s", "--source", help="Source language (default: auto)"),
    target_lang: Optional[str] = typer.Option(None, "-t", "--target", help="Target language (default: zh)"),
    backend: Optional[str] = typer.Option(None, "-b", "--backend", help="API type (simple/openai)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Translation endpoint URL"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key"),
    model: Optional[str] = typer.Option(None, "-m", "--model", help="Model name for the openai API type"),
    skip: Optional[List[str]] = typer.Option(None, "--skip", help="CSS selector whose matches are not translated (repeatable)"),
    hide_original: Optional[bool] = typer.Option(None, "--hide-original/--show-original", help="Hide original text next to translations"),
    root_selector: Optional[str] = typer.Option(None, "--root", help="CSS selector of the element to translate"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
    debug_mode: bool = typer.Option(False, "--debug/--no-debug", help="Enable debug logging"),
):
    """Translate an HTML document and write it with an inline overlay."""

    setup_logger(level="DEBUG" if debug_mode else "WARNING")

    soup = _read_html(input_file)
    if output is None:
        output = input_file.with_name(f"{input_file.stem}_translated{input_file.suffix or '.html'}")

    try:
        settings = load_settings(
            str(config) if config else None,
            api_type=backend,
            api_url=api_url,
            api_key=api_key,
            model=model,
            from_lang=source_lang,
            to_lang=target_lang,
            skip_selectors=skip or None,
            hide_original=hide_original,
        )
    except (InlineTransError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    root = None
    if root_selector:
        root = soup.select_one(root_selector)
        if root is None:
            console.print(f"[red]Error: no element matches --root {root_selector!r}[/red]")
            raise typer.Exit(1)

    console.print(f"[bold blue]InlineTrans[/bold blue]")
    console.print(f"Input: {input_file}")
    console.print(f"Output: {output}")
    console.print(f"Translation: {settings.from_lang} → {settings.to_lang}")
    console.print(f"Backend: {settings.api_type} ({settings.api_url})\n")

    view = RenderedView(soup.body or soup)
    failure: Optional[InlineTransError] = None

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False
    ) as progress:
        task = progress.add_task("[cyan]Translating blocks...", total=None)

        def on_progress(done: int, total: int) -> None:
            progress.update(task, completed=done, total=total)

        session = TranslationSession(view, settings, fallback_root=soup, progress_callback=on_progress)
        try:
            session.translate_sync(root)
        except InlineTransError as e:
            failure = e

    if session.has_translations():
        inject_stylesheet(soup)
        output.write_text(str(soup), encoding="utf-8")

    stats = session.cache.get_stats()
    table = Table(title="Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Annotations", str(len(session.annotations)))
    table.add_row("Backend calls", str(stats["misses"]))
    table.add_row("Cache hits", str(stats["hits"]))
    table.add_row("Originals hidden", "yes" if settings.hide_original else "no")
    console.print(table)

    if failure is not None:
        console.print(f"[red]Translation stopped: {failure}[/red]")
        raise typer.Exit(1)

    if session.has_translations():
        console.print(f"[green]✓ Saved to {output}[/green]")
    else:
        console.print("[yellow]Nothing to translate; no output written.[/yellow]")


@app.command()
def strip(
    input_file: Path = typer.Argument(..., help="HTML file containing an overlay"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file path (default: overwrite input)"),
):
    """Remove a translation overlay from a saved HTML document."""

    soup = _read_html(input_file)
    removed = strip_annotations(soup)
    target = output or input_file
    target.write_text(str(soup), encoding="utf-8")
    console.print(f"[green]Removed {removed} annotations → {target}[/green]")


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
):
    """Show the effective settings (API key masked) and backend status."""

    try:
        settings = load_settings(str(config) if config else None)
    except (InlineTransError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="InlineTrans settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in settings.to_dict().items():
        if isinstance(value, list):
            value = "\n".join(value) or "-"
        table.add_row(key, str(value))
    console.print(table)

    info = create_backend(settings).get_info()
    backend_table = Table(title="Backend")
    backend_table.add_column("Key", style="cyan")
    backend_table.add_column("Value")
    for key, value in info.items():
        backend_table.add_row(key, str(value))
    console.print(backend_table)
    if not info["available"]:
        console.print("[yellow]Backend is not fully configured; translate will fail.[/yellow]")


def cli():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    cli()
