"""
Recorder Search - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--language, etc.)
    2. Config file (config.yaml)
    3. Environment variables (RECORDER_SEARCH__SEARCH__LANGUAGE, etc.)

Usage:
    recorder-search detect "getByRole('button')"
    recorder-search search page.html '"Submit"'
    recorder-search page https://example.com "Sign in" --visible
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from recorder_search import __version__
from recorder_search.config import get_search_config, get_settings
from recorder_search.config.settings import SearchConfig
from recorder_search.dom.document import Document
from recorder_search.dom.text import TextCache, element_text
from recorder_search.exceptions import ConfigurationError
from recorder_search.highlight.memory import InMemoryHighlight
from recorder_search.interfaces.highlight import IHighlight
from recorder_search.search.host import create_host
from recorder_search.search.modes import detect_search_mode
from recorder_search.search.tool import ElementSearchTool
from recorder_search.selectors.engine import css_path
from recorder_search.ui.widgets import Widget
from recorder_search.utils.logging import setup_logging_from_settings

# Create the CLI app
app = typer.Typer(
    name="recorder-search",
    help="Element search for the browser recorder",
    add_completion=False,
)

console = Console()

MAX_ROWS = 20


def setup_logging(verbose: bool = False):
    """Configure logging from the settings; --verbose forces DEBUG."""
    setup_logging_from_settings(get_settings().logging, verbose)


def _search_config(language: Optional[str]) -> SearchConfig:
    try:
        return get_search_config(language)
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)


async def _run_search(
    document: Document,
    query: str,
    config: SearchConfig,
    highlight: Optional[IHighlight] = None,
) -> ElementSearchTool:
    host = create_host(document, highlight=highlight, config=config)
    tool = ElementSearchTool(host)
    tool.install(Widget("x-pw-tools-list"))
    await tool.search_now(query)
    await tool.settle()
    return tool


def _print_results(tool: ElementSearchTool, show_all: bool) -> None:
    state = tool.state
    view = tool.projection
    tooltip = tool.current_tooltip()
    
    if not state.is_active:
        console.print(f"[yellow]✗ No match for {state.query or '(empty)'!r}[/yellow] [dim]({state.mode.value})[/dim]")
        return
    
    console.print(Panel.fit(
        f"[bold blue]🔎 {view.counter_text}[/bold blue]\n"
        f"[dim]Mode:[/dim] {state.mode.value}\n"
        f"[dim]Query:[/dim] {state.query}"
        + (f"\n[dim]Current:[/dim] {tooltip}" if tooltip else ""),
        border_style="blue",
    ))
    
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", width=4)
    table.add_column("Element", style="dim")
    table.add_column("Text")
    
    cache: TextCache = {}
    rows = state.matches if show_all else state.matches[:MAX_ROWS]
    for i, element in enumerate(rows):
        marker = "▶" if i == state.current_index else str(i + 1)
        text = element_text(cache, element).normalized
        table.add_row(marker, css_path(element), text[:60] + ("..." if len(text) > 60 else ""))
    
    console.print(table)
    hidden = len(state.matches) - len(rows)
    if hidden > 0:
        console.print(f"[dim]... {hidden} more (use --all)[/dim]")


@app.command()
def detect(
    query: str = typer.Argument(..., help="Search text as typed into the search box"),
):
    """Show which search strategy a query selects."""
    query = query.strip()
    if not query:
        console.print("[yellow]Empty query clears the search[/yellow]")
        return
    detected = detect_search_mode(query)
    console.print(f"[bold]{detected.mode.value}[/bold]  {detected.query}")


@app.command()
def search(
    file_path: str = typer.Argument(..., help="Path to an HTML file"),
    query: str = typer.Argument(..., help="Search text"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Locator language: javascript, python"),
    show_all: bool = typer.Option(False, "--all", "-a", help="List every match"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Search a saved HTML page.
    
    Examples:
        recorder-search search page.html "getByRole('button')"
        recorder-search search page.html '"Submit"' --language python
    """
    path = Path(file_path)
    if not path.exists():
        console.print(f"[red]✗ File not found: {file_path}[/red]")
        raise typer.Exit(1)
    
    config = _search_config(language)
    setup_logging(verbose)
    document = Document.from_file(path)
    highlight = InMemoryHighlight()
    tool = asyncio.run(_run_search(document, query, config, highlight))
    _print_results(tool, show_all)


@app.command()
def page(
    url: str = typer.Argument(..., help="Page to open"),
    query: str = typer.Argument(..., help="Search text"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Locator language: javascript, python"),
    show_all: bool = typer.Option(False, "--all", "-a", help="List every match"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Search a live page and highlight the current match in the browser.
    
    Examples:
        recorder-search page https://example.com "More information" --visible
    """
    config = _search_config(language)
    setup_logging(verbose)
    
    if not url.startswith(("http://", "https://", "file://")):
        url = "https://" + url
    
    try:
        asyncio.run(_page_async(url, query, config, headless=not visible, show_all=show_all))
    except KeyboardInterrupt:
        console.print("[dim]Interrupted[/dim]")


async def _page_async(url: str, query: str, config: SearchConfig, headless: bool, show_all: bool):
    from playwright.async_api import async_playwright
    from recorder_search.highlight.page import PageHighlight
    
    console.print("[dim]⏳ Launching browser...[/dim]")
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=headless)
        try:
            page = await browser.new_page(viewport={"width": 1280, "height": 800})
            console.print(f"[dim]🌐 Navigating to {url}...[/dim]")
            await page.goto(url)
            
            document = Document.from_html(await page.content())
            highlight = PageHighlight(page)
            tool = await _run_search(document, query, config, highlight)
            await highlight.flush()
            _print_results(tool, show_all)
            
            if not headless:
                await asyncio.get_running_loop().run_in_executor(
                    None, console.input, "[dim]Press Enter to close the browser[/dim] "
                )
        finally:
            await browser.close()


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Recorder Search[/bold] v{__version__}")


if __name__ == "__main__":
    app()
