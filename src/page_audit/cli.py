"""CLI interface for page-audit."""

import json
import logging
import sys
from dataclasses import replace

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from . import __version__
from .auditor import audit_url
from .config import AuditConfig
from .errors import FetchError, InputError
from .fetcher import normalize_url
from .models import AuditReport


console = Console()
err_console = Console(stderr=True)

DESIGN_LABELS = [
    ("header", "Header"),
    ("footer", "Footer"),
    ("banner", "Hero / banner"),
    ("logo", "Logo"),
    ("nav_menu", "Navigation menu"),
    ("cta_found", "Call-to-action"),
]


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def readability_color(score: float | None) -> str:
    """Get color for a Flesch Reading Ease value."""
    if score is None:
        return "dim"
    if score >= 60:
        return "green"
    elif score >= 30:
        return "yellow"
    else:
        return "red"


def flag(value: bool) -> str:
    return "[green]✓ found[/green]" if value else "[red]✗ missing[/red]"


def print_result(report: AuditReport, verbose: bool = False) -> None:
    """Print audit report to console."""
    fetch = report.fetch

    # Header
    console.print()
    console.print(Panel(
        f"[bold]{fetch.final_url}[/bold]\n"
        f"[dim]HTTP {fetch.status_code} • fetched in {fetch.elapsed_ms}ms[/dim]\n"
        f"{report.summary}",
        title="🔍 Page Audit",
        border_style="blue"
    ))

    # Design signals
    design = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    design.add_column("Design", style="cyan")
    design.add_column("Status")
    for attr, label in DESIGN_LABELS:
        design.add_row(label, flag(getattr(report.signals, attr)))
    console.print(design)

    # Content and links
    metrics = report.metrics
    stats = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    stats.add_column("Metric", style="cyan")
    stats.add_column("Value", justify="right")
    stats.add_row("Words", str(metrics.words))
    stats.add_row("Sentences", str(metrics.sentences))
    stats.add_row("Syllables", str(metrics.syllables))
    fre = metrics.flesch_reading_ease
    stats.add_row(
        "Flesch Reading Ease",
        f"[{readability_color(fre)}]{fre if fre is not None else 'N/A'}[/]",
    )
    stats.add_row(
        "Images missing alt",
        f"{len(report.meta.images_missing_alt)}/{report.meta.images_total}",
    )
    broken = report.broken_links
    stats.add_row(
        "Links (found / checked / broken)",
        f"{report.links_total_found} / {report.links_checked} / "
        f"[{'red' if broken else 'green'}]{len(broken)}[/]",
    )
    if report.pagespeed:
        if "error" in report.pagespeed:
            stats.add_row("PageSpeed", f"[yellow]{report.pagespeed['error']}[/yellow]")
        else:
            stats.add_row("PageSpeed", str(report.pagespeed.get("performanceScore")))
    console.print(stats)

    if verbose:
        if report.contact.emails or report.contact.phones:
            console.print("\n[bold]Contact:[/bold]\n")
            for email in report.contact.emails:
                console.print(f"  ✉ {email}")
            for phone in report.contact.phones:
                console.print(f"  ☎ {phone}")
        if broken:
            console.print("\n[bold]Broken links:[/bold]\n")
            for link in broken[:report.broken_sample_size]:
                status = link.status_code if link.status_code is not None else "—"
                console.print(f"  [red]✗[/red] {link.url} [dim]({status}"
                              f"{', ' + link.error if link.error else ''})[/dim]")

    # Issues
    if report.issues:
        console.print("\n[bold]Issues Found:[/bold]\n")
        for issue in report.issues:
            console.print(f"  [yellow]⚠[/] {issue}")

    if report.suggestions:
        console.print("\n[bold]🎯 Suggestions:[/bold]\n")
        for i, suggestion in enumerate(report.suggestions, 1):
            console.print(f"  {i}. [cyan]{suggestion}[/cyan]")

    # Footer
    console.print()
    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]page-audit v{__version__}[/dim]")
    console.print()


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """Page Audit - structure, readability and link health for one page.

    \b
    Quick start:
        page-audit scan example.com
        page-audit example.com --json
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("url")
@click.option("-v", "--verbose", is_flag=True, help="Show contacts and broken links")
@click.option("-t", "--timeout", type=float, default=None, help="Page fetch timeout in seconds")
@click.option("--link-timeout", type=float, default=None, help="Per-link check timeout in seconds")
@click.option("--max-links", type=int, default=None, help="Maximum number of links to check")
@click.option("--no-pagespeed", is_flag=True, help="Skip PageSpeed enrichment")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--debug", is_flag=True, help="Log requests to stderr")
def scan(url: str, verbose: bool, timeout: float | None, link_timeout: float | None,
         max_links: int | None, no_pagespeed: bool, json_output: bool, debug: bool):
    """Audit a single page.

    \b
    Examples:
        page-audit scan example.com
        page-audit scan example.com --verbose
        page-audit scan https://example.com/about --json --max-links 50
    """
    configure_logging(debug)

    try:
        config = AuditConfig.from_env()
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration in environment: {e}")
    overrides = {}
    if timeout is not None:
        overrides["page_timeout"] = timeout
    if link_timeout is not None:
        overrides["link_timeout"] = link_timeout
    if max_links is not None:
        overrides["max_links_checked"] = max_links
    if no_pagespeed:
        overrides["pagespeed_api_key"] = None
    config = replace(config, **overrides)

    url = normalize_url(url)

    try:
        if json_output:
            report = audit_url(url, config)
        else:
            with console.status(f"[bold blue]Auditing {url}...[/bold blue]"):
                report = audit_url(url, config)
    except InputError as e:
        _fail(e, json_output, exit_code=2)
    except FetchError as e:
        _fail(e, json_output, exit_code=1)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_result(report, verbose=verbose)


def _fail(error, json_output: bool, exit_code: int) -> None:
    if json_output:
        click.echo(json.dumps(error.to_dict(), indent=2))
    else:
        console.print(f"\n[red]Error:[/red] {error.message}")
        if error.details:
            console.print(f"[dim]{error.details}[/dim]")
    sys.exit(exit_code)


# Convenience: allow `page-audit URL` as shortcut for `page-audit scan URL`
def main():
    """Entry point that handles both `page-audit URL` and `page-audit scan URL`."""
    args = sys.argv[1:]

    # If first arg looks like a URL (not a command), insert 'scan'
    if args and not args[0].startswith('-') and args[0] not in ['scan', '--help', '--version']:
        if '.' in args[0] or args[0].startswith('localhost'):
            sys.argv.insert(1, 'scan')

    cli()


if __name__ == "__main__":
    main()
