"""Command-line interface for the impact estimator."""

import logging
import os
import threading
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from .analyzers import ImpactEstimator, ImpactReport, ScanRequest
from .config import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS, DEFAULT_LANGUAGE, ScanConfiguration
from .errors import InvalidScanRequestError, ScanCancelledError
from .presentation import (
    SUPPORTED_LANGUAGES, describe_last_change, render_json, render_markdown, translate
)

# Set up rich error handling
install()
console = Console()
err_console = Console(stderr=True)

PHASE_MESSAGES = {
    'context_detection': 'analysisInProgress',
    'scanning': 'scanningFiles',
    'history': 'resolvingHistory',
    'finalizing': 'displayingResult',
}

TIER_STYLES = {'low': 'green', 'medium': 'yellow', 'high': 'red'}


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.command()
@click.argument('target_file', type=click.Path(dir_okay=False))
@click.argument('symbol', required=False)
@click.option('--root', '-r', 'root_dir', type=click.Path(file_okay=False),
              help='Project root to scan (default: current directory)')
@click.option('--lang', '-l', type=click.Choice(SUPPORTED_LANGUAGES), default=DEFAULT_LANGUAGE,
              help='Report language')
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'markdown', 'json']),
              default='text', help='Output format')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the report to a file')
@click.option('--ext', '-e', 'extensions', multiple=True,
              help=f"Source extension to scan, repeatable (default: {' '.join(sorted(DEFAULT_EXTENSIONS))})")
@click.option('--exclude', '-x', 'excludes', multiple=True,
              help='Extra directory name to skip, repeatable')
@click.option('--follow-symlinks/--no-follow-symlinks', default=False,
              help='Follow symbolic links while walking the project')
@click.option('--workers', '-w', type=int, default=0, help='Scan worker threads (default: CPU count)')
@click.option('--git-timeout', type=float, default=10.0, help='Seconds allowed per git command')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(target_file, symbol, root_dir, lang, output_format, output, extensions, excludes,
        follow_symlinks, workers, git_timeout, verbose):
    """Estimate the impact of changing TARGET_FILE, optionally one SYMBOL in it.

    Searches the project for references to the file's name and to the symbol,
    reports who last changed the file, and rates the risk of changing it.

    USAGE:
        impact-estimator src/widget.js                 # References to widget.js
        impact-estimator src/widget.js render          # ...and calls to render()
        impact-estimator src/widget.js -f json -o out.json
    """
    _configure_logging(verbose)

    config = ScanConfiguration(
        extensions=frozenset(extensions) if extensions else DEFAULT_EXTENSIONS,
        excluded_dirs=DEFAULT_EXCLUDED_DIRS | frozenset(excludes),
        follow_symlinks=follow_symlinks,
        max_workers=workers,
        git_timeout=git_timeout,
        language=lang,
    )
    request = ScanRequest(
        target_file=Path(target_file),
        project_root=Path(root_dir) if root_dir else Path(os.getcwd()),
        target_symbol=symbol,
    )

    try:
        report = _run(request, config, show_progress=output_format == 'text' and not output)
    except InvalidScanRequestError as e:
        err_console.print(f"[red]❌ {escape(translate(e.message_key, lang, e.subject))}[/red]")
        raise click.Abort()
    except (ScanCancelledError, KeyboardInterrupt):
        err_console.print(f"[yellow]⚠️  {translate('analysisCancelled', lang)}[/yellow]")
        raise click.Abort()

    _output_report(report, output_format, output, lang)


def _run(request: ScanRequest, config: ScanConfiguration, show_progress: bool) -> ImpactReport:
    cancel_event = threading.Event()
    lang = config.language

    if not show_progress:
        return ImpactEstimator(config).estimate(request, cancel_event)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(translate('analysisInProgress', lang), total=None)

        def on_phase(phase: str):
            progress.update(task, description=translate(PHASE_MESSAGES.get(phase, 'analysisInProgress'), lang))

        try:
            return ImpactEstimator(config, on_phase=on_phase).estimate(request, cancel_event)
        except KeyboardInterrupt:
            cancel_event.set()
            raise


def _output_report(report: ImpactReport, output_format: str, output, lang: str):
    """Output the report in the requested format."""
    if output_format == 'json':
        content = render_json(report)
    elif output_format == 'markdown':
        content = render_markdown(report, lang)
    elif output:
        # Plain text files get the markdown rendering
        content = render_markdown(report, lang)
    else:
        _display_text_report(report, lang)
        return

    if output:
        Path(output).write_text(content, encoding='utf-8')
        console.print(f"📄 {escape(str(output))}")
    else:
        click.echo(content)


def _display_text_report(report: ImpactReport, lang: str):
    """Display a report in the terminal using Rich."""
    author, when = describe_last_change(report.last_change, lang)

    console.print(f"\n[bold]{translate('impactTitle', lang)}[/bold]")
    console.print(f"• {translate('file', lang)}: [cyan]{escape(report.relative(report.requested_file))}[/cyan]")
    console.print(f"• {translate('lastChangedBy', lang)}: {escape(author)}")
    if when:
        console.print(f"• {translate('lastChangedTime', lang)}: {escape(when)}")
    console.print(f"• {translate('scannedFiles', lang)}: {report.scanned_file_count}")
    if report.declaring_context:
        console.print(f"• {translate('declaringContext', lang)}: {escape(report.declaring_context)}")

    console.print(f"\n🔁 [bold]{translate('usageDetail', lang)}[/bold]")
    if report.impacts:
        table = Table()
        table.add_column(translate('file', lang), style="cyan")
        table.add_column(translate('line', lang), style="magenta")
        table.add_column(translate('usageDetail', lang), style="yellow")

        for impact in report.impacts.values():
            kind = translate('directUsage' if impact.is_direct else 'indirectUsage', lang)
            if report.target_symbol and impact.references_symbol:
                confidence = 'highConfidence' if impact.is_high_confidence else 'lowConfidence'
                kind = f"{kind}, {translate(confidence, lang)}"
            if impact.via_attribution is not None:
                kind = f"{kind} ({translate('via', lang, impact.via_attribution.name)})"
            lines = ", ".join(str(n) for n in impact.line_numbers)
            table.add_row(escape(report.relative(impact.file)), lines, escape(kind))

        console.print(table)
    else:
        console.print(f"  {translate('notFound', lang)}")

    if report.target_symbol:
        if report.symbol_not_found:
            console.print()
            console.print(escape(translate('warning', lang, report.target_symbol)))
        else:
            found = translate('functionFound', lang, report.target_symbol, report.symbol_found_count)
            console.print(f"\n🧠 {translate('note', lang)}: {escape(found)}")

    tier = report.risk_tier
    style = TIER_STYLES[tier.value]
    console.print(f"\n[bold {style}]{translate(tier.label_key, lang)}[/bold {style}]")
    console.print(translate(tier.message_key, lang, report.impacted_count))


if __name__ == '__main__':
    cli()
