from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from spec_simplifier.app_factory import create_service, create_spec_repository
from spec_simplifier.cli.console_view import ConsoleProgress, prompt_directory, show_discovery, show_summary
from spec_simplifier.config.ini_config import AppSettings
from spec_simplifier.domain.models import DiscoverySummary
from spec_simplifier.services.review_client import ReviewClient

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


def run(
    args: argparse.Namespace,
    settings: AppSettings,
    *,
    console: Optional[Console] = None,
    review_client: Optional[ReviewClient] = None,
) -> int:
    """
    One CLI run: resolve directory, discover, process, summarise.
    Only a missing directory or a discovery failure ends the run early.
    """
    console = console or Console()

    raw_dir = args.directory if args.directory else prompt_directory(console)
    root = Path(raw_dir).expanduser()
    if not raw_dir or not root.is_dir():
        console.print(f'[red]Error: Directory "{raw_dir}" does not exist.[/red]')
        return EXIT_FAILED

    console.print(f"[blue]Starting search for spec files and related files in directory: {root}[/blue]")
    spec_repo = create_spec_repository(settings, root)
    try:
        records = spec_repo.find_spec_files()
    except OSError as e:
        logger.exception("Discovery failed under %s", root)
        console.print(f"[red]Error while scanning {root}: {e}[/red]")
        return EXIT_FAILED

    show_discovery(console, root, DiscoverySummary.summarize(records))

    max_files = settings.max_files if args.max_files is None else args.max_files
    if max_files > 0 and len(records) > max_files:
        console.print(f"[yellow]Processing only the first {max_files} of {len(records)} spec files.[/yellow]")
        records = records[:max_files]

    service = create_service(
        settings,
        spec_repo,
        review_client=review_client,
        progress=ConsoleProgress(console),
    )
    report = service.run(records)

    show_summary(console, report, service.report_repo.report_path)
    return EXIT_OK
