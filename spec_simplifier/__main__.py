from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from spec_simplifier.cli.args import parse_args
from spec_simplifier.cli.controller import EXIT_FAILED, run
from spec_simplifier.config.ini_config import IniConfig
from spec_simplifier.domain.errors import ConfigError
from spec_simplifier.logging_setup import setup_logging

logger = logging.getLogger("spec_simplifier")

EXIT_INTERRUPTED = 130


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = IniConfig.from_env_or_default(args.ini).load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILED

    setup_logging(args.log_level or settings.log_level, settings.log_file)

    try:
        return run(args, settings)
    except KeyboardInterrupt:
        logger.warning("Interrupted; the report reflects the files completed so far")
        return EXIT_INTERRUPTED
    except Exception:
        logger.exception("Error in main")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())

#############################
#
# Layout
# •	app_factory.py: composition root; builds SpecRepository, ReportRepository,
#   the review client (AnthropicMessagesTransport + AnthropicReviewClient) and SimplifyService.
# •	config/ini_config.py: INI + env (APP_INI, CLAUDE_API_KEY) -> AppSettings.
# •	domain/: SpecRecord, ProcessingOutcome, RunReport, error types. No I/O.
# •	repositories/spec_repository.py: discovery/pairing of *.spec.* files, file read/write.
# •	repositories/report_repository.py: one JSON report per run, rewritten after every file.
# •	services/: prompt building, response parsing, the sequential batch loop with retry/backoff.
# •	adapters/anthropic_http.py: HTTP transport (requests).
# •	cli/: argparse, interactive prompt, rich progress + summary.
#
# Runtime flow
# •	prompt/arg -> directory
# •	SpecRepository.find_spec_files() -> [SpecRecord]
# •	SimplifyService.run(records):
# •	  for each record: read -> review (up to 3 attempts, 1s/2s backoff) -> overwrite spec | skip | fail
# •	  RunReport.with_outcome(...) -> ReportRepository.write(...)
# •	summary table + report path
######################################################################
