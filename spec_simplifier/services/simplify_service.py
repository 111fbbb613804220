from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from spec_simplifier.domain.errors import ExhaustedRetriesError, LocalIOError, ReviewError
from spec_simplifier.domain.models import ProcessingOutcome, RunReport, SpecRecord
from spec_simplifier.repositories.report_repository import ReportRepository
from spec_simplifier.repositories.spec_repository import SpecRepository
from spec_simplifier.services.review_client import ReviewClient, ReviewResponse

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0


class ProgressListener:
    """Observer for the batch loop. Default methods do nothing."""

    def on_start(self, total: int) -> None:
        pass

    def on_record_start(self, index: int, record: SpecRecord) -> None:
        pass

    def on_retry(self, record: SpecRecord, attempt: int, error: Exception, delay: float) -> None:
        pass

    def on_outcome(self, index: int, outcome: ProcessingOutcome, report: RunReport) -> None:
        pass

    def on_finish(self, report: RunReport) -> None:
        pass


@dataclass
class SimplifyService:
    """
    Service layer: runs every discovered spec file through the review client,
    one at a time, and keeps the report file current after each one.
    """
    spec_repo: SpecRepository
    review_client: ReviewClient
    report_repo: ReportRepository
    max_attempts: int = MAX_ATTEMPTS
    base_delay_seconds: float = BASE_DELAY_SECONDS
    sleep: Callable[[float], None] = time.sleep
    progress: ProgressListener = field(default_factory=ProgressListener)

    def run(self, records: list[SpecRecord], report: Optional[RunReport] = None) -> RunReport:
        report = report or RunReport()
        self.report_repo.write(report)
        self.progress.on_start(len(records))

        for index, record in enumerate(records, start=1):
            self.progress.on_record_start(index, record)
            outcome = self.process_record(record)
            report = report.with_outcome(outcome)
            self.report_repo.write(report)
            self.progress.on_outcome(index, outcome, report)

        self.progress.on_finish(report)
        logger.info(
            "Run finished: %d processed, %d succeeded, %d skipped, %d failed",
            report.total_processed, report.succeeded, report.skipped, report.failed,
        )
        return report

    def process_record(self, record: SpecRecord) -> ProcessingOutcome:
        try:
            return self._process(record)
        except Exception as e:
            logger.exception("Error processing file %s", record.spec_name)
            return ProcessingOutcome.failed(record, str(e) or type(e).__name__)

    def _process(self, record: SpecRecord) -> ProcessingOutcome:
        # Reading
        try:
            spec_content = self.spec_repo.read_text(record.spec_path)
            related_content = (
                self.spec_repo.read_text(record.related_path) if record.related_path else None
            )
        except LocalIOError as e:
            logger.error("Could not read %s: %s", record.spec_name, e)
            return ProcessingOutcome.failed(record, str(e))

        # Submitted / RetryPending
        try:
            response, attempts = self._review_with_retry(record, spec_content, related_content)
        except ExhaustedRetriesError as e:
            logger.error("%s: %s", record.spec_name, e)
            return ProcessingOutcome.failed(record, str(e), attempts=e.attempts)

        if not response.has_content:
            logger.warning("No new content received for %s. File not updated.", record.spec_name)
            return ProcessingOutcome.skipped(record, attempts)

        # Accepted
        try:
            self.spec_repo.write_text(record.spec_path, response.new_spec_content)
        except LocalIOError as e:
            logger.error("Could not write %s: %s", record.spec_name, e)
            return ProcessingOutcome.failed(record, str(e), attempts=attempts)

        logger.info("Simplified %s (attempts=%d)", record.spec_path, attempts)
        return ProcessingOutcome.success(record, attempts)

    def _review_with_retry(
        self,
        record: SpecRecord,
        spec_content: str,
        related_content: Optional[str],
    ) -> tuple[ReviewResponse, int]:
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self.review_client.review(
                    spec_content,
                    related_content,
                    spec_name=record.spec_name,
                    spec_path=str(record.spec_path),
                )
                return response, attempt
            except ReviewError as e:
                logger.warning(
                    "Review of %s failed (attempt %d of %d): %s",
                    record.spec_name, attempt, self.max_attempts, e,
                )
                if attempt >= self.max_attempts:
                    raise ExhaustedRetriesError(attempt, e) from e

                delay = attempt * self.base_delay_seconds
                self.progress.on_retry(record, attempt, e, delay)
                self.sleep(delay)
