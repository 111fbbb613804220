######## models.py
########

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SpecRecord:
    spec_name: str
    spec_path: Path
    related_name: Optional[str] = None
    related_path: Optional[Path] = None   # only set when the file existed at discovery

    @property
    def is_paired(self) -> bool:
        return self.related_path is not None


@dataclass(frozen=True)
class DiscoverySummary:
    total: int
    paired: int

    @staticmethod
    def summarize(records: list[SpecRecord]) -> "DiscoverySummary":
        return DiscoverySummary(
            total=len(records),
            paired=sum(1 for r in records if r.is_paired),
        )


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ProcessingOutcome:
    record: SpecRecord
    status: OutcomeStatus
    error: Optional[str] = None   # only for FAILED
    attempts: int = 0             # review calls made

    @staticmethod
    def success(record: SpecRecord, attempts: int) -> "ProcessingOutcome":
        return ProcessingOutcome(record=record, status=OutcomeStatus.SUCCESS, attempts=attempts)

    @staticmethod
    def skipped(record: SpecRecord, attempts: int) -> "ProcessingOutcome":
        return ProcessingOutcome(record=record, status=OutcomeStatus.SKIPPED, attempts=attempts)

    @staticmethod
    def failed(record: SpecRecord, error: str, attempts: int = 0) -> "ProcessingOutcome":
        return ProcessingOutcome(record=record, status=OutcomeStatus.FAILED, error=error, attempts=attempts)


@dataclass(frozen=True)
class FailedFile:
    file: str
    error: str


@dataclass(frozen=True)
class RunReport:
    """
    Cumulative result of one run.
    Immutable: with_outcome() returns the next value, so the orchestrator
    threads it through its loop instead of mutating shared lists.
    """
    successful_files: tuple[str, ...] = field(default_factory=tuple)
    skipped_files: tuple[str, ...] = field(default_factory=tuple)
    error_files: tuple[FailedFile, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> int:
        return len(self.successful_files)

    @property
    def skipped(self) -> int:
        return len(self.skipped_files)

    @property
    def failed(self) -> int:
        return len(self.error_files)

    @property
    def total_processed(self) -> int:
        return self.succeeded + self.skipped + self.failed

    def with_outcome(self, outcome: ProcessingOutcome) -> "RunReport":
        record = outcome.record
        if outcome.status is OutcomeStatus.SUCCESS:
            return RunReport(
                successful_files=self.successful_files + (str(record.spec_path),),
                skipped_files=self.skipped_files,
                error_files=self.error_files,
            )
        if outcome.status is OutcomeStatus.SKIPPED:
            return RunReport(
                successful_files=self.successful_files,
                skipped_files=self.skipped_files + (str(record.spec_path),),
                error_files=self.error_files,
            )
        return RunReport(
            successful_files=self.successful_files,
            skipped_files=self.skipped_files,
            error_files=self.error_files + (FailedFile(file=record.spec_name, error=outcome.error or "Unknown error"),),
        )

    def to_dict(self) -> dict:
        return {
            "totalProcessed": self.total_processed,
            "successfullyProcessed": self.succeeded,
            "errors": self.failed,
            "skipped": self.skipped,
            "successfulFiles": list(self.successful_files),
            "errorFiles": [{"file": f.file, "error": f.error} for f in self.error_files],
            "skippedFiles": list(self.skipped_files),
        }
