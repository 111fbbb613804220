from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from spec_simplifier.domain.models import RunReport

logger = logging.getLogger(__name__)

DEFAULT_REPORT_PREFIX = "simplify_report_"


def report_file_name(now: datetime, prefix: str = DEFAULT_REPORT_PREFIX) -> str:
    """
    simplify_report_2026-10-18T09-30-00-123Z.json
    UTC ISO-8601 with ':' and '.' replaced so the name is filesystem-safe.
    """
    now = now.astimezone(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
    return prefix + stamp.replace(":", "-").replace(".", "-") + ".json"


def render_report(report: RunReport) -> str:
    return json.dumps(report.to_dict(), indent=2) + "\n"


@dataclass
class ReportRepository:
    """
    Writes RunReport snapshots to one fixed path per run.
    Each write replaces the whole file; readers never see a partial report.
    """
    report_path: Path

    @staticmethod
    def for_run(root: Path, prefix: str = DEFAULT_REPORT_PREFIX, now: Optional[datetime] = None) -> "ReportRepository":
        now = now or datetime.now(timezone.utc)
        return ReportRepository(report_path=Path(root) / report_file_name(now, prefix))

    def write(self, report: RunReport) -> bool:
        """Returns False (after logging) when the snapshot could not be written."""
        payload = render_report(report)
        target = self.report_path
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError:
            logger.exception("Error writing report file %s", target)
            return False
        finally:
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary report file %s", tmp_name)

        logger.debug("Report updated: %s (%d processed)", target, report.total_processed)
        return True
