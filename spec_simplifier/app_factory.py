from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests

from spec_simplifier.adapters.anthropic_http import AnthropicMessagesTransport
from spec_simplifier.config.ini_config import AppSettings
from spec_simplifier.repositories.report_repository import ReportRepository
from spec_simplifier.repositories.spec_repository import SpecRepository
from spec_simplifier.services.review_client import AnthropicReviewClient, ReviewClient
from spec_simplifier.services.simplify_service import ProgressListener, SimplifyService


def create_spec_repository(settings: AppSettings, root: Path) -> SpecRepository:
    return SpecRepository(
        root=root,
        spec_suffixes=settings.spec_suffixes,
        spec_marker=settings.spec_marker,
    )


def create_review_client(settings: AppSettings, session: Optional[requests.Session] = None) -> ReviewClient:
    transport = AnthropicMessagesTransport(
        settings.api_key(),
        api_url=settings.api_url,
        model=settings.model,
        max_tokens=settings.max_tokens,
        timeout_seconds=settings.timeout_seconds,
        anthropic_version=settings.anthropic_version,
        session=session,
    )
    return AnthropicReviewClient(transport=transport)


def create_service(
    settings: AppSettings,
    spec_repo: SpecRepository,
    *,
    review_client: Optional[ReviewClient] = None,
    report_repo: Optional[ReportRepository] = None,
    progress: Optional[ProgressListener] = None,
) -> SimplifyService:
    """Composition root: wires repositories, review client and retry policy."""
    return SimplifyService(
        spec_repo=spec_repo,
        review_client=review_client or create_review_client(settings),
        report_repo=report_repo or ReportRepository.for_run(spec_repo.root, prefix=settings.report_prefix),
        max_attempts=settings.max_attempts,
        base_delay_seconds=settings.base_delay_seconds,
        progress=progress or ProgressListener(),
    )
