from .prompt_builder import build_review_prompt, sanitize
from .review_client import AnthropicReviewClient, ReviewClient, ReviewResponse, parse_review_text
from .simplify_service import ProgressListener, SimplifyService

__all__ = [
    "AnthropicReviewClient",
    "ReviewClient",
    "ReviewResponse",
    "parse_review_text",
    "build_review_prompt",
    "sanitize",
    "ProgressListener",
    "SimplifyService",
]
