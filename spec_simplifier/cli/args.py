from __future__ import annotations

import argparse
from typing import Optional, Sequence


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spec-simplifier",
        description="Simplify *.spec.* test files in a directory tree using a review service.",
    )
    p.add_argument(
        "directory",
        nargs="?",
        help="Directory to search for spec files (prompted for when omitted).",
    )
    p.add_argument("--ini", help="Path to an INI file (overrides APP_INI).")
    p.add_argument(
        "--max-files",
        type=int,
        default=None,
        help="Only process the first N discovered spec files (0 = all).",
    )
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR.")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
