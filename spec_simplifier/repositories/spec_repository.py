from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from spec_simplifier.domain.errors import LocalIOError
from spec_simplifier.domain.models import SpecRecord

logger = logging.getLogger(__name__)

DEFAULT_SPEC_SUFFIXES = (".spec.js", ".spec.ts", ".spec.vue")
DEFAULT_SPEC_MARKER = ".spec."


def related_name_for(spec_name: str, marker: str = DEFAULT_SPEC_MARKER) -> str:
    # Button.spec.ts -> Button.ts
    return spec_name.replace(marker, ".", 1)


def _resolve_related(spec_dir: Path, related_name: str) -> Optional[Path]:
    same_dir = spec_dir / related_name
    if same_dir.is_file():
        return same_dir

    # Tests kept in a __tests__/ style folder next to the subject
    one_up = spec_dir.parent / related_name
    if one_up.is_file():
        return one_up

    return None


@dataclass
class SpecRepository:
    """
    Repository pattern: encapsulates locating spec files, pairing them with
    their subject files, and reading/writing their contents.
    """
    root: Path
    spec_suffixes: tuple[str, ...] = DEFAULT_SPEC_SUFFIXES
    spec_marker: str = DEFAULT_SPEC_MARKER

    def is_spec_file(self, name: str) -> bool:
        return name.endswith(self.spec_suffixes)

    def find_spec_files(self) -> list[SpecRecord]:
        """
        Depth-first walk of root. Sibling order follows the filesystem.
        OSError while listing a directory propagates to the caller.
        """
        found: list[SpecRecord] = []
        self._walk(Path(self.root), found)
        logger.info("Discovery under %s found %d spec files", self.root, len(found))
        return found

    def _walk(self, directory: Path, found: list[SpecRecord]) -> None:
        for entry in directory.iterdir():
            if entry.is_dir():
                self._walk(entry, found)
            elif entry.is_file() and self.is_spec_file(entry.name):
                found.append(self._make_record(entry))

    def _make_record(self, spec_path: Path) -> SpecRecord:
        candidate = related_name_for(spec_path.name, self.spec_marker)
        related_path = _resolve_related(spec_path.parent, candidate)
        if related_path is None:
            logger.debug("No subject file for %s", spec_path)

        return SpecRecord(
            spec_name=spec_path.name,
            spec_path=spec_path,
            related_name=candidate if related_path else None,
            related_path=related_path,
        )

    def read_text(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LocalIOError(path, e) from e

    def write_text(self, path: Path, content: str) -> None:
        # newline="" keeps the service's line endings as returned
        try:
            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as e:
            raise LocalIOError(path, e) from e
