"""Discovery of skill directories under one or more roots."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from skill_validator.errors import NotFoundError, ScanError, ScanPermissionError
from skill_validator.models import SkillLocation

logger = logging.getLogger(__name__)


class SkillScanner:
    """Walks root directories and yields every directory holding a skill file.

    Errors are collected per root (and per unreadable subdirectory) in
    ``errors`` instead of being raised, so one bad root never stops the others.
    """

    def __init__(
        self,
        skill_file_name: str = "SKILL.md",
        exclude_dirs: Iterable[str] = (),
    ):
        """Initialize the scanner.

        Args:
            skill_file_name: Exact file name that marks a skill directory.
            exclude_dirs: Directory names never descended into. Hidden
                directories are always skipped.
        """
        self.skill_file_name = skill_file_name
        self.exclude_dirs = set(exclude_dirs)
        self.errors: list[ScanError] = []
        self.failed_roots: list[Path] = []

    def scan(self, roots: Iterable[Path | str]) -> Iterator[SkillLocation]:
        """Lazily yield skill locations found under the given roots.

        Each call starts a fresh scan and resets ``errors``.

        Args:
            roots: Directories to walk. A path to a skill file is accepted
                and yields its parent directory.

        Yields:
            SkillLocation for each skill directory, in sorted walk order.
            A directory reachable from several roots is yielded once.
        """
        self.errors = []
        self.failed_roots = []
        seen: set[Path] = set()

        for root in roots:
            yield from self._scan_root(Path(root), seen)

    def _scan_root(self, root: Path, seen: set[Path]) -> Iterator[SkillLocation]:
        if not root.exists():
            self._record(NotFoundError(root), root_failed=True)
            return

        # "." and ".." carry no directory name to match the skill name against
        if root.name in ("", ".."):
            root = root.resolve()

        if root.is_file():
            if root.name == self.skill_file_name:
                parent = root.parent if root.parent.name else root.resolve().parent
                yield from self._emit(parent, seen)
            else:
                self._record(
                    ScanError(root, "Not a directory or skill file"), root_failed=True
                )
            return

        def on_error(error: OSError) -> None:
            path = Path(error.filename) if error.filename else root
            is_root = path == root
            if isinstance(error, PermissionError):
                self._record(ScanPermissionError(path), root_failed=is_root)
            else:
                self._record(
                    ScanError(path, error.strerror or str(error)), root_failed=is_root
                )

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames[:] = sorted(
                name
                for name in dirnames
                if not name.startswith(".") and name not in self.exclude_dirs
            )
            if self.skill_file_name in filenames:
                yield from self._emit(Path(dirpath), seen)

    def _emit(self, directory: Path, seen: set[Path]) -> Iterator[SkillLocation]:
        key = directory.resolve()
        if key in seen:
            logger.debug(f"Skipping already scanned skill directory: {directory}")
            return
        seen.add(key)
        logger.debug(f"Found skill directory: {directory}")
        yield SkillLocation(
            directory=directory, skill_file=directory / self.skill_file_name
        )

    def _record(self, error: ScanError, root_failed: bool = False) -> None:
        logger.warning(str(error))
        self.errors.append(error)
        if root_failed:
            self.failed_roots.append(error.path)
