"""Filesystem listing and mutation providers used by the navigator.

Listing calls never raise: unreadable directories come back empty and failed
metadata lookups read as "not a directory". Mutations report failures through
``OperationResult`` so the UI can show them inline.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

PARENT_MARKER = ".."


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a filesystem mutation."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> OperationResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> OperationResult:
        return cls(ok=False, reason=reason)


class ListingProvider(Protocol):
    def list(self, path: Path) -> list[str]: ...

    def list_directories_only(self, path: Path, exclude: str | None = None) -> list[str]: ...

    def is_directory(self, path: Path) -> bool: ...


class FileOperationsProvider(Protocol):
    def rename(self, old_path: Path, new_path: Path) -> OperationResult: ...

    def move(self, src_path: Path, dest_dir: Path) -> OperationResult: ...


def _entry_sort_key(name: str) -> tuple[str, str]:
    return name.casefold(), name


class DirectoryLister:
    """Local-disk listing provider."""

    def list(self, path: Path) -> list[str]:
        """Return entry names in ``path``, or ``[]`` when it cannot be read."""
        try:
            with os.scandir(path) as entries:
                names = [entry.name for entry in entries]
        except OSError as exc:
            logger.debug("cannot list %s: %s", path, exc)
            return []
        return sorted(names, key=_entry_sort_key)

    def list_directories_only(self, path: Path, exclude: str | None = None) -> list[str]:
        """Return ``..`` followed by subdirectory names of ``path``.

        ``exclude`` is skipped so a directory cannot be offered as a move
        destination for itself.
        """
        names: list[str] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if exclude is not None and entry.name == exclude:
                        continue
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    if is_dir:
                        names.append(entry.name)
        except OSError as exc:
            logger.debug("cannot list directories in %s: %s", path, exc)
        return [PARENT_MARKER, *sorted(names, key=_entry_sort_key)]

    def is_directory(self, path: Path) -> bool:
        """Return whether ``path`` is a directory; lookup failures read as no."""
        try:
            return path.is_dir()
        except OSError as exc:
            logger.debug("metadata lookup failed for %s: %s", path, exc)
            return False


class FileOperations:
    """Local-disk rename and move provider."""

    def rename(self, old_path: Path, new_path: Path) -> OperationResult:
        if not os.path.lexists(old_path):
            return OperationResult.failure(f"'{old_path.name}' no longer exists")
        if os.path.lexists(new_path):
            return OperationResult.failure(f"'{new_path.name}' already exists")
        try:
            os.rename(old_path, new_path)
        except OSError as exc:
            logger.warning("rename %s -> %s failed: %s", old_path, new_path, exc)
            return OperationResult.failure(exc.strerror or str(exc))
        logger.info("renamed %s -> %s", old_path, new_path)
        return OperationResult.success()

    def move(self, src_path: Path, dest_dir: Path) -> OperationResult:
        """Move ``src_path`` under ``dest_dir`` keeping its base name.

        Directory subtrees are copied recursively, then the source is removed.
        Existing destinations are never overwritten, and a copy that fails
        partway is removed again.
        """
        target = dest_dir / src_path.name
        if not os.path.lexists(src_path):
            return OperationResult.failure(f"'{src_path.name}' no longer exists")
        if not dest_dir.is_dir():
            return OperationResult.failure(f"'{dest_dir}' is not a directory")
        if os.path.lexists(target):
            return OperationResult.failure(f"'{src_path.name}' already exists in destination")

        is_dir = src_path.is_dir() and not src_path.is_symlink()
        if is_dir:
            src_resolved = src_path.resolve()
            dest_resolved = dest_dir.resolve()
            if dest_resolved == src_resolved or src_resolved in dest_resolved.parents:
                return OperationResult.failure("cannot move a directory into itself")

        try:
            if is_dir:
                shutil.copytree(src_path, target, symlinks=True)
            else:
                shutil.copy2(src_path, target, follow_symlinks=False)
        except OSError as exc:
            logger.warning("move %s -> %s failed while copying: %s", src_path, dest_dir, exc)
            _discard_partial_copy(target, is_dir)
            return OperationResult.failure(_copy_failure_reason(exc))

        try:
            if is_dir:
                shutil.rmtree(src_path)
            else:
                os.remove(src_path)
        except OSError as exc:
            # The copy is complete at this point, so it is kept.
            logger.warning("moved %s -> %s but could not remove the source: %s", src_path, target, exc)
            return OperationResult.failure(f"copied, but could not remove source: {exc.strerror or exc}")
        logger.info("moved %s -> %s", src_path, target)
        return OperationResult.success()


def _discard_partial_copy(target: Path, is_dir: bool) -> None:
    """Remove whatever a failed copy left at ``target``."""
    if is_dir:
        shutil.rmtree(target, ignore_errors=True)
        return
    if os.path.lexists(target):
        try:
            os.remove(target)
        except OSError as exc:
            logger.warning("could not remove partial copy %s: %s", target, exc)


def _copy_failure_reason(exc: OSError) -> str:
    """Return a short reason naming the first entry that could not be copied.

    ``shutil.copytree`` collects per-entry failures into ``shutil.Error`` whose
    first argument is a list of ``(src, dst, why)`` tuples.
    """
    if isinstance(exc, shutil.Error) and exc.args and isinstance(exc.args[0], list) and exc.args[0]:
        first_src = exc.args[0][0][0]
        return f"could not copy '{os.path.basename(first_src)}'"
    return exc.strerror or str(exc)
