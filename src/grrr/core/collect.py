"""Expand dropped files and folders into a flat, ordered file list."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from grrr.core.content_types import guess_content_type
from grrr.errors import CollectionError
from grrr.models import PathRef

logger = logging.getLogger(__name__)


def resolve_path(path: str | os.PathLike[str]) -> PathRef:
    """Resolve *path* to an absolute ``PathRef``; the path must exist."""
    absolute = Path(os.path.abspath(path))
    if not absolute.exists():
        raise CollectionError(f"Path does not exist: {absolute}")
    is_dir = absolute.is_dir()
    content_type = None if is_dir else guess_content_type(absolute)
    return PathRef(path=absolute, is_dir=is_dir, content_type=content_type)


def resolve_base(roots: Sequence[PathRef]) -> PathRef:
    """Return the parent directory of the first root.

    Later roots are not considered, even when they live elsewhere.
    """
    if not roots:
        raise CollectionError("At least one path is required.")
    return PathRef(path=roots[0].path.parent, is_dir=True)


def _file_ref(path: Path) -> PathRef:
    return PathRef(path=path, is_dir=False, content_type=guess_content_type(path))


def _scan(directory: Path) -> list[os.DirEntry[str]] | None:
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        logger.debug("Cannot enumerate %s, skipping: %s", directory, exc)
        return None


def _collect_dir(root: Path, files: list[PathRef]) -> None:
    # Each frame is (directory, canonical path, remaining entries); the
    # canonical paths of open frames are the ancestors of the current entry.
    ancestors: set[str] = set()
    frames: list[tuple[Path, str, Iterator[os.DirEntry[str]]]] = []

    def _enter(directory: Path) -> None:
        canonical = os.path.realpath(directory)
        if canonical in ancestors:
            logger.warning("Skipping symlink cycle at %s", directory)
            return
        entries = _scan(directory)
        if entries is None:
            return
        ancestors.add(canonical)
        frames.append((directory, canonical, iter(entries)))

    _enter(root)
    while frames:
        directory, canonical, entries = frames[-1]
        entry = next(entries, None)
        if entry is None:
            frames.pop()
            ancestors.discard(canonical)
            continue
        entry_path = directory / entry.name
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        if is_dir:
            _enter(entry_path)
        else:
            files.append(_file_ref(entry_path))


def collect_files(roots: Sequence[PathRef]) -> list[PathRef]:
    """Return every non-directory under *roots* in discovery order.

    Directory children are visited in the order the filesystem returns them.
    Duplicated roots produce duplicated entries.
    """
    files: list[PathRef] = []
    for root in roots:
        if root.is_dir:
            _collect_dir(root.path, files)
        else:
            files.append(root)
    return files


def collect(paths: Sequence[str | os.PathLike[str] | PathRef]) -> tuple[PathRef, list[PathRef]]:
    """Resolve *paths* and return ``(base, files)``."""
    if not paths:
        raise CollectionError("At least one path is required.")
    roots = [p if isinstance(p, PathRef) else resolve_path(p) for p in paths]
    base = resolve_base(roots)
    files = collect_files(roots)
    logger.info("Collected %d file(s) from %d root(s) under %s", len(files), len(roots), base.path)
    return base, files
