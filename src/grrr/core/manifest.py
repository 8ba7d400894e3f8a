"""Render and write the GResource XML manifest."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path, PurePath

from grrr.core.content_types import is_image
from grrr.errors import ManifestWriteError
from grrr.models import ManifestConfig, PathRef

logger = logging.getLogger(__name__)

PREPROCESS_PIXDATA = "to-pixdata"

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_path(value: str) -> str:
    for char, entity in _XML_ESCAPES:
        value = value.replace(char, entity)
    return value


def relative_entry(base: PathRef, file: PathRef) -> str:
    """Return *file* relative to *base* in POSIX form (may contain ``..``)."""
    return PurePath(os.path.relpath(file.path, base.path)).as_posix()


def render_file_entry(base: PathRef, file: PathRef) -> str:
    path = escape_path(relative_entry(base, file))
    if is_image(file.content_type):
        return f'<file preprocess="{PREPROCESS_PIXDATA}">{path}</file>'
    return f"<file>{path}</file>"


def render_manifest(base: PathRef, files: Sequence[PathRef], config: ManifestConfig) -> str:
    # The prefix goes in verbatim; only file paths are escaped.
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<gresources>",
        f'\t<gresource prefix="{config.prefix}">',
    ]
    lines.extend(f"\t\t{render_file_entry(base, f)}" for f in files)
    lines.append("\t</gresource>")
    lines.append("</gresources>")
    return "\n".join(lines) + "\n"


def manifest_path(base: PathRef, config: ManifestConfig) -> Path:
    return base.path / config.manifest_name


def build_manifest(base: PathRef, files: Sequence[PathRef], config: ManifestConfig) -> Path:
    """Write ``<name>.xml`` into *base*, replacing any previous manifest.

    Returns the path of the written file.
    """
    target = manifest_path(base, config)
    try:
        content = render_manifest(base, files, config).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ManifestWriteError(f"Cannot encode manifest {target}: {exc}") from exc
    try:
        target.unlink(missing_ok=True)
        with target.open("xb") as fh:
            fh.write(content)
    except OSError as exc:
        raise ManifestWriteError(f"Cannot write manifest {target}: {exc}") from exc
    logger.info("Wrote manifest %s with %d file(s)", target, len(files))
    return target
