import os
from collections.abc import Sequence
from pathlib import Path

from grrr.core.collect import collect
from grrr.core.compiler import CompileJob, CompletionCallback, bundle_name_for, start_compile
from grrr.core.manifest import build_manifest
from grrr.core.ports.notifier import Notifier
from grrr.models import ManifestConfig, PathRef


def generated_names(config: ManifestConfig) -> frozenset[str]:
    """Names of the files a job writes into its base directory."""
    return frozenset({config.manifest_name, bundle_name_for(config.manifest_name)})


def folder_roots(folder: Path, config: ManifestConfig) -> list[Path]:
    """Children of *folder* to bundle with *folder* itself as the base.

    The manifest and bundle of earlier runs are left out.
    """
    skip = generated_names(config)
    return [child for child in folder.iterdir() if child.name not in skip]


def prepare_bundle(
    paths: Sequence[str | os.PathLike[str] | PathRef],
    config: ManifestConfig,
) -> tuple[PathRef, Path]:
    """Collect *paths* and write their manifest.

    Returns (base, manifest_path).
    """
    base, files = collect(paths)
    return base, build_manifest(base, files, config)


async def run_bundle(
    paths: Sequence[str | os.PathLike[str] | PathRef],
    config: ManifestConfig,
    on_complete: CompletionCallback | None = None,
    *,
    compiler: str | None = None,
    notifier: Notifier | None = None,
) -> CompileJob:
    """Collect, write the manifest, and start compiling it.

    Every call is an independent job; *config* is the snapshot it uses.
    """
    base, manifest = prepare_bundle(paths, config)
    return await start_compile(base, manifest.name, on_complete, compiler=compiler, notifier=notifier)
