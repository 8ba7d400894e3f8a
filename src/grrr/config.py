"""Persisted bundle settings.

The settings file is a small JSON record with optional ``res_name`` and
``res_prefix`` strings. Jobs never read it directly; they receive a
``ManifestConfig`` snapshot.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import BaseModel, ConfigDict, ValidationError

from grrr.models import DEFAULT_RESOURCE_NAME, DEFAULT_RESOURCE_PREFIX, ManifestConfig

logger = logging.getLogger(__name__)

APP_DIR_NAME = "grrr"
CONFIG_FILE_NAME = "config.json"


def default_config_path() -> Path:
    override = os.getenv("GRRR_CONFIG_FILE")
    if override:
        return Path(override)
    return Path(user_data_dir()) / APP_DIR_NAME / CONFIG_FILE_NAME


class StoredSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    res_name: str | None = None
    res_prefix: str | None = None


def _to_config(stored: StoredSettings) -> ManifestConfig:
    return ManifestConfig(
        name=stored.res_name or DEFAULT_RESOURCE_NAME,
        prefix=stored.res_prefix or DEFAULT_RESOURCE_PREFIX,
    )


class ConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_config_path()

    def _read(self) -> StoredSettings:
        if not self.path.exists():
            return StoredSettings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return StoredSettings.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return StoredSettings()

    def load(self) -> ManifestConfig:
        return _to_config(self._read())

    def save(self, config: ManifestConfig) -> bool:
        """Persist *config* if it differs from what is stored.

        Blank values fall back to the defaults. Returns True when the file was written.
        """
        stored = self._read()
        wanted = _to_config(StoredSettings(res_name=config.name, res_prefix=config.prefix))
        if stored.res_name == wanted.name and stored.res_prefix == wanted.prefix:
            return False

        stored = stored.model_copy(update={"res_name": wanted.name, "res_prefix": wanted.prefix})
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.unlink(missing_ok=True)
        self.path.write_text(json.dumps(stored.model_dump(exclude_none=True)), encoding="utf-8")
        logger.info("Saved settings to %s", self.path)
        return True


class SettingsDraft:
    """Editable name/prefix values; jobs only ever see a ``snapshot()``."""

    def __init__(self, name: str = "", prefix: str = "") -> None:
        self.name = name
        self.prefix = prefix

    @classmethod
    def from_config(cls, config: ManifestConfig) -> SettingsDraft:
        return cls(name=config.name, prefix=config.prefix)

    def snapshot(self) -> ManifestConfig:
        return ManifestConfig(
            name=self.name.strip() or DEFAULT_RESOURCE_NAME,
            prefix=self.prefix.strip() or DEFAULT_RESOURCE_PREFIX,
        )
