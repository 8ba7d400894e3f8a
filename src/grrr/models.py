from pathlib import Path

from pydantic import BaseModel, ConfigDict

DEFAULT_RESOURCE_NAME = "custom.gresource"
DEFAULT_RESOURCE_PREFIX = "/org/gnome/custom"


class PathRef(BaseModel):
    """An absolute filesystem path with its type and content type resolved once."""

    model_config = ConfigDict(frozen=True)

    path: Path
    is_dir: bool
    content_type: str | None = None

    @property
    def name(self) -> str:
        return self.path.name


class ManifestConfig(BaseModel):
    """Bundle name and resource prefix captured when a job starts."""

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_RESOURCE_NAME
    prefix: str = DEFAULT_RESOURCE_PREFIX

    @property
    def manifest_name(self) -> str:
        return f"{self.name}.xml"
