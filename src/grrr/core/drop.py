from pathlib import Path
from urllib.parse import unquote, urlparse


def path_from_drop_item(item: str) -> Path:
    """Turn one ``text/uri-list`` line (``file://`` URI or bare path) into a path."""
    parsed = urlparse(item)
    if parsed.scheme == "file":
        if parsed.netloc not in ("", "localhost"):
            raise ValueError(f"Remote file URI not supported: {item}")
        return Path(unquote(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ValueError(f"Unsupported URI scheme '{parsed.scheme}': {item}")
    return Path(item)


def paths_from_drop_text(text: str) -> list[Path]:
    """Parse a dropped text payload, one item per line, keeping order and duplicates."""
    paths: list[Path] = []
    for line in text.splitlines():
        item = line.strip()
        if not item or item.startswith("#"):
            continue
        paths.append(path_from_drop_item(item))
    return paths
