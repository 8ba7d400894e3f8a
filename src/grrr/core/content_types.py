import mimetypes
from pathlib import Path

_EXTRA_TYPES = {
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".ui": "application/x-gtk-builder",
    ".css": "text/css",
    ".json": "application/json",
}

# Leading bytes of image formats the pixdata preprocessor is usually fed.
_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)

_SNIFF_SIZE = 16


def _sniff_content_type(file_path: Path) -> str | None:
    try:
        with file_path.open("rb") as fh:
            head = fh.read(_SNIFF_SIZE)
    except OSError:
        return None
    for signature, content_type in _IMAGE_SIGNATURES:
        if head.startswith(signature):
            return content_type
    return None


def guess_content_type(file_path: Path) -> str | None:
    suffix = file_path.suffix.lower()
    if suffix in _EXTRA_TYPES:
        return _EXTRA_TYPES[suffix]
    content_type, _ = mimetypes.guess_type(file_path.name, strict=False)
    if content_type is not None:
        return content_type
    return _sniff_content_type(file_path)


def is_image(content_type: str | None) -> bool:
    return content_type is not None and content_type.startswith("image/")
