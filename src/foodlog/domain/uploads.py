"""Models for uploaded images."""

from dataclasses import dataclass

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


@dataclass(frozen=True)
class ImageUpload:
    """Image file submitted by a client."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def metadata(self) -> dict[str, object]:
        """Return file metadata for debug payloads."""
        return {"name": self.filename, "size": self.size, "type": self.content_type}


def format_file_size(size: int) -> str:
    """Render a byte count as a human-readable string."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[index]}"
