"""Remote repository file model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RawFile:
    """One entry of a remote directory listing."""

    name: str
    download_url: Optional[str] = None
    html_url: Optional[str] = None
    path: str = ""
    type: str = "file"

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty")

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> "RawFile":
        """Build from one item of the GitHub contents API response."""
        return cls(
            name=entry.get("name") or "",
            download_url=entry.get("download_url"),
            html_url=entry.get("html_url"),
            path=entry.get("path") or "",
            type=entry.get("type") or "file",
        )

    @property
    def is_markdown(self) -> bool:
        """True for plain files with a ``.md`` name."""
        return self.type == "file" and self.name.endswith(".md")

    @property
    def stem(self) -> str:
        """File name without the ``.md`` suffix."""
        return self.name[:-3] if self.name.endswith(".md") else self.name
