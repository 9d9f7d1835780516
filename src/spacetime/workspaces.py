"""Map file locations to the workspace folders that own them."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Iterator, Mapping, Optional
from urllib.parse import unquote, urlparse


def path_from_location(location: str) -> Optional[Path]:
    """Return a filesystem path for a plain path or ``file://`` URI.

    Other URI schemes (``untitled:``, ``git:``, ``vscode-remote://``...) name
    documents that do not live on this disk and yield ``None``.
    """
    location = location.strip()
    if not location:
        return None
    parsed = urlparse(location)
    # Single-letter schemes are Windows drive letters.
    if parsed.scheme and len(parsed.scheme) > 1:
        if parsed.scheme != "file":
            return None
        if parsed.netloc and parsed.netloc != "localhost":
            return None
        return Path(unquote(parsed.path))
    return Path(location)


class WorkspaceRegistry:
    """Known workspace folders keyed by display name."""

    def __init__(self, folders: Optional[Mapping[str, Path]] = None) -> None:
        self._folders: dict[str, Path] = {}
        for name, folder in (folders or {}).items():
            self.add(name, folder)

    def add(self, name: str, folder: Path) -> None:
        self._folders[name] = Path(folder).expanduser().resolve()

    def __contains__(self, name: object) -> bool:
        return name in self._folders

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._folders))

    def __len__(self) -> int:
        return len(self._folders)

    def as_dict(self) -> dict[str, str]:
        return {name: str(folder) for name, folder in self._folders.items()}

    def resolve(self, location: str) -> Optional[str]:
        """Return the workspace whose folder contains ``location``.

        Nested folders resolve to the deepest match.
        """
        path = path_from_location(location)
        if path is None:
            return None
        target = _absolute(path)
        best: Optional[tuple[int, str]] = None
        for name, folder in self._folders.items():
            if target == folder or folder in target.parents:
                depth = len(folder.parts)
                if best is None or depth > best[0]:
                    best = (depth, name)
        return best[1] if best else None


def _absolute(path: PurePath) -> Path:
    return Path(path).expanduser().resolve()
