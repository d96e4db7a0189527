"""File discovery and reading for step definition and feature files."""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from SpecRunner.pipeline.errors import DiscoveryError


@runtime_checkable
class OSAbstraction(Protocol):
    """Everything the Driver needs from the file system.

    Failures are raised as DiscoveryError, never returned.
    """

    def find_files_with_extension(self, path: str, extension: str) -> list[str]: ...

    def read_file(self, path: str) -> str: ...

    def file_exists(self, path: str) -> bool: ...


class LocalFileSystem:
    """OSAbstraction backed by the local disk.

    Discovery is recursive and sorted so that runs are reproducible.
    """

    def find_files_with_extension(self, path: str, extension: str) -> list[str]:
        root = Path(path)
        if not root.exists():
            raise DiscoveryError(f"Path not found: {root}")
        if root.is_file():
            return [str(root)] if root.suffix == extension else []
        try:
            return sorted(str(p) for p in root.rglob(f"*{extension}") if p.is_file())
        except OSError as exc:
            raise DiscoveryError(f"Cannot list {root}: {exc}") from exc

    def read_file(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DiscoveryError(f"Cannot read {path}: {exc}") from exc

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()
