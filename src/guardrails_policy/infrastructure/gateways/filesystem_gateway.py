"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import os
from pathlib import Path
from typing import Iterator, Sequence

from guardrails_policy.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def normalize(self, path: str) -> str:
        """Forward-slash form of a path, as file patterns expect."""
        return Path(path).as_posix()

    def walk_files(self, path: str, exclude_dirs: Sequence[str]) -> Iterator[str]:
        """Yield files below path in sorted order, never entering excluded directory names."""
        root = Path(path)
        if root.is_file():
            yield root.as_posix()
            return
        excluded = set(exclude_dirs)
        for dir_path, dir_names, file_names in os.walk(root):
            dir_names[:] = sorted(d for d in dir_names if d not in excluded)
            for file_name in sorted(file_names):
                yield (Path(dir_path) / file_name).as_posix()
