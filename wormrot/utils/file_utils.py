"""
File-related utility functions for wormrot transfers.
Handles item enumeration, hashing, and local name collisions.
"""

import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from wormrot.config import DIRECTORY_HASH_SENTINEL
from wormrot.errors import UsageError
from wormrot.rotation.digest import sha256_file
from .file_transfer import ItemKind, TransferItem


class FileUtils:
    """Utility class for file operations in wormrot."""

    @staticmethod
    def item_kind(path: str) -> ItemKind:
        """
        Classify a local path.

        Args:
            path: Path to classify

        Returns:
            ItemKind of the path

        Raises:
            UsageError: if the path is neither a regular file nor a directory
        """
        if os.path.isfile(path):
            return ItemKind.FILE
        if os.path.isdir(path):
            return ItemKind.DIRECTORY
        raise UsageError(f"Item '{path}' is neither a file nor a directory.")

    @staticmethod
    def content_hash(path: str, kind: ItemKind) -> str:
        """SHA-256 of a file, or the placeholder for directories."""
        if kind == ItemKind.DIRECTORY:
            return DIRECTORY_HASH_SENTINEL
        return sha256_file(path)

    @staticmethod
    def select_paths(args: Sequence[str],
                     on_skip: Optional[Callable[[str], None]] = None) -> List[str]:
        """
        Keep the arguments that name existing paths.

        Arguments starting with a hyphen are options, not items. Missing
        paths are reported through `on_skip` and dropped.

        Args:
            args: Raw command-line arguments
            on_skip: Called with each argument that was dropped

        Returns:
            Paths in the order given

        Raises:
            UsageError: if no valid path remains
        """
        paths = []
        for arg in args:
            if arg.startswith("-"):
                continue
            if not os.path.exists(arg):
                if on_skip is not None:
                    on_skip(arg)
                continue
            paths.append(arg)

        if not paths:
            raise UsageError("No valid files provided")
        return paths

    @staticmethod
    def build_items(paths: Sequence[str]) -> List[TransferItem]:
        """Describe each path as a TransferItem. Hashes are computed later, per item."""
        total = len(paths)
        items = []
        for index, path in enumerate(paths, start=1):
            kind = FileUtils.item_kind(path)
            name = Path(os.path.abspath(path)).name
            items.append(TransferItem(name=name, kind=kind, content_hash="",
                                      index=index, total=total, path=path))
        return items

    @staticmethod
    def split_name(name: str) -> Tuple[str, str]:
        """
        Split a name into stem and extension for renaming.

        Hidden names ('.bashrc') and names without a dot have no extension.

        Returns:
            (stem, extension) where extension includes the leading dot or is ''
        """
        if name.startswith("."):
            return name, ""
        stem, dot, ext = name.rpartition(".")
        if not dot or not stem or not ext:
            return name, ""
        return stem, f".{ext}"

    @staticmethod
    def find_available_name(directory: str, name: str) -> str:
        """
        Return `name` if it is free in `directory`, else the first free
        `stem_<n><ext>` for n = 1, 2, ...

        Args:
            directory: Directory the item will be stored in
            name: Name the sender used

        Returns:
            A name that does not exist in `directory`
        """
        if not os.path.lexists(os.path.join(directory, name)):
            return name

        stem, ext = FileUtils.split_name(name)
        counter = 1
        while True:
            candidate = f"{stem}_{counter}{ext}"
            if not os.path.lexists(os.path.join(directory, candidate)):
                return candidate
            counter += 1

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """
        Format file size in human-readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string (e.g., "1.5 KB", "2.3 MB")
        """
        if size_bytes == 0:
            return "0 B"

        units = ['B', 'KB', 'MB', 'GB', 'TB']
        unit_index = 0
        size = float(size_bytes)

        while size >= 1024.0 and unit_index < len(units) - 1:
            size /= 1024.0
            unit_index += 1

        if unit_index == 0:
            return f"{int(size)} {units[unit_index]}"
        else:
            return f"{size:.1f} {units[unit_index]}"
