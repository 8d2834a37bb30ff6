from dataclasses import dataclass
from enum import Enum
from typing import Optional

from wormrot.config import DIRECTORY_HASH_SENTINEL


class ItemKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class TransferItem:
    """One file or directory of a run, on either side of the transfer."""
    name: str
    kind: ItemKind
    content_hash: str
    index: int
    total: int
    path: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.kind == ItemKind.DIRECTORY

    @property
    def hash_applicable(self) -> bool:
        return self.content_hash != DIRECTORY_HASH_SENTINEL

    @property
    def label(self) -> str:
        return f"{self.index}/{self.total}"
