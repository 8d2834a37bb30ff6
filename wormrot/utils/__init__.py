from .file_transfer import ItemKind, TransferItem
from .file_utils import FileUtils
from .progress_tracker import ProgressTracker, RunState, TransferStatus

__all__ = ["ItemKind", "TransferItem", "FileUtils", "ProgressTracker", "RunState", "TransferStatus"]
