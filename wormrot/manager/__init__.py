from .send_manager import SendManager
from .receive_manager import ReceiveManager
from .transfer_controller import TransferController

__all__ = ["SendManager", "ReceiveManager", "TransferController"]
