import os
from typing import Callable, List, Optional, Sequence

from wormrot.config import RotatorConfig
from wormrot.network import HumanReadableSeedEncoder, WormholeClient
from wormrot.rotation import CodeGenerator, MnemonicEncoder, RotationScheduler
from wormrot.ui import logging
from wormrot.utils import FileUtils, ProgressTracker
from .receive_manager import ReceiveManager, ReceivingClient
from .send_manager import SendManager, SendingClient

logger = logging.Logger()


class TransferController:
  """
  Wires one run together: scheduler, code generator, mnemonic encoder and
  transfer tool client, all built from a single RotatorConfig.
  """
  def __init__(self, config: RotatorConfig, encoder: Optional[MnemonicEncoder] = None,
               client=None, clock: Optional[Callable[[], float]] = None, dest_dir: Optional[str] = None):
    self.config = config
    logger.add_redaction(config.secret)
    logger.set_debug(config.debug)

    self.scheduler = RotationScheduler(config.modulo, clock=clock)
    self.encoder = encoder or HumanReadableSeedEncoder(config.hrs_bin)
    self.client = client or WormholeClient.from_config(config)
    self.code_generator = CodeGenerator(self.scheduler, config.secret, self.encoder)
    self.dest_dir = dest_dir or os.getcwd()
    self.tracker: Optional[ProgressTracker] = None

  def run(self, paths: Sequence[str]) -> List[str]:
    """Send `paths`, or receive when there are none."""
    if paths:
      return self.send(paths)
    return self.receive()

  def send(self, paths: Sequence[str]) -> List[str]:
    items = FileUtils.build_items(paths)
    self.scheduler.capture_base()
    self.tracker = ProgressTracker("send")
    sender = SendManager(self.code_generator, self.client, self.tracker)
    sender.run(items)
    return [item.path for item in items]

  def receive(self) -> List[str]:
    self.scheduler.capture_base()
    self.tracker = ProgressTracker("receive")
    receiver = ReceiveManager(self.code_generator, self.client, self.dest_dir, self.tracker)
    return receiver.run()
