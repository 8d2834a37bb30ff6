import os
from typing import List, Optional, Protocol

from wormrot.errors import UsageError, WormrotError
from wormrot.protocol import CountMessage, ItemMetadataMessage
from wormrot.rotation import CodeGenerator
from wormrot.ui.logging import Logger, LoggerInstance
from wormrot.utils import FileUtils, ProgressTracker, RunState, TransferItem

logger = Logger()

SENDER_CODENAME = 'SENDER'
SENDER_PREFIX = f'[green]\\[{SENDER_CODENAME}][/]'


class SendingClient(Protocol):
  def send_text(self, text: str, code: str) -> None: ...
  def send_path(self, path: str, code: str) -> None: ...


class SendManager:
  """
  Sender side of a run: announce the item count with the base code, then send
  metadata and data for each item with their own codes, strictly in order.
  """
  def __init__(self, code_generator: CodeGenerator, client: SendingClient,
               tracker: Optional[ProgressTracker] = None, log: Optional[LoggerInstance] = None):
    self.code_generator = code_generator
    self.client = client
    self.tracker = tracker or ProgressTracker("send")
    self.logger = log or logger.get_logger(SENDER_PREFIX)
    self.codes_used: List[str] = []
    self._current_index: Optional[int] = None

  def run(self, items: List[TransferItem]) -> None:
    try:
      self._announce_count(len(items))
      for item in items:
        self._send_item(item)
    except WormrotError as e:
      self.tracker.fail(str(e), self._current_index)
      raise

    self.tracker.set_state(RunState.DONE)
    self.logger.info(f"All {len(items)} items sent.")

  def _use_code(self, code: str) -> str:
    self.codes_used.append(code)
    return code

  def _announce_count(self, total: int) -> None:
    self.tracker.set_state(RunState.ANNOUNCING_COUNT)
    self.tracker.set_total(total)
    code = self._use_code(self.code_generator.base_code())

    message = CountMessage(total)
    self.logger.info(f"Sending file count: {total}")
    self.logger.info(f"Prepare for file count. Code: {code}")
    self.client.send_text(message.to_text(), code)

  def _send_item(self, item: TransferItem) -> None:
    self._current_index = item.index
    self.tracker.start_item(item.index, item.name)

    try:
      if item.is_directory:
        self.logger.info(f"Skipping sha256sum calculation for directory '{item.path}'.")
      else:
        self.logger.info(f"Calculating sha256sum for file '{item.path}' "
                         f"({FileUtils.format_file_size(os.path.getsize(item.path))})...")
      item.content_hash = FileUtils.content_hash(item.path, item.kind)
    except OSError as e:
      raise UsageError(f"Failed to calculate sha256sum for '{item.path}': {e}") from e
    if item.hash_applicable:
      self.logger.info(f"Calculated hash: {item.content_hash}")

    # Metadata
    self.tracker.set_state(RunState.SENDING_METADATA)
    meta_code = self._use_code(self.code_generator.meta_code(item.index))
    metadata = ItemMetadataMessage(item.name, item.content_hash, item.index, item.total)
    self.logger.info(f"Sending metadata for item {item.label}: {metadata.to_text()}")
    self.logger.info(f"Prepare for metadata {item.label}. Code: {meta_code}")
    self.client.send_text(metadata.to_text(), meta_code)

    # Data
    self.tracker.set_state(RunState.SENDING_DATA)
    data_code = self._use_code(self.code_generator.data_code(item.index))
    self.logger.info(f"Sending file data {item.label}: '{item.path}'")
    self.logger.info(f"Prepare for data {item.label}. Code: {data_code}")
    self.client.send_path(item.path, data_code)

    self.tracker.complete_item(item.index)
    self._current_index = None
