import os
import shutil
import tempfile
from typing import List, Optional, Protocol

from wormrot.errors import IntegrityError, ProtocolViolationError, WormrotError
from wormrot.protocol import CountMessage, ItemMetadataMessage
from wormrot.rotation import CodeGenerator, sha256_file
from wormrot.ui.logging import Logger, LoggerInstance
from wormrot.utils import FileUtils, ProgressTracker, RunState

logger = Logger()

RECEIVER_CODENAME = 'RECEIVER'
RECEIVER_PREFIX = f'[blue]\\[{RECEIVER_CODENAME}][/]'

STAGING_PREFIX = ".wormrot-"


class ReceivingClient(Protocol):
  def receive_text(self, code: str) -> str: ...
  def receive_path(self, code: str, dest_dir: str, output_name: Optional[str] = None) -> None: ...


class ReceiveManager:
  """
  Receiver side of a run: learn the item count from the base code, then
  receive, validate and verify each item in order. Any deviation from the
  expected sequence stops the run.
  """
  def __init__(self, code_generator: CodeGenerator, client: ReceivingClient, dest_dir: str,
               tracker: Optional[ProgressTracker] = None, log: Optional[LoggerInstance] = None):
    self.code_generator = code_generator
    self.client = client
    self.dest_dir = dest_dir
    self.tracker = tracker or ProgressTracker("receive")
    self.logger = log or logger.get_logger(RECEIVER_PREFIX)
    self.codes_used: List[str] = []
    self.received: List[str] = []
    self._current_index: Optional[int] = None

  def run(self) -> List[str]:
    """
    Receive a whole run.

    Returns:
        Paths of the stored items, in order
    """
    try:
      total = self._await_count()
      for index in range(1, total + 1):
        self._receive_item(index, total)
    except WormrotError as e:
      self.tracker.fail(str(e), self._current_index)
      raise

    self.tracker.set_state(RunState.DONE)
    self.logger.info(f"All {len(self.received)} items received successfully.")
    return list(self.received)

  def _use_code(self, code: str) -> str:
    self.codes_used.append(code)
    return code

  def _await_count(self) -> int:
    self.tracker.set_state(RunState.AWAITING_COUNT)
    code = self._use_code(self.code_generator.base_code())
    self.logger.info("Receiving file count...")
    self.logger.info(f"Prepare for file count. Code: {code}")

    raw = self.client.receive_text(code)
    self.logger.debug(f"Received count JSON: '{raw}'")
    total = CountMessage.from_text(raw).number_of_files
    self.tracker.set_total(total)
    self.logger.info(f"Will receive {total} item(s)")
    return total

  def _receive_metadata(self, index: int, total: int) -> ItemMetadataMessage:
    self.tracker.set_state(RunState.AWAITING_METADATA)
    code = self._use_code(self.code_generator.meta_code(index))
    self.logger.info(f"Receiving metadata for item {index}/{total}...")
    self.logger.info(f"Prepare for metadata {index}/{total}. Code: {code}")

    raw = self.client.receive_text(code)
    self.logger.debug(f"Received raw metadata JSON: '{raw}'")
    metadata = ItemMetadataMessage.from_text(raw)

    if metadata.index != index:
      raise ProtocolViolationError(f"Expected index {index}, but received {metadata.index}.")
    if metadata.total != total:
      raise ProtocolViolationError(
        f"Expected total {total}, but received {metadata.total} in metadata for item {index}."
      )

    self.logger.info(f"Metadata parsed - Filename: '{metadata.filename}', "
                     f"Expected Hash: {metadata.sha256sum}, Index: {metadata.index}/{total}")
    return metadata

  def _receive_item(self, index: int, total: int) -> None:
    self._current_index = index
    metadata = self._receive_metadata(index, total)
    self.tracker.start_item(index, metadata.filename)

    self.tracker.set_state(RunState.AWAITING_DATA)
    code = self._use_code(self.code_generator.data_code(index))

    target_name = FileUtils.find_available_name(self.dest_dir, metadata.filename)
    if target_name != metadata.filename:
      self.logger.warning(f"Item '{metadata.filename}' already exists. Will save as '{target_name}' instead.")

    self.logger.info(f"Receiving file data for item {index}/{total}...")
    self.logger.info(f"Prepare for data {index}/{total}. Code: {code}")

    if metadata.is_directory:
      self._receive_directory(code, metadata.filename, target_name)
    else:
      output_name = target_name if target_name != metadata.filename else None
      self.client.receive_path(code, self.dest_dir, output_name)

    self.tracker.set_state(RunState.VERIFYING)
    stored_path = os.path.join(self.dest_dir, target_name)
    self._verify(metadata, stored_path)

    self.received.append(stored_path)
    self.tracker.complete_item(index, stored_as=stored_path)
    self.logger.info(f"Item '{target_name}' (item {index}/{total}) processed successfully.")
    self._current_index = None

  def _receive_directory(self, code: str, name: str, target_name: str) -> None:
    """The tool always stores directories under the sender's name, so a renamed
    directory is received into a private staging area and moved afterwards."""
    if target_name == name:
      self.client.receive_path(code, self.dest_dir)
      return

    staging_dir = tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=self.dest_dir)
    try:
      self.client.receive_path(code, staging_dir)
      staged = os.path.join(staging_dir, name)
      if not os.path.isdir(staged):
        raise IntegrityError(f"Received directory '{name}' not found after transfer.", staged)
      os.rename(staged, os.path.join(self.dest_dir, target_name))
    finally:
      shutil.rmtree(staging_dir, ignore_errors=True)

  def _verify(self, metadata: ItemMetadataMessage, path: str) -> None:
    if metadata.is_directory:
      self.logger.info(f"Skipping hash verification for received directory '{metadata.filename}' (item {metadata.index}).")
      if not os.path.isdir(path):
        raise IntegrityError(f"Received directory '{path}' not found after transfer.", path)
      return

    self.logger.info(f"Verifying sha256sum for received file '{path}'...")
    if not os.path.isfile(path):
      # A directory or other object arrived under the name announced for a file
      if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
      elif os.path.lexists(path):
        os.remove(path)
      raise IntegrityError(f"Received file '{path}' not found after transfer. Cannot verify hash.", path)

    try:
      calculated = sha256_file(path)
    except OSError as e:
      os.remove(path)
      raise IntegrityError(f"Failed to calculate sha256sum for received file '{path}': {e}", path) from e
    self.logger.debug(f"Calculated hash: {calculated}")
    self.logger.debug(f"Expected hash:   {metadata.sha256sum}")
    if calculated != metadata.sha256sum:
      os.remove(path)
      raise IntegrityError(
        f"SHA256SUM MISMATCH for item {metadata.index} ('{metadata.filename}')! "
        f"Deleted corrupted file: '{path}'",
        path,
      )
    self.logger.info(f"SHA256SUM OK for item {metadata.index} ('{metadata.filename}').")
