"""
Invocation contract for magic-wormhole: send or receive a text payload or a
file/directory under a given code.
"""

from typing import Optional, Sequence

from wormrot.config import RotatorConfig
from wormrot.ui.logging import Logger, LoggerInstance
from .external_command import ExternalCommand

logger = Logger()

WORMHOLE_CODENAME = 'WORMHOLE'
WORMHOLE_PREFIX = f'[magenta]\\[{WORMHOLE_CODENAME}][/]'


class WormholeClient:
  def __init__(self, command: ExternalCommand, send_args: Sequence[str] = (),
               receive_args: Sequence[str] = (), log: Optional[LoggerInstance] = None):
    self.command = command
    self.send_args = list(send_args)
    self.receive_args = list(receive_args)
    self.logger = log or logger.get_logger(WORMHOLE_PREFIX)

  @classmethod
  def from_config(cls, config: RotatorConfig) -> 'WormholeClient':
    command = ExternalCommand(config.wormhole_bin, timeout=config.timeout, redact=logger.redact)
    return cls(command, config.send_args, config.receive_args)

  def send_text(self, text: str, code: str) -> None:
    args = ["send", "--text", text, *self.send_args, "--code", code]
    self.logger.debug(f"Running: {self.command.describe(self.command.base_argv + args)}")
    self.command.check(self.command.run(args), "send text")

  def send_path(self, path: str, code: str) -> None:
    args = ["send", path, *self.send_args, "--code", code]
    self.logger.debug(f"Running: {self.command.describe(self.command.base_argv + args)}")
    self.command.check(self.command.run(args), f"send '{path}'")

  def receive_text(self, code: str) -> str:
    args = ["receive", "--only-text", *self.receive_args, code]
    self.logger.debug(f"Running: {self.command.describe(self.command.base_argv + args)}")
    result = self.command.check(self.command.run(args, capture=True), "receive text")
    return result.stdout.strip()

  def receive_path(self, code: str, dest_dir: str, output_name: Optional[str] = None) -> None:
    """
    Receive a file or directory into `dest_dir`.

    Args:
        code: Code to receive with
        dest_dir: Directory the tool runs in; items land here
        output_name: Store a file under this name instead of the sender's name
    """
    args = ["receive", *self.receive_args]
    if output_name is not None:
      args += ["--output-file", output_name]
    args.append(code)
    self.logger.debug(f"Running in '{dest_dir}': {self.command.describe(self.command.base_argv + args)}")
    self.command.check(self.command.run(args, cwd=dest_dir), "receive item data")
