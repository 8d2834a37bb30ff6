import argparse
import dataclasses
from typing import List, Optional
from wormrot.config import VERSION, DEFAULT_MODULO, MIN_MODULO, RotatorConfig
from wormrot.config.config import (
  UVX_WORMHOLE_BIN, UVX_HRS_BIN, DEFAULT_SEND_ARGS, DEFAULT_RECEIVE_ARGS, DEFAULT_TIMEOUT
)
from wormrot.errors import EXIT_INTERRUPTED, UsageError, WormrotError
from wormrot.ui.logging import Logger
from wormrot.utils import FileUtils
from .transfer_controller import TransferController

logger = Logger()

STARTER_CODENAME = 'STARTER'

server_logger = logger.get_logger(f'[yellow]\\[{STARTER_CODENAME}][/]')

ENVIRONMENT_HELP = f"""
Without arguments, wormrot starts in receive mode.

Environment variables:
  WORMROT_MODULO                Time rotation interval in seconds (min: {MIN_MODULO}, default: {DEFAULT_MODULO})
  WORMROT_SECRET                Shared secret for code generation (required)
  WORMROT_BIN                   Command to run wormhole (default: {UVX_WORMHOLE_BIN})
  WORMROT_HRS_BIN               Command to run HumanReadableSeed (default: {UVX_HRS_BIN})
  WORMROT_DEFAULT_SEND_ARGS     Default arguments for send (default: {DEFAULT_SEND_ARGS})
  WORMROT_DEFAULT_RECEIVE_ARGS  Default arguments for receive (default: {DEFAULT_RECEIVE_ARGS})
  WORMROT_TIMEOUT               Seconds to wait for each transfer step (default: {DEFAULT_TIMEOUT})
  WORMROT_DEBUG                 Set to 1 to print debug output
"""


class WormrotArgumentParser(argparse.ArgumentParser):
  def error(self, message: str):
    raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
  parser = WormrotArgumentParser(
    prog="wormrot",
    description=f"wormrot v{VERSION} - A wrapper around magic-wormhole for reliable file transfers",
    epilog=ENVIRONMENT_HELP,
    formatter_class=argparse.RawDescriptionHelpFormatter,
  )
  parser.add_argument("paths", nargs="*", help="Files or directories to send")
  parser.add_argument("-v", "--version", action="version", version=f"%(prog)s v{VERSION}")
  parser.add_argument("--debug", action="store_true", help="Print debug output")
  return parser


def main(argv: Optional[List[str]] = None) -> int:
  parser = build_parser()
  try:
    args, ignored = parser.parse_known_args(argv)
    for option in ignored:
      server_logger.warning(f"Ignoring unknown option '{option}'")

    config = RotatorConfig.from_env()
    if args.debug:
      config = dataclasses.replace(config, debug=True)
    config.check_executables()

    # Any argument besides --debug selects send mode
    paths: List[str] = []
    if args.paths or ignored:
      paths = FileUtils.select_paths(
        args.paths, on_skip=lambda p: server_logger.warning(f"Skipping '{p}': no such file or directory")
      )

    controller = TransferController(config)
    controller.run(paths)
  except WormrotError as e:
    server_logger.error(str(e))
    return e.exit_code
  except KeyboardInterrupt:
    server_logger.error("Interrupted.")
    return EXIT_INTERRUPTED
  return 0


if __name__ == "__main__":
  raise SystemExit(main())
