from .external_command import ExternalCommand, CommandResult
from .mnemonic_encoder import HumanReadableSeedEncoder
from .wormhole_client import WormholeClient

__all__ = ["ExternalCommand", "CommandResult", "HumanReadableSeedEncoder", "WormholeClient"]
