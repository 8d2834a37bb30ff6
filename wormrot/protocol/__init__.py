from .message_formats import CountMessage, ItemMetadataMessage
from .protocol_parser import format_json_message, parse_json_message

__all__ = ["CountMessage", "ItemMetadataMessage", "format_json_message", "parse_json_message"]
