import json
from typing import Any, Dict

from wormrot.errors import ProtocolViolationError


def format_json_message(msg_dict: Dict[str, Any]) -> str:
    '''
    Formats a dictionary into the single-line JSON text sent through the
    transfer tool's text channel.

    Example:
    >>> format_json_message({"number_of_files": 2})
    '{"number_of_files": 2}'

    Args:
        msg_dict (dict): The dictionary to format.

    Returns:
        str: compact JSON text
    '''
    return json.dumps(msg_dict, ensure_ascii=False)


def parse_json_message(raw_message: str) -> Dict[str, Any]:
    '''
    Parses received text into a dictionary. Anything that is not a JSON object
    is a protocol violation; no attempt is made to repair it.

    Args:
        raw_message (str): text printed by the transfer tool

    Returns:
        dict: the decoded JSON object

    Raises:
        ProtocolViolationError: if the text is empty, not JSON, or not an object
    '''
    text = (raw_message or "").strip()
    if not text:
        raise ProtocolViolationError("Received an empty message")
    try:
        message = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProtocolViolationError(f"Received message is not valid JSON ({e}): '{text}'")
    if not isinstance(message, dict):
        raise ProtocolViolationError(f"Received message is not a JSON object: '{text}'")
    return message
