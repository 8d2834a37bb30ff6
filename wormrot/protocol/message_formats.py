"""
Message structures exchanged over the transfer tool's text channel:
the item count announced with the base code, and one metadata message per item.
"""

import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from wormrot.config import COUNT_FIELD, DIRECTORY_HASH_SENTINEL
from wormrot.errors import ProtocolViolationError
from .protocol_parser import format_json_message, parse_json_message

SHA256_PATTERN = re.compile(r"^[a-f0-9]{64}$")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _raise_if_invalid(result: Dict[str, Any], raw: str) -> None:
    if not result['valid']:
        raise ProtocolViolationError(f"{'; '.join(result['errors'])} in message: '{raw}'")


@dataclass
class CountMessage:
    """Announces how many items the sender is about to transfer."""
    number_of_files: int

    def to_dict(self) -> Dict[str, Any]:
        return {COUNT_FIELD: self.number_of_files}

    def validate(self) -> Dict[str, Any]:
        errors = []
        if not _is_int(self.number_of_files):
            errors.append(f"{COUNT_FIELD} must be an integer")
        elif self.number_of_files < 0:
            errors.append(f"{COUNT_FIELD} must not be negative")
        return {
            'valid': len(errors) == 0,
            'errors': errors
        }

    def to_text(self) -> str:
        return format_json_message(self.to_dict())

    @classmethod
    def from_text(cls, raw: str) -> 'CountMessage':
        data = parse_json_message(raw)
        if COUNT_FIELD not in data:
            raise ProtocolViolationError(f"Could not extract file count from received JSON: '{raw}'")
        message = cls(number_of_files=data[COUNT_FIELD])
        _raise_if_invalid(message.validate(), raw)
        return message


@dataclass
class ItemMetadataMessage:
    """Describes item `index` of `total` before its content is sent."""
    filename: str
    sha256sum: str
    index: int
    total: int

    @property
    def is_directory(self) -> bool:
        return self.sha256sum == DIRECTORY_HASH_SENTINEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filename': self.filename,
            'sha256sum': self.sha256sum,
            'index': self.index,
            'total': self.total
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ItemMetadataMessage':
        missing = [key for key in ('filename', 'sha256sum', 'index', 'total') if key not in data]
        if missing:
            raise ProtocolViolationError(f"Metadata is missing field(s): {', '.join(missing)}")
        return cls(
            filename=data['filename'],
            sha256sum=data['sha256sum'],
            index=data['index'],
            total=data['total']
        )

    def validate(self) -> Dict[str, Any]:
        """Validate field types and ranges. Sequencing is checked by the receiver."""
        errors: List[str] = []

        if not isinstance(self.filename, str) or not self.filename:
            errors.append("filename must be a non-empty string")
        elif (os.path.basename(self.filename) != self.filename or "\\" in self.filename
              or self.filename in (".", "..")):
            errors.append(f"filename '{self.filename}' is not a plain file name")

        if not isinstance(self.sha256sum, str) or (
                not self.is_directory and not SHA256_PATTERN.match(self.sha256sum)):
            errors.append("sha256sum must be a sha256 hex digest or the directory placeholder")

        if not _is_int(self.index) or self.index < 1:
            errors.append("index must be a positive integer")
        if not _is_int(self.total) or self.total < 1:
            errors.append("total must be a positive integer")
        if not errors and self.index > self.total:
            errors.append(f"index {self.index} exceeds total {self.total}")

        return {
            'valid': len(errors) == 0,
            'errors': errors
        }

    def to_text(self) -> str:
        return format_json_message(self.to_dict())

    @classmethod
    def from_text(cls, raw: str) -> 'ItemMetadataMessage':
        message = cls.from_dict(parse_json_message(raw))
        _raise_if_invalid(message.validate(), raw)
        return message
