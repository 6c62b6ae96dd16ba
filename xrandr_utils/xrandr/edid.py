import string
from dataclasses import dataclass
from typing import Callable

from ..errors import ValidationError
from .parser import split_lines


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex dump, ignoring embedded whitespace.

    Raises ValidationError for an odd digit count or a pair that is not hex;
    nothing is returned on failure.
    """
    digits = "".join(ch for ch in text if ch not in string.whitespace)
    if len(digits) % 2 != 0:
        raise ValidationError("edid hex length is not even")
    out = bytearray()
    for i in range(0, len(digits), 2):
        pair = digits[i:i + 2]
        if pair[0] not in string.hexdigits or pair[1] not in string.hexdigits:
            raise ValidationError(f"invalid hex pair: {pair}")
        out.append(int(pair, 16))
    return bytes(out)


def extract_between_quotes(line: str, label: str) -> str | None:
    if label not in line:
        return None
    start = line.find("'")
    if start < 0:
        return None
    end = line.find("'", start + 1)
    if end < 0:
        return None
    return line[start + 1:end].strip()


def extract_after_colon(line: str, label: str) -> str | None:
    if label not in line:
        return None
    _, sep, rest = line.partition(":")
    if not sep:
        return None
    return rest.strip()


@dataclass(frozen=True)
class SerialRule:
    label: str
    extract: Callable[[str, str], str | None]


# Order matters: each rule scans the whole report before the next is tried.
SERIAL_RULES = (
    SerialRule("Display Product Serial Number:", extract_between_quotes),
    SerialRule("Serial Number:", extract_after_colon),
    SerialRule("Alphanumeric Data String:", extract_between_quotes),
)


def extract_serial(decoded: str) -> str | None:
    lines = split_lines(decoded)
    for rule in SERIAL_RULES:
        for line in lines:
            value = rule.extract(line, rule.label)
            if value:
                return value
    return None
