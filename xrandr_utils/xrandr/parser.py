import re
import string
from dataclasses import dataclass, field
from enum import Enum


class DisplayState(Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass
class HeaderInfo:
    name: str
    state: DisplayState
    primary: bool = False
    geometry: str | None = None


@dataclass
class DisplaySection:
    name: str
    state: DisplayState
    primary: bool = False
    geometry: str | None = None
    lines: list[str] = field(default_factory=list)

    @property
    def connected(self) -> bool:
        return self.state is DisplayState.CONNECTED

    @property
    def label_line(self) -> str | None:
        return self.lines[0] if self.lines else None


_GEOMETRY_RE = re.compile(r"[0-9]+x[0-9]+[+-][0-9]+[+-][0-9]+")
_HEX_LINE_CHARS = frozenset(string.hexdigits + string.whitespace)
_STATE_WORDS = {state.value: state for state in DisplayState}

EDID_LABEL = "EDID:"
CONNECTOR_LABEL = "CONNECTOR_ID:"
MONITORS_HEADER = "Monitors:"


def split_lines(text: str) -> list[str]:
    r"""Split on ``\n`` only, dropping one trailing ``\r`` per line.

    Form feeds and other separators that ``str.splitlines`` honours stay inside
    the line they appear in.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_geometry_token(token: str) -> bool:
    """True when ``token`` is exactly ``WxH+X+Y`` (offsets may be negative)."""
    return _GEOMETRY_RE.fullmatch(token) is not None


def parse_header(line: str) -> HeaderInfo | None:
    parts = line.split()
    if len(parts) < 2:
        return None
    state = _STATE_WORDS.get(parts[1])
    if state is None:
        return None
    header = HeaderInfo(name=parts[0], state=state)
    for token in parts[2:]:
        if token == "primary":
            header.primary = True
        elif header.geometry is None and is_geometry_token(token):
            header.geometry = token
    return header


def parse_sections(verbose: str) -> list[DisplaySection]:
    """Split ``xrandr --verbose`` text into one section per output header.

    Lines ahead of the first header (the ``Screen 0: ...`` banner) belong to no
    output and are dropped. Every section keeps its header as ``lines[0]``.
    """
    sections: list[DisplaySection] = []
    current: DisplaySection | None = None
    for line in split_lines(verbose):
        header = parse_header(line)
        if header is not None:
            if current is not None:
                sections.append(current)
            current = DisplaySection(
                name=header.name,
                state=header.state,
                primary=header.primary,
                geometry=header.geometry,
                lines=[line],
            )
        elif current is not None:
            current.lines.append(line)
    if current is not None:
        sections.append(current)
    return sections


def find_section(sections: list[DisplaySection], name: str) -> DisplaySection | None:
    # first match wins when the source repeats a name
    for section in sections:
        if section.name == name:
            return section
    return None


def display_names(sections: list[DisplaySection], exclude: set[str] | None = None) -> list[str]:
    exclude = exclude or set()
    return [section.name for section in sections if section.name not in exclude]


def extract_edid_hex(lines: list[str]) -> str | None:
    capture = False
    digits: list[str] = []
    for line in lines:
        line = line.strip()
        if not capture:
            if line.startswith(EDID_LABEL):
                capture = True
            continue
        if not line or not set(line) <= _HEX_LINE_CHARS:
            break
        digits.extend(ch for ch in line if ch in string.hexdigits)
    return "".join(digits) or None


def extract_connector_id(lines: list[str]) -> str | None:
    for line in lines:
        line = line.strip()
        if line.startswith(CONNECTOR_LABEL):
            value = line[len(CONNECTOR_LABEL):].strip()
            if value:
                return value
    return None


def parse_monitor_map(listing: str) -> dict[str, str]:
    """Map output name to monitor index from ``xrandr --listmonitors``.

    Data lines look like `` 0: +*eDP-1 1920/344x1080/193+0+0  eDP-1``; the
    index is the first token up to ``:`` and the output name is the last token.
    """
    monitors: dict[str, str] = {}
    lines = split_lines(listing)
    if lines and lines[0].startswith(MONITORS_HEADER):
        lines = lines[1:]
    for line in lines:
        parts = line.rstrip().split()
        if not parts:
            continue
        index = parts[0].split(":", 1)[0]
        monitors[parts[-1]] = index
    return monitors


def escape_multiline(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")
