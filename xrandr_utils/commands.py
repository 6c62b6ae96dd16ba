from __future__ import annotations
import logging
import sys
from typing import TextIO

from .errors import DecodeError, DisplayLookupError, ValidationError
from .mapping import MapFlags, MapFormatter
from .xrandr.edid import extract_serial, hex_to_bytes
from .xrandr.parser import (
    DisplaySection,
    display_names,
    escape_multiline,
    extract_connector_id,
    extract_edid_hex,
    find_section,
    parse_monitor_map,
    parse_sections,
)
from .xrandr.xrandr import EdidDecode, Xrandr, read_piped_text

log = logging.getLogger(__name__)


def off_args(names: list[str]) -> list[str]:
    args: list[str] = []
    for name in names:
        args += ["--output", name, "--off"]
    return args


class DisplayCommands:
    """Answers the CLI commands; every method returns the lines to print.

    Topology text comes from piped stdin when there is any, otherwise from
    ``xrandr --verbose``. The monitor commands read ``xrandr --listmonitors``
    the same way. Input is acquired on first use only.
    """

    def __init__(
        self,
        xrandr: Xrandr | None = None,
        decoder: EdidDecode | None = None,
        stdin: TextIO | None = None,
    ):
        self.xrandr = xrandr or Xrandr()
        self.decoder = decoder or EdidDecode()
        # sys.stdin is None when the process is detached
        self.stdin = stdin if stdin is not None else sys.stdin
        self._sections: list[DisplaySection] | None = None

    @property
    def sections(self) -> list[DisplaySection]:
        if self._sections is None:
            text = read_piped_text(self.stdin)
            if text is None:
                text = self.xrandr.verbose()
            self._sections = parse_sections(text)
            log.debug("parsed %d display sections", len(self._sections))
        return self._sections

    def monitors(self) -> dict[str, str]:
        listing = read_piped_text(self.stdin)
        if listing is None:
            listing = self.xrandr.list_monitors()
        return parse_monitor_map(listing)

    def section(self, display: str) -> DisplaySection:
        section = find_section(self.sections, display)
        if section is None:
            raise DisplayLookupError(f"display not found: {display}")
        return section

    def edid_hex(self, display: str) -> str:
        edid = extract_edid_hex(self.section(display).lines)
        if edid is None:
            raise DisplayLookupError(f"edid data not available for display: {display}")
        return edid

    def decode_edid(self, edid: str) -> str:
        return self.decoder.decode(hex_to_bytes(edid))

    def _serial_or_empty(self, section: DisplaySection) -> str:
        edid = extract_edid_hex(section.lines)
        if edid is None:
            return ""
        try:
            decoded = self.decode_edid(edid)
        except (DecodeError, ValidationError) as exc:
            log.warning("skipping serial for %s: %s", section.name, exc)
            return ""
        return extract_serial(decoded) or ""

    # single display lookups

    def connected(self, display: str) -> list[str]:
        return [self.section(display).state.value]

    def section_text(self, display: str) -> list[str]:
        text = "\n".join(self.section(display).lines)
        if not text:
            raise DisplayLookupError("section is empty")
        return [text]

    def edid(self, display: str) -> list[str]:
        return [self.edid_hex(display)]

    def edid_decoded(self, display: str) -> list[str]:
        decoded = self.decode_edid(self.edid_hex(display))
        return [decoded.removesuffix("\n")]

    def serial(self, display: str) -> list[str]:
        serial = extract_serial(self.decode_edid(self.edid_hex(display)))
        if serial is None:
            raise DisplayLookupError(f"serial not found in edid for: {display}")
        return [serial]

    def connector(self, display: str) -> list[str]:
        connector = extract_connector_id(self.section(display).lines)
        if connector is None:
            raise DisplayLookupError(f"connector id not available for: {display}")
        return [connector]

    def geometry(self, display: str) -> list[str]:
        section = self.section(display)
        if not section.connected:
            raise DisplayLookupError(f"display not connected: {display}")
        if section.geometry is None:
            raise DisplayLookupError(f"geometry not available for display: {display}")
        return [section.geometry]

    def label_line(self, display: str) -> list[str]:
        line = self.section(display).label_line
        if line is None:
            raise DisplayLookupError(f"label line missing for display: {display}")
        return [line]

    def monitor(self, display: str) -> list[str]:
        index = self.monitors().get(display)
        if index is None:
            raise DisplayLookupError(f"monitor not found for display: {display}")
        return [index]

    def names(self, connected_only: bool = False) -> list[str]:
        return [s.name for s in self.sections if s.connected or not connected_only]

    # maps

    def connected_map(self, flags: MapFlags) -> list[str]:
        return MapFormatter(flags).render((s.name, s.state.value) for s in self.sections)

    def section_map(self, flags: MapFlags) -> list[str]:
        return MapFormatter(flags).render(
            (s.name, escape_multiline("\n".join(s.lines))) for s in self.sections
        )

    def serial_map(self, flags: MapFlags) -> list[str]:
        return MapFormatter(flags).render((s.name, self._serial_or_empty(s)) for s in self.sections)

    def connector_map(self, flags: MapFlags) -> list[str]:
        return MapFormatter(flags).render(
            (s.name, extract_connector_id(s.lines) or "") for s in self.sections
        )

    def geometry_map(self, flags: MapFlags) -> list[str]:
        pairs = []
        for s in self.sections:
            # disconnected outputs and outputs without a mode have no geometry
            if not s.connected or s.geometry is None:
                continue
            pairs.append((s.name, f"primary,{s.geometry}" if s.primary else s.geometry))
        return MapFormatter(flags).render(pairs)

    def monitor_map(self, flags: MapFlags) -> list[str]:
        return MapFormatter(flags).render(self.monitors().items())

    # reconfiguration

    def single_output(self, keep: str) -> list[str]:
        self.section(keep)
        args = ["--output", keep, "--primary", "--auto"]
        args += off_args(display_names(self.sections, exclude={keep}))
        self.xrandr.configure(args)
        return []

    def dual_output(self, left: str, right: str) -> list[str]:
        if left == right:
            raise ValidationError("left and right displays must be different")
        self.section(left)
        self.section(right)
        args = [
            "--output", left, "--primary", "--auto",
            "--output", right, "--auto", "--right-of", left,
        ]
        args += off_args(display_names(self.sections, exclude={left, right}))
        self.xrandr.configure(args)
        return []
