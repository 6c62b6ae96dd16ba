import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Callable

from .commands import DisplayCommands
from .config import CONFIG
from .errors import UsageError, XrandrUtilsError
from .mapping import MapFlags

log = logging.getLogger(__name__)

USAGE = """\
Usage: xrandr-utils <command> [args]

Commands:
  display_connected <display>
  display_connected_map [--filtered] [--keys|--values]
  display_section <display>
  display_section_map [--filtered] [--keys|--values]
  display_edid <display>
  display_edid_decoded <display>
  display_serial <display>
  display_serial_map [--filtered] [--keys|--values]
  display_connector <display>
  display_connector_map [--filtered] [--keys|--values]
  display_names [--connected]
  display_geometry <display>
  display_geometry_map [--filtered] [--keys|--values]
  display_label_line <display>
  display_monitor <display>
  display_monitor_map [--filtered] [--keys|--values]
  single_display_output <display>
  dual_display_output <left> <right>

Topology is read from stdin when it is piped, otherwise from `xrandr --verbose`
(`xrandr --listmonitors` for the monitor commands).
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


@dataclass(frozen=True)
class Command:
    run: Callable[..., list[str]]
    positionals: tuple[str, ...] = ()
    kind: str = "lookup"


def _commands(tool: DisplayCommands) -> dict[str, Command]:
    return {
        "display_connected": Command(tool.connected, ("display",)),
        "display_connected_map": Command(tool.connected_map, kind="map"),
        "display_section": Command(tool.section_text, ("display",)),
        "display_section_map": Command(tool.section_map, kind="map"),
        "display_edid": Command(tool.edid, ("display",)),
        "display_edid_decoded": Command(tool.edid_decoded, ("display",)),
        "display_serial": Command(tool.serial, ("display",)),
        "display_serial_map": Command(tool.serial_map, kind="map"),
        "display_connector": Command(tool.connector, ("display",)),
        "display_connector_map": Command(tool.connector_map, kind="map"),
        "display_names": Command(tool.names, kind="names"),
        "display_geometry": Command(tool.geometry, ("display",)),
        "display_geometry_map": Command(tool.geometry_map, kind="map"),
        "display_label_line": Command(tool.label_line, ("display",)),
        "display_monitor": Command(tool.monitor, ("display",)),
        "display_monitor_map": Command(tool.monitor_map, kind="map"),
        "single_display_output": Command(tool.single_output, ("display",)),
        "dual_display_output": Command(tool.dual_output, ("left display", "right display")),
    }


FLAGS = {
    "map": ("--filtered", "--keys", "--values"),
    "names": ("--connected",),
}


def _build_parser(name: str, command: Command) -> _Parser:
    parser = _Parser(prog=name, add_help=False, allow_abbrev=False)
    for i, _ in enumerate(command.positionals):
        parser.add_argument(f"arg{i}", nargs="?")
    for flag in FLAGS.get(command.kind, ()):
        parser.add_argument(flag, action="store_true")
    return parser


def parse_command_args(name: str, command: Command, argv: list[str]) -> list:
    """Turn the arguments after the command name into call arguments."""
    flags = FLAGS.get(command.kind, ())
    for arg in argv:
        # exact flag names only: no "--flag=value", no "--" separator
        if arg.startswith("-") and arg not in flags:
            raise UsageError(f"unknown option: {arg}")
    ns, unknown = _build_parser(name, command).parse_known_args(argv)
    if unknown:
        raise UsageError(f"unknown option: {unknown[0]}")
    args = []
    for i, label in enumerate(command.positionals):
        value = getattr(ns, f"arg{i}")
        if value is None:
            raise UsageError(f"missing argument: {label}")
        args.append(value)
    if command.kind == "map":
        args.append(MapFlags(filtered=ns.filtered, keys=ns.keys, values=ns.values))
    elif command.kind == "names":
        args.append(ns.connected)
    return args


def run(argv: list[str], tool: DisplayCommands | None = None) -> list[str]:
    tool = tool or DisplayCommands()
    name, rest = argv[0], argv[1:]
    command = _commands(tool).get(name)
    if command is None:
        raise UsageError(f"unknown command: {name}")
    args = parse_command_args(name, command, rest)
    log.debug("dispatching %s %s", name, args)
    return command.run(*args)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=getattr(logging, CONFIG.log_level.upper(), logging.WARNING),
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    if not argv or argv[0] in ("help", "-h", "--help"):
        print(USAGE)
        return 0
    try:
        lines = run(argv)
    except XrandrUtilsError as exc:
        print(exc, file=sys.stderr)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
