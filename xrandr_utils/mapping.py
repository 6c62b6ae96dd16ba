from dataclasses import dataclass, field
from typing import Iterable

from .errors import ValidationError


@dataclass(frozen=True)
class MapFlags:
    filtered: bool = False
    keys: bool = False
    values: bool = False

    def __post_init__(self):
        if self.keys and self.values:
            raise ValidationError("--keys and --values cannot be combined")


@dataclass
class MapFormatter:
    """Renders ``key=value`` pairs for the ``*_map`` commands.

    One formatter lives for one command invocation; ``--values`` output is
    de-duplicated against everything it has emitted so far.
    """

    flags: MapFlags = field(default_factory=MapFlags)
    seen: set[str] = field(default_factory=set)

    def format(self, key: str, value: str) -> str | None:
        if (self.flags.filtered or self.flags.values) and not value.strip():
            return None
        if self.flags.keys:
            return key
        if self.flags.values:
            if value in self.seen:
                return None
            self.seen.add(value)
            return value
        return f"{key}={value}"

    def render(self, pairs: Iterable[tuple[str, str]]) -> list[str]:
        lines = []
        for key, value in pairs:
            line = self.format(key, value)
            if line is not None:
                lines.append(line)
        return lines
