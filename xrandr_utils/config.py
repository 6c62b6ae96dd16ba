import os
from dataclasses import dataclass


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(frozen=True)
class AppConfig:
    xrandr_path: str = os.getenv("XRANDR_PATH", "xrandr")
    edid_decode_path: str = os.getenv("EDID_DECODE_PATH", "edid-decode")
    command_timeout_s: float | None = _optional_float("XRANDR_UTILS_TIMEOUT")

    log_level: str = os.getenv("XRANDR_UTILS_LOG_LEVEL", "WARNING")


CONFIG = AppConfig()
