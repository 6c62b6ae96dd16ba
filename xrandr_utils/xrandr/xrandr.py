import logging
import subprocess
from typing import TextIO

from ..config import CONFIG
from ..errors import DecodeError, InputError, ReconfigureError, XrandrUtilsError

log = logging.getLogger(__name__)


def _run(
    cmd: list[str],
    error_cls: type[XrandrUtilsError],
    input: bytes | None = None,
    timeout: float | None = None,
) -> bytes:
    log.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, input=input, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        log.error("%s timed out after %ss", cmd[0], timeout)
        raise error_cls(f"{cmd[0]} timed out after {timeout}s") from exc
    except OSError as exc:
        log.error("could not start %s: %s", cmd[0], exc)
        raise error_cls(f"failed to run {' '.join(cmd)}: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        if stderr:
            log.error("%s stderr: %s", cmd[0], stderr)
        raise error_cls(f"{' '.join(cmd)} exited with status {result.returncode}")
    return result.stdout


def read_piped_text(stream: TextIO | None) -> str | None:
    """Return everything piped on ``stream``, or None when it is a terminal.

    A detached process has no stdin at all; that also counts as no input.
    Bytes are decoded like xrandr's own output, so bad UTF-8 is replaced.
    """
    if stream is None or stream.isatty():
        return None
    try:
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            text = buffer.read().decode("utf-8", errors="replace")
        else:
            text = stream.read()
    except (UnicodeDecodeError, OSError) as exc:
        raise InputError(f"failed to read stdin: {exc}") from exc
    if not text.strip():
        raise InputError("stdin supplied but empty")
    log.debug("read %d characters from stdin", len(text))
    return text


class Xrandr:
    def __init__(self, path: str | None = None, timeout: float | None = None):
        self.path = path or CONFIG.xrandr_path
        self.timeout = timeout if timeout is not None else CONFIG.command_timeout_s

    def _query(self, args: list[str]) -> str:
        out = _run([self.path] + args, InputError, timeout=self.timeout)
        return out.decode("utf-8", errors="replace")

    def verbose(self) -> str:
        return self._query(["--verbose"])

    def list_monitors(self) -> str:
        return self._query(["--listmonitors"])

    def configure(self, args: list[str]) -> None:
        log.info("xrandr %s", " ".join(args))
        _run([self.path] + args, ReconfigureError, timeout=self.timeout)


class EdidDecode:
    def __init__(self, path: str | None = None, timeout: float | None = None):
        self.path = path or CONFIG.edid_decode_path
        self.timeout = timeout if timeout is not None else CONFIG.command_timeout_s

    def decode(self, edid: bytes) -> str:
        out = _run([self.path], DecodeError, input=edid, timeout=self.timeout)
        return out.decode("utf-8", errors="replace")
