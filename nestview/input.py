"""Low-level terminal input decoding and command mapping.

Reads raw bytes from stdin and translates them into normalized key tokens,
then maps tokens onto the browser's navigation commands.
"""

from __future__ import annotations

import enum
import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []


class Command(enum.Enum):
    UP = "up"
    DOWN = "down"
    INTO = "into"
    OUT = "out"
    QUIT = "quit"
    SELECT = "select"
    CYCLE_THEME = "cycle_theme"


_KEY_COMMANDS: dict[str, Command] = {
    "UP": Command.UP,
    "k": Command.UP,
    "DOWN": Command.DOWN,
    "j": Command.DOWN,
    "RIGHT": Command.INTO,
    "l": Command.INTO,
    "LEFT": Command.OUT,
    "h": Command.OUT,
    "BACKSPACE": Command.OUT,
    "ENTER": Command.SELECT,
    "q": Command.QUIT,
    "ESC": Command.QUIT,
    "CTRL_C": Command.QUIT,
    "EOF": Command.QUIT,
    "t": Command.CYCLE_THEME,
}


def command_for_key(key: str) -> Command | None:
    return _KEY_COMMANDS.get(key)


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token.

    Returns ``""`` when ``timeout_ms`` elapses and ``"EOF"`` once input has
    ended.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            # A readable descriptor with no data is end of input (hangup).
            return "EOF"

    if ch == b"\x03":
        return "CTRL_C"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch in {b"\r", b"\n"}:
        return "ENTER"

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    return "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Command",
    "command_for_key",
    "read_key",
]
