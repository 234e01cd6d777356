from __future__ import annotations

import base64
import sys
from typing import Optional, TextIO

CLEAR_SCREEN = "\x1b[2J"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h\n"
# move to row 2, column 0, then the iTerm2 inline file sequence terminated by BEL
_INLINE_IMAGE = "\x1b[2;0H\x1b]1337;File=inline=1:{payload}\a"


class TerminalDisplay:
    """Writes frames to a terminal that understands the iTerm2 inline image protocol."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def clear_screen(self) -> None:
        self._write(CLEAR_SCREEN)

    def hide_cursor(self) -> None:
        self._write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._write(SHOW_CURSOR)

    def show_image(self, png_bytes: bytes) -> None:
        self._write(inline_image_sequence(png_bytes))

    def show_status(self, tick: int) -> None:
        self._write(f"\nLoop: {tick}")

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()


def inline_image_sequence(png_bytes: bytes) -> str:
    payload = base64.b64encode(png_bytes).decode("ascii")
    return _INLINE_IMAGE.format(payload=payload)
