import os
import sys
import select
import termios
import logging as lg
from typing import BinaryIO, Protocol, TextIO

from lc3vm.common.hwconf import EOF_CHAR


class InputSource(Protocol):
    def poll_available(self) -> bool:
        ...

    def read_char(self) -> int:
        ...


class OutputSink(Protocol):
    def putc(self, code: int):
        ...

    def puts(self, text: str):
        ...

    def flush(self):
        ...


class Keyboard:
    """ Console keyboard reading raw bytes from a file descriptor """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin

    def poll_available(self) -> bool:
        readable, _, _ = select.select([self.stream.fileno()], [], [], 0)
        return bool(readable)

    def read_char(self) -> int:
        # Bypass the text layer so select() and reads agree on what is pending
        buf = os.read(self.stream.fileno(), 1)

        if not buf:
            return EOF_CHAR

        return buf[0]


class Display:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def target(self) -> TextIO:
        # Resolved on every write so redirected stdout is honoured
        return self.stream if self.stream is not None else sys.stdout

    def raw(self) -> BinaryIO:
        # Characters are bytes, not code points; pending text goes out first
        stream = self.target()
        stream.flush()
        return stream.buffer

    def putc(self, code: int):
        self.raw().write(bytes([code & 0xFF]))

    def puts(self, text: str):
        self.raw().write(text.encode('latin-1'))

    def flush(self):
        self.target().flush()


class Console:
    """
    Puts a terminal into unbuffered, no-echo mode for the lifetime of the
    context and restores the saved attributes on the way out.
    Non-terminal streams (pipes, files) are left alone.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin
        self.saved: list | None = None

    def __enter__(self):
        if not self.stream.isatty():
            lg.debug('Input is not a terminal, keeping line discipline')
            return self

        fd = self.stream.fileno()
        self.saved = termios.tcgetattr(fd)

        raw = termios.tcgetattr(fd)
        raw[3] &= ~(termios.ICANON | termios.ECHO)    # lflag
        termios.tcsetattr(fd, termios.TCSANOW, raw)
        return self

    def __exit__(self, *exc):
        self.restore()
        return False

    def restore(self):
        if self.saved is None:
            return

        termios.tcsetattr(self.stream.fileno(), termios.TCSANOW, self.saved)
        self.saved = None
