from typing import TYPE_CHECKING, Callable, Iterator

import lc3vm.common.ops as ops
from lc3vm.common.hwconf import MEMORY_SIZE, WORD_MASK

if TYPE_CHECKING:
    from lc3vm.runtime.cpu import CPU
    from lc3vm.runtime.memory import Memory


IN_PROMPT = 'Enter a character: '
HALT_NOTICE = 'Halting execution\n'


def string_cells(memory: 'Memory', start: int) -> Iterator[int]:
    """ Yields cells from start up to, not including, the first zero cell """
    for i in range(MEMORY_SIZE):
        cell = memory.peek((start + i) & WORD_MASK)

        if cell == 0:
            return

        yield cell


def getc(proc: 'CPU'):
    proc.r.set(0, proc.keyboard.read_char())


def out(proc: 'CPU'):
    proc.display.putc(proc.r.get(0))
    proc.display.flush()


def puts(proc: 'CPU'):
    for cell in string_cells(proc.memory, proc.r.get(0)):
        proc.display.putc(cell)

    proc.display.flush()


def in_(proc: 'CPU'):
    proc.display.puts(IN_PROMPT)
    proc.display.flush()

    getc(proc)
    proc.display.putc(proc.r.get(0))
    proc.display.flush()


def putsp(proc: 'CPU'):
    for cell in string_cells(proc.memory, proc.r.get(0)):
        proc.display.putc(cell & 0xFF)

        high = cell >> 8

        if high:
            proc.display.putc(high)

    proc.display.flush()


def halt(proc: 'CPU'):
    proc.display.puts(HALT_NOTICE)
    proc.display.flush()
    proc.running = False


ROUTINES: dict[int, Callable[['CPU'], None]] = {
    ops.TRAP_GETC: getc,
    ops.TRAP_OUT: out,
    ops.TRAP_PUTS: puts,
    ops.TRAP_IN: in_,
    ops.TRAP_PUTSP: putsp,
    ops.TRAP_HALT: halt
}


def dispatch(proc: 'CPU', vector: int):
    routine = ROUTINES.get(vector)

    # Unknown vectors are ignored, as the reference machine does
    if routine is not None:
        routine(proc)
