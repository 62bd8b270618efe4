from typing import Iterable

from lc3vm.common.hwconf import MEMORY_SIZE, WORD_MASK, KBSR, KBDR, KBSR_READY
from lc3vm.runtime.peripheral import InputSource


class Memory:
    """
    Flat 16-bit word memory. The keyboard status register is refreshed from
    the input source whenever it is read, which also latches the pending
    character into the keyboard data register.
    """

    cells: list[int]

    def __init__(self, keyboard: InputSource):
        self.keyboard = keyboard
        self.cells = [0] * MEMORY_SIZE

    def poll_keyboard(self):
        if self.keyboard.poll_available():
            self.cells[KBSR] = KBSR_READY
            self.cells[KBDR] = self.keyboard.read_char() & WORD_MASK
        else:
            self.cells[KBSR] = 0

    def read(self, address: int) -> int:
        address &= WORD_MASK

        if address == KBSR:
            self.poll_keyboard()

        return self.cells[address]

    def write(self, address: int, value: int):
        self.cells[address & WORD_MASK] = value & WORD_MASK

    def peek(self, address: int) -> int:
        return self.cells[address & WORD_MASK]

    def load(self, origin: int, words: Iterable[int]) -> int:
        count = 0

        for address, word in enumerate(words, start=origin):
            if address >= MEMORY_SIZE:
                break

            self.cells[address] = word & WORD_MASK
            count += 1

        return count
