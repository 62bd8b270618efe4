import logging as lg

from lc3vm.common.ops import Flag
from lc3vm.common.hwconf import GP_REGS, WORD_MASK, PC_START


class Registers():
    gp: list[int]  # General purpose registers
    cond: Flag     # Condition code, empty until the first flag update

    def __init__(self):
        self._pc = PC_START
        self.cond = Flag(0)
        self.gp = [0] * GP_REGS

    @property
    def pc(self) -> int:
        return self._pc

    @pc.setter
    def pc(self, value: int):
        self._pc = value & WORD_MASK

    def get(self, index: int) -> int:
        return self.gp[index]

    def set(self, index: int, value: int):
        self.gp[index] = value & WORD_MASK

    def update_flags(self, index: int):
        value = self.gp[index]

        if value == 0:
            self.cond = Flag.ZRO
        elif value >> 15:
            self.cond = Flag.NEG
        else:
            self.cond = Flag.POS

    def cond_name(self) -> str:
        return {
            Flag.NEG: 'N',
            Flag.ZRO: 'Z',
            Flag.POS: 'P'
        }.get(self.cond, '-')

    def debug_dump(self):
        state = [f'PC:{self.pc:04X}', f'CC:{self.cond_name()}']
        state.extend([f'R{i}:{self.gp[i]:04X}' for i in range(len(self.gp))])

        lg.debug(' '.join(state))
