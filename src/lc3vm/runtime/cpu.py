from lc3vm.common.ops import Opcode
from lc3vm.common.hwconf import RET_REG, WORD_MASK
from lc3vm.runtime.memory import Memory
from lc3vm.runtime.registers import Registers
from lc3vm.runtime.peripheral import InputSource, OutputSink
import lc3vm.runtime.traps as traps


class IllegalOpcode(Exception):
    def __init__(self, opcode: Opcode, word: int, address: int):
        super().__init__(
            f'Illegal opcode {opcode.name} (0x{word:04X}) at 0x{address:04X}'
        )

        self.opcode = opcode
        self.word = word
        self.address = address


def sign_extend(value: int, bit_count: int) -> int:
    value &= (1 << bit_count) - 1

    if (value >> (bit_count - 1)) & 1:
        value |= (WORD_MASK << bit_count) & WORD_MASK

    return value


# - Instruction fields - #

def dr(instruction: int) -> int:
    return (instruction >> 9) & 0x7


def sr1(instruction: int) -> int:
    return (instruction >> 6) & 0x7


def sr2(instruction: int) -> int:
    return instruction & 0x7


def imm_flag(instruction: int) -> bool:
    return bool((instruction >> 5) & 0x1)


def imm5(instruction: int) -> int:
    return sign_extend(instruction, 5)


def offset6(instruction: int) -> int:
    return sign_extend(instruction, 6)


def pc_offset9(instruction: int) -> int:
    return sign_extend(instruction, 9)


def pc_offset11(instruction: int) -> int:
    return sign_extend(instruction, 11)


def trapvect8(instruction: int) -> int:
    return instruction & 0xFF


class CPU():
    memory: Memory          # Ref. to memory
    r: Registers
    running: bool           # Cleared by the HALT trap only

    def __init__(self, memory: Memory, keyboard: InputSource, display: OutputSink):
        self.memory = memory
        self.keyboard = keyboard
        self.display = display

        self.r = Registers()
        self.running = True

    # - Helpers - #

    def debug_dump(self):
        self.r.debug_dump()

    def pc_relative(self, offset: int) -> int:
        return (self.r.pc + offset) & WORD_MASK

    def base_relative(self, instruction: int) -> int:
        return (self.r.get(sr1(instruction)) + offset6(instruction)) & WORD_MASK

    def second_operand(self, instruction: int) -> int:
        if imm_flag(instruction):
            return imm5(instruction)

        return self.r.get(sr2(instruction))

    def load_reg(self, index: int, value: int):
        self.r.set(index, value)
        self.r.update_flags(index)

    # - Operations - #

    def br(self, instruction: int):
        nzp = (instruction >> 9) & 0x7

        if nzp & self.r.cond:
            self.r.pc = self.pc_relative(pc_offset9(instruction))

    def add(self, instruction: int):
        a = self.r.get(sr1(instruction))
        b = self.second_operand(instruction)
        self.load_reg(dr(instruction), a + b)

    def ld(self, instruction: int):
        addr = self.pc_relative(pc_offset9(instruction))
        self.load_reg(dr(instruction), self.memory.read(addr))

    def st(self, instruction: int):
        addr = self.pc_relative(pc_offset9(instruction))
        self.memory.write(addr, self.r.get(dr(instruction)))

    def jsr(self, instruction: int):
        self.r.set(RET_REG, self.r.pc)

        if (instruction >> 11) & 0x1:
            self.r.pc = self.pc_relative(pc_offset11(instruction))
        else:
            self.r.pc = self.r.get(sr1(instruction))

    def band(self, instruction: int):
        a = self.r.get(sr1(instruction))
        b = self.second_operand(instruction)
        self.load_reg(dr(instruction), a & b)

    def ldr(self, instruction: int):
        addr = self.base_relative(instruction)
        self.load_reg(dr(instruction), self.memory.read(addr))

    def str_(self, instruction: int):
        addr = self.base_relative(instruction)
        self.memory.write(addr, self.r.get(dr(instruction)))

    def bnot(self, instruction: int):
        a = self.r.get(sr1(instruction))
        self.load_reg(dr(instruction), ~a)

    def ldi(self, instruction: int):
        pointer = self.memory.read(self.pc_relative(pc_offset9(instruction)))
        self.load_reg(dr(instruction), self.memory.read(pointer))

    def sti(self, instruction: int):
        pointer = self.memory.read(self.pc_relative(pc_offset9(instruction)))
        self.memory.write(pointer, self.r.get(dr(instruction)))

    def jmp(self, instruction: int):
        self.r.pc = self.r.get(sr1(instruction))

    def lea(self, instruction: int):
        self.load_reg(dr(instruction), self.pc_relative(pc_offset9(instruction)))

    def trap(self, instruction: int):
        traps.dispatch(self, trapvect8(instruction))

    def illegal(self, instruction: int):
        address = (self.r.pc - 1) & WORD_MASK
        raise IllegalOpcode(Opcode(instruction >> 12), instruction, address)

    HANDLERS = {
        Opcode.BR: br,
        Opcode.ADD: add,
        Opcode.LD: ld,
        Opcode.ST: st,
        Opcode.JSR: jsr,
        Opcode.AND: band,
        Opcode.LDR: ldr,
        Opcode.STR: str_,
        Opcode.RTI: illegal,
        Opcode.NOT: bnot,
        Opcode.LDI: ldi,
        Opcode.STI: sti,
        Opcode.JMP: jmp,
        Opcode.RES: illegal,
        Opcode.LEA: lea,
        Opcode.TRAP: trap
    }

    # -- Implementation -- #

    def fetch(self) -> int:
        instruction = self.memory.read(self.r.pc)
        self.r.pc += 1
        return instruction

    def exec_next(self):
        instruction = self.fetch()
        handler = self.HANDLERS[Opcode(instruction >> 12)]
        handler(self, instruction)


_unhandled = set(Opcode) - set(CPU.HANDLERS)

if _unhandled:
    raise RuntimeError(f'Opcodes without a handler: {sorted(_unhandled)}')
