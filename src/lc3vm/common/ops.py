from enum import IntEnum, IntFlag


class Opcode(IntEnum):
    BR = 0x0    # if nzp & COND: PC + off9 -> PC
    ADD = 0x1   # SR1 + SR2/imm5 -> DR
    LD = 0x2    # M[PC + off9] -> DR
    ST = 0x3    # SR -> M[PC + off9]
    JSR = 0x4   # PC -> R7; PC + off11 / BaseR -> PC
    AND = 0x5   # SR1 & SR2/imm5 -> DR
    LDR = 0x6   # M[BaseR + off6] -> DR
    STR = 0x7   # SR -> M[BaseR + off6]
    RTI = 0x8   # undefined, faults
    NOT = 0x9   # ~SR -> DR
    LDI = 0xA   # M[M[PC + off9]] -> DR
    STI = 0xB   # SR -> M[M[PC + off9]]
    JMP = 0xC   # BaseR -> PC
    RES = 0xD   # reserved, faults
    LEA = 0xE   # PC + off9 -> DR
    TRAP = 0xF  # service trapvect8


class Flag(IntFlag):
    POS = 1 << 0
    ZRO = 1 << 1
    NEG = 1 << 2


# Trap vectors
TRAP_GETC = 0x20    # read a character, no echo
TRAP_OUT = 0x21     # write R0 as a character
TRAP_PUTS = 0x22    # write a string, one character per word
TRAP_IN = 0x23      # prompt, read a character and echo it
TRAP_PUTSP = 0x24   # write a string, two characters per word
TRAP_HALT = 0x25    # stop the machine
