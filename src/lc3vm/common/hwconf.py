MEMORY_SIZE = 0x10000      # 16-bit address space, every address is valid
WORD_MASK = 0xFFFF
WORD_BITS = 16

GP_REGS = 8
RET_REG = 7                # JSR stores the return address here

PC_START = 0x3000          # Conventional user program origin

# Memory mapped registers
KBSR = 0xFE00              # Keyboard status, bit 15 set when a key is pending
KBDR = 0xFE02              # Keyboard data, last character read
KBSR_READY = 1 << 15

EOF_CHAR = 0xFFFF          # What a 16-bit register sees of EOF
