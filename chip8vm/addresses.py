# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# The built-in font glyphs live at the very bottom of memory
FONT_START = 0x000
FONT_END = 0x050

# Where the program counter should originally point, and where programs load
PROGRAM_COUNTER_START = 0x200

# The call stack holds at most this many return addresses
STACK_SIZE = 16

# The total number of registers in the Chip 8 CPU, and the flag register
NUM_REGISTERS = 0x10
FLAG_REGISTER = 0xF

# The number of keys on the hexadecimal keypad
NUM_KEYS = 0x10

# The dimensions of the pixel grid
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Operand masks. An operand is split into four nibbles:
#
#    Bits:  15-12     11-8      7-4       3-0
#           op        x         y         n
OPERATION_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
N_MASK = 0x000F
NN_MASK = 0x00FF
NNN_MASK = 0x0FFF

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF
