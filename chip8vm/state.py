import logging

from chip8vm.addresses import (
    BYTE_MASK, FONT_END, FONT_START, MAX_MEMORY, NUM_KEYS, NUM_REGISTERS,
    PROGRAM_COUNTER_START, SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE,
)
from chip8vm.exception import (
    OutOfBoundsException, ProgramTooLargeException, StackOverflowException,
    StackUnderflowException,
)
from chip8vm.font import FONT_SPRITES

logger = logging.getLogger(__name__)


class MachineState(object):
    """
    Holds all of the architectural state of a Chip 8 machine:

        * 4096 bytes of memory, the font glyphs living at the bottom
        * 16 x 8-bit general purpose registers (V0 - VF), an index register
          (I) and the program counter (PC)
        * a 16 entry call stack and its stack pointer
        * the delay and sound timers
        * the 16 key keypad
        * the 64 x 32 monochrome pixel grid

    Only the interpreter mutates the state. Display, input and audio
    collaborators use the read-only accessors, plus set_key for input.
    """
    def __init__(self):
        self.memory = bytearray(MAX_MEMORY)
        self.registers = {
            'v': [],
            'index': 0,
            'pc': 0,
        }
        self.timers = {
            'delay': 0,
            'sound': 0,
        }
        self.stack = []
        self.stack_pointer = 0
        self.keys = []
        self.pixels = []
        self.draw_flag = False

        # When not None, holds the register an Fx0A instruction is waiting
        # to fill with the next key press
        self.awaiting_key = None
        self.latched_key = None
        self.reset()

    def reset(self):
        """
        Blank out memory, registers, stack, timers, keys and pixels, restore
        the font glyphs and point the program counter at the start of the
        program area.
        """
        self.memory[:] = bytes(MAX_MEMORY)
        self.memory[FONT_START:FONT_START + len(FONT_SPRITES)] = FONT_SPRITES
        self.registers['v'] = [0] * NUM_REGISTERS
        self.registers['index'] = 0
        self.registers['pc'] = PROGRAM_COUNTER_START
        self.timers['delay'] = 0
        self.timers['sound'] = 0
        self.stack = [0] * STACK_SIZE
        self.stack_pointer = 0
        self.keys = [False] * NUM_KEYS
        self.pixels = [[False] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)]
        self.draw_flag = True
        self.awaiting_key = None
        self.latched_key = None
        logger.debug("Machine state reset.")

    def push(self, address):
        """
        Push a return address onto the call stack.

        :param address: the address to push
        """
        if self.stack_pointer >= STACK_SIZE:
            raise StackOverflowException(address)
        self.stack[self.stack_pointer] = address
        self.stack_pointer += 1

    def pop(self):
        """
        Pop the most recently pushed return address off the call stack.

        :return: the popped address
        """
        if self.stack_pointer <= 0:
            raise StackUnderflowException()
        self.stack_pointer -= 1
        return self.stack[self.stack_pointer]

    @staticmethod
    def check_address(address):
        if not 0 <= address < MAX_MEMORY:
            raise OutOfBoundsException(address)

    @classmethod
    def check_writable(cls, address):
        cls.check_address(address)
        if FONT_START <= address < FONT_END:
            raise OutOfBoundsException(address)

    def read_memory(self, address):
        self.check_address(address)
        return self.memory[address]

    def write_memory(self, address, value):
        """
        Write a byte into memory. The font region cannot be written to by
        running programs.

        :param address: the address to write to
        :param value: the value to write, truncated to 8 bits
        """
        self.check_writable(address)
        self.memory[address] = value & BYTE_MASK

    def load_program(self, program_data, offset=PROGRAM_COUNTER_START):
        """
        Copy a program image into memory verbatim.

        :param program_data: the bytes of the program
        :param offset: the location in memory at which to load the program
        """
        program_data = bytes(program_data)
        if offset < 0 or offset + len(program_data) > MAX_MEMORY:
            raise ProgramTooLargeException(len(program_data), offset)
        self.memory[offset:offset + len(program_data)] = program_data
        logger.debug("Loaded %d bytes at %X.", len(program_data), offset)

    def set_key(self, key_index, pressed):
        """
        Record the state of a key on the keypad. A fresh press while an Fx0A
        instruction is waiting is latched for the interpreter to pick up.

        :param key_index: the key (0x0 - 0xF)
        :param pressed: True if the key is down
        """
        if not 0 <= key_index < NUM_KEYS:
            raise ValueError("Key index out of range: {}".format(key_index))
        was_pressed = self.keys[key_index]
        self.keys[key_index] = bool(pressed)
        if pressed and not was_pressed and self.awaiting_key is not None \
                and self.latched_key is None:
            self.latched_key = key_index

    def pixel_grid(self):
        """
        Returns a read-only snapshot of the pixel grid, indexed as
        grid[y][x].
        """
        return tuple(tuple(row) for row in self.pixels)

    def sound_active(self):
        return self.timers['sound'] > 0
