import logging
import random

from chip8vm.addresses import (
    BYTE_MASK, FLAG_REGISTER, MAX_MEMORY, N_MASK, NN_MASK, NNN_MASK,
    OPERATION_MASK, SCREEN_HEIGHT, SCREEN_WIDTH, WORD_MASK, X_MASK, Y_MASK,
)
from chip8vm.config import DEFAULT_QUIRKS
from chip8vm.exception import (
    InvalidOpCodeException, OutOfBoundsException, StackOverflowException,
)
from chip8vm.font import font_address
from chip8vm.state import MachineState

logger = logging.getLogger(__name__)

# The highest address an Fx1E result may reach before the overflow quirk
# reports a carry in VF
INDEX_OVERFLOW_LIMIT = 0x0FFF

# C L A S S E S ###############################################################


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    The CPU owns a MachineState and advances it by exactly one instruction
    per call to step(). Timers are decremented separately by tick(), which
    the host calls at its own fixed rate (normally 60 times per second).

    ** VF is a special register - it is used to store the overflow bit
    """
    def __init__(self, state=None, quirks=None, rng=None):
        """
        Initialize the Chip8 CPU.

        :param state: the MachineState to run against (a fresh one if None)
        :param quirks: the Quirks to interpret ambiguous opcodes with
        :param rng: a random.Random used by Cxnn
        """
        self.cpu_state = state if state is not None else MachineState()
        self.cpu_quirks = quirks if quirks is not None else DEFAULT_QUIRKS
        self.cpu_random = rng if rng is not None else random.Random()

        # The operation_lookup table is executed according to the most
        # significant nibble of the operand (e.g. operand 8nnn would call
        # self.cpu_execute_logical_instruction)
        self.cpu_operation_lookup = {
            0x0: self.cpu_clear_return,                  # 00E0, 00EE, 0000
            0x1: self.cpu_jump_to_address,               # 1nnn - JUMP nnn
            0x2: self.cpu_jump_to_subroutine,            # 2nnn - CALL nnn
            0x3: self.cpu_skip_if_reg_equal_val,         # 3snn - SKE  Vs, nn
            0x4: self.cpu_skip_if_reg_not_equal_val,     # 4snn - SKNE Vs, nn
            0x5: self.cpu_skip_if_reg_equal_reg,         # 5st0 - SKE  Vs, Vt
            0x6: self.cpu_move_value_to_reg,             # 6snn - LOAD Vs, nn
            0x7: self.cpu_add_value_to_reg,              # 7snn - ADD  Vs, nn
            0x8: self.cpu_execute_logical_instruction,   # see subfunctions below
            0x9: self.cpu_skip_if_reg_not_equal_reg,     # 9st0 - SKNE Vs, Vt
            0xA: self.cpu_load_index_reg_with_value,     # Annn - LOAD I, nnn
            0xB: self.cpu_jump_to_register_plus_value,   # Bnnn - JUMP V0 + nnn
            0xC: self.cpu_generate_random_number,        # Ctnn - RAND Vt, nn
            0xD: self.cpu_draw_sprite,                   # Dstn - DRAW Vs, Vt, n
            0xE: self.cpu_keyboard_routines,             # see subfunctions below
            0xF: self.cpu_misc_routines,                 # see subfunctions below
        }

        # Opcodes starting with 0 are matched on the whole operand
        self.cpu_system_operation_lookup = {
            0x0000: self.cpu_no_operation,               # 0000 - NOP
            0x00E0: self.cpu_clear_screen,               # 00E0 - CLS
            0x00EE: self.cpu_return_from_subroutine,     # 00EE - RTS
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with 8 (e.g. operand 8nn0 would call
        # self.cpu_move_reg_into_reg)
        self.cpu_logical_operation_lookup = {
            0x0: self.cpu_move_reg_into_reg,             # 8st0 - LOAD Vs, Vt
            0x1: self.cpu_logical_or,                    # 8st1 - OR   Vs, Vt
            0x2: self.cpu_logical_and,                   # 8st2 - AND  Vs, Vt
            0x3: self.cpu_exclusive_or,                  # 8st3 - XOR  Vs, Vt
            0x4: self.cpu_add_reg_to_reg,                # 8st4 - ADD  Vs, Vt
            0x5: self.cpu_subtract_reg_from_reg,         # 8st5 - SUB  Vs, Vt
            0x6: self.cpu_right_shift_reg,               # 8st6 - SHR  Vs
            0x7: self.cpu_subtract_reg_from_reg1,        # 8st7 - SUBN Vs, Vt
            0xE: self.cpu_left_shift_reg,                # 8stE - SHL  Vs
        }

        self.cpu_keyboard_routine_lookup = {
            0x9E: self.cpu_skip_if_key_pressed,          # Es9E - SKPR Vs
            0xA1: self.cpu_skip_if_key_not_pressed,      # EsA1 - SKUP Vs
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with F (e.g. operand Fn07 would call
        # self.cpu_move_delay_timer_into_reg)
        self.cpu_misc_routine_lookup = {
            0x07: self.cpu_move_delay_timer_into_reg,    # Ft07 - LOAD Vt, DELAY
            0x0A: self.cpu_wait_for_keypress,            # Ft0A - KEYD Vt
            0x15: self.cpu_move_reg_into_delay_timer,    # Fs15 - LOAD DELAY, Vs
            0x18: self.cpu_move_reg_into_sound_timer,    # Fs18 - LOAD SOUND, Vs
            0x1E: self.cpu_add_reg_into_index,           # Fs1E - ADD  I, Vs
            0x29: self.cpu_load_index_with_reg_sprite,   # Fs29 - LOAD I, Vs
            0x33: self.cpu_store_bcd_in_memory,          # Fs33 - BCD
            0x55: self.cpu_store_regs_in_memory,         # Fs55 - STOR [I], Vs
            0x65: self.cpu_read_regs_from_memory,        # Fs65 - LOAD Vs, [I]
        }
        self.cpu_operand = 0

    def __str__(self):
        val = 'PC: {:4X}  OP: {:4X}\n'.format(
            self.cpu_registers['pc'] - 2, self.cpu_operand)
        for index in range(0x10):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'I: {:4X}\n'.format(self.cpu_registers['index'])
        return val

    @property
    def cpu_registers(self):
        return self.cpu_state.registers

    @property
    def cpu_timers(self):
        return self.cpu_state.timers

    # Host interface ##########################################################

    def reset(self):
        self.cpu_operand = 0
        self.cpu_state.reset()

    def load_program(self, program_data):
        self.cpu_state.load_program(program_data)

    def load_rom(self, filename):
        """
        Load the ROM indicated by the filename into memory at the start of
        the program area.

        :param filename: the name of the file to load
        """
        with open(filename, 'rb') as rom_file:
            self.cpu_state.load_program(rom_file.read())
        logger.debug("Loaded ROM %s.", filename)

    def set_key(self, key_index, pressed):
        self.cpu_state.set_key(key_index, pressed)

    def pixel_grid(self):
        return self.cpu_state.pixel_grid()

    def sound_active(self):
        return self.cpu_state.sound_active()

    def step(self):
        """
        Execute the next instruction pointed to by the program counter. While
        an Fx0A instruction is waiting for a key, nothing is fetched and
        nothing changes until a key press has been latched.

        :return: the operand executed, or None while waiting for a key
        """
        if self.cpu_state.awaiting_key is not None:
            return self.cpu_complete_key_wait()
        cpu_pc = self.cpu_registers['pc']
        try:
            self.execute(self.cpu_fetch())
        except StackOverflowException:
            # A call that cannot be made leaves the program counter on the call
            self.cpu_registers['pc'] = cpu_pc
            raise
        return self.cpu_operand

    def execute(self, cpu_operator_param):
        """
        Decode and execute the given operand without fetching it from memory.
        The program counter is left as it is, apart from what the instruction
        itself does.

        :param cpu_operator_param: the 16-bit operand to execute
        """
        self.cpu_operand = cpu_operator_param
        logger.debug("Execute op-code %04X.", self.cpu_operand)
        cpu_operation = (self.cpu_operand & OPERATION_MASK) >> 12
        self.cpu_operation_lookup[cpu_operation]()

    def tick(self):
        """
        Decrement both the sound and delay timer.
        """
        if self.cpu_timers['delay'] != 0:
            self.cpu_timers['delay'] -= 1

        if self.cpu_timers['sound'] != 0:
            self.cpu_timers['sound'] -= 1

    # Fetch / decode ##########################################################

    def cpu_fetch(self):
        """
        Read the big-endian operand at the program counter and advance the
        program counter past it.
        """
        cpu_pc = self.cpu_registers['pc']
        if not 0 <= cpu_pc < MAX_MEMORY - 1:
            raise OutOfBoundsException(cpu_pc if cpu_pc >= MAX_MEMORY else cpu_pc + 1)
        cpu_operand = self.cpu_state.memory[cpu_pc] << 8
        cpu_operand |= self.cpu_state.memory[cpu_pc + 1]
        self.cpu_registers['pc'] = cpu_pc + 2
        return cpu_operand

    def cpu_invalid(self):
        raise InvalidOpCodeException(self.cpu_operand)

    def cpu_x(self):
        return (self.cpu_operand & X_MASK) >> 8

    def cpu_y(self):
        return (self.cpu_operand & Y_MASK) >> 4

    def cpu_execute_logical_instruction(self):
        """
        Execute the logical instruction based upon the current operand.
        """
        cpu_operation = self.cpu_operand & N_MASK
        self.cpu_logical_operation_lookup.get(cpu_operation, self.cpu_invalid)()

    def cpu_keyboard_routines(self):
        """
        Run the specified keyboard routine based upon the operand. These
        operations are:

            Es9E - SKPR Vs
            EsA1 - SKUP Vs

           Bits:  15-12    11-8      7-4      3-0
                  unused   source  9 or A    E or 1
        """
        cpu_operation = self.cpu_operand & NN_MASK
        self.cpu_keyboard_routine_lookup.get(cpu_operation, self.cpu_invalid)()

    def cpu_misc_routines(self):
        """
        Will execute one of the routines specified in misc_routines.
        """
        cpu_operation = self.cpu_operand & NN_MASK
        self.cpu_misc_routine_lookup.get(cpu_operation, self.cpu_invalid)()

    # 0 - system ##############################################################

    def cpu_clear_return(self):
        """
        Opcodes starting with a 0 are one of the following instructions:

            0000 - No operation
            00E0 - Clear the display
            00EE - Return from subroutine

        Any other 0nnn machine code call is not supported.
        """
        self.cpu_system_operation_lookup.get(self.cpu_operand, self.cpu_invalid)()

    def cpu_no_operation(self):
        pass

    def cpu_clear_screen(self):
        """
        00E0 - CLS

        Turns off all the pixels in the pixel grid.
        """
        for row in self.cpu_state.pixels:
            row[:] = [False] * len(row)
        self.cpu_state.draw_flag = True

    def cpu_return_from_subroutine(self):
        """
        00EE - RTS

        Return from subroutine. Pop the return address off the stack into the
        program counter.
        """
        self.cpu_registers['pc'] = self.cpu_state.pop()

    # 1 - 7 ###################################################################

    def cpu_jump_to_address(self):
        """
        1nnn - JUMP nnn

        Jump to address. The address to jump to is calculated using the bits
        taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_registers['pc'] = self.cpu_operand & NNN_MASK

    def cpu_jump_to_subroutine(self):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter on the stack. The
        subroutine to jump to is taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_state.push(self.cpu_registers['pc'])
        self.cpu_registers['pc'] = self.cpu_operand & NNN_MASK

    def cpu_skip_if_reg_equal_val(self):
        """
        3snn - SKE Vs, nn

        Skip if register contents equal to constant value. The calculation for
        the register and constant is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant

        The program counter is updated to skip the next instruction by
        advancing it by 2 bytes.
        """
        if self.cpu_registers['v'][self.cpu_x()] == (self.cpu_operand & NN_MASK):
            self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_not_equal_val(self):
        """
        4snn - SKNE Vs, nn

        Skip if register contents not equal to constant value.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant
        """
        if self.cpu_registers['v'][self.cpu_x()] != (self.cpu_operand & NN_MASK):
            self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_equal_reg(self):
        """
        5st0 - SKE Vs, Vt

        Skip if source register is equal to target register. The low nibble
        must be 0.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.cpu_operand & N_MASK:
            self.cpu_invalid()
        if self.cpu_registers['v'][self.cpu_x()] == self.cpu_registers['v'][self.cpu_y()]:
            self.cpu_registers['pc'] += 2

    def cpu_move_value_to_reg(self):
        """
        6snn - LOAD Vs, nn

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        self.cpu_registers['v'][self.cpu_x()] = self.cpu_operand & NN_MASK

    def cpu_add_value_to_reg(self):
        """
        7snn - ADD Vs, nn

        Add the constant value to the specified register, wrapping at 256.
        VF is not affected.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        cpu_target = self.cpu_x()
        temp = self.cpu_registers['v'][cpu_target] + (self.cpu_operand & NN_MASK)
        self.cpu_registers['v'][cpu_target] = temp & BYTE_MASK

    # 8 - logical / arithmetic ################################################
    #
    # Flag producing instructions compute both the result and the flag from
    # the register values read before either write. The flag is written last,
    # so VF holds the flag when VF is also the target.

    def cpu_move_reg_into_reg(self):
        """
        8st0 - LOAD Vs, Vt

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      0
        """
        self.cpu_registers['v'][self.cpu_x()] = self.cpu_registers['v'][self.cpu_y()]

    def cpu_logical_or(self):
        """
        8st1 - OR   Vs, Vt
        """
        self.cpu_registers['v'][self.cpu_x()] |= self.cpu_registers['v'][self.cpu_y()]

    def cpu_logical_and(self):
        """
        8st2 - AND  Vs, Vt
        """
        self.cpu_registers['v'][self.cpu_x()] &= self.cpu_registers['v'][self.cpu_y()]

    def cpu_exclusive_or(self):
        """
        8st3 - XOR  Vs, Vt
        """
        self.cpu_registers['v'][self.cpu_x()] ^= self.cpu_registers['v'][self.cpu_y()]

    def cpu_add_reg_to_reg(self):
        """
        8st4 - ADD  Vs, Vt

        Add the value in the source register to the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      4

        If a carry is generated, set a carry flag in register VF.
        """
        cpu_target = self.cpu_x()
        temp = self.cpu_registers['v'][cpu_target] + self.cpu_registers['v'][self.cpu_y()]
        self.cpu_registers['v'][cpu_target] = temp & BYTE_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if temp > BYTE_MASK else 0

    def cpu_subtract_reg_from_reg(self):
        """
        8st5 - SUB  Vs, Vt

        Subtract the value in the source register from the value in the target
        register, and store the result in the target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      5

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target = self.cpu_x()
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        cpu_source_reg = self.cpu_registers['v'][self.cpu_y()]
        self.cpu_registers['v'][cpu_target] = (cpu_target_reg - cpu_source_reg) & BYTE_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_target_reg >= cpu_source_reg else 0

    def cpu_right_shift_reg(self):
        """
        8st6 - SHR  Vs

        Shift the bits 1 bit to the right. Bit 0 will be shifted into register
        VF. Vs is shifted in place unless the shift_uses_vy quirk is set, in
        which case Vt is shifted into Vs.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      6
        """
        cpu_value = self.cpu_shift_source()
        self.cpu_registers['v'][self.cpu_x()] = cpu_value >> 1
        self.cpu_registers['v'][FLAG_REGISTER] = cpu_value & 0x1

    def cpu_subtract_reg_from_reg1(self):
        """
        8st7 - SUBN Vs, Vt

        Subtract the value in the target register from the value in the source
        register, and store the result in the target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      7

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target = self.cpu_x()
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        cpu_source_reg = self.cpu_registers['v'][self.cpu_y()]
        self.cpu_registers['v'][cpu_target] = (cpu_source_reg - cpu_target_reg) & BYTE_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_source_reg >= cpu_target_reg else 0

    def cpu_left_shift_reg(self):
        """
        8stE - SHL  Vs

        Shift the bits 1 bit to the left, truncating to 8 bits. Bit 7 will be
        shifted into register VF. The source follows the same quirk as SHR.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      E
        """
        cpu_value = self.cpu_shift_source()
        self.cpu_registers['v'][self.cpu_x()] = (cpu_value << 1) & BYTE_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = (cpu_value & 0x80) >> 7

    def cpu_shift_source(self):
        if self.cpu_quirks.shift_uses_vy:
            return self.cpu_registers['v'][self.cpu_y()]
        return self.cpu_registers['v'][self.cpu_x()]

    # 9 - D ###################################################################

    def cpu_skip_if_reg_not_equal_reg(self):
        """
        9st0 - SKNE Vs, Vt

        Skip if source register is not equal to target register. The low
        nibble must be 0.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.cpu_operand & N_MASK:
            self.cpu_invalid()
        if self.cpu_registers['v'][self.cpu_x()] != self.cpu_registers['v'][self.cpu_y()]:
            self.cpu_registers['pc'] += 2

    def cpu_load_index_reg_with_value(self):
        """
        Annn - LOAD I, nnn

           Bits:  15-12     11-8      7-4       3-0
                  unused   constant  constant  constant
        """
        self.cpu_registers['index'] = self.cpu_operand & NNN_MASK

    def cpu_jump_to_register_plus_value(self):
        """
        Bnnn - JUMP V0 + nnn

        Load the program counter with the address in the operand plus the
        value of register V0.

           Bits:  15-12     11-8      7-4       3-0
                  unused   address  address  address
        """
        self.cpu_registers['pc'] = (self.cpu_operand & NNN_MASK) + self.cpu_registers['v'][0]

    def cpu_generate_random_number(self):
        """
        Ctnn - RAND Vt, nn

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused    target    value    value
        """
        cpu_value = self.cpu_operand & NN_MASK
        self.cpu_registers['v'][self.cpu_x()] = cpu_value & self.cpu_random.randint(0, 255)

    def cpu_draw_sprite(self):
        """
        Dxyn - DRAW x, y, num_bytes

        Draws the sprite pointed to in the index register at the specified
        x and y coordinates. Drawing is done via an XOR routine, meaning that
        if the target pixel is already turned on, and a pixel is set to be
        turned on at that same location via the draw, then the pixel is turned
        off. The routine will wrap the pixels if they are drawn off the edge
        of the screen. Each sprite is 8 bits (1 byte) wide. The num_bytes
        parameter sets how tall the sprite is. Consecutive bytes in the memory
        pointed to by the index register make up the bytes of the sprite. Each
        bit in the sprite byte determines whether a pixel is turned on (1) or
        turned off (0). For example, assume that the index register pointed
        to the following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'. The
        x_source and y_source tell which registers contain the x and y
        coordinates for the sprite. If drawing causes any pixel to be turned
        off, then VF will be set to 1, otherwise it is set to 0.

           Bits:  15-12     11-8      7-4       3-0
                  unused    x_source  y_source  num_bytes
        """
        cpu_x_pos = self.cpu_registers['v'][self.cpu_x()]
        cpu_y_pos = self.cpu_registers['v'][self.cpu_y()]
        cpu_num_bytes = self.cpu_operand & N_MASK
        cpu_index = self.cpu_registers['index']

        # Read the whole sprite first so a bad index leaves the grid alone
        cpu_sprite = [self.cpu_state.read_memory(cpu_index + cpu_y_index)
                      for cpu_y_index in range(cpu_num_bytes)]

        cpu_pixels = self.cpu_state.pixels
        cpu_collision = 0
        for cpu_y_index, cpu_color_byte in enumerate(cpu_sprite):
            cpu_y_coord = (cpu_y_pos + cpu_y_index) % SCREEN_HEIGHT

            for cpu_x_index in range(8):
                if not cpu_color_byte & (0x80 >> cpu_x_index):
                    continue
                cpu_x_coord = (cpu_x_pos + cpu_x_index) % SCREEN_WIDTH
                if cpu_pixels[cpu_y_coord][cpu_x_coord]:
                    cpu_collision = 1
                cpu_pixels[cpu_y_coord][cpu_x_coord] = not cpu_pixels[cpu_y_coord][cpu_x_coord]

        self.cpu_registers['v'][FLAG_REGISTER] = cpu_collision
        self.cpu_state.draw_flag = True

    # E - keyboard ############################################################

    def cpu_skip_if_key_pressed(self):
        """
        Es9E - SKPR Vs

        Skip the next instruction if the key named by the low nibble of the
        source register is pressed.
        """
        cpu_key_to_check = self.cpu_registers['v'][self.cpu_x()] & N_MASK
        if self.cpu_state.keys[cpu_key_to_check]:
            self.cpu_registers['pc'] += 2

    def cpu_skip_if_key_not_pressed(self):
        """
        EsA1 - SKUP Vs

        Skip the next instruction if the key named by the low nibble of the
        source register is NOT pressed.
        """
        cpu_key_to_check = self.cpu_registers['v'][self.cpu_x()] & N_MASK
        if not self.cpu_state.keys[cpu_key_to_check]:
            self.cpu_registers['pc'] += 2

    # F - misc ################################################################

    def cpu_move_delay_timer_into_reg(self):
        """
        Ft07 - LOAD Vt, DELAY

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         7
        """
        self.cpu_registers['v'][self.cpu_x()] = self.cpu_timers['delay']

    def cpu_wait_for_keypress(self):
        """
        Ft0A - KEYD Vt

        Stop execution until a key is pressed. Move the value of the key
        pressed into the specified register. Execution is not blocked here:
        the machine enters the awaiting-key mode and each following step()
        is a no-op until set_key() reports a fresh press.

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         A
        """
        self.cpu_state.awaiting_key = self.cpu_x()
        self.cpu_state.latched_key = None
        logger.debug("Waiting for a key press into V%X.", self.cpu_state.awaiting_key)

    def cpu_complete_key_wait(self):
        cpu_key = self.cpu_state.latched_key
        if cpu_key is None:
            return None
        cpu_target = self.cpu_state.awaiting_key
        self.cpu_registers['v'][cpu_target] = cpu_key
        self.cpu_state.awaiting_key = None
        self.cpu_state.latched_key = None
        logger.debug("Key %X stored in V%X, resuming execution.", cpu_key, cpu_target)
        self.cpu_operand = 0xF00A | (cpu_target << 8)
        return self.cpu_operand

    def cpu_move_reg_into_delay_timer(self):
        """
        Fs15 - LOAD DELAY, Vs

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         5
        """
        self.cpu_timers['delay'] = self.cpu_registers['v'][self.cpu_x()]

    def cpu_move_reg_into_sound_timer(self):
        """
        Fs18 - LOAD SOUND, Vs

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         8
        """
        self.cpu_timers['sound'] = self.cpu_registers['v'][self.cpu_x()]

    def cpu_add_reg_into_index(self):
        """
        Fs1E - ADD  I, Vs

        Add the value of the register into the index register value, wrapping
        at 16 bits. With the index_overflow_sets_vf quirk, VF reports whether
        the sum ran past 0xFFF.

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         E
        """
        temp = self.cpu_registers['index'] + self.cpu_registers['v'][self.cpu_x()]
        self.cpu_registers['index'] = temp & WORD_MASK
        if self.cpu_quirks.index_overflow_sets_vf:
            self.cpu_registers['v'][FLAG_REGISTER] = 1 if temp > INDEX_OVERFLOW_LIMIT else 0

    def cpu_load_index_with_reg_sprite(self):
        """
        Fs29 - LOAD I, Vs

        Load the index with the font sprite for the digit in the source
        register. All sprites are 5 bytes long.

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     2         9
        """
        self.cpu_registers['index'] = font_address(self.cpu_registers['v'][self.cpu_x()])

    def cpu_store_bcd_in_memory(self):
        """
        Fs33 - BCD

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> self.memory[index]
            tens       -> self.memory[index + 1]
            ones       -> self.memory[index + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> self.memory[index]
             2 -> self.memory[index + 1]
             3 -> self.memory[index + 2]

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     3         3
        """
        cpu_value = self.cpu_registers['v'][self.cpu_x()]
        cpu_digits = (cpu_value // 100, (cpu_value // 10) % 10, cpu_value % 10)
        self.cpu_write_block(cpu_digits)

    def cpu_store_regs_in_memory(self):
        """
        Fs55 - STOR [I], Vs

        Store V0 through Vs in the memory pointed to by the index register.
        The index register itself is not changed.

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     5         5
        """
        self.cpu_write_block(self.cpu_registers['v'][:self.cpu_x() + 1])

    def cpu_read_regs_from_memory(self):
        """
        Fs65 - LOAD Vs, [I]

        Read V0 through Vs from the memory pointed to by the index register.
        The index register itself is not changed.

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     6         5
        """
        cpu_index = self.cpu_registers['index']
        cpu_values = [self.cpu_state.read_memory(cpu_index + cpu_counter)
                      for cpu_counter in range(self.cpu_x() + 1)]
        self.cpu_registers['v'][:len(cpu_values)] = cpu_values

    def cpu_write_block(self, cpu_values):
        """
        Write consecutive bytes starting at the index register. Every address
        is checked before anything is written.

        :param cpu_values: the byte values to write
        """
        cpu_index = self.cpu_registers['index']
        for cpu_counter in range(len(cpu_values)):
            self.cpu_state.check_writable(cpu_index + cpu_counter)
        for cpu_counter, cpu_value in enumerate(cpu_values):
            self.cpu_state.write_memory(cpu_index + cpu_counter, cpu_value)
