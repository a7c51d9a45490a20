class Chip8Exception(Exception):
    """
    Base class for every error the interpreter raises.
    """


class OutOfBoundsException(Chip8Exception):
    """
    A class to raise memory access exceptions.
    """
    def __init__(self, address):
        self.address = address
        Chip8Exception.__init__(self, "Memory access out of bounds: {:X}".format(address))


class StackOverflowException(Chip8Exception):
    """
    A class to raise exceptions when a call would exceed the stack capacity.
    """
    def __init__(self, address):
        self.address = address
        Chip8Exception.__init__(self, "Stack overflow pushing: {:X}".format(address))


class StackUnderflowException(Chip8Exception):
    """
    A class to raise exceptions on a return without a matching call.
    """
    def __init__(self):
        Chip8Exception.__init__(self, "Stack underflow: return with empty stack")


class InvalidOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions.
    """
    def __init__(self, op_code):
        self.op_code = op_code
        Chip8Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))


class ProgramTooLargeException(Chip8Exception):
    """
    A class to raise exceptions when a program does not fit in memory.
    """
    def __init__(self, size, offset):
        self.size = size
        self.offset = offset
        Chip8Exception.__init__(
            self, "Program of {} bytes does not fit at {:X}".format(size, offset))
