from chip8vm.config import Quirks
from chip8vm.cpu import CPU
from chip8vm.exception import (
    Chip8Exception, InvalidOpCodeException, OutOfBoundsException,
    ProgramTooLargeException, StackOverflowException, StackUnderflowException,
)
from chip8vm.state import MachineState

__all__ = [
    'CPU', 'MachineState', 'Quirks', 'Chip8Exception', 'InvalidOpCodeException',
    'OutOfBoundsException', 'ProgramTooLargeException', 'StackOverflowException',
    'StackUnderflowException',
]
