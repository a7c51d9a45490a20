import random

import pytest

from chip8vm.cpu import CPU
from chip8vm.state import MachineState


@pytest.fixture
def state():
    return MachineState()


@pytest.fixture
def cpu(state):
    return CPU(state=state, rng=random.Random(1234))


@pytest.fixture
def load_words(cpu):
    """Place big-endian op-codes at the start of the program area."""
    def _load(*words):
        data = bytearray()
        for word in words:
            data += word.to_bytes(2, 'big')
        cpu.load_program(data)
    return _load
