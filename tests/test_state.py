"""Tests for the machine state container."""

import pytest

from chip8vm.addresses import (
    FONT_END, MAX_MEMORY, PROGRAM_COUNTER_START, SCREEN_HEIGHT, SCREEN_WIDTH,
    STACK_SIZE,
)
from chip8vm.exception import (
    OutOfBoundsException, ProgramTooLargeException, StackOverflowException,
    StackUnderflowException,
)
from chip8vm.font import FONT_SPRITES, font_address
from chip8vm.state import MachineState


def test_new_state_has_font_and_start_address(state):
    assert bytes(state.memory[:len(FONT_SPRITES)]) == FONT_SPRITES
    assert all(b == 0 for b in state.memory[len(FONT_SPRITES):])
    assert state.registers['pc'] == PROGRAM_COUNTER_START
    assert state.stack_pointer == 0
    assert state.awaiting_key is None


def test_font_table_has_sixteen_five_byte_glyphs():
    assert len(FONT_SPRITES) == 16 * 5
    assert font_address(0x0) == 0
    assert font_address(0xA) == 50
    assert font_address(0x1F) == font_address(0xF)


def test_push_pop_round_trip(state):
    state.push(0x202)
    state.push(0x300)
    assert state.stack_pointer == 2
    assert state.pop() == 0x300
    assert state.pop() == 0x202
    assert state.stack_pointer == 0


def test_push_past_capacity_overflows(state):
    for address in range(STACK_SIZE):
        state.push(address)
    with pytest.raises(StackOverflowException):
        state.push(0x400)
    assert state.stack_pointer == STACK_SIZE


def test_pop_empty_underflows(state):
    with pytest.raises(StackUnderflowException):
        state.pop()
    assert state.stack_pointer == 0


def test_memory_access_bounds(state):
    with pytest.raises(OutOfBoundsException) as info:
        state.read_memory(MAX_MEMORY)
    assert info.value.address == MAX_MEMORY
    with pytest.raises(OutOfBoundsException):
        state.write_memory(-1, 0)
    state.write_memory(MAX_MEMORY - 1, 0x1AB)
    assert state.read_memory(MAX_MEMORY - 1) == 0xAB


def test_font_region_is_write_protected(state):
    with pytest.raises(OutOfBoundsException):
        state.write_memory(0, 0xFF)
    with pytest.raises(OutOfBoundsException):
        state.write_memory(FONT_END - 1, 0xFF)
    state.write_memory(FONT_END, 0xFF)
    assert state.memory[0] == FONT_SPRITES[0]


def test_load_program_copies_bytes_verbatim(state):
    state.load_program(b'\x12\x34\x56')
    assert bytes(state.memory[0x200:0x203]) == b'\x12\x34\x56'


def test_load_program_exactly_fills_memory(state):
    size = MAX_MEMORY - PROGRAM_COUNTER_START
    state.load_program(bytes([0xAA]) * size)
    assert state.memory[MAX_MEMORY - 1] == 0xAA


def test_load_program_too_large_leaves_memory_alone(state):
    size = MAX_MEMORY - PROGRAM_COUNTER_START + 1
    with pytest.raises(ProgramTooLargeException) as info:
        state.load_program(bytes([0xAA]) * size)
    assert info.value.size == size
    assert info.value.offset == PROGRAM_COUNTER_START
    assert all(b == 0 for b in state.memory[PROGRAM_COUNTER_START:])


def test_reset_clears_everything():
    state = MachineState()
    state.load_program(bytes(range(256)) * 4)
    state.memory[0x10] = 0xEE
    state.registers['v'] = list(range(1, 17))
    state.registers['index'] = 0x345
    state.registers['pc'] = 0x400
    state.timers['delay'] = 10
    state.timers['sound'] = 20
    state.push(0x222)
    state.set_key(3, True)
    state.pixels[5][7] = True
    state.awaiting_key = 2

    state.reset()

    assert bytes(state.memory[:len(FONT_SPRITES)]) == FONT_SPRITES
    for address in range(len(FONT_SPRITES), MAX_MEMORY):
        assert state.memory[address] == 0
    assert state.registers['v'] == [0] * 16
    assert state.registers['index'] == 0
    assert state.registers['pc'] == PROGRAM_COUNTER_START
    assert state.timers == {'delay': 0, 'sound': 0}
    assert state.stack_pointer == 0
    assert state.stack == [0] * STACK_SIZE
    assert state.keys == [False] * 16
    for row in state.pixel_grid():
        assert not any(row)
    assert state.awaiting_key is None
    assert state.latched_key is None


def test_pixel_grid_is_a_snapshot(state):
    grid = state.pixel_grid()
    assert len(grid) == SCREEN_HEIGHT
    assert all(len(row) == SCREEN_WIDTH for row in grid)
    state.pixels[0][0] = True
    assert grid[0][0] is False
    assert state.pixel_grid()[0][0] is True


def test_sound_active_follows_sound_timer(state):
    assert not state.sound_active()
    state.timers['sound'] = 1
    assert state.sound_active()


def test_set_key_rejects_bad_index(state):
    with pytest.raises(ValueError):
        state.set_key(16, True)


def test_set_key_latches_only_while_awaiting(state):
    state.set_key(4, True)
    assert state.latched_key is None
    state.set_key(4, False)
    state.awaiting_key = 0
    state.set_key(7, True)
    state.set_key(9, True)
    assert state.latched_key == 7
    assert state.keys[7] and state.keys[9]
