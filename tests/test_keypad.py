from types import SimpleNamespace

import pygame

from chip8vm.keypad import KEY_MAPPINGS, Keypad


def test_keydown_and_keyup_update_key_vector(cpu):
    keypad = Keypad()
    down = SimpleNamespace(type=pygame.KEYDOWN, key=KEY_MAPPINGS[0xA])
    up = SimpleNamespace(type=pygame.KEYUP, key=KEY_MAPPINGS[0xA])

    assert keypad.handle_event(down, cpu)
    assert cpu.cpu_state.keys[0xA]
    assert keypad.handle_event(up, cpu)
    assert not cpu.cpu_state.keys[0xA]


def test_unmapped_keys_and_other_events_are_ignored(state):
    keypad = Keypad()
    assert not keypad.handle_event(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_z), state)
    assert not keypad.handle_event(SimpleNamespace(type=pygame.QUIT), state)
    assert state.keys == [False] * 16


def test_keypad_press_completes_key_wait(cpu):
    keypad = Keypad({0x5: pygame.K_SPACE})
    cpu.execute(0xF20A)
    keypad.handle_event(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_SPACE), cpu)
    assert cpu.step() == 0xF20A
    assert cpu.cpu_registers['v'][2] == 0x5
