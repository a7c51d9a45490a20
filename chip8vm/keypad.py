import logging

import pygame

logger = logging.getLogger(__name__)

# Sets which keys on the keyboard map to the Chip 8 keys
KEY_MAPPINGS = {
    0x0: pygame.K_KP0,
    0x1: pygame.K_KP1,
    0x2: pygame.K_KP2,
    0x3: pygame.K_KP3,
    0x4: pygame.K_KP4,
    0x5: pygame.K_KP5,
    0x6: pygame.K_KP6,
    0x7: pygame.K_KP7,
    0x8: pygame.K_KP8,
    0x9: pygame.K_KP9,
    0xA: pygame.K_a,
    0xB: pygame.K_b,
    0xC: pygame.K_c,
    0xD: pygame.K_d,
    0xE: pygame.K_e,
    0xF: pygame.K_f,
}


class Keypad(object):
    """
    Translates pygame keyboard events into Chip 8 key state.
    """
    def __init__(self, key_mappings=None):
        mappings = key_mappings if key_mappings is not None else KEY_MAPPINGS
        self.key_lookup = {pygame_key: chip8_key for chip8_key, pygame_key in mappings.items()}

    def handle_event(self, event, state):
        """
        Update the machine's key vector from a KEYDOWN or KEYUP event. Other
        events and unmapped keys are ignored.

        :param event: the pygame event
        :param state: the MachineState (or CPU) to forward the key to
        :return: True if the event changed a Chip 8 key
        """
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return False
        chip8_key = self.key_lookup.get(event.key)
        if chip8_key is None:
            return False
        pressed = event.type == pygame.KEYDOWN
        state.set_key(chip8_key, pressed)
        logger.debug("Key state changed. Key: %X, Pressed: %s.", chip8_key, pressed)
        return True
