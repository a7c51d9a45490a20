import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SOUND_FREQUENCY = 44100
SOUND_AMPLITUDE = 4096
TONE_HZ = 440


def square_wave(frequency=SOUND_FREQUENCY, tone=TONE_HZ, amplitude=SOUND_AMPLITUDE):
    """
    Build one second of a square wave tone as 16-bit mono samples.

    :param frequency: the sample rate
    :param tone: the pitch of the tone in Hz
    :param amplitude: the peak sample value
    :return: a numpy int16 array of samples
    """
    period = frequency / tone
    samples = np.arange(frequency)
    wave = np.where((samples % period) < (period / 2), amplitude, -amplitude)
    return wave.astype(np.int16)


class Buzzer(object):
    """
    Plays a continuous tone for as long as the sound timer is active.
    """
    def __init__(self):
        self.playing = False
        self.sound_player = None

    def init_sound(self):
        pygame.mixer.init(SOUND_FREQUENCY, -16, 1)
        wave = square_wave()
        # The mixer may still open in stereo, which needs one column per channel
        channels = pygame.mixer.get_init()[2]
        if channels > 1:
            wave = np.column_stack([wave] * channels)
        self.sound_player = pygame.sndarray.make_sound(wave)

    def update(self, active):
        """
        Start or stop the tone to match the sound timer.

        :param active: True while the sound timer is above zero
        """
        if active and not self.playing:
            self.sound_player.play(-1)
            self.playing = True
            logger.debug("Starting sound.")
        elif not active and self.playing:
            self.sound_player.stop()
            self.playing = False
            logger.debug("Stopping sound.")
