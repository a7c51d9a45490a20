import numpy as np

from chip8vm.buzzer import SOUND_AMPLITUDE, Buzzer, square_wave


def test_square_wave_is_one_second_of_two_levels():
    wave = square_wave(frequency=8000, tone=400)
    assert wave.dtype == np.int16
    assert len(wave) == 8000
    assert set(np.unique(wave)) == {-SOUND_AMPLITUDE, SOUND_AMPLITUDE}
    # 20 samples per period, high for the first half
    assert (wave[:10] == SOUND_AMPLITUDE).all()
    assert (wave[10:20] == -SOUND_AMPLITUDE).all()


class FakeSound(object):
    def __init__(self):
        self.calls = []

    def play(self, loops):
        self.calls.append(('play', loops))

    def stop(self):
        self.calls.append(('stop',))


def test_buzzer_only_toggles_on_changes():
    buzzer = Buzzer()
    buzzer.sound_player = FakeSound()
    buzzer.update(True)
    buzzer.update(True)
    buzzer.update(False)
    buzzer.update(False)
    assert buzzer.sound_player.calls == [('play', -1), ('stop',)]
