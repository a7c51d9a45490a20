from collections import namedtuple

# Interpreter behaviours that differ between historical Chip 8 implementations.
#
#   shift_uses_vy          - 8xy6 / 8xyE shift Vy into Vx instead of shifting
#                            Vx in place
#   index_overflow_sets_vf - Fx1E sets VF when I + Vx runs past 0xFFF
Quirks = namedtuple('Quirks', ['shift_uses_vy', 'index_overflow_sets_vf'],
                    defaults=(False, False))

DEFAULT_QUIRKS = Quirks()
