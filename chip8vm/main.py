import argparse
import logging
import sys

import pygame

from chip8vm.buzzer import Buzzer
from chip8vm.config import Quirks
from chip8vm.cpu import CPU
from chip8vm.exception import Chip8Exception
from chip8vm.keypad import Keypad
from chip8vm.screen import Screen

logger = logging.getLogger(__name__)

# A simple timer event used for the delay and sound timers
TIMER = pygame.USEREVENT + 1
# Delay timer decrement interval (in ms)
DELAY_INTERVAL = 17


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    quirks = Quirks(shift_uses_vy=args.shift_vy,
                    index_overflow_sets_vf=args.index_overflow)
    project_cpu = CPU(quirks=quirks)
    try:
        project_cpu.load_rom(args.rom)
    except (OSError, Chip8Exception) as error:
        logger.error("Unable to load ROM %s: %s", args.rom, error)
        return 1

    pygame.init()
    project_screen = Screen(ratio=args.scale)
    project_screen.init_display()
    project_keypad = Keypad()
    project_buzzer = Buzzer()
    project_buzzer.init_sound()
    pygame.time.set_timer(TIMER, DELAY_INTERVAL)
    status = 0
    running = True

    while running:
        pygame.time.wait(args.op_delay)
        try:
            project_cpu.step()
        except Chip8Exception as error:
            logger.error("Interpreter halted: %s", error)
            logger.debug("Machine state at halt:\n%s", project_cpu)
            status = 1
            running = False

        # Check for events
        for event in pygame.event.get():
            if event.type == TIMER:
                project_cpu.tick()
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                running = False
            project_keypad.handle_event(event, project_cpu)

        if project_cpu.cpu_state.draw_flag:
            project_screen.render(project_cpu.pixel_grid())
            project_cpu.cpu_state.draw_flag = False
        project_buzzer.update(project_cpu.sound_active())

    project_buzzer.update(False)
    pygame.quit()
    return status


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator")
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", help="the scale factor to apply to the display "
                   "(default is 10)", type=int, default=10, dest="scale")
    parser.add_argument(
        "-d", help="sets the CPU operation to take at least "
                   "the specified number of milliseconds to execute (default is 1)",
        type=int, default=1, dest="op_delay")
    parser.add_argument(
        "--shift-vy", help="8xy6 and 8xyE shift Vy into Vx instead of "
                           "shifting Vx in place", action="store_true", dest="shift_vy")
    parser.add_argument(
        "--index-overflow", help="Fx1E sets VF when I runs past 0xFFF",
        action="store_true", dest="index_overflow")
    parser.add_argument(
        "-v", help="log every executed instruction", action="store_true",
        dest="verbose")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s]:  %(message)s", stream=sys.stdout)
    return screen_cpu_connector(args)


if __name__ == "__main__":
    sys.exit(main())
