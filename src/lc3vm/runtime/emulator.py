import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Sequence

import click

from lc3vm.runtime.memory import Memory
from lc3vm.runtime.peripheral import Keyboard, Display, Console, InputSource, OutputSink
from lc3vm.runtime.loader import ImageError, load_image, load_image_file
import lc3vm.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_LOAD_FAIL = 1
EXIT_KEYBOARD = 3
EXIT_ILLEGAL_OPCODE = 4
EXIT_EXEC_ERROR = 100


Image = bytes | Path


def boot(
    images: Sequence[Image],
    keyboard: InputSource,
    display: OutputSink
) -> cpu.CPU:
    memory = Memory(keyboard)

    for image in images:
        if isinstance(image, Path):
            load_image_file(memory, image)
        else:
            load_image(memory, image)

    return cpu.CPU(memory, keyboard, display)


def run_machine(proc: cpu.CPU, trace: bool = False):
    while proc.running:
        proc.exec_next()

        if trace:
            proc.debug_dump()


def execute(
    images: Sequence[Image],
    keyboard: InputSource | None = None,
    display: OutputSink | None = None,
    trace: bool = False
) -> cpu.CPU:
    proc = boot(
        images,
        keyboard if keyboard is not None else Keyboard(),
        display if display is not None else Display()
    )

    run_machine(proc, trace)
    return proc


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--trace', is_flag=True, help='Dumps registers after every instruction')
@click.argument('images', nargs=-1, required=True, type=Path)
def run(verbose: bool, trace: bool, images: tuple[Path, ...]):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info("LC3VM")

    console = Console(sys.stdin)

    try:
        with console:
            proc = execute(list(images), trace=trace)

        lg.info('Execution halted gracefully')
        proc.debug_dump()
        sys.exit(EXIT_HALT)

    except ImageError as e:
        lg.error(str(e))
        sys.exit(EXIT_LOAD_FAIL)

    except cpu.IllegalOpcode as e:
        lg.error(f'Execution aborted: {e}')
        sys.exit(EXIT_ILLEGAL_OPCODE)

    except KeyboardInterrupt:
        print()
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
