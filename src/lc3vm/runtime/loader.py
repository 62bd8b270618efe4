import struct
import logging as lg
from pathlib import Path

from lc3vm.common.hwconf import MEMORY_SIZE
from lc3vm.runtime.memory import Memory


class ImageError(Exception):
    pass


def image_words(data: bytes) -> list[int]:
    count = len(data) // 2
    return list(struct.unpack(f'>{count}H', data[:count * 2]))


def load_image(memory: Memory, data: bytes) -> int:
    """
    Places a program image into memory. The first big-endian word of the
    image is the origin, the rest are stored consecutively from there on.
    Returns the origin.
    """

    if len(data) < 2:
        raise ImageError(f'Image is {len(data)} bytes long, no origin word')

    if len(data) % 2:
        lg.warning('Image has an odd trailing byte, ignoring it')

    (origin, *words) = image_words(data)
    stored = memory.load(origin, words)

    if stored < len(words):
        lg.warning(f'{len(words) - stored} words past 0x{MEMORY_SIZE - 1:04X} dropped')

    lg.info(f'Loaded {stored} words at 0x{origin:04X}')
    return origin


def load_image_file(memory: Memory, path: Path) -> int:
    lg.debug(f'Reading image {path}')

    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageError(f'Failed to load image {path}: {e.strerror}') from e

    return load_image(memory, data)
