import pytest

from lc3vm.runtime.memory import Memory
from lc3vm.runtime.loader import ImageError, load_image, load_image_file

from unit_utils import ScriptedKeyboard, image


@pytest.fixture
def memory():
    yield Memory(ScriptedKeyboard())


def test_big_endian_words(memory):
    origin = load_image(memory, bytes([0x30, 0x00, 0x12, 0x34, 0xAB, 0xCD]))

    assert origin == 0x3000
    assert memory.peek(0x3000) == 0x1234
    assert memory.peek(0x3001) == 0xABCD
    assert memory.peek(0x2FFF) == 0
    assert memory.peek(0x3002) == 0


def test_origin_only(memory):
    assert load_image(memory, bytes([0x40, 0x00])) == 0x4000
    assert memory.cells == [0] * len(memory.cells)


def test_odd_trailing_byte(memory):
    load_image(memory, bytes([0x30, 0x00, 0x00, 0x05, 0x07]))

    assert memory.peek(0x3000) == 5
    assert memory.peek(0x3001) == 0


@pytest.mark.parametrize('data', [b'', b'\x30'])
def test_missing_origin(memory, data):
    with pytest.raises(ImageError):
        load_image(memory, data)


def test_words_past_top_are_dropped(memory):
    load_image(memory, image([1, 2, 3], origin=0xFFFE))

    assert memory.peek(0xFFFE) == 1
    assert memory.peek(0xFFFF) == 2
    assert memory.peek(0) == 0


def test_later_images_overlay(memory):
    load_image(memory, image([1, 2, 3]))
    load_image(memory, image([9], origin=0x3001))

    assert [memory.peek(a) for a in range(0x3000, 0x3003)] == [1, 9, 3]


def test_load_file(memory, tmp_path):
    path = tmp_path / 'prog.obj'
    path.write_bytes(image([0x1234], origin=0x5000))

    assert load_image_file(memory, path) == 0x5000
    assert memory.peek(0x5000) == 0x1234


def test_load_missing_file(memory, tmp_path):
    path = tmp_path / 'missing.obj'

    with pytest.raises(ImageError, match='missing.obj'):
        load_image_file(memory, path)
