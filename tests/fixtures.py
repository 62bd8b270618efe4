# type: ignore
import pytest

from lc3vm.common.hwconf import PC_START
from lc3vm.runtime.memory import Memory
from lc3vm.runtime.peripheral import Display
import lc3vm.runtime.cpu as cpu

from unit_utils import ScriptedKeyboard


@pytest.fixture
def keyboard():
    yield ScriptedKeyboard()


@pytest.fixture
def machine(keyboard):
    memory = Memory(keyboard)
    proc = cpu.CPU(memory, keyboard, Display())
    yield proc


def place(proc, words, origin=PC_START):
    proc.memory.load(origin, words)


def step(proc, count=1):
    for _ in range(count):
        proc.exec_next()
