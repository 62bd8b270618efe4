import pytest

from lc3vm.common.ops import Flag
from lc3vm.common.hwconf import PC_START
from lc3vm.runtime.registers import Registers


def test_initial_state():
    r = Registers()

    assert r.pc == PC_START
    assert r.cond == Flag(0)
    assert r.gp == [0] * 8


@pytest.mark.parametrize('value, flag', [
    (0, Flag.ZRO),
    (1, Flag.POS),
    (0x7FFF, Flag.POS),
    (0x8000, Flag.NEG),
    (0xFFFF, Flag.NEG),
    (0x10000, Flag.ZRO),
])
def test_update_flags(value, flag):
    r = Registers()

    r.set(3, value)
    r.update_flags(3)

    assert r.cond == flag


def test_exactly_one_flag():
    r = Registers()

    for value in range(0, 0x10000, 0x101):
        r.set(0, value)
        r.update_flags(0)

        assert r.cond in (Flag.POS, Flag.ZRO, Flag.NEG)


def test_pc_wraps():
    r = Registers()

    r.pc = 0xFFFF
    r.pc += 1

    assert r.pc == 0


def test_debug_dump(caplog):
    r = Registers()
    r.set(2, 0xBEEF)

    with caplog.at_level('DEBUG'):
        r.debug_dump()

    assert 'PC:3000 CC:- R0:0000 R1:0000 R2:BEEF' in caplog.text
