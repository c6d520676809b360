import pytest

from minic.platform import (
    FP_REG_NO,
    LX_REG_NO,
    MAX_REG_NUM,
    REG_NAMES,
    SP_REG_NO,
    TMP_REG_NO,
    const_expr,
    is_disp,
    is_reg,
    reg_name,
)


@pytest.mark.parametrize("value", [0, 1, 16, 255])
def test_small_values_are_immediates(value):
    assert const_expr(value) is True


def test_large_value_needing_register_is_not_immediate():
    assert const_expr(257) is False


@pytest.mark.parametrize("base", [1, 0x7F, 0xFF, 0xA5])
@pytest.mark.parametrize("shift", range(0, 25, 2))
def test_even_rotations_of_byte_are_immediates(base, shift):
    assert const_expr(base << shift) is True


def test_odd_shift_of_full_byte_is_not_immediate():
    assert const_expr(0xFF << 1) is False


@pytest.mark.parametrize("value", [-16, 5, 257, 4096, 0x12345, -4096, 1 << 20])
def test_const_expr_symmetric_in_sign(value):
    assert const_expr(value) == const_expr(-value)


@pytest.mark.parametrize("value,expected", [(4095, True), (4096, False), (-4095, True), (-4096, False), (0, True)])
def test_is_disp_bounds(value, expected):
    assert is_disp(value) is expected


def test_every_register_name_is_recognised():
    assert all(is_reg(name) for name in REG_NAMES)


@pytest.mark.parametrize("name", ["r11", "r13", "R0", "", "x0"])
def test_non_register_names(name):
    assert is_reg(name) is False


def test_special_register_numbers():
    assert reg_name(FP_REG_NO) == "fp"
    assert reg_name(SP_REG_NO) == "sp"
    assert reg_name(LX_REG_NO) == "lr"
    assert reg_name(TMP_REG_NO) == "r10"


def test_reg_name_round_trips_with_table():
    assert [reg_name(no) for no in range(MAX_REG_NUM)] == list(REG_NAMES)


@pytest.mark.parametrize("no", [-1, MAX_REG_NUM])
def test_reg_name_rejects_out_of_range(no):
    with pytest.raises(ValueError):
        reg_name(no)