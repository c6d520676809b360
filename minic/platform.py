"""ARM32 platform facts: register names, immediate encodings and offsets."""

REG_NAMES = (
    "r0",   # argument / return value, caller-saved
    "r1",   # argument / high half of 64-bit results, caller-saved
    "r2",   # argument, caller-saved
    "r3",   # argument, caller-saved
    "r4",
    "r5",
    "r6",
    "r7",
    "r8",   # loads operand 1, holds expression results
    "r9",   # loads operand 2, immediates, label addresses
    "r10",  # scratch register for large immediates
    "fp",   # r11, frame pointer for local addressing
    "ip",   # r12, intra-procedure scratch
    "sp",   # r13, stack pointer
    "lr",   # r14, link register
    "pc",   # r15, program counter
)

MAX_REG_NUM = len(REG_NAMES)

# General purpose registers r0-r10 may be handed out by the allocator.
MAX_USABLE_REG_NUM = 11

TMP_REG_NO = 10
FP_REG_NO = 11
SP_REG_NO = 13
LX_REG_NO = 14

# Marker for "no register assigned".
NO_REG = -1

_MASK32 = 0xFFFFFFFF


def _rotate_left_two(value: int) -> int:
    return ((value << 2) | (value >> 30)) & _MASK32


def _is_rotated_imm8(num: int) -> bool:
    """True if the 32-bit pattern of num is an 8-bit value rotated by an even amount."""
    value = num & _MASK32
    for _ in range(16):
        if value <= 0xFF:
            return True
        value = _rotate_left_two(value)
    return False


def const_expr(num: int) -> bool:
    """True if num or -num can be encoded as an ARM data-processing immediate."""
    return _is_rotated_imm8(num) or _is_rotated_imm8(-num)


def is_disp(num: int) -> bool:
    """True if num is a valid load/store displacement."""
    return -4096 < num < 4096


def is_reg(name: str) -> bool:
    """True if name is one of the ARM32 register names."""
    return name in REG_NAMES


def reg_name(no: int) -> str:
    """Return the assembler name of register number no."""
    if not 0 <= no < MAX_REG_NUM:
        raise ValueError(f"invalid register number: {no}")
    return REG_NAMES[no]