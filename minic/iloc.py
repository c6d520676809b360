"""ARM32 instruction sequences (ILOC) and the helpers that emit them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, TextIO

from .platform import FP_REG_NO, NO_REG, SP_REG_NO, const_expr, is_disp, reg_name

LABEL_MARK = ":"


class ValueLike(Protocol):
    """What the emitter needs from an IR value.

    ``memory_addr`` is ``(base_reg_no, offset)`` for values that live in memory,
    otherwise ``None``. A value may also carry ``constant`` (an int for integer
    constants) and ``is_global`` (true for global variables).
    """

    name: str
    reg_id: int
    memory_addr: Optional[tuple[int, int]]


class FrameLike(Protocol):
    """What stack allocation needs from a function."""

    max_dep: int


def _constant_of(var: Any) -> Optional[int]:
    return getattr(var, "constant", None)


def _is_global(var: Any) -> bool:
    return bool(getattr(var, "is_global", False))


def _memory_addr(var: Any) -> tuple[int, int]:
    addr = getattr(var, "memory_addr", None)
    if addr is None:
        raise ValueError(f"value {getattr(var, 'name', var)!r} has no memory address")
    return addr


@dataclass
class ArmInst:
    """One ARM32 assembly instruction, label or comment."""

    opcode: str
    result: str = ""
    arg1: str = ""
    arg2: str = ""
    cond: str = ""
    addition: str = ""
    dead: bool = False

    def replace(
        self,
        opcode: str,
        result: str = "",
        arg1: str = "",
        arg2: str = "",
        cond: str = "",
        addition: str = "",
    ) -> None:
        """Overwrite the instruction's contents."""
        self.opcode = opcode
        self.result = result
        self.arg1 = arg1
        self.arg2 = arg2
        self.cond = cond
        self.addition = addition

    def set_dead(self) -> None:
        """Mark the instruction as removed."""
        self.dead = True

    @property
    def is_label(self) -> bool:
        return self.result == LABEL_MARK

    def output(self) -> str:
        """Render the instruction as assembly text; dead or empty ones render as ''."""
        if self.dead or not self.opcode:
            return ""

        text = self.opcode + self.cond
        if self.result:
            text += self.result if self.is_label else " " + self.result
        for part in (self.arg1, self.arg2, self.addition):
            if part:
                text += "," + part
        return text


class ILocArm32:
    """An ordered sequence of ARM32 instructions for one function."""

    def __init__(self, module: Any = None) -> None:
        self.module = module
        self.code: list[ArmInst] = []

    def _emit(self, *args: str) -> None:
        self.code.append(ArmInst(*args))

    def comment(self, text: str) -> None:
        """Emit an assembler comment line."""
        self._emit("@", text)

    def to_str(self, num: int, flag: bool = True) -> str:
        """Render num, prefixed with '#' as an immediate when flag is set."""
        return ("#" if flag else "") + str(num)

    def label(self, name: str) -> None:
        """Emit a label definition."""
        self._emit(name, LABEL_MARK)

    def inst(self, op: str, rs: str, arg1: str = "", arg2: str = "") -> None:
        """Emit a generic instruction with up to two source operands."""
        self._emit(op, rs, arg1, arg2)

    def load_imm(self, rs_reg_no: int, constant: int) -> None:
        """Load a 32-bit constant with movw, plus movt when the high half is set."""
        rs = reg_name(rs_reg_no)
        self._emit("movw", rs, "#:lower16:" + str(constant))
        if (constant >> 16) & 0xFFFF:
            self._emit("movt", rs, "#:upper16:" + str(constant))

    def load_symbol(self, rs_reg_no: int, name: str) -> None:
        """Load the address of a symbol."""
        rs = reg_name(rs_reg_no)
        self._emit("movw", rs, "#:lower16:" + name)
        self._emit("movt", rs, "#:upper16:" + name)

    def load_base(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        """Emit ldr rs,[base,#offset], going through rs when the offset is too large."""
        rs = reg_name(rs_reg_no)
        base = reg_name(base_reg_no)
        if is_disp(offset):
            if offset:
                base += "," + self.to_str(offset)
        else:
            self.load_imm(rs_reg_no, offset)
            base += "," + rs
        self._emit("ldr", rs, "[" + base + "]")

    def store_base(self, src_reg_no: int, base_reg_no: int, disp: int, tmp_reg_no: int) -> None:
        """Emit str src,[base,#disp], using tmp for a displacement that does not fit."""
        base = reg_name(base_reg_no)
        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(tmp_reg_no, disp)
            base += "," + reg_name(tmp_reg_no)
        self._emit("str", reg_name(src_reg_no), "[" + base + "]")

    def mov_reg(self, rs_reg_no: int, src_reg_no: int) -> None:
        """Emit a register-to-register move."""
        self._emit("mov", reg_name(rs_reg_no), reg_name(src_reg_no))

    def load_var(self, rs_reg_no: int, src_var: ValueLike) -> None:
        """Bring the value of src_var into register rs."""
        constant = _constant_of(src_var)
        if constant is not None:
            self.load_imm(rs_reg_no, constant)
        elif src_var.reg_id != NO_REG:
            if src_var.reg_id != rs_reg_no:
                self._emit("mov", reg_name(rs_reg_no), reg_name(src_var.reg_id))
        elif _is_global(src_var):
            self.load_symbol(rs_reg_no, src_var.name)
            rs = reg_name(rs_reg_no)
            self._emit("ldr", rs, "[" + rs + "]")
        else:
            base_reg_no, offset = _memory_addr(src_var)
            self.load_base(rs_reg_no, base_reg_no, offset)

    def lea_var(self, rs_reg_no: int, var: ValueLike) -> None:
        """Load the stack address of var into register rs."""
        base_reg_no, offset = _memory_addr(var)
        self.lea_stack(rs_reg_no, base_reg_no, offset)

    def store_var(self, src_reg_no: int, dest_var: ValueLike, tmp_reg_no: int) -> None:
        """Store register src into dest_var, using tmp for addresses when needed."""
        if dest_var.reg_id != NO_REG:
            if src_reg_no != dest_var.reg_id:
                self._emit("mov", reg_name(dest_var.reg_id), reg_name(src_reg_no))
        elif _is_global(dest_var):
            self.load_symbol(tmp_reg_no, dest_var.name)
            self._emit("str", reg_name(src_reg_no), "[" + reg_name(tmp_reg_no) + "]")
        else:
            base_reg_no, offset = _memory_addr(dest_var)
            self.store_base(src_reg_no, base_reg_no, offset, tmp_reg_no)

    def lea_stack(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        """Compute base+offset into register rs."""
        rs = reg_name(rs_reg_no)
        base = reg_name(base_reg_no)
        if const_expr(offset):
            self._emit("add", rs, base, self.to_str(offset))
        else:
            self.load_imm(rs_reg_no, offset)
            self._emit("add", rs, base, rs)

    def alloc_stack(self, func: FrameLike, tmp_reg_no: int) -> None:
        """Set up fp and reserve the function's stack frame."""
        off = func.max_dep
        if off == 0:
            return

        self.mov_reg(FP_REG_NO, SP_REG_NO)
        if const_expr(off):
            self._emit("sub", "sp", "sp", self.to_str(off))
        else:
            self.load_imm(tmp_reg_no, off)
            self._emit("sub", "sp", "sp", reg_name(tmp_reg_no))

    def call_fun(self, name: str) -> None:
        """Emit a call; the result comes back in r0."""
        self._emit("bl", name)

    def nop(self) -> None:
        """Emit an empty placeholder instruction."""
        self._emit("")

    def jump(self, label: str) -> None:
        """Emit an unconditional branch."""
        self._emit("b", label)

    def output(self, file: TextIO, output_empty: bool = False) -> None:
        """Write the sequence as assembly; labels are not indented."""
        for arm in self.code:
            text = arm.output()
            if arm.is_label:
                file.write(text + "\n")
            elif text:
                file.write("\t" + text + "\n")
            elif output_empty:
                file.write("\n")

    def delete_unused_label(self) -> None:
        """Mark labels that no live branch targets as dead."""
        labels = [
            arm
            for arm in self.code
            if not arm.dead and arm.opcode.startswith(".") and arm.is_label
        ]
        for label_arm in labels:
            used = any(
                not arm.dead and arm.opcode.startswith("b") and arm.result == label_arm.opcode
                for arm in self.code
            )
            if not used:
                label_arm.set_dead()