"""A naive register allocator that spills the oldest holder when registers run out."""

from __future__ import annotations

from typing import Optional, Protocol

from .platform import MAX_USABLE_REG_NUM, NO_REG


class LoadRegHolder(Protocol):
    """Anything that can be given a load register."""

    load_reg_id: int


class SimpleRegisterAllocator:
    """Hands out registers r0-r10 to values, evicting the earliest holder on exhaustion."""

    def __init__(self) -> None:
        self._busy: set[int] = set()
        self._used: set[int] = set()
        self._holders: list[LoadRegHolder] = []

    @staticmethod
    def _check(no: int) -> None:
        if not 0 <= no < MAX_USABLE_REG_NUM:
            raise ValueError(f"register {no} is not allocatable")

    def _mark(self, no: int) -> None:
        self._busy.add(no)
        self._used.add(no)

    def _take_holder(self, predicate) -> Optional[LoadRegHolder]:
        for index, holder in enumerate(self._holders):
            if predicate(holder):
                return self._holders.pop(index)
        return None

    def allocate(self, var: Optional[LoadRegHolder] = None, no: int = NO_REG) -> int:
        """Give var a register, preferring no; spill the oldest holder if none is free."""
        if var is not None and var.load_reg_id != NO_REG:
            return var.load_reg_id

        if no != NO_REG:
            self._check(no)

        if no != NO_REG and no not in self._busy:
            regno = no
        else:
            regno = next(
                (k for k in range(MAX_USABLE_REG_NUM) if k not in self._busy),
                NO_REG,
            )

        if regno != NO_REG:
            self._mark(regno)
        else:
            if not self._holders:
                raise RuntimeError("no register is free and none can be spilled")
            oldest = self._holders.pop(0)
            regno = oldest.load_reg_id
            oldest.load_reg_id = NO_REG

        if var is not None:
            var.load_reg_id = regno
            self._holders.append(var)

        return regno

    def allocate_reg(self, no: int) -> None:
        """Force register no to be taken, evicting any value that holds it."""
        self._check(no)
        if no in self._busy:
            self.free_reg(no)
        self._mark(no)

    def free(self, var: Optional[LoadRegHolder]) -> None:
        """Release the load register held by var."""
        if var is None or var.load_reg_id == NO_REG:
            return
        self._busy.discard(var.load_reg_id)
        self._take_holder(lambda holder: holder is var)
        var.load_reg_id = NO_REG

    def free_reg(self, no: int) -> None:
        """Release register no and detach the value holding it, if any."""
        if no == NO_REG:
            return
        self._check(no)
        self._busy.discard(no)
        holder = self._take_holder(lambda h: h.load_reg_id == no)
        if holder is not None:
            holder.load_reg_id = NO_REG

    def is_busy(self, no: int) -> bool:
        """True if register no is currently taken."""
        self._check(no)
        return no in self._busy

    def was_used(self, no: int) -> bool:
        """True if register no has ever been taken."""
        self._check(no)
        return no in self._used