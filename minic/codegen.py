"""Base classes for code generators that write their output to a file or stdout."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable, Protocol, TextIO


class FunctionLike(Protocol):
    """What the assembly generator needs from a function."""

    is_builtin: bool


class ModuleLike(Protocol):
    """What the assembly generator needs from a compilation unit."""

    functions: Iterable[Any]


class CodeGenerator(ABC):
    """Produces output for one module."""

    def __init__(self, module: Any) -> None:
        self.module = module
        self.show_linear_ir = False

    def run(self, out_file_name: str = "") -> bool:
        """Generate into the named file, or to standard output when the name is empty."""
        if out_file_name:
            with open(out_file_name, "w", encoding="utf-8") as out:
                return self.generate(out)
        return self.generate(sys.stdout)

    @abstractmethod
    def generate(self, out: TextIO) -> bool:
        """Write the generated code to out."""


class CodeGeneratorAsm(CodeGenerator):
    """Emits an assembly file: header, data section, then one text block per function."""

    def __init__(self, module: ModuleLike) -> None:
        super().__init__(module)
        # Label numbering is file-wide, not per function.
        self.label_index = 0

    def generate(self, out: TextIO) -> bool:
        self.gen_header(out)
        self.gen_data_section(out)
        self._gen_code_section(out)
        return True

    def _gen_code_section(self, out: TextIO) -> None:
        self.label_index = 0
        for func in self.module.functions:
            if not func.is_builtin:
                self.gen_function_section(out, func)

    @abstractmethod
    def gen_header(self, out: TextIO) -> None:
        """Write the assembly header."""

    @abstractmethod
    def gen_data_section(self, out: TextIO) -> None:
        """Write global variables, initialised and not."""

    @abstractmethod
    def gen_function_section(self, out: TextIO, func: FunctionLike) -> None:
        """Write the instructions of one function into the text section."""

    @abstractmethod
    def register_allocation(self, func: FunctionLike) -> None:
        """Assign registers and stack slots for func."""