"""Syntax trees, DOT export, register allocation and ARM32 assembly emission for a small C subset."""

__version__ = "1.0.1"

__all__ = ["allocator", "codegen", "graph", "iloc", "platform", "syntax_tree"]