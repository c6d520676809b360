# minic

This package holds parts of a compiler for a small subset of C. It is written in
pure Python and has no third-party dependencies.

## Modules

- `minic.syntax_tree` defines the abstract syntax tree. It has `AstNode`, the
  `AstOperatorType` and `BasicType` enums, and the lexer attributes
  `DigitIntAttr`, `DigitRealAttr`, `VarIdAttr` and `TypeAttr`. It also has the
  helpers a parser uses to build the tree:
  - `create_contain_node`
  - `create_func_def` and `create_func_def_from_attrs`
  - `create_func_call`
  - `create_type_node` and `type_attr_to_type`
  - `create_var_decl_node`
  - `create_var_decl_stmt_node` and `create_var_decl_stmt_from_attrs`
  - `add_var_decl_node`

  `FrontEndExecutor` is an abstract base class for a front end. Its `run()`
  parses a file and sets `ast_root`.
- `minic.graph` turns a tree into a Graphviz DOT document (`ast_to_dot`) and
  gives the label shown for each node (`node_name`). `output_ast(root, path)`
  writes the DOT text to a file. The path may end in `.dot` or `.gv`, or have
  no extension at all. Any other extension, such as `.png`, raises
  `ValueError`.
- `minic.platform` holds facts about the ARM32 target:
  - `reg_name` gives a register's name and `is_reg` checks one.
  - `const_expr` tells whether a number is an encodable immediate, meaning a
    rotated 8-bit value, taken for either the number or its negation.
  - `is_disp` checks that a load/store displacement lies strictly between
    -4096 and 4096.
  - It also defines register-number constants such as `FP_REG_NO`,
    `SP_REG_NO` and `TMP_REG_NO`.
- `minic.allocator` provides `SimpleRegisterAllocator`, which hands out
  registers r0–r10:
  - `allocate(var, no)` gives `var` a register. It uses `no` if that register
    is free, and otherwise the lowest free one. When every register is taken,
    it takes the register of the oldest holder. It raises `RuntimeError` if
    there is no holder to take one from.
  - `allocate_reg(no)` forces register `no` to be taken.
  - `free(var)` and `free_reg(no)` release registers.
  - `is_busy(no)` and `was_used(no)` report a register's state.
- `minic.iloc` provides `ILocArm32`, a list of `ArmInst` instructions. Its
  helpers emit the following:
  - immediates: `load_imm`, which uses `movw` and adds `movt` when the high
    half is set
  - symbols: `load_symbol`
  - base+offset loads and stores: `load_base` and `store_base`
  - value moves: `load_var`, `store_var` and `lea_var`
  - frames: `alloc_stack`
  - control flow and comments: `call_fun`, `jump`, `label` and `comment`

  `delete_unused_label()` marks dead any label that no branch targets.
  `output(file, output_empty)` writes the assembly text, with labels
  unindented and instructions indented by a tab.
- `minic.codegen` provides `CodeGenerator` and `CodeGeneratorAsm`, which are
  abstract base classes:
  - `CodeGenerator.run(out_file_name)` writes to the named file, or to
    standard output when the name is empty.
  - `CodeGeneratorAsm.generate` writes the header, then the data section,
    then one section per function that is not built in.
  - A concrete back end supplies `gen_header`, `gen_data_section`,
    `gen_function_section` and `register_allocation`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import sys

from minic.iloc import ILocArm32

iloc = ILocArm32(None)
iloc.label(".L1")
iloc.load_imm(0, 70000)
iloc.jump(".L1")
iloc.delete_unused_label()
iloc.output(sys.stdout, False)
```

This example prints:

```
.L1:
	movw r0,#:lower16:70000
	movt r0,#:upper16:70000
	b .L1
```

## What it does not do

This package is a set of building blocks, not a working compiler:

- It has no lexer or parser. `FrontEndExecutor` is abstract.
- It has no intermediate representation of its own.
- It has no complete ARM32 code generator. `CodeGeneratorAsm` is abstract.
  The emitters in `minic.iloc` accept any objects that have the attributes
  they read.
- `minic.graph` writes DOT text only. It does not produce images.
- The package installs no command.