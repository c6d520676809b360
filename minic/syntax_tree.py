"""Abstract syntax tree nodes, lexer attributes and helpers that build the tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

_UINT32_MASK = 0xFFFFFFFF


class BasicType(Enum):
    """Basic value types known to the front end."""

    TYPE_NONE = 0
    TYPE_VOID = 1
    TYPE_INT = 2
    TYPE_FLOAT = 3
    TYPE_MAX = 4


@dataclass
class DigitIntAttr:
    """An unsigned integer literal handed from the lexer to the parser."""

    val: int
    lineno: int


@dataclass
class DigitRealAttr:
    """A real literal handed from the lexer to the parser."""

    val: float
    lineno: int


@dataclass
class VarIdAttr:
    """An identifier (variable or function name) handed from the lexer to the parser."""

    id: str
    lineno: int


@dataclass
class TypeAttr:
    """A type keyword handed from the lexer to the parser."""

    type: BasicType
    lineno: int


class AstOperatorType(Enum):
    """Kinds of AST nodes: leaves first, then internal operators."""

    LEAF_LITERAL_UINT = 0
    LEAF_LITERAL_FLOAT = 1
    LEAF_VAR_ID = 2
    LEAF_TYPE = 3

    COMPILE_UNIT = 4
    FUNC_DEF = 5
    FUNC_FORMAL_PARAMS = 6
    FUNC_FORMAL_PARAM = 7
    FUNC_CALL = 8
    FUNC_REAL_PARAMS = 9
    BLOCK = 10
    COMPOUNDSTMT = 10  # another name for a block
    RETURN = 11
    ASSIGN = 12
    DECL_STMT = 13
    VAR_DECL = 14
    ADD = 15
    SUB = 16
    MUL = 17
    DIV = 18
    MOD = 19
    NEG = 20

    MAX = 21


_LEAF_TYPES = frozenset(
    {
        AstOperatorType.LEAF_LITERAL_UINT,
        AstOperatorType.LEAF_LITERAL_FLOAT,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.LEAF_TYPE,
    }
)


@dataclass(eq=False)
class AstNode:
    """A node of the abstract syntax tree."""

    node_type: AstOperatorType
    type: BasicType = BasicType.TYPE_VOID
    line_no: int = -1
    integer_val: int = 0
    float_val: float = 0.0
    name: str = ""
    parent: Optional["AstNode"] = field(default=None, repr=False)
    sons: list["AstNode"] = field(default_factory=list)
    # Linear IR produced for this node and the value it yields.
    block_insts: list[Any] = field(default_factory=list, repr=False)
    val: Any = field(default=None, repr=False)
    # Whether entering this node (e.g. a block) opens a new scope.
    need_scope: bool = True

    def is_leaf_node(self) -> bool:
        """True for literal, identifier and type leaves."""
        return self.node_type in _LEAF_TYPES

    def insert_son_node(self, node: Optional["AstNode"]) -> "AstNode":
        """Append node as the last child; None is ignored. Returns self."""
        if node is not None:
            node.parent = self
            self.sons.append(node)
        return self

    @classmethod
    def new(cls, node_type: AstOperatorType, *args: Optional["AstNode"]) -> "AstNode":
        """Create an internal node with the given children; a None ends the list."""
        parent = cls(node_type)
        for child in args:
            if child is None:
                break
            parent.insert_son_node(child)
        return parent

    @classmethod
    def from_int(cls, attr: DigitIntAttr) -> "AstNode":
        """Create an unsigned integer literal leaf."""
        node = cls(AstOperatorType.LEAF_LITERAL_UINT, BasicType.TYPE_INT, attr.lineno)
        node.integer_val = attr.val & _UINT32_MASK
        return node

    @classmethod
    def from_id(cls, attr: VarIdAttr) -> "AstNode":
        """Create an identifier leaf from a lexer attribute."""
        return cls.from_name(attr.id, attr.lineno)

    @classmethod
    def from_name(cls, name: str, line_no: int) -> "AstNode":
        """Create an identifier leaf."""
        node = cls(AstOperatorType.LEAF_VAR_ID, BasicType.TYPE_VOID, line_no)
        node.name = name
        return node

    @classmethod
    def from_type(cls, type_: BasicType) -> "AstNode":
        """Create a type leaf."""
        return cls(AstOperatorType.LEAF_TYPE, type_)


def create_contain_node(
    node_type: AstOperatorType,
    first_child: Optional[AstNode] = None,
    second_child: Optional[AstNode] = None,
    third_child: Optional[AstNode] = None,
) -> AstNode:
    """Create an internal node with up to three children; None children are skipped."""
    node = AstNode(node_type)
    for child in (first_child, second_child, third_child):
        node.insert_son_node(child)
    return node


def create_func_def(
    type_node: AstNode,
    name_node: AstNode,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition with type, name, parameters and body children."""
    node = AstNode(AstOperatorType.FUNC_DEF, type_node.type, name_node.line_no)
    node.name = name_node.name

    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_FORMAL_PARAMS)
    if block_node is None:
        block_node = AstNode(AstOperatorType.BLOCK)

    for child in (type_node, name_node, params_node, block_node):
        node.insert_son_node(child)
    return node


def create_func_def_from_attrs(
    type_attr: TypeAttr,
    id_attr: VarIdAttr,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition from the lexer's type and name attributes."""
    type_node = create_type_node(type_attr)
    id_node = AstNode.from_name(id_attr.id, id_attr.lineno)
    return create_func_def(type_node, id_node, block_node, params_node)


def type_attr_to_type(attr: TypeAttr) -> BasicType:
    """Map a type attribute to a value type: int stays int, anything else is void."""
    if attr.type is BasicType.TYPE_INT:
        return BasicType.TYPE_INT
    return BasicType.TYPE_VOID


def create_type_node(attr: TypeAttr) -> AstNode:
    """Create a type leaf from a type attribute."""
    return AstNode.from_type(type_attr_to_type(attr))


def create_func_call(funcname_node: AstNode, params_node: Optional[AstNode] = None) -> AstNode:
    """Create a function call with the name and actual parameter list as children."""
    node = AstNode(AstOperatorType.FUNC_CALL)
    node.name = funcname_node.name

    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_REAL_PARAMS)

    node.insert_son_node(funcname_node)
    node.insert_son_node(params_node)
    return node


def create_var_decl_node(type_: Union[BasicType, TypeAttr], id_attr: VarIdAttr) -> AstNode:
    """Create a single variable declaration with a type leaf and a name leaf."""
    if isinstance(type_, TypeAttr):
        type_ = type_attr_to_type(type_)

    type_node = AstNode.from_type(type_)
    id_node = AstNode.from_name(id_attr.id, id_attr.lineno)

    decl_node = create_contain_node(AstOperatorType.VAR_DECL, type_node, id_node)
    decl_node.type = type_
    return decl_node


def create_var_decl_stmt_node(first_child: Optional[AstNode] = None) -> AstNode:
    """Create a declaration statement, starting with first_child if given."""
    stmt_node = create_contain_node(AstOperatorType.DECL_STMT)
    if first_child is not None:
        stmt_node.type = first_child.type
        stmt_node.insert_son_node(first_child)
    return stmt_node


def create_var_decl_stmt_from_attrs(type_attr: TypeAttr, id_attr: VarIdAttr) -> AstNode:
    """Create a declaration statement holding one variable declaration."""
    return create_var_decl_stmt_node(create_var_decl_node(type_attr, id_attr))


def add_var_decl_node(stmt_node: AstNode, id_attr: VarIdAttr) -> AstNode:
    """Append another variable of the statement's type to a declaration statement."""
    stmt_node.insert_son_node(create_var_decl_node(stmt_node.type, id_attr))
    return stmt_node


class FrontEndExecutor(ABC):
    """A front end that parses a source file into an abstract syntax tree."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self.ast_root: Optional[AstNode] = None

    @abstractmethod
    def run(self) -> bool:
        """Parse the file, setting ast_root; return True on success."""