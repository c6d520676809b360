import pytest

from minic.syntax_tree import (
    AstNode,
    AstOperatorType,
    BasicType,
    DigitIntAttr,
    FrontEndExecutor,
    TypeAttr,
    VarIdAttr,
    add_var_decl_node,
    create_contain_node,
    create_func_call,
    create_func_def,
    create_func_def_from_attrs,
    create_type_node,
    create_var_decl_node,
    create_var_decl_stmt_from_attrs,
    create_var_decl_stmt_node,
    type_attr_to_type,
)


def test_compound_stmt_is_alias_of_block():
    node = AstNode(AstOperatorType.COMPOUNDSTMT)
    assert node.node_type is AstOperatorType.BLOCK
    assert not node.is_leaf_node()


def test_int_literal_leaf():
    node = AstNode.from_int(DigitIntAttr(42, 3))
    assert node.node_type is AstOperatorType.LEAF_LITERAL_UINT
    assert node.integer_val == 42
    assert node.type is BasicType.TYPE_INT
    assert node.line_no == 3
    assert node.is_leaf_node()


def test_int_literal_is_truncated_to_uint32():
    node = AstNode.from_int(DigitIntAttr(2**32 + 7, 1))
    assert node.integer_val == 7


def test_id_leaf_from_attr_and_name():
    a = AstNode.from_id(VarIdAttr("x", 5))
    b = AstNode.from_name("x", 5)
    assert a.node_type is b.node_type is AstOperatorType.LEAF_VAR_ID
    assert (a.name, a.line_no) == (b.name, b.line_no) == ("x", 5)
    assert a.type is BasicType.TYPE_VOID


def test_type_leaf():
    node = AstNode.from_type(BasicType.TYPE_INT)
    assert node.node_type is AstOperatorType.LEAF_TYPE
    assert node.type is BasicType.TYPE_INT
    assert node.is_leaf_node()


def test_internal_node_is_not_leaf():
    assert not AstNode(AstOperatorType.ADD).is_leaf_node()


def test_insert_son_sets_parent_and_ignores_none():
    parent = AstNode(AstOperatorType.BLOCK)
    child = AstNode.from_name("y", 1)
    assert parent.insert_son_node(child) is parent
    parent.insert_son_node(None)
    assert parent.sons == [child]
    assert child.parent is parent


def test_new_stops_at_none():
    a = AstNode.from_name("a", 1)
    b = AstNode.from_name("b", 1)
    c = AstNode.from_name("c", 1)
    node = AstNode.new(AstOperatorType.ADD, a, b, None, c)
    assert node.sons == [a, b]
    assert c.parent is None
    assert all(son.parent is node for son in node.sons)


def test_contain_node_skips_none_children():
    a = AstNode.from_name("a", 1)
    c = AstNode.from_name("c", 1)
    node = create_contain_node(AstOperatorType.ASSIGN, a, None, c)
    assert node.node_type is AstOperatorType.ASSIGN
    assert node.sons == [a, c]


def test_type_attr_to_type():
    assert type_attr_to_type(TypeAttr(BasicType.TYPE_INT, 1)) is BasicType.TYPE_INT
    assert type_attr_to_type(TypeAttr(BasicType.TYPE_FLOAT, 1)) is BasicType.TYPE_VOID
    assert type_attr_to_type(TypeAttr(BasicType.TYPE_VOID, 1)) is BasicType.TYPE_VOID


def test_create_type_node():
    node = create_type_node(TypeAttr(BasicType.TYPE_INT, 2))
    assert node.node_type is AstOperatorType.LEAF_TYPE
    assert node.type is BasicType.TYPE_INT


def test_func_def_fills_missing_params_and_block():
    type_node = AstNode.from_type(BasicType.TYPE_INT)
    name_node = AstNode.from_name("main", 9)
    func = create_func_def(type_node, name_node)
    assert func.node_type is AstOperatorType.FUNC_DEF
    assert func.name == "main"
    assert func.type is BasicType.TYPE_INT
    assert func.line_no == 9
    kinds = [son.node_type for son in func.sons]
    assert kinds == [
        AstOperatorType.LEAF_TYPE,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.FUNC_FORMAL_PARAMS,
        AstOperatorType.BLOCK,
    ]
    assert func.sons[2].sons == [] and func.sons[3].sons == []


def test_func_def_keeps_given_block_and_params():
    block = AstNode(AstOperatorType.BLOCK)
    params = AstNode(AstOperatorType.FUNC_FORMAL_PARAMS)
    func = create_func_def(
        AstNode.from_type(BasicType.TYPE_VOID), AstNode.from_name("f", 1), block, params
    )
    assert func.sons[2] is params
    assert func.sons[3] is block
    assert block.parent is func


def test_func_def_from_attrs():
    func = create_func_def_from_attrs(
        TypeAttr(BasicType.TYPE_INT, 4), VarIdAttr("main", 4), None, None
    )
    assert func.name == "main"
    assert func.type is BasicType.TYPE_INT
    assert func.sons[1].name == "main"
    assert len(func.sons) == 4


def test_func_call_without_params():
    call = create_func_call(AstNode.from_name("putint", 2))
    assert call.node_type is AstOperatorType.FUNC_CALL
    assert call.name == "putint"
    assert call.sons[1].node_type is AstOperatorType.FUNC_REAL_PARAMS
    assert call.sons[1].sons == []


def test_func_call_with_params():
    params = AstNode.new(AstOperatorType.FUNC_REAL_PARAMS, AstNode.from_int(DigitIntAttr(1, 2)))
    call = create_func_call(AstNode.from_name("g", 2), params)
    assert call.sons[1] is params
    assert params.parent is call


@pytest.mark.parametrize("type_", [BasicType.TYPE_INT, TypeAttr(BasicType.TYPE_INT, 1)])
def test_var_decl_node(type_):
    decl = create_var_decl_node(type_, VarIdAttr("v", 6))
    assert decl.node_type is AstOperatorType.VAR_DECL
    assert decl.type is BasicType.TYPE_INT
    assert decl.sons[0].node_type is AstOperatorType.LEAF_TYPE
    assert decl.sons[1].name == "v"
    assert decl.sons[1].line_no == 6


def test_var_decl_stmt_from_first_child():
    decl = create_var_decl_node(BasicType.TYPE_INT, VarIdAttr("a", 1))
    stmt = create_var_decl_stmt_node(decl)
    assert stmt.node_type is AstOperatorType.DECL_STMT
    assert stmt.type is BasicType.TYPE_INT
    assert stmt.sons == [decl]


def test_var_decl_stmt_without_child():
    stmt = create_var_decl_stmt_node(None)
    assert stmt.sons == []
    assert stmt.type is BasicType.TYPE_VOID


def test_add_var_decl_uses_statement_type():
    stmt = create_var_decl_stmt_from_attrs(TypeAttr(BasicType.TYPE_INT, 1), VarIdAttr("a", 1))
    assert add_var_decl_node(stmt, VarIdAttr("b", 1)) is stmt
    assert [son.sons[1].name for son in stmt.sons] == ["a", "b"]
    assert all(son.type is BasicType.TYPE_INT for son in stmt.sons)
    assert all(son.parent is stmt for son in stmt.sons)


def test_front_end_executor_is_abstract():
    with pytest.raises(TypeError):
        FrontEndExecutor("prog.c")


def test_front_end_executor_subclass_sets_root():
    root = create_contain_node(AstOperatorType.COMPILE_UNIT)

    class _Fixed(FrontEndExecutor):
        def run(self):
            self.ast_root = root
            return True

    executor = _Fixed("prog.c")
    assert executor.ast_root is None
    assert executor.run() is True
    assert executor.filename == "prog.c"
    assert executor.ast_root is root
    assert root.node_type is AstOperatorType.COMPILE_UNIT
    assert not root.is_leaf_node()