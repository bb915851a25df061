from __future__ import annotations

"""
Unit tests for the Dependency Tree Builder.

Verifies the raw tree produced for identifiers, member chains, indexers,
calls, sigil expressions, nested functions and literals.
"""

import pytest

from auxdeps.core.analysis.tree_builder import dependency_tree
from auxdeps.domain.dependency_models import (
    CallDependency,
    ExpressionDependency,
    FileDependency,
    LiteralDependency,
    MemberDependency,
    TagDependency,
)
from auxdeps.domain.errors import AmbiguousIndexError, FormulaSyntaxError


def _root(*deps):
    return ExpressionDependency(deps)


# -----------------------------------------------------------------------------
# Members and indexers
# -----------------------------------------------------------------------------

def test_identifier_becomes_free_member():
    """A bare identifier is a member without an object."""
    assert dependency_tree("abc") == _root(MemberDependency("abc"))


def test_property_access_nests_objects():
    """'a.b.c' builds members read object first."""
    expected = MemberDependency("c", MemberDependency("b", MemberDependency("a")))
    assert dependency_tree("a.b.c") == _root(expected)


def test_this_is_a_plain_member():
    """'this' is treated as a conventional identifier at this layer."""
    assert dependency_tree("this") == _root(MemberDependency("this"))
    assert dependency_tree("this.val") == _root(MemberDependency("val", MemberDependency("this")))


def test_literal_indexer_is_equivalent_to_property_access():
    """tag()['funny'] and tag().funny build the same tree."""
    assert dependency_tree("tag()['funny']") == dependency_tree("tag().funny")
    assert dependency_tree("abc[0]") == _root(MemberDependency("0", MemberDependency("abc")))


@pytest.mark.parametrize("code", ["tag()[myVar]", "abc[a + 1]", "abc[`x${y}`]", "abc[true]"])
def test_non_literal_indexer_raises(code):
    """A key that is not a string or number literal cannot be resolved."""
    with pytest.raises(AmbiguousIndexError):
        dependency_tree(code)


def test_ambiguous_index_error_keeps_expression():
    with pytest.raises(AmbiguousIndexError) as exc:
        dependency_tree("abc[myVar]")
    assert exc.value.expression == "myVar"


# -----------------------------------------------------------------------------
# Calls
# -----------------------------------------------------------------------------

def test_simple_arguments_are_not_wrapped():
    """Literals and identifiers stay single nodes inside a call."""
    result = dependency_tree('tag("test", true, false, isBuilder)')

    expected = CallDependency(
        MemberDependency("tag"),
        [
            LiteralDependency("test"),
            LiteralDependency(True),
            LiteralDependency(False),
            MemberDependency("isBuilder"),
        ],
    )
    assert result == _root(expected)


def test_complex_arguments_are_wrapped_in_expressions():
    """Arguments made of several dependencies keep their boundaries."""
    result = dependency_tree("fn(a + b, c)")

    expected = CallDependency(
        MemberDependency("fn"),
        [
            ExpressionDependency([MemberDependency("a"), MemberDependency("b")]),
            MemberDependency("c"),
        ],
    )
    assert result == _root(expected)


def test_method_call_uses_member_chain_as_identifier():
    result = dependency_tree("player.isBuilder()")
    assert result == _root(CallDependency(MemberDependency("isBuilder", MemberDependency("player"))))


# -----------------------------------------------------------------------------
# Sigils
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("symbol,cls", [("#", TagDependency), ("@", FileDependency)])
def test_sigil_chains_build_on_tag_and_file_nodes(symbol, cls):
    """'#tag().num + #other().num' and the '@' variant share one shape."""
    result = dependency_tree(f"{symbol}tag().num + {symbol}other().num")

    assert result == _root(
        MemberDependency("num", cls("tag")),
        MemberDependency("num", cls("other")),
    )


def test_sigil_arguments_and_dotted_names():
    """Dotted sigil names are captured verbatim and arguments are analyzed."""
    result = dependency_tree('#tag.test("abc", isBuilder)')

    expected = TagDependency(
        "tag.test",
        [LiteralDependency("abc"), MemberDependency("isBuilder")],
    )
    assert result == _root(expected)


def test_bare_sigil_has_no_dependencies():
    assert dependency_tree("@bot") == _root(FileDependency("bot"))


def test_sigils_inside_strings_are_literals():
    assert dependency_tree("'#notATag'") == _root(LiteralDependency("#notATag"))


def test_sigils_inside_template_substitutions_are_found():
    result = dependency_tree("`value: ${#tag}`")
    assert result == _root(TagDependency("tag"))


# -----------------------------------------------------------------------------
# Nested functions
# -----------------------------------------------------------------------------

def test_arrow_function_body_is_nested_expression():
    """The parameter list is skipped but body references are kept."""
    result = dependency_tree("toast(x => x == this.val)")

    expected = CallDependency(
        MemberDependency("toast"),
        [
            ExpressionDependency([
                MemberDependency("x"),
                MemberDependency("val", MemberDependency("this")),
            ])
        ],
    )
    assert result == _root(expected)


def test_function_expression_matches_arrow_function():
    arrow = dependency_tree("toast(x => x == this.val)")
    named = dependency_tree("toast(function(x) { return x == this.val; })")
    assert arrow == named


def test_sigils_inside_function_bodies_are_found():
    result = dependency_tree("#tag(x => x.y == @bot().z)")

    expected = TagDependency(
        "tag",
        [
            ExpressionDependency([
                MemberDependency("y", MemberDependency("x")),
                MemberDependency("z", FileDependency("bot")),
            ])
        ],
    )
    assert result == _root(expected)


def test_parameter_default_values_are_dependencies():
    result = dependency_tree("fn((x = limit) => x)")

    expected = CallDependency(
        MemberDependency("fn"),
        [ExpressionDependency([MemberDependency("limit"), MemberDependency("x")])],
    )
    assert result == _root(expected)


# -----------------------------------------------------------------------------
# Aggregating syntax
# -----------------------------------------------------------------------------

def test_binary_operands_keep_source_order():
    result = dependency_tree("a + b * c")
    assert result == _root(MemberDependency("a"), MemberDependency("b"), MemberDependency("c"))


def test_object_literal_keys_are_not_dependencies():
    result = dependency_tree("({ a: b, [c]: d, e })")

    assert result == _root(
        MemberDependency("b"),
        MemberDependency("c"),
        MemberDependency("d"),
        MemberDependency("e"),
    )


def test_declared_variable_names_are_not_dependencies():
    result = dependency_tree("let y = a; y + 1")

    assert result == _root(
        MemberDependency("a"),
        MemberDependency("y"),
        LiteralDependency(1),
    )


def test_ternary_and_logical_operators():
    result = dependency_tree("a ? b : c || 'd'")

    assert result == _root(
        MemberDependency("a"),
        MemberDependency("b"),
        MemberDependency("c"),
        LiteralDependency("d"),
    )


# -----------------------------------------------------------------------------
# Literals
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "code,value",
    [
        ("123", 123),
        ("1.5", 1.5),
        ("0x1F", 31),
        ("0b101", 5),
        ("1_000", 1000),
        ("1e3", 1000.0),
        ("'a\\nb'", "a\nb"),
        ('"\\u00e9"', "é"),
        ("`plain`", "plain"),
        ("''", ""),
        ("true", True),
        ("null", None),
    ],
)
def test_literal_values(code, value):
    assert dependency_tree(code) == _root(LiteralDependency(value))


def test_empty_formula_has_no_dependencies():
    assert dependency_tree("") == _root()


def test_syntax_error_propagates():
    with pytest.raises(FormulaSyntaxError):
        dependency_tree("getTag(abc")


# -----------------------------------------------------------------------------
# Declarations and binding patterns
# -----------------------------------------------------------------------------

def test_class_names_are_not_dependencies():
    """Only the heritage clause and member bodies are read."""
    result = dependency_tree("class A extends B { m() { return x; } }")

    assert result == _root(
        MemberDependency("B"),
        ExpressionDependency([MemberDependency("x")]),
    )


def test_class_expression_name_is_not_a_dependency():
    result = dependency_tree("(class Named { m() { return y; } })")
    assert result == _root(ExpressionDependency([MemberDependency("y")]))


def test_computed_keys_in_parameters_are_dependencies():
    result = dependency_tree("fn(({ [k]: v }) => v)")

    expected = CallDependency(
        MemberDependency("fn"),
        [ExpressionDependency([MemberDependency("k"), MemberDependency("v")])],
    )
    assert result == _root(expected)


def test_destructuring_declarations_read_keys_and_defaults():
    result = dependency_tree("let { [k]: v = d } = o; v")

    assert result == _root(
        MemberDependency("k"),
        MemberDependency("d"),
        MemberDependency("o"),
        MemberDependency("v"),
    )
