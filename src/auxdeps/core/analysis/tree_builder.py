from __future__ import annotations

"""
Dependency Tree Builder.

Walks a parsed formula and produces the raw dependency tree: an
'expression' root whose children mirror the formula's structure using a
small set of node kinds (literal, member, call, tag, file, expression).

Syntax that carries no dependency of its own (operators, statements,
parentheses, object literals) contributes the dependencies of its parts
in source order. Bracket indexers must use a literal key, since any other
key hides the member being read.
"""

import logging
import re
from typing import List, Optional

from auxdeps.core.analysis.formula_parser import Node, ParsedFormula, parse_formula
from auxdeps.domain import constants as const
from auxdeps.domain.dependency_models import (
    CallDependency,
    Dependency,
    ExpressionDependency,
    FileDependency,
    LiteralDependency,
    LiteralValue,
    MemberDependency,
    TagDependency,
)
from auxdeps.domain.errors import AmbiguousIndexError

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = frozenset({
    "arrow_function",
    "function",
    "function_expression",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "method_definition",
})

_CLASS_TYPES = frozenset({"class", "class_declaration"})

# Nodes that never name a dependency
_IGNORED_TYPES = frozenset({
    "comment",
    "hash_bang_line",
    "property_identifier",
    "private_property_identifier",
    "statement_identifier",
    "shorthand_property_identifier_pattern",
    "regex",
    "super",
})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_LEGACY_OCTAL = re.compile(r"0[0-7]+")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def dependency_tree(code: str) -> ExpressionDependency:
    """
    Build the raw dependency tree of a formula.

    Args:
        code: The formula source text.

    Returns:
        ExpressionDependency: The root of the tree.

    Raises:
        FormulaSyntaxError: If the formula cannot be parsed.
        AmbiguousIndexError: If an indexer uses a non-literal key.
    """
    formula = parse_formula(code)
    return TreeBuilder(formula).build()


class TreeBuilder:
    """
    Converts one parsed formula into dependency nodes.

    Function and arrow function parameters are declarations, not reads:
    the builder never visits the parameter list itself, only the default
    values it contains and the function body.
    """

    def __init__(self, formula: ParsedFormula) -> None:
        self._formula = formula

    def build(self) -> ExpressionDependency:
        """Return the 'expression' root for the whole formula."""
        return ExpressionDependency(self._collect(self._formula.root))

    # -------------------------------------------------------------------------
    # Generic traversal
    # -------------------------------------------------------------------------

    def _collect(self, node: Node) -> List[Dependency]:
        """Return the dependencies of any node, in source order."""
        single = self._single(node)
        if single is not None:
            return [single]

        kind = node.type
        if kind in _IGNORED_TYPES:
            return []

        if kind == "shorthand_property_identifier":
            return [MemberDependency(self._text(node))]

        if kind == "pair":
            # Plain keys are names of the new object, computed keys are reads
            deps: List[Dependency] = []
            key = node.child_by_field_name("key")
            if key is not None and key.type == "computed_property_name":
                deps.extend(self._collect(key))
            value = node.child_by_field_name("value")
            if value is not None:
                deps.extend(self._collect(value))
            return deps

        if kind == "variable_declarator":
            deps = self._pattern_reads(node.child_by_field_name("name"))
            value = node.child_by_field_name("value")
            if value is not None:
                deps.extend(self._collect(value))
            return deps

        if kind == "catch_clause":
            deps = []
            param = node.child_by_field_name("parameter")
            if param is not None:
                deps.extend(self._pattern_reads(param))
            body = node.child_by_field_name("body")
            if body is not None:
                deps.extend(self._collect(body))
            return deps

        if kind in _CLASS_TYPES:
            # The class name is a declaration
            deps = []
            for index, child in enumerate(node.children):
                if child.is_named and node.field_name_for_child(index) != "name":
                    deps.extend(self._collect(child))
            return deps

        deps = []
        for child in node.named_children:
            deps.extend(self._collect(child))
        return deps

    def _single(self, node: Node) -> Optional[Dependency]:
        """
        Build the node as one dependency when it has a dedicated shape.

        Returns None for syntax that only aggregates its children.
        """
        kind = node.type

        if kind == "identifier":
            sigil = self._formula.sigil_for(node)
            if sigil is not None:
                return _sigil_node(sigil[0], sigil[1], [])
            return MemberDependency(self._text(node))

        if kind == "this":
            return MemberDependency(const.THIS_IDENTIFIER)

        if kind == "undefined":
            return MemberDependency("undefined")

        literal = self._literal(node)
        if literal is not None:
            return literal

        if kind == "parenthesized_expression":
            inner = [c for c in node.named_children if c.type != "comment"]
            return self._single(inner[0]) if len(inner) == 1 else None

        if kind == "member_expression":
            return self._member(node)

        if kind == "subscript_expression":
            return self._subscript(node)

        if kind == "call_expression":
            return self._call(node)

        if kind in _FUNCTION_TYPES:
            return ExpressionDependency(self._function(node))

        return None

    # -------------------------------------------------------------------------
    # Member chains and calls
    # -------------------------------------------------------------------------

    def _member(self, node: Node) -> MemberDependency:
        prop = node.child_by_field_name("property")
        return MemberDependency(
            identifier=self._text(prop),
            object=self._subtree(node.child_by_field_name("object")),
        )

    def _subscript(self, node: Node) -> MemberDependency:
        index = node.child_by_field_name("index")
        key = self._literal(index) if index is not None else None
        if key is None or not isinstance(key.value, (str, int, float)) or isinstance(key.value, bool):
            expression = self._text(index) if index is not None else ""
            logger.debug(f"Rejecting non-literal indexer: [{expression}]")
            raise AmbiguousIndexError(expression)

        return MemberDependency(
            identifier=_key_name(key.value),
            object=self._subtree(node.child_by_field_name("object")),
        )

    def _call(self, node: Node) -> Dependency:
        callee = node.child_by_field_name("function")
        args = self._arguments(node.child_by_field_name("arguments"))

        sigil = self._formula.sigil_for(callee)
        if sigil is not None:
            return _sigil_node(sigil[0], sigil[1], args)

        return CallDependency(identifier=self._subtree(callee), dependencies=args)

    def _arguments(self, node: Optional[Node]) -> List[Dependency]:
        """
        Analyze call arguments one by one.

        Simple arguments stay single nodes; anything else is wrapped in
        its own 'expression' so argument boundaries are preserved.
        """
        if node is None:
            return []
        if node.type == "arguments":
            items = [c for c in node.named_children if c.type != "comment"]
        else:
            # Tagged template: fn`...`
            items = [node]
        return [self._subtree(item) for item in items]

    def _subtree(self, node: Node) -> Dependency:
        single = self._single(node)
        if single is not None:
            return single
        return ExpressionDependency(self._collect(node))

    # -------------------------------------------------------------------------
    # Functions
    # -------------------------------------------------------------------------

    def _function(self, node: Node) -> List[Dependency]:
        deps: List[Dependency] = []
        params = node.child_by_field_name("parameters")
        if params is None:
            params = node.child_by_field_name("parameter")
        if params is not None:
            deps.extend(self._pattern_reads(params))

        body = node.child_by_field_name("body")
        if body is not None:
            deps.extend(self._collect(body))
        return deps

    def _pattern_reads(self, node: Node) -> List[Dependency]:
        """
        Collect the reads of a binding pattern, skipping the bound names.

        Default values and computed keys are reads; everything else in a
        parameter list or destructuring target only declares names.
        """
        if node.type == "computed_property_name":
            return self._collect(node)

        if node.type in ("assignment_pattern", "object_assignment_pattern"):
            deps = self._pattern_reads(node.child_by_field_name("left"))
            deps.extend(self._collect(node.child_by_field_name("right")))
            return deps

        deps = []
        for child in node.named_children:
            deps.extend(self._pattern_reads(child))
        return deps

    # -------------------------------------------------------------------------
    # Literals
    # -------------------------------------------------------------------------

    def _literal(self, node: Node) -> Optional[LiteralDependency]:
        kind = node.type
        if kind == "string":
            return LiteralDependency(self._string_value(node))
        if kind == "template_string":
            if any(c.type == "template_substitution" for c in node.named_children):
                return None
            return LiteralDependency(self._string_value(node))
        if kind == "number":
            return LiteralDependency(_number_value(self._text(node)))
        if kind == "true":
            return LiteralDependency(True)
        if kind == "false":
            return LiteralDependency(False)
        if kind == "null":
            return LiteralDependency(None)
        return None

    def _string_value(self, node: Node) -> str:
        parts: List[str] = []
        for child in node.named_children:
            if child.type == "escape_sequence":
                parts.append(_decode_escape(self._text(child)))
            elif child.type == "string_fragment":
                parts.append(self._text(child))
        return "".join(parts)

    def _text(self, node: Node) -> str:
        return self._formula.text_of(node)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _sigil_node(kind: str, name: str, args: List[Dependency]) -> Dependency:
    if kind == "tag":
        return TagDependency(name, args)
    return FileDependency(name, args)


def _key_name(value: LiteralValue) -> str:
    """Render an indexer key the way it names a property."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _number_value(text: str) -> LiteralValue:
    """Convert a numeric literal to an int when it has integral syntax."""
    t = text.replace("_", "")
    if t.endswith("n"):
        return int(t[:-1], 0)

    low = t.lower()
    if low.startswith(("0x", "0o", "0b")):
        return int(t, 0)
    if _LEGACY_OCTAL.fullmatch(t):
        return int(t, 8)
    if "." in low or "e" in low:
        return float(t)
    return int(t.lstrip("0") or "0")


def _decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as '\\n' or '\\u00e9'."""
    body = sequence[1:]
    if not body:
        return ""

    head = body[0]
    if head in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[head]
    if head == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == "u":
        digits = body[2:-1] if body.startswith("u{") else body[1:5]
        return chr(int(digits, 16))
    if head in "01234567" and body.isdigit():
        return chr(int(body, 8))
    if head in "\r\n\u2028\u2029":
        # Line continuation
        return ""
    return body
