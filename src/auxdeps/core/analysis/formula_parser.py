from __future__ import annotations

"""
Formula Parsing Front End.

Parses formula source with the tree-sitter JavaScript grammar. Formulas
extend JavaScript with two sigil forms, '#name(...)' for tag queries and
'@name(...)' for bot queries (the argument list is optional). The grammar
does not know them, so every sigil outside of string, template, regex
and comment text is first replaced with a reserved placeholder identifier; the
placeholder map travels with the parsed tree so the tree builder can turn
the placeholders back into tag/file nodes.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import tree_sitter
import tree_sitter_javascript as tsjavascript

from auxdeps.domain import constants as const
from auxdeps.domain.errors import FormulaSyntaxError

logger = logging.getLogger(__name__)

Language = tree_sitter.Language
Parser = tree_sitter.Parser
Node = tree_sitter.Node

JS_LANGUAGE = Language(tsjavascript.language())

# Dotted sigil names: '#tag', '#aux.color', '@bot.name'
_SIGIL_NAME = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")
_IDENTIFIER_CHARS = re.compile(r"[\w$.]")

# Regex literal vs division
_WORD_CHAR = re.compile(r"[\w$]")
_WORD_RUN = re.compile(r"[\w$]+")
_TRAILING_WORD = re.compile(r"[\w$]+$")
_OPERAND_END = frozenset(")]}'\"`")
_REGEX_KEYWORDS = frozenset({
    "return", "typeof", "instanceof", "in", "of", "new", "delete",
    "void", "throw", "case", "do", "else", "yield", "await",
})


# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedFormula:
    """
    A parsed formula ready for dependency analysis.

    Attributes:
        source: UTF-8 bytes of the rewritten formula that was parsed.
        root: The tree-sitter 'program' node.
        sigils: Placeholder identifier -> (node type, sigil name).
    """
    source: bytes
    root: Node
    sigils: Dict[str, Tuple[str, str]] = field(default_factory=dict)

    def text_of(self, node: Node) -> str:
        """Return the source text covered by a node."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    def sigil_for(self, node: Node) -> Optional[Tuple[str, str]]:
        """Return (type, name) when the node is a sigil placeholder."""
        if node.type != "identifier":
            return None
        return self.sigils.get(self.text_of(node))


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_formula(code: str) -> ParsedFormula:
    """
    Parse formula source into a tree-sitter tree.

    Args:
        code: The formula source text, sigils included.

    Returns:
        ParsedFormula: The parsed tree and its sigil placeholders.

    Raises:
        FormulaSyntaxError: If the source contains a syntax error.
    """
    rewritten, sigils = rewrite_sigils(code)
    source = rewritten.encode("utf-8")

    # Parsers are cheap and not shared between threads
    parser = Parser(JS_LANGUAGE)
    tree = parser.parse(source)
    root = tree.root_node

    if root.has_error:
        bad = _find_error_node(root)
        row, column = (bad.start_point[0], bad.start_point[1]) if bad else (0, 0)
        lines = rewritten.splitlines() or [""]
        line_text = lines[row] if row < len(lines) else ""
        kind = "Missing token" if bad is not None and bad.is_missing else "Unexpected token"
        logger.debug(f"Formula syntax error at {row + 1}:{column + 1}: {code!r}")
        raise FormulaSyntaxError(
            f"{kind} at line {row + 1}, column {column + 1}",
            lineno=row + 1,
            offset=column + 1,
            text=line_text,
        )

    return ParsedFormula(source=source, root=root, sigils=sigils)


def rewrite_sigils(code: str) -> Tuple[str, Dict[str, Tuple[str, str]]]:
    """
    Replace every sigil expression head with a placeholder identifier.

    '#tag.test(1)' becomes '__auxSigil0(1)' and '@bot' becomes
    '__auxSigil1'. String literals, template text and comments are copied
    verbatim; code inside template substitutions is rewritten.

    Args:
        code: The formula source text.

    Returns:
        Tuple[str, Dict[str, Tuple[str, str]]]: The rewritten source and the
        placeholder -> (node type, name) map.
    """
    prefix = const.PLACEHOLDER_PREFIX
    while prefix in code:
        prefix += "_"

    out: List[str] = []
    sigils: Dict[str, Tuple[str, str]] = {}

    # Each entry is the open-brace depth of a '${...}' substitution
    substitutions: List[int] = []
    in_template = False
    i = 0
    n = len(code)

    while i < n:
        ch = code[i]

        if in_template:
            if ch == "\\":
                out.append(code[i:i + 2])
                i += 2
            elif ch == "`":
                out.append(ch)
                in_template = False
                i += 1
            elif code.startswith("${", i):
                out.append("${")
                substitutions.append(0)
                in_template = False
                i += 2
            else:
                out.append(ch)
                i += 1
            continue

        if ch in ("'", '"'):
            end = _skip_string(code, i)
            out.append(code[i:end])
            i = end
        elif ch == "`":
            out.append(ch)
            in_template = True
            i += 1
        elif code.startswith("//", i):
            end = code.find("\n", i)
            end = n if end < 0 else end
            out.append(code[i:end])
            i = end
        elif code.startswith("/*", i):
            end = code.find("*/", i + 2)
            end = n if end < 0 else end + 2
            out.append(code[i:end])
            i = end
        elif ch == "{" and substitutions:
            substitutions[-1] += 1
            out.append(ch)
            i += 1
        elif ch == "}" and substitutions:
            if substitutions[-1] == 0:
                substitutions.pop()
                in_template = True
            else:
                substitutions[-1] -= 1
            out.append(ch)
            i += 1
        elif ch == "/" and _starts_regex(code, i):
            end = _skip_regex(code, i)
            out.append(code[i:end])
            i = end
        else:
            match = _sigil_at(code, i) if ch in const.SIGIL_KINDS else None
            if match is None:
                out.append(ch)
                i += 1
                continue
            placeholder = f"{prefix}{len(sigils)}"
            sigils[placeholder] = (const.SIGIL_KINDS[ch], match.group(0))
            out.append(placeholder)
            i = match.end()

    return "".join(out), sigils


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _sigil_at(code: str, i: int) -> Optional[re.Match[str]]:
    """Return the name match when the sigil character at 'i' opens a sigil."""
    if i > 0 and _IDENTIFIER_CHARS.match(code[i - 1]):
        return None
    return _SIGIL_NAME.match(code, i + 1)


def _starts_regex(code: str, i: int) -> bool:
    """
    Decide whether the '/' at 'i' opens a regex literal or divides.

    A slash after an operand (name, number, closing bracket, string) is a
    division; after an operator, an opening bracket or a keyword such as
    'return' it starts a regex.
    """
    j = i - 1
    while j >= 0 and code[j].isspace():
        j -= 1
    if j < 0:
        return True

    prev = code[j]
    if prev in _OPERAND_END:
        return False
    if _WORD_CHAR.match(prev):
        word = _TRAILING_WORD.search(code, 0, j + 1)
        return word is not None and word.group(0) in _REGEX_KEYWORDS
    return True


def _skip_regex(code: str, start: int) -> int:
    """Return the index just past the regex literal and its flags."""
    i = start + 1
    in_class = False
    while i < len(code):
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "\n":
            return i
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            flags = _WORD_RUN.match(code, i + 1)
            return flags.end() if flags is not None else i + 1
        i += 1
    return len(code)


def _skip_string(code: str, start: int) -> int:
    """Return the index just past the string literal opened at 'start'."""
    quote = code[start]
    i = start + 1
    while i < len(code):
        ch = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote or ch == "\n":
            return i + 1
        i += 1
    return len(code)


def _find_error_node(node: Node) -> Optional[Node]:
    """Locate the first ERROR or MISSING node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _find_error_node(child)
            if found is not None:
                return found
    return None
