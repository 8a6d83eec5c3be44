"""Expansion mini-language for configuration leaf strings.

A leaf string is parsed into one of three expressions:

* :class:`TypedSubstitution` - the whole string is ``$NAME::TYPE:SUB1:SUB2``
  (``::TYPE`` and the subtypes are optional). The variable is converted
  with :func:`~simple_app_config.domain.converter.convert`.
* :class:`Template` - the string embeds one or more ``${NAME}`` references.
  Every reference expands to the variable's plain string value.
* :class:`Literal` - anything else, including strings whose leading ``$``
  is escaped as ``\\$``.

A backslash is an escape only at the start of the string (``\\$NAME``) or
right before ``${``; every other backslash is kept as written.

Only a whole-string match converts types. A ``${NAME::TYPE}`` reference is
not recognised and stays literal text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from .converter import convert
from .enums import DataType
from .errors import UndefinedEnvVarError

Lookup = Callable[[str], Union[str, None]]
"""Returns an environment variable's value, or None when undefined."""

_ESCAPED_DOLLAR = "\\$"
_REFERENCE_OPEN = "${"
_ESCAPED_REFERENCE = "\\${"
_MAX_TYPE_TOKENS = 3


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class Reference:
    name: str


@dataclass(frozen=True, slots=True)
class TypedSubstitution:
    name: str
    type_token: str = DataType.STRING.value
    subtypes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Template:
    fragments: tuple[str | Reference, ...]

    @property
    def references(self) -> tuple[str, ...]:
        return tuple(fragment.name for fragment in self.fragments if isinstance(fragment, Reference))


ExpansionExpression = Union[Literal, TypedSubstitution, Template]


def _is_word(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


class _Parser:
    """Recursive-descent parser over a single leaf string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def parse(self) -> ExpansionExpression:
        typed = self._typed_substitution()
        if typed is not None:
            return typed
        self._pos = 0
        return self._template()

    def _at_end(self) -> bool:
        return self._pos >= len(self._text)

    def _consume(self, token: str) -> bool:
        if self._text.startswith(token, self._pos):
            self._pos += len(token)
            return True
        return False

    def _word(self) -> str:
        start = self._pos
        while not self._at_end() and _is_word(self._text[self._pos]):
            self._pos += 1
        return self._text[start : self._pos]

    def _typed_substitution(self) -> TypedSubstitution | None:
        if not self._consume("$"):
            return None
        name = self._word()
        if not name:
            return None
        tokens: list[str] = []
        if self._consume("::"):
            tokens.append(self._word())
            while len(tokens) < _MAX_TYPE_TOKENS and self._consume(":"):
                tokens.append(self._word())
            if not all(tokens):
                return None
        if not self._at_end():
            return None
        if not tokens:
            return TypedSubstitution(name)
        return TypedSubstitution(name, tokens[0], tuple(tokens[1:]))

    def _reference(self) -> Reference | None:
        start = self._pos
        if self._consume(_REFERENCE_OPEN):
            name = self._word()
            if name and self._consume("}"):
                return Reference(name)
        self._pos = start
        return None

    def _template(self) -> ExpansionExpression:
        fragments: list[str | Reference] = []
        buffer: list[str] = []
        if self._consume(_ESCAPED_DOLLAR):
            buffer.append("$")
        while not self._at_end():
            if self._consume(_ESCAPED_REFERENCE):
                buffer.append(_REFERENCE_OPEN)
                continue
            reference = self._reference()
            if reference is not None:
                if buffer:
                    fragments.append("".join(buffer))
                    buffer.clear()
                fragments.append(reference)
                continue
            buffer.append(self._text[self._pos])
            self._pos += 1
        text = "".join(buffer)
        if not any(isinstance(fragment, Reference) for fragment in fragments):
            return Literal("".join(str(fragment) for fragment in fragments) + text)
        if text:
            fragments.append(text)
        return Template(tuple(fragments))


def parse_expression(text: str) -> ExpansionExpression:
    """Parse a leaf string into an expansion expression.

    Examples:
        >>> parse_expression("$PORT::number")
        TypedSubstitution(name='PORT', type_token='number', subtypes=())
        >>> parse_expression("$MAP::map:string:number")
        TypedSubstitution(name='MAP', type_token='map', subtypes=('string', 'number'))
        >>> parse_expression("http://${HOST}:80")
        Template(fragments=('http://', Reference(name='HOST'), ':80'))
        >>> parse_expression("\\\\$HOME")
        Literal(text='$HOME')
        >>> parse_expression("cost \\\\$5")
        Literal(text='cost \\\\$5')
        >>> parse_expression("${A::number}")
        Literal(text='${A::number}')
    """
    return _Parser(text).parse()


def _lookup_string(name: str, lookup: Lookup) -> str:
    value = lookup(name)
    if value is None:
        raise UndefinedEnvVarError(name)
    return value


def evaluate(expression: ExpansionExpression, lookup: Lookup) -> Any:
    """Evaluate *expression* against *lookup*.

    Raises:
        UndefinedEnvVarError: If a referenced variable is undefined.
        UnsupportedTypeError: If a typed substitution names an unknown type.
        TypeConversionError: If a variable cannot be converted.
    """
    if isinstance(expression, Literal):
        return expression.text
    if isinstance(expression, TypedSubstitution):
        raw = _lookup_string(expression.name, lookup)
        return convert(expression.type_token, raw, *expression.subtypes)
    if isinstance(expression, Template):
        return "".join(
            _lookup_string(fragment.name, lookup) if isinstance(fragment, Reference) else fragment
            for fragment in expression.fragments
        )
    raise TypeError(f"Unknown expansion expression: {type(expression).__name__}")


def expand(text: str, lookup: Lookup) -> Any:
    """Parse and evaluate a leaf string in one step.

    Examples:
        >>> env = {"BOOLEAN": "FALSE", "MAP": '{"cat":"test"}'}
        >>> expand("$BOOLEAN::boolean", env.get)
        False
        >>> expand("prefix ${MAP}", env.get)
        'prefix {"cat":"test"}'
        >>> expand("plain", env.get)
        'plain'
    """
    return evaluate(parse_expression(text), lookup)


__all__ = [
    "ExpansionExpression",
    "Literal",
    "Lookup",
    "Reference",
    "Template",
    "TypedSubstitution",
    "evaluate",
    "expand",
    "parse_expression",
]
