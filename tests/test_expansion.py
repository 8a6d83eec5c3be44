"""Expansion language stories: typed substitution, templates, literals, and escapes."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from simple_app_config.domain.errors import (
    TypeConversionError,
    UndefinedEnvVarError,
    UnsupportedTypeError,
)
from simple_app_config.domain.expansion import (
    Literal,
    Reference,
    Template,
    TypedSubstitution,
    expand,
    parse_expression,
)

ENV: dict[str, str] = {
    "BOOLEAN": "FALSE",
    "PORT": "8080",
    "HOST": "db.local",
    "MAP": '{"cat":"test","bat":"test"}',
    "EMPTY": "",
}


def lookup(name: str) -> str | None:
    return ENV.get(name)


@pytest.fixture
def env_lookup() -> Callable[[str], str | None]:
    return lookup


# ======================== parsing ========================


@pytest.mark.os_agnostic
def test_bare_variable_parses_as_string_substitution() -> None:
    """``$NAME`` without a type is a string substitution."""
    assert parse_expression("$HOST") == TypedSubstitution("HOST")


@pytest.mark.os_agnostic
def test_typed_substitution_keeps_up_to_two_subtypes() -> None:
    """Type and subtypes are split on single colons."""
    assert parse_expression("$MAP::map:string:number") == TypedSubstitution("MAP", "map", ("string", "number"))


@pytest.mark.os_agnostic
@pytest.mark.parametrize("text", ["$HOST/path", "x$HOST", "$PORT::", "$PORT::number:", "$::number", "$"])
def test_partial_typed_substitutions_are_not_recognised(text: str) -> None:
    """Only a whole-string ``$NAME::TYPE`` match is a typed substitution."""
    assert not isinstance(parse_expression(text), TypedSubstitution)


@pytest.mark.os_agnostic
def test_template_splits_text_around_references() -> None:
    """Text fragments and references keep their order."""
    assert parse_expression("${HOST}:${PORT}") == Template((Reference("HOST"), ":", Reference("PORT")))


@pytest.mark.os_agnostic
def test_template_lists_its_references() -> None:
    """The references property names every variable in order."""
    template = parse_expression("a ${X} b ${Y} ${X}")

    assert isinstance(template, Template)
    assert template.references == ("X", "Y", "X")


@pytest.mark.os_agnostic
def test_escaped_dollar_is_a_literal() -> None:
    """``\\$`` suppresses expansion and leaves a plain dollar sign."""
    assert parse_expression("\\$HOST") == Literal("$HOST")


@pytest.mark.os_agnostic
def test_escaped_reference_inside_template_stays_literal() -> None:
    """An escaped reference is kept as text next to a real reference."""
    assert parse_expression("\\${A} ${B}") == Template(("${A} ", Reference("B")))


@pytest.mark.os_agnostic
def test_escaped_reference_after_text_stays_literal() -> None:
    """``\\${`` in the middle of a value is a literal ``${``."""
    assert expand("cost ${PORT} \\${PORT}", lookup) == "cost 8080 ${PORT}"


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "text",
    ["price\\$", "^cost: \\$[0-9]+$", "C:\\dir\\$file", "a\\b", "\\\\$x", "x \\$HOST"],
)
def test_backslashes_outside_escapes_are_kept(text: str) -> None:
    """A backslash that neither starts the value nor precedes ``${`` is left as written."""
    assert expand(text, lookup) == text


@pytest.mark.os_agnostic
def test_typed_reference_inside_braces_is_not_recognised() -> None:
    """``${NAME::TYPE}`` stays literal text."""
    assert parse_expression("${PORT::number}") == Literal("${PORT::number}")


@pytest.mark.os_agnostic
@pytest.mark.parametrize("text", ["plain", "", "price: 5$", "${", "${}", "${unterminated"])
def test_strings_without_references_are_literals(text: str) -> None:
    """Anything without a complete reference evaluates to itself."""
    assert parse_expression(text) == Literal(text)


# ======================== evaluation ========================


@pytest.mark.os_agnostic
def test_boolean_substitution_converts_false_word(env_lookup: Callable[[str], str | None]) -> None:
    """``$BOOLEAN::boolean`` with BOOLEAN=FALSE yields False."""
    assert expand("$BOOLEAN::boolean", env_lookup) is False


@pytest.mark.os_agnostic
def test_number_substitution_converts_digits(env_lookup: Callable[[str], str | None]) -> None:
    """``$PORT::number`` yields an int."""
    assert expand("$PORT::number", env_lookup) == 8080


@pytest.mark.os_agnostic
def test_map_substitution_and_template_see_the_same_variable(env_lookup: Callable[[str], str | None]) -> None:
    """A typed map conversion and a template of the same variable differ only in type."""
    assert expand("$MAP::map:string:string", env_lookup) == {"cat": "test", "bat": "test"}
    assert expand("prefix ${MAP}", env_lookup) == 'prefix {"cat":"test","bat":"test"}'


@pytest.mark.os_agnostic
def test_template_references_are_never_converted(env_lookup: Callable[[str], str | None]) -> None:
    """Embedded references always expand to plain strings."""
    assert expand("${PORT}", env_lookup) == "8080"


@pytest.mark.os_agnostic
def test_empty_variable_is_defined(env_lookup: Callable[[str], str | None]) -> None:
    """An empty value is still a value."""
    assert expand("[${EMPTY}]", env_lookup) == "[]"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("text", ["$MISSING", "$MISSING::number", "a ${MISSING} b"])
def test_undefined_variables_raise(text: str, env_lookup: Callable[[str], str | None]) -> None:
    """Every expression form reports an undefined variable by name."""
    with pytest.raises(UndefinedEnvVarError) as exc_info:
        expand(text, env_lookup)

    assert exc_info.value.name == "MISSING"
    assert str(exc_info.value) == "The environment variable MISSING is undefined."


@pytest.mark.os_agnostic
def test_unknown_type_in_substitution_raises(env_lookup: Callable[[str], str | None]) -> None:
    """An unknown type token surfaces as UnsupportedTypeError."""
    with pytest.raises(UnsupportedTypeError):
        expand("$PORT::tuple", env_lookup)


@pytest.mark.os_agnostic
def test_failed_conversion_in_substitution_raises(env_lookup: Callable[[str], str | None]) -> None:
    """A value that cannot be converted surfaces as TypeConversionError."""
    with pytest.raises(TypeConversionError):
        expand("$HOST::number", env_lookup)


@pytest.mark.os_agnostic
def test_literals_never_consult_the_lookup() -> None:
    """Literal evaluation does not touch the environment."""
    calls: list[str] = []

    def recording(name: str) -> str | None:
        calls.append(name)
        return None

    assert expand("\\$HOST", recording) == "$HOST"
    assert calls == []


# ======================== properties ========================


@pytest.mark.os_agnostic
@given(text=st.text(alphabet=st.characters(exclude_characters="$"), max_size=40))
@settings(max_examples=200)
def test_text_without_dollar_expands_to_itself(text: str) -> None:
    """Strings with no expansion syntax are returned unchanged."""
    assert expand(text, lambda _name: None) == text


@pytest.mark.os_agnostic
@given(
    name=st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}", fullmatch=True),
    value=st.text(max_size=20),
    prefix=st.text(alphabet=st.characters(exclude_characters="$\\"), max_size=10),
)
@settings(max_examples=200)
def test_template_inserts_the_raw_value(name: str, value: str, prefix: str) -> None:
    """``prefix${NAME}`` always expands to prefix plus the raw value."""
    assert expand(f"{prefix}${{{name}}}", {name: value}.get) == prefix + value
