from typing import Annotated, Optional

import pytest

from envali import ConfigurationError, ConstraintTag, ValidatableEntity, constraints as c
from envali.validators.presets import PRESET_PATTERNS, RegexPreset


@pytest.mark.parametrize(
    "method, value, fails",
    [
        ("matches", "abc123", False),
        ("matches", "abc123!", True),
        ("looking_at", "abc123!", False),
        ("looking_at", "!abc", True),
        ("find", "!!abc!!", False),
        ("find", "!!!", True),
    ],
)
def test_match_methods(engine, method, value, fails) -> None:
    class Code(ValidatableEntity):
        value: Annotated[str, c.match(r"[a-z]+[0-9]*", method=method)] = ""

    assert engine.validate(Code(value=value)).has_error() is fails


def test_modifiers_change_matching(engine) -> None:
    class Word(ValidatableEntity):
        strict: Annotated[str, c.match("[a-z]+")] = "abc"
        relaxed: Annotated[str, c.match("[a-z]+", modifiers=("ignore_case",))] = "abc"

    report = engine.validate(Word(strict="ABC", relaxed="ABC"))

    assert [v.field for v in report.get_errors(Word)] == ["strict"]


@pytest.mark.parametrize(
    "preset, good, bad",
    [
        ("email_address", "someone@example.com", "someone@"),
        ("domain_name", "sub.example.org", "-bad-.org"),
        ("web_url", "https://example.com/path?q=1", "ftp://example.com"),
        ("ftp_url", "ftp://files.example.com/pub", "https://example.com"),
        ("ip_address", "192.168.0.1", "256.1.1.1"),
        ("ip_address_with_port", "10.0.0.1:8080", "10.0.0.1:70000"),
        ("date_with_hyphen", "2024-02-29", "2024-13-01"),
        ("date_with_slash", "2024/01/31", "2024-01-31"),
        ("date", "20240131", "20241331"),
        ("numeric", "0123", "12a"),
        ("alphanumeric", "abc123", "abc 123"),
        ("alphabet_upper_case", "ABC", "AbC"),
        ("post_code_jp", "100-0001", "1000001"),
        ("cell_phone_with_hyphen_jp", "090-1234-5678", "03-1234-5678"),
        ("json_file", "data.json", "data.yaml"),
        ("hiragana", "ひらがな", "カタカナ"),
        ("katakana", "カタカナ", "ひらがな"),
    ],
)
def test_presets(engine, preset, good, bad) -> None:
    class Holder(ValidatableEntity):
        value: Annotated[str, c.match(preset=preset)] = ""

    assert engine.validate(Holder(value=good)).is_empty()
    assert engine.validate(Holder(value=bad)).has_error()


def test_every_preset_has_a_pattern() -> None:
    assert set(PRESET_PATTERNS) == set(RegexPreset)


def test_preset_violation_message_shows_pattern(engine) -> None:
    class Contact(ValidatableEntity):
        email: Annotated[str, c.match(preset="email_address")] = ""

    violation = engine.validate(Contact(email="nope")).get_errors(Contact)[0]

    assert violation.constraint == ConstraintTag.MATCH
    assert PRESET_PATTERNS[RegexPreset.EMAIL_ADDRESS] in violation.message


def test_match_skips_none(engine) -> None:
    class MaybeCode(ValidatableEntity):
        value: Annotated[Optional[str], c.match("[0-9]+")] = None

    assert engine.validate(MaybeCode()).is_empty()


def test_invalid_expression_raises(engine) -> None:
    class Broken(ValidatableEntity):
        value: Annotated[str, c.match("([a-z]")] = "a"

    with pytest.raises(ConfigurationError):
        engine.validate(Broken())


def test_match_without_expression_needs_content(engine) -> None:
    class Empty(ValidatableEntity):
        value: Annotated[str, c.match()] = "a"

    with pytest.raises(ConfigurationError):
        engine.validate(Empty())
