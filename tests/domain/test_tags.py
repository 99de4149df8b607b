from __future__ import annotations

from dataclasses import dataclass

from lib_log_sentry.domain.events import ERROR_KEY
from lib_log_sentry.domain.tags import make_tags


@dataclass
class _Point:
    x: int
    y: int


def test_make_tags_excludes_error_and_stringifies_values() -> None:
    tags = make_tags(
        {
            "AAA": 123,
            ERROR_KEY: RuntimeError("some error"),
            "BBB": {"aaa": 123},
        }
    )

    assert tags == {"AAA": "123", "BBB": "{'aaa': 123}"}


def test_make_tags_excludes_error_key_even_for_plain_values() -> None:
    assert make_tags({ERROR_KEY: "text", "k": "v"}) == {"k": "v"}


def test_make_tags_uses_natural_string_form() -> None:
    tags = make_tags({"point": _Point(1, 2), "flag": True, "none": None, "ratio": 0.5})

    assert tags == {"point": "_Point(x=1, y=2)", "flag": "True", "none": "None", "ratio": "0.5"}


def test_make_tags_honours_custom_error_key() -> None:
    assert make_tags({"exc": ValueError("x"), ERROR_KEY: 1}, error_key="exc") == {ERROR_KEY: "1"}


def test_make_tags_on_empty_fields() -> None:
    assert make_tags({}) == {}
