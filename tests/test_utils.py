import json

import pytest

from querygen.generate.utils import (
    GenerateError,
    _go_quote,
    del_pointer_sym,
    get_package_name,
    get_pure_name,
    get_struct_name,
    is_capitalize,
    is_end,
    uncapitalize,
)


@pytest.mark.parametrize(
    "text, expected",
    [("User", True), ("user", False), ("", False), ("_User", False), ("Zeta", True)],
)
def test_is_capitalize(text, expected):
    assert is_capitalize(text) is expected


@pytest.mark.parametrize("ch", list("azAZ09-_."))
def test_is_end_false_for_name_characters(ch):
    assert is_end(ch) is False


@pytest.mark.parametrize("ch", [" ", ")", "{", "@", ",", "\n", "é"])
def test_is_end_true_for_other_characters(ch):
    assert is_end(ch) is True


def test_del_pointer_sym_strips_all_leading_stars():
    assert del_pointer_sym("**model.User") == "model.User"
    assert del_pointer_sym("model.User") == "model.User"


def test_get_package_name():
    assert get_package_name("*model.User") == "model"
    assert get_package_name("model") == "model"


def test_get_pure_name():
    assert get_pure_name("*User") == "u"
    with pytest.raises(IndexError):
        get_pure_name("")


def test_get_struct_name():
    assert get_struct_name("model.User") == "User"
    assert get_struct_name("User") == "User"


@pytest.mark.parametrize("text", ["UserInfo", "A", "already", "Xyz"])
def test_uncapitalize_lowers_only_first(text):
    result = uncapitalize(text)
    assert result[0] == text[0].lower()
    assert result[1:] == text[1:]


def test_uncapitalize_empty():
    assert uncapitalize("") == ""


def test_go_quote_escapes_quotes_and_newlines():
    assert _go_quote('a"b\n') == '"a\\"b\\n"'


@pytest.mark.parametrize("text", ["select * from ", "users", "a\tb", 'x "y" \\ z', ""])
def test_go_quote_round_trips_as_json(text):
    assert json.loads(_go_quote(text)) == text


def test_generate_error_carries_message():
    err = GenerateError("boom")
    assert str(err) == "boom"
    assert err.args == ("boom",)
    assert isinstance(err, Exception)