"""Tests for hylog.jsonio"""

import json

import pytest

from hylog.errors import HyLogError, InvalidArgumentError
from hylog.jsonio import parse_json, safe_parse, safe_stringify, stringify_json


class TestSafeParse:
    def test_ok(self):
        assert safe_parse('{"a": 1}') == ({"a": 1}, None)

    def test_error(self):
        value, error = safe_parse("{oops")
        assert value is None
        assert isinstance(error, json.JSONDecodeError)

    def test_non_string(self):
        value, error = safe_parse(None)
        assert value is None
        assert isinstance(error, TypeError)


class TestSafeStringify:
    def test_ok(self):
        assert safe_stringify({"a": [1, 2]}) == ('{"a":[1,2]}', None)

    def test_non_ascii_kept(self):
        assert safe_stringify({"city": "café"}) == ('{"city":"café"}', None)

    def test_unserializable(self):
        text, error = safe_stringify({"a": object()})
        assert text is None
        assert isinstance(error, TypeError)

    def test_nan_rejected(self):
        text, error = safe_stringify(float("nan"))
        assert text is None
        assert isinstance(error, ValueError)

    def test_circular(self):
        data = []
        data.append(data)
        text, error = safe_stringify(data)
        assert text is None
        assert error is not None


class TestParseJson:
    def test_valid(self):
        assert parse_json('{"a":1}') == {"a": 1}

    def test_valid_scalar(self):
        assert parse_json("3") == 3

    def test_lenient_fallback(self):
        assert parse_json("not json") == {"$message": "not json"}
        assert parse_json("not json", False) == {"$message": "not json"}

    def test_strict_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_json("not json", True)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert exc_info.value.context == {"text": "not json"}


class TestStringifyJson:
    def test_ok(self):
        assert stringify_json({"k": "v"}) == '{"k":"v"}'

    def test_none(self):
        assert stringify_json(None) == "null"

    def test_failure_propagates(self):
        with pytest.raises(HyLogError) as exc_info:
            stringify_json({1, 2})
        assert exc_info.value.code_string() == "ERR_UNKNOWN_ERROR"
        assert not isinstance(exc_info.value, InvalidArgumentError)
