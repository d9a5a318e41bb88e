"""Unit tests for parameter encoding."""

from __future__ import annotations

import json
from datetime import date

from spaceapi.client.runtime.rest import stringify, to_json_body, to_query_string


class TestStringify:
    def test_booleans_are_lowercase(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_dates_are_iso(self):
        assert stringify(date(2020, 7, 21)) == "2020-07-21"

    def test_other_values_use_str(self):
        assert stringify(42) == "42"
        assert stringify("abc") == "abc"


class TestQueryString:
    def test_empty(self):
        assert to_query_string({}) == ""

    def test_fields_and_repeated_keys(self):
        """Test that list values repeat their key and $fields is escaped."""
        query = to_query_string({"$fields": "*,parent!", "members": ["a", "b"]})
        assert query == "?%24fields=*%2Cparent%21&members=a&members=b"

    def test_scalar_values_are_stringified(self):
        query = to_query_string({"since": date(2024, 1, 31), "reportPastMembers": True})
        assert query == "?since=2024-01-31&reportPastMembers=true"

    def test_special_characters_are_escaped(self):
        assert to_query_string({"query": "a b&c"}) == "?query=a+b%26c"


class TestJsonBody:
    def test_empty(self):
        assert to_json_body({}) is None

    def test_dates_are_serialized(self):
        body = to_json_body({"since": date(2024, 1, 31), "ids": ["a", "b"]})
        assert json.loads(body) == {"since": "2024-01-31", "ids": ["a", "b"]}
