"""Tests for declaration loading helpers."""

import json

import pytest
import requests

from autocodable import utils
from autocodable.utils import (
    DeclarationLoaderError,
    JSONLoaderError,
    load_declarations,
    load_json,
    load_json_from_file,
    load_json_from_url,
    parse_declarations,
)


class _Response:
    def __init__(self, payload=None, status=200, content_type="application/json", error=None):
        self._payload = payload
        self.status_code = status
        self.headers = {"content-type": content_type}
        self._error = error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if self._error:
            raise self._error
        return self._payload


@pytest.fixture
def declaration_file(tmp_path):
    path = tmp_path / "user.json"
    path.write_text(json.dumps({"declarations": [{"type_name": "User"}]}), encoding="utf-8")
    return path


def test_load_json_from_file(declaration_file):
    source, data = load_json_from_file(declaration_file)

    assert source == str(declaration_file)
    assert data["declarations"][0]["type_name"] == "User"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_from_file(tmp_path / "nope.json")


def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(JSONLoaderError, match="Invalid JSON"):
        load_json_from_file(path)


def test_load_json_from_url(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return _Response({"type_name": "User"})

    monkeypatch.setattr(utils.requests, "get", fake_get)

    assert load_json_from_url("https://example.com/decls", timeout=5) == (
        "https://example.com/decls",
        {"type_name": "User"},
    )
    assert calls == [("https://example.com/decls", 5)]


def test_invalid_url():
    with pytest.raises(JSONLoaderError, match="Invalid URL"):
        load_json_from_url("not a url")


@pytest.mark.parametrize(
    "response_or_error, message",
    [
        (_Response(status=404), "HTTP error 404"),
        (requests.exceptions.Timeout(), "Request timeout"),
        (requests.exceptions.ConnectionError(), "Connection error"),
        (_Response(error=json.JSONDecodeError("Expecting value", "", 0)), "Invalid JSON response"),
    ],
)
def test_url_failures(monkeypatch, response_or_error, message):
    def fake_get(url, timeout):
        if isinstance(response_or_error, Exception):
            raise response_or_error
        return response_or_error

    monkeypatch.setattr(utils.requests, "get", fake_get)

    with pytest.raises(JSONLoaderError, match=message):
        load_json_from_url("https://example.com/decls.json")


def test_load_json_requires_exactly_one_source(declaration_file):
    with pytest.raises(JSONLoaderError):
        load_json()
    with pytest.raises(JSONLoaderError):
        load_json(declaration_file, "https://example.com")


def test_load_declarations(declaration_file):
    source, declarations = load_declarations(file_path=declaration_file)

    assert source == str(declaration_file)
    assert [d.type_name for d in declarations] == ["User"]


def test_parse_declarations_reports_source():
    with pytest.raises(DeclarationLoaderError, match="^decls.json: "):
        parse_declarations([{"enums": []}], "decls.json")
