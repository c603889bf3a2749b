import io
import json
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest

from dronesim.wolfram import (
    DEFAULT_QUERY,
    WolframError,
    build_query_url,
    main,
    parse_response,
    query,
)

SAMPLE = {
    "queryresult": {
        "success": True,
        "pods": [
            {"subpods": [{"plaintext": "simplify | sin(a) cos(b) + cos(a) sin(b)"}]},
            {"subpods": [{"plaintext": "sin(a + b)"}]},
        ],
    }
}


def test_url_round_trips_query():
    url = build_query_url(DEFAULT_QUERY, "placeholder")
    params = parse_qs(urlsplit(url).query)
    assert params["input"] == [DEFAULT_QUERY]
    assert params["format"] == ["plaintext"]
    assert params["output"] == ["JSON"]
    assert params["appid"] == ["placeholder"]


def test_url_escapes_reserved_characters():
    url = build_query_url("a b*c", "placeholder")
    assert "input=a%20b%2Ac&" in url


def test_parse_response_extracts_two_lines():
    assert parse_response(json.dumps(SAMPLE)) == (
        "simplify | sin(a) cos(b) + cos(a) sin(b)",
        "sin(a + b)",
    )


def test_parse_response_failed_query():
    doc = {"queryresult": {"success": False}}
    with pytest.raises(WolframError, match="query failed"):
        parse_response(json.dumps(doc))


def test_parse_response_bad_json():
    with pytest.raises(WolframError, match="JSON Parsing Error"):
        parse_response("{not json")


def test_parse_response_missing_pods():
    doc = {"queryresult": {"success": True, "pods": []}}
    with pytest.raises(WolframError):
        parse_response(json.dumps(doc))


def test_query_uses_opener():
    seen = []

    def opener(url):
        seen.append(url)
        return json.dumps(SAMPLE)

    result = query("x + x", "placeholder", opener)
    assert result[1] == "sin(a + b)"
    assert seen == [build_query_url("x + x", "placeholder")]


def test_query_network_failure():
    def opener(url):
        raise OSError("unreachable")

    with pytest.raises(WolframError, match="unreachable"):
        query("x", "placeholder", opener)


def test_main_prints_answer(capsys):
    payload = json.dumps(SAMPLE).encode("utf-8")
    with patch("dronesim.wolfram.urlopen", return_value=io.BytesIO(payload)):
        assert main(["--app-id", "placeholder"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["simplify | sin(a) cos(b) + cos(a) sin(b)", "sin(a + b)"]


def test_main_reports_failure(capsys):
    payload = json.dumps({"queryresult": {"success": False}}).encode("utf-8")
    with patch("dronesim.wolfram.urlopen", return_value=io.BytesIO(payload)):
        assert main(["--app-id", "placeholder"]) == 1
    assert "query failed" in capsys.readouterr().err