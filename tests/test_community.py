import json
import logging
import os
import time
from itertools import count
from types import SimpleNamespace

import pytest
import requests
from monocheck_cli import community
from monocheck_cli.community import CACHE_FILE_NAME, fetch_community_rules
from monocheck_cli.converters import community_rule_to_rule
from monocheck_linter.models import RuleAction, RuleSource

PAYLOAD = [
    {
        "from": "@old/ui",
        "to": "@new/ui",
        "action": "rename",
        "description": "UI kit moved",
        "prefixOnly": True,
        "category": "ui",
        "priority": 5,
        "examples": [{"before": "@old/ui/button", "after": "@new/ui/button"}],
    },
    {"from": "moment", "to": "date-fns", "action": "replace-method", "description": "Use date-fns"},
]


class FakeResponse:
    """Streaming response; a str payload is sent as raw text, anything else as JSON."""

    def __init__(self, payload, status_code=200, chunks=1):
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self._body = text.encode("utf-8")
        self._chunks = chunks
        self.status_code = status_code

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size=1):
        size = max(1, -(-len(self._body) // self._chunks))
        for start in range(0, len(self._body), size):
            yield self._body[start : start + size]


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, exc=None):
        def _get(url, timeout=None, stream=False):
            assert stream
            calls.append({"url": url, "timeout": timeout})
            if exc is not None:
                raise exc
            return response

        monkeypatch.setattr(community.requests, "get", _get)
        return calls

    return install


def test_fetch_parses_and_caches(tmp_path, fake_get):
    calls = fake_get(FakeResponse(PAYLOAD))
    rules = fetch_community_rules("https://rules.example/special-cases.json", cache_dir=tmp_path)

    assert [r.from_ for r in rules] == ["@old/ui", "moment"]
    assert rules[0].prefix_only
    assert rules[0].examples[0].after == "@new/ui/button"
    assert rules[1].action == RuleAction.REPLACE_METHOD
    assert calls == [{"url": "https://rules.example/special-cases.json", "timeout": 5.0}]
    assert json.loads((tmp_path / CACHE_FILE_NAME).read_text()) == PAYLOAD


def test_fresh_cache_skips_network(tmp_path, fake_get):
    (tmp_path / CACHE_FILE_NAME).write_text(json.dumps(PAYLOAD))
    calls = fake_get(exc=AssertionError("network should not be used"))

    rules = fetch_community_rules(cache_dir=tmp_path)

    assert len(rules) == 2
    assert calls == []


def test_stale_cache_is_refreshed(tmp_path, fake_get):
    cache = tmp_path / CACHE_FILE_NAME
    cache.write_text(json.dumps(PAYLOAD[:1]))
    old = time.time() - 2 * 24 * 60 * 60
    os.utime(cache, (old, old))
    calls = fake_get(FakeResponse(PAYLOAD))

    rules = fetch_community_rules(cache_dir=tmp_path)

    assert len(rules) == 2
    assert len(calls) == 1


@pytest.mark.parametrize(
    "response, exc",
    [
        (None, requests.Timeout("timed out")),
        (None, requests.ConnectionError("refused")),
        (FakeResponse([], status_code=503), None),
        (FakeResponse("<html>"), None),
        (FakeResponse({"rules": []}), None),
        (FakeResponse([{"from": "x", "action": "explode"}]), None),
    ],
)
def test_failures_degrade_to_empty_list(tmp_path, fake_get, caplog, response, exc):
    fake_get(response, exc)
    with caplog.at_level(logging.WARNING, logger="monocheck_cli.community"):
        assert fetch_community_rules(cache_dir=tmp_path, timeout=1.5) == []
    assert "Could not fetch community rules" in caplog.text
    assert not (tmp_path / CACHE_FILE_NAME).exists()


def test_custom_timeout_is_passed(fake_get):
    calls = fake_get(FakeResponse([]))
    assert fetch_community_rules(timeout=0.5, cache_dir=None) == []
    assert calls[0]["timeout"] == 0.5


def test_community_rule_conversion(tmp_path, fake_get):
    fake_get(FakeResponse(PAYLOAD))
    rule = community_rule_to_rule(fetch_community_rules(cache_dir=None)[0])

    assert rule.match_key == "@old/ui"
    assert rule.replacement == "@new/ui"
    assert rule.source == RuleSource.COMMUNITY
    assert rule.priority == 5
    assert rule.rewrite("@old/ui/button") == "@new/ui/button"


def test_slow_response_hits_total_deadline(tmp_path, fake_get, monkeypatch, caplog):
    clock = count(0, 10)
    monkeypatch.setattr(community, "time", SimpleNamespace(monotonic=lambda: next(clock), time=time.time))
    fake_get(FakeResponse(PAYLOAD, chunks=4))

    with caplog.at_level(logging.WARNING, logger="monocheck_cli.community"):
        assert fetch_community_rules(cache_dir=tmp_path, timeout=15.0) == []
    assert "took longer than 15.0s" in caplog.text
    assert not (tmp_path / CACHE_FILE_NAME).exists()
