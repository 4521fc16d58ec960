# Tests for oauth/patterns.py

import re

import pytest

from oauth.patterns import PatternCache, compile_pattern


@pytest.fixture
def cache():
    return PatternCache()


class TestCompilePattern:
    def test_wildcard_becomes_any_run(self):
        regex = compile_pattern("https://*.example.com/*")
        assert regex.match("https://app.example.com/")
        assert regex.match("https://a.b.example.com/deep/path?x=1")

    def test_anchored_at_both_ends(self):
        regex = compile_pattern("https://app.example.com/")
        assert regex.match("https://app.example.com/") is not None
        assert regex.match("https://app.example.com/extra") is None
        assert regex.match("xhttps://app.example.com/") is None

    def test_regex_metacharacters_are_literal(self):
        regex = compile_pattern("https://app.example.com/cb?a=1")
        # "." must not match an arbitrary character, "?" is not a quantifier
        assert regex.match("https://appxexample.com/cb?a=1") is None
        assert regex.match("https://app.example.com/cba=1") is None
        assert regex.match("https://app.example.com/cb?a=1") is not None

    def test_wildcard_matches_empty(self):
        assert compile_pattern("http://localhost:3000/*").match("http://localhost:3000/")


class TestPatternCache:
    def test_subdomain_wildcard(self, cache):
        assert cache.match("https://app.example.com/", "https://*.example.com/*")

    def test_other_domain_rejected(self, cache):
        assert not cache.match("https://evil.com/", "https://*.example.com/*")

    def test_literal_pattern_matches_only_itself(self, cache):
        pattern = "https://app.example.com/callback"
        assert cache.match("https://app.example.com/callback", pattern)
        assert not cache.match("https://app.example.com/callback/", pattern)
        assert not cache.match("https://app.example.com/callbac", pattern)

    def test_compiles_once_per_pattern(self, cache, monkeypatch):
        calls = []
        real_compile = compile_pattern

        def counting_compile(pattern):
            calls.append(pattern)
            return real_compile(pattern)

        monkeypatch.setattr("oauth.patterns.compile_pattern", counting_compile)

        first = cache.match("https://app.example.com/", "https://*.example.com/*")
        second = cache.match("https://app.example.com/", "https://*.example.com/*")

        assert first is second is True
        assert calls == ["https://*.example.com/*"]
        assert "https://*.example.com/*" in cache
        assert len(cache) == 1

    def test_uncompilable_pattern_never_matches(self, cache, monkeypatch):
        def broken_compile(pattern):
            raise re.error("boom")

        monkeypatch.setattr("oauth.patterns.compile_pattern", broken_compile)

        assert cache.match("https://anything/", "*") is False
        assert "*" not in cache

    def test_separate_caches_are_independent(self):
        a, b = PatternCache(), PatternCache()
        a.match("x", "x")
        assert len(a) == 1
        assert len(b) == 0


def test_trailing_newline_does_not_match():
    assert not PatternCache().match("https://app.example.com/\n", "https://app.example.com/")
