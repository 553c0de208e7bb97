from __future__ import annotations

import pytest

from pageassets.cachebuster import CacheBuster
from pageassets.diagnostics import AssetWarning
from pageassets.urls import build_url, is_absolute_url, join_domain, resolve_environment


@pytest.mark.parametrize(
    "identifier",
    ["https://ext.example/x.js", "http://ext.example/x.css", "//cdn.example/x.js", "HTTPS://EXT.example/x.js"],
)
def test_absolute_urls_pass_through(identifier: str) -> None:
    buster = CacheBuster()
    buster.set_generator(lambda name: "v9")
    assert is_absolute_url(identifier)
    assert build_url(identifier, domain="https://cdn.example/", cachebuster=buster) == identifier


def test_relative_identifier_is_not_absolute() -> None:
    assert not is_absolute_url("js/app.js")
    assert not is_absolute_url("/js/app.js")


@pytest.mark.parametrize(
    ("domain", "identifier", "expected"),
    [
        ("/", "style.css", "/style.css"),
        ("/", "/style.css", "/style.css"),
        ("https://cdn.example.com", "foo.js", "https://cdn.example.com/foo.js"),
        ("https://cdn.example.com///", "//foo.js", "https://cdn.example.com/foo.js"),
    ],
)
def test_join_domain(domain: str, identifier: str, expected: str) -> None:
    assert join_domain(domain, identifier) == expected


def test_cache_buster_is_applied_before_joining() -> None:
    buster = CacheBuster()
    buster.hashes = {"foo.js": "v123"}
    url = build_url("foo.js", domain="https://cdn.example.com", cachebuster=buster)
    assert url == "https://cdn.example.com/foo.js?v123"


def test_url_generator_receives_busted_identifier_and_secure_flag() -> None:
    calls = []
    buster = CacheBuster()
    buster.hashes = {"foo.js": "v1"}

    def generator(name: str, secure: bool) -> str:
        calls.append((name, secure))
        return "CUSTOM/" + name

    assert build_url("foo.js", cachebuster=buster, url_generator=generator, secure=True) == "CUSTOM/foo.js?v1"
    assert calls == [("foo.js?v1", True)]


def test_url_generator_non_string_becomes_empty() -> None:
    with pytest.warns(AssetWarning):
        assert build_url("foo.js", url_generator=lambda name, secure: None) == ""


def test_resolve_environment() -> None:
    assert resolve_environment("staging", lambda: "local") == "staging"
    assert resolve_environment(None, None) == "production"
    assert resolve_environment(None, lambda: "local") == "local"
    with pytest.warns(AssetWarning):
        assert resolve_environment(None, lambda: 3) == "production"
