import pytest

import shortlinks.validation as V
from shortlinks.validation import is_valid_shortcode, is_valid_url


@pytest.mark.parametrize(
    "url",
    [
        "https://a.com",
        "http://example.com/path?q=1#frag",
        "https://sub.example.co.uk:8443/x",
        "ftp://files.example.com/readme.txt",
        "http://localhost:3000/abc",
        "  https://example.com  ",
    ],
)
def test_valid_urls(url):
    assert is_valid_url(url) is True


@pytest.mark.parametrize(
    "url",
    [
        "",
        "   ",
        "not a url",
        "example.com",
        "/relative/path",
        "mailto:someone@example.com",
        "https://exa mple.com",
        "http://host:notaport/",
        "http://",
        None,
        42,
    ],
)
def test_invalid_urls(url):
    assert is_valid_url(url) is False


def test_validator_exception_falls_back_to_parser(monkeypatch):
    def boom(_):
        raise RuntimeError("validator crashed")

    monkeypatch.setattr(V.validators, "url", boom)
    assert is_valid_url("https://example.com") is True
    assert is_valid_url("nope") is False


@pytest.mark.parametrize("code", ["a", "abc123", "my-code_1", "X" * 64, "has space", "my.code", "ü"])
def test_valid_shortcodes(code):
    assert is_valid_shortcode(code) is True


@pytest.mark.parametrize("code", ["", "   ", "slash/code", "q?x", "frag#1", "50%off", "stats", None])
def test_invalid_shortcodes(code):
    assert is_valid_shortcode(code) is False
