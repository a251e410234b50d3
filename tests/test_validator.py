"""Tests for URL validation."""

import asyncio
import socket

import pytest

from shorturl.errors import InvalidInputError, InvalidReason
from shorturl.validator import DNSResolver, URLValidator, ValidationResult
from .conftest import FakeResolver, UNRESOLVABLE_HOST


class TestURLValidator:
    """Test the validator against a fake resolver."""

    async def test_accepts_resolvable_url(self, validator, resolver):
        result = await validator.validate("https://www.freecodecamp.org")

        assert result.is_valid
        assert result.url == "https://www.freecodecamp.org"
        assert result.hostname == "www.freecodecamp.org"
        assert resolver.calls == ["www.freecodecamp.org"]

    async def test_canonical_url_is_stripped(self, validator):
        result = await validator.validate("  https://example.com/path \n")

        assert result.is_valid
        assert result.url == "https://example.com/path"

    @pytest.mark.parametrize(
        "raw, reason",
        [
            ("not a url", InvalidReason.MALFORMED),
            ("ftp://example.com", InvalidReason.UNSUPPORTED_SCHEME),
            ("https://example.com/a\x00b", InvalidReason.MALFORMED),
            ("", InvalidReason.EMPTY),
            ("   ", InvalidReason.EMPTY),
            (None, InvalidReason.EMPTY),
            (12345, InvalidReason.EMPTY),
        ],
    )
    async def test_rejects_without_resolving(self, validator, resolver, raw, reason):
        result = await validator.validate(raw)

        assert not result.is_valid
        assert result.reason == reason
        assert resolver.calls == []

    async def test_rejects_unresolvable_host(self, validator, resolver):
        result = await validator.validate(f"https://{UNRESOLVABLE_HOST}/page")

        assert not result.is_valid
        assert result.reason == InvalidReason.UNRESOLVABLE
        assert result.hostname == UNRESOLVABLE_HOST
        assert resolver.calls == [UNRESOLVABLE_HOST]

    async def test_resolves_on_every_call(self, validator, resolver):
        await validator.validate("https://example.com/a")
        await validator.validate("https://example.com/a")

        assert resolver.calls == ["example.com", "example.com"]

    async def test_max_length(self, resolver):
        validator = URLValidator(resolver=resolver, max_url_length=25)

        result = await validator.validate("https://example.com/" + "x" * 10)

        assert result.reason == InvalidReason.TOO_LONG

    def test_raise_for_invalid(self):
        ValidationResult(url="https://example.com").raise_for_invalid()

        with pytest.raises(InvalidInputError) as exc_info:
            ValidationResult(url="ftp://x", reason=InvalidReason.UNSUPPORTED_SCHEME).raise_for_invalid()
        assert exc_info.value.reason == InvalidReason.UNSUPPORTED_SCHEME
        assert exc_info.value.message == "invalid url"


class TestDNSResolver:
    """Test the getaddrinfo-backed resolver without touching the network."""

    async def test_resolves(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def fake_getaddrinfo(host, port, **kwargs):
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)

        assert await DNSResolver().resolve("example.com")

    async def test_lookup_error_is_failure(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def fake_getaddrinfo(host, port, **kwargs):
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)

        assert not await DNSResolver().resolve("no-such-host.invalid")

    async def test_unicode_error_is_failure(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def fake_getaddrinfo(host, port, **kwargs):
            raise UnicodeError("label too long")

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)

        assert not await DNSResolver().resolve("a" * 100 + ".com")

    async def test_timeout_is_failure(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def slow_getaddrinfo(host, port, **kwargs):
            await asyncio.sleep(10)
            return []

        monkeypatch.setattr(loop, "getaddrinfo", slow_getaddrinfo)

        assert not await DNSResolver(timeout_seconds=0.05).resolve("slow.example.com")

    async def test_empty_answer_is_failure(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def fake_getaddrinfo(host, port, **kwargs):
            return []

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)

        assert not await DNSResolver().resolve("empty.example.com")

    async def test_validator_uses_dns_resolver(self, monkeypatch):
        loop = asyncio.get_running_loop()

        async def fake_getaddrinfo(host, port, **kwargs):
            if host == "www.example.com":
                return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

        monkeypatch.setattr(loop, "getaddrinfo", fake_getaddrinfo)
        validator = URLValidator(resolver=DNSResolver())

        assert (await validator.validate("https://www.example.com")).is_valid
        result = await validator.validate("https://nope.example.org")
        assert result.reason == InvalidReason.UNRESOLVABLE


def test_fake_resolver_defaults():
    assert FakeResolver().unknown == {UNRESOLVABLE_HOST}
