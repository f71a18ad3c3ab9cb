"""Unit tests for needle and haystack encoding."""

from __future__ import annotations

import pytest


class TestPrimitives:
    """Tests for the host/path append helpers."""

    def test_append_host_adds_leading_dot(self) -> None:
        """Hosts always start at a label boundary."""
        from gfwlist.encoder import append_host

        parts: list[str] = []
        append_host(parts, "example.com")
        assert "".join(parts) == ".example.com"

    def test_append_host_keeps_existing_dot(self) -> None:
        from gfwlist.encoder import append_host

        parts: list[str] = []
        append_host(parts, ".example.com")
        assert "".join(parts) == ".example.com"

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("/page", "/page/"), ("/page/", "/page/"), ("", "/"), ("/", "/")],
    )
    def test_append_path_terminates_segment(self, path: str, expected: str) -> None:
        """Paths always end with a segment delimiter."""
        from gfwlist.encoder import append_path

        parts: list[str] = []
        append_path(parts, path)
        assert "".join(parts) == expected

    def test_append_host_path_splits_at_first_slash(self) -> None:
        from gfwlist.encoder import append_host_path

        parts: list[str] = []
        append_host_path(parts, "example.com/ads/banner")
        assert "".join(parts) == ".example.com\x03/ads/banner/"

    def test_append_host_path_defaults_to_root(self) -> None:
        from gfwlist.encoder import append_host_path

        parts: list[str] = []
        append_host_path(parts, "example.com")
        assert "".join(parts) == ".example.com\x03/"


class TestUrlEncoding:
    """Tests for URL encoding in full and rule mode."""

    def test_encode_url_full(self) -> None:
        """Query URLs always carry the path field."""
        from gfwlist.encoder import encode_url

        assert encode_url("http://www.example.com/page") == "\x01http\x02.www.example.com\x03/page/"
        assert encode_url("https://Example.COM:8443") == "\x01https\x02.example.com\x03/"

    def test_rule_mode_omits_bare_root_path(self) -> None:
        """A URL rule written without a path does not pin the host's end."""
        from gfwlist.encoder import append_url

        parts: list[str] = []
        append_url(parts, "http://example.com", full=False)
        assert "".join(parts) == "\x01http\x02.example.com"

    def test_rule_mode_keeps_explicit_root_path(self) -> None:
        from gfwlist.encoder import append_url

        parts: list[str] = []
        append_url(parts, "http://example.com/", full=False)
        assert "".join(parts) == "\x01http\x02.example.com\x03/"

    def test_rule_mode_keeps_non_root_path(self) -> None:
        from gfwlist.encoder import append_url

        parts: list[str] = []
        append_url(parts, "http://example.com/page", full=False)
        assert "".join(parts) == "\x01http\x02.example.com\x03/page/"

    def test_invalid_url_raises(self) -> None:
        from gfwlist.encoder import encode_url
        from gfwlist.exceptions import GfwListUrlError

        with pytest.raises(GfwListUrlError):
            encode_url("example.com")


class TestEncodeLiteral:
    """Tests for turning classified literal rules into needles."""

    def test_domain_suffix_and_anchor_share_encoding(self) -> None:
        from gfwlist.encoder import Anchor, encode_literal

        assert encode_literal(Anchor.DOMAIN_SUFFIX, "example.com") == ".example.com\x03/"
        assert encode_literal(Anchor.DOMAIN, "example.com") == ".example.com\x03/"

    def test_substring_rule_pins_host_start(self) -> None:
        from gfwlist.encoder import Anchor, encode_literal

        assert encode_literal(Anchor.SUBSTRING, "example.com/x") == "\x02.example.com\x03/x/"

    def test_url_rule_uses_rule_mode(self) -> None:
        from gfwlist.encoder import Anchor, encode_literal

        assert encode_literal(Anchor.URL, "http://example.com") == "\x01http\x02.example.com"
