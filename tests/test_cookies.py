"""Tests for the cookie store."""

import threading

import pytest

from omada_api.cookies import CookieStore, parse_set_cookie


class TestParseSetCookie:
    """Tests for parse_set_cookie."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("TPOMADA_SESSIONID=S1", ("TPOMADA_SESSIONID", "S1")),
            ("TPOMADA_SESSIONID=S1; Path=/; HttpOnly; Secure", ("TPOMADA_SESSIONID", "S1")),
            ("a=b=c; Path=/", ("a", "b=c")),
            (" spaced = v ;", ("spaced", "v")),
            ("empty=", ("empty", "")),
        ],
    )
    def test_valid_headers(self, header, expected):
        assert parse_set_cookie(header) == expected

    @pytest.mark.parametrize("header", ["", "novalue", "=orphan; Path=/"])
    def test_invalid_headers(self, header):
        assert parse_set_cookie(header) is None


class TestCookieStore:
    """Tests for CookieStore merge semantics."""

    def test_last_write_wins(self):
        """Test that A=2 replaces a prior A=1."""
        store = CookieStore({"A": "1"})
        store.merge(["A=2"])

        assert dict(store) == {"A": "2"}
        assert store.header() == "A=2"

    def test_later_header_in_batch_wins(self):
        store = CookieStore()
        store.merge(["A=1; Path=/", "B=x", "A=3"])

        assert dict(store) == {"B": "x", "A": "3"}

    def test_header_joins_all_cookies(self):
        store = CookieStore()
        store.merge(["TPOMADA_SESSIONID=S1; Path=/", "locale=en"])

        assert store.header() == "TPOMADA_SESSIONID=S1; locale=en"

    def test_empty_store(self):
        store = CookieStore()

        assert len(store) == 0
        assert store.header() == ""

    def test_merge_ignores_malformed(self):
        store = CookieStore({"A": "1"})
        store.merge(["garbage", ""])

        assert dict(store) == {"A": "1"}

    def test_set_and_clear(self):
        store = CookieStore()
        store.set("A", "1")
        assert store["A"] == "1"
        assert "A" in store

        store.clear()
        assert "A" not in store

    def test_concurrent_merges(self):
        """Test that merges from many threads all land."""
        store = CookieStore()

        def worker(n):
            for i in range(50):
                store.merge([f"c{n}={i}"])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert dict(store) == {f"c{n}": "49" for n in range(8)}
