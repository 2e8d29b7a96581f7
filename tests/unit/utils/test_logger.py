"""Tests for logging helpers."""

import asyncio

from postsmith.utils.logger import get_request_id, set_request_id, truncate


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("hello", 10) == "hello"

    def test_long_text_marked(self):
        assert truncate("abcdefghij", 4) == "abcd... [6 more chars]"

    def test_none(self):
        assert truncate(None) == ""


class TestRequestId:
    def test_set_and_get(self):
        set_request_id("req-1")
        try:
            assert get_request_id() == "req-1"
        finally:
            set_request_id(None)

    def test_isolated_per_task(self):
        async def worker(rid):
            set_request_id(rid)
            await asyncio.sleep(0)
            return get_request_id()

        async def main():
            return await asyncio.gather(worker("a"), worker("b"))

        assert asyncio.run(main()) == ["a", "b"]
