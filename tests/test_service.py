"""Tests for service layer."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from snaplink.lib.errors import (
    CodeGenerationError,
    RejectionReason,
    StorageError,
    URLValidationError,
)
from snaplink.lib.service import URLShortenerService


class TestURLShortenerService:
    """Test URL shortener service."""

    @pytest.mark.asyncio
    async def test_create_short_url(self, service, sample_urls):
        mapping, created = await service.create_short_url(sample_urls[0])

        assert created
        assert len(mapping.short_code) == 8
        assert mapping.original_url == sample_urls[0]
        assert mapping.click_count == 0

    @pytest.mark.asyncio
    async def test_create_trims_whitespace(self, service):
        mapping, _ = await service.create_short_url("  https://example.com/trim  ")

        assert mapping.original_url == "https://example.com/trim"

    @pytest.mark.asyncio
    async def test_duplicate_url_reuses_mapping(self, service, sample_urls):
        first, created_first = await service.create_short_url(sample_urls[0])
        second, created_second = await service.create_short_url(sample_urls[0])

        assert created_first
        assert not created_second
        assert second.short_code == first.short_code
        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_duplicate_url_reports_live_click_count(self, service, sample_urls):
        first, _ = await service.create_short_url(sample_urls[0])
        await service.resolve(first.short_code)
        await service.resolve(first.short_code)
        await service.wait_for_pending_clicks()

        again, created = await service.create_short_url(sample_urls[0])

        assert not created
        assert again.click_count == 2

    @pytest.mark.asyncio
    async def test_distinct_urls_get_distinct_codes(self, service, sample_urls):
        codes = set()
        for url in sample_urls:
            mapping, _ = await service.create_short_url(url)
            codes.add(mapping.short_code)

        assert len(codes) == len(sample_urls)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url, reason", [
        ("", RejectionReason.EMPTY_INPUT),
        ("not-a-url", RejectionReason.MALFORMED_URL),
        ("ftp://example.com", RejectionReason.DISALLOWED_SCHEME),
        ("http://ab", RejectionReason.LENGTH_OUT_OF_RANGE),
        ("http://localhost/x", RejectionReason.SUSPICIOUS_TARGET),
        ("https://bit.ly/abc", RejectionReason.ALREADY_SHORTENED),
    ])
    async def test_invalid_url(self, service, store, url, reason):
        with pytest.raises(URLValidationError) as exc_info:
            await service.create_short_url(url)

        assert exc_info.value.reason == reason
        assert await store.find_by_original_url(url) is None

    @pytest.mark.asyncio
    async def test_collision_is_retried(self, store, logger, scripted_generator):
        await store.insert("taken001", "https://example.com/taken")
        service = URLShortenerService(
            db=store,
            short_code_generator=scripted_generator(["taken001", "fresh001"]),
            logger=logger,
        )

        mapping, created = await service.create_short_url("https://example.com/new")

        assert created
        assert mapping.short_code == "fresh001"

    @pytest.mark.asyncio
    async def test_collision_retries_are_bounded(self, store, logger, scripted_generator):
        await store.insert("taken001", "https://example.com/taken")
        service = URLShortenerService(
            db=store,
            short_code_generator=scripted_generator(["taken001"] * 3),
            logger=logger,
            max_collision_retries=2,
        )

        with pytest.raises(CodeGenerationError):
            await service.create_short_url("https://example.com/new")

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, service, store):
        store.find_by_original_url = AsyncMock(side_effect=StorageError("disk gone"))

        with pytest.raises(StorageError):
            await service.create_short_url("https://example.com/fail")

    @pytest.mark.asyncio
    async def test_get_url_info_does_not_count(self, service, sample_urls):
        created, _ = await service.create_short_url(sample_urls[0])

        info = await service.get_url_info(created.short_code)
        await service.wait_for_pending_clicks()
        info_again = await service.get_url_info(created.short_code)

        assert info.click_count == 0
        assert info_again.click_count == 0

    @pytest.mark.asyncio
    async def test_resolve_counts_click(self, service, sample_urls):
        created, _ = await service.create_short_url(sample_urls[0])

        mapping = await service.resolve(created.short_code)
        await service.wait_for_pending_clicks()

        assert mapping.original_url == sample_urls[0]
        info = await service.get_url_info(created.short_code)
        assert info.click_count == 1

    @pytest.mark.asyncio
    async def test_resolve_nonexistent(self, service, store):
        store.increment_clicks = AsyncMock()

        assert await service.resolve("nonexist") is None
        store.increment_clicks.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolve_does_not_wait_for_increment(self, service, store, sample_urls):
        created, _ = await service.create_short_url(sample_urls[0])
        release = asyncio.Event()

        async def slow_increment(short_code):
            await release.wait()

        store.increment_clicks = slow_increment

        mapping = await service.resolve(created.short_code)
        assert mapping is not None
        assert len(service._pending_clicks) == 1

        release.set()
        await service.wait_for_pending_clicks()
        assert not service._pending_clicks

    @pytest.mark.asyncio
    async def test_click_failure_reaches_hook(self, store, logger, sample_urls):
        failures = []
        service = URLShortenerService(
            db=store,
            logger=logger,
            on_click_error=lambda code, exc: failures.append((code, exc)),
        )
        created, _ = await service.create_short_url(sample_urls[0])
        store.increment_clicks = AsyncMock(side_effect=StorageError("locked"))

        mapping = await service.resolve(created.short_code)
        await service.wait_for_pending_clicks()

        assert mapping.short_code == created.short_code
        assert len(failures) == 1
        assert failures[0][0] == created.short_code
        assert isinstance(failures[0][1], StorageError)

    @pytest.mark.asyncio
    async def test_health_check(self, service):
        health = await service.health_check()

        assert health == {"database": True, "overall": True}
