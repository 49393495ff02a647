"""Bounded context: Caching and dismissals

Business rules for the persisted update cache, dismissal history and
background results.
"""

from datetime import timedelta

from app_update.domain.model import StoreOracleDescriptor
from app_update.domain.version import SemanticVersion
from app_update.services.cache_service import (
    DISMISS_COUNT_KEY,
    LAST_CHECK_KEY,
    UPDATE_INFO_KEY,
    CacheService,
)
from conftest import BrokenStore, descriptor

SIX_HOURS = timedelta(hours=6)


class TestCachedUpdateInfo:
    """As a user reopening the app, I don't wait on the network for a fresh result."""

    def test_cached_result_is_returned_within_ttl(self, cache, clock):
        cache.cache_update_info(descriptor("1.2.0"))
        clock.advance(hours=5, minutes=59)

        cached = cache.cached_update_info(SIX_HOURS)

        assert cached is not None
        assert cached.latest_version == SemanticVersion(1, 2, 0)

    def test_cached_result_expires_after_ttl(self, cache, clock):
        cache.cache_update_info(descriptor("1.2.0"))
        clock.advance(hours=6, minutes=1)

        assert cache.cached_update_info(SIX_HOURS) is None

    def test_cache_records_fetch_time(self, cache, clock, store):
        cache.cache_update_info(descriptor())

        assert store.data[LAST_CHECK_KEY] == int(clock.now().timestamp() * 1000)
        assert cache.cached_entry().fetched_at == clock.now()

    def test_empty_cache_returns_none(self, cache):
        assert cache.cached_update_info(SIX_HOURS) is None

    def test_corrupt_cache_is_treated_as_empty(self, cache, store):
        cache.cache_update_info(descriptor())
        store.data[UPDATE_INFO_KEY] = "{not json"

        assert cache.cached_entry() is None

    def test_clear_cache_forgets_result_and_check_time(self, cache):
        cache.cache_update_info(descriptor())
        cache.clear_cache()

        assert cache.cached_entry() is None
        assert cache.last_check_time() is None

    def test_store_descriptor_survives_the_cache(self, cache):
        cache.cache_update_info(
            StoreOracleDescriptor(
                latest_version=SemanticVersion.from_build_code(12),
                current_version=SemanticVersion.from_build_code(10),
                store_reports_update=True,
            )
        )

        assert cache.cached_update_info(SIX_HOURS).update_available


class TestCheckInterval:
    """Background checks respect the configured interval."""

    def test_first_check_is_due(self, cache):
        assert cache.should_check_for_update(24)

    def test_check_not_due_right_after_caching(self, cache, clock):
        cache.cache_update_info(descriptor())
        clock.advance(hours=1)

        assert not cache.should_check_for_update(24)

    def test_check_due_after_interval(self, cache, clock):
        cache.cache_update_info(descriptor())
        clock.advance(hours=24)

        assert cache.should_check_for_update(24)


class TestDismissals:
    """As a user who said no, I am not asked again about the same release."""

    def test_dismissed_version_is_remembered(self, cache):
        cache.mark_update_dismissed("2.0.0")

        assert cache.has_user_dismissed_version("2.0.0")
        assert not cache.has_user_dismissed_version("2.0.1")

    def test_each_dismissal_increments_count(self, cache):
        cache.mark_update_dismissed("2.0.0")
        cache.mark_update_dismissed("2.0.1")

        state = cache.dismissal_state()
        assert state.dismiss_count == 2
        assert state.dismissed_version == "2.0.1"

    def test_clear_dismiss_status_keeps_count(self, cache):
        cache.mark_update_dismissed("2.0.0")
        cache.clear_dismiss_status()

        assert not cache.has_user_dismissed_version("2.0.0")
        assert cache.dismiss_count() == 1

    def test_reset_dismiss_data_clears_count(self, cache, store):
        cache.mark_update_dismissed("2.0.0")
        cache.reset_dismiss_data()

        assert cache.dismiss_count() == 0
        assert DISMISS_COUNT_KEY not in store.data


class TestBackgroundResults:
    """A background check leaves its finding for the next launch."""

    def test_background_update_is_stored(self, cache):
        cache.mark_background_update(descriptor("3.0.0"))

        assert cache.has_background_update()
        assert cache.background_update_info().latest_version == SemanticVersion(3, 0, 0)

    def test_clear_background_update(self, cache):
        cache.mark_background_update(descriptor("3.0.0"))
        cache.clear_background_update()

        assert not cache.has_background_update()
        assert cache.background_update_info() is None


class TestStoreFailures:
    """A broken store never interrupts the update flow."""

    def test_failing_store_reads_as_empty(self, clock):
        cache = CacheService(BrokenStore(), clock)

        assert cache.cached_update_info(SIX_HOURS) is None
        assert cache.last_check_time() is None
        assert cache.should_check_for_update(24)
        assert cache.dismiss_count() == 0
        assert not cache.has_background_update()
        assert cache.background_update_info() is None

    def test_failing_store_writes_are_swallowed(self, clock):
        cache = CacheService(BrokenStore(), clock)

        cache.cache_update_info(descriptor())
        cache.mark_update_dismissed("2.0.0")
        cache.mark_background_update(descriptor())
        cache.clear_cache()
        cache.reset_dismiss_data()
