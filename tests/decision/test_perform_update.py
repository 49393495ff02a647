"""Bounded context: Update installation

Business rules for sending the user to the new version once they accept.
"""

import pytest

from app_update.adapters.store.in_app_update import InAppUpdateExecutor
from app_update.adapters.store.store_page import StorePageExecutor
from app_update.domain.model import InAppUpdateResult, NativeUpdateStatus, UpdateConfig, UpdateStrategy
from app_update.domain.ports import InstallExecutorPort
from app_update.services.analytics import AnalyticsService
from app_update.usecases.perform_update import PerformUpdateUseCase, select_install_executor
from conftest import FakeNativeStore, RecordingLauncher, descriptor

ANDROID = UpdateConfig(play_store_id="com.example.app")
MARKET_URL = "market://details?id=com.example.app"
WEB_URL = "https://play.google.com/store/apps/details?id=com.example.app"


class RecordingFallback(InstallExecutorPort):
    def __init__(self):
        self.calls = 0

    def install(self, descriptor):
        self.calls += 1
        return True


@pytest.fixture
def analytics(clock, recorder):
    return AnalyticsService(ANDROID.replace(enable_analytics=True, analytics_callback=recorder), clock)


class TestExecutorSelection:

    def test_android_with_sdk_uses_in_app_update(self, android_app, analytics):
        executor = select_install_executor(ANDROID, android_app, RecordingLauncher(), analytics, FakeNativeStore())

        assert isinstance(executor, InAppUpdateExecutor)

    def test_android_without_sdk_opens_store_page(self, android_app, analytics):
        executor = select_install_executor(ANDROID, android_app, RecordingLauncher(), analytics)

        assert isinstance(executor, StorePageExecutor)

    def test_ios_opens_store_page(self, ios_app, analytics):
        config = UpdateConfig(app_store_id="123")

        executor = select_install_executor(config, ios_app, RecordingLauncher(), analytics, FakeNativeStore())

        assert isinstance(executor, StorePageExecutor)


class TestStorePage:
    """As a user who accepted, I land on the store page for the app."""

    def test_market_link_is_tried_first(self, android_app):
        launcher = RecordingLauncher()

        assert StorePageExecutor(ANDROID, android_app, launcher).install(descriptor())
        assert launcher.opened == [MARKET_URL]

    def test_web_page_when_market_link_fails(self, android_app):
        launcher = RecordingLauncher(accepts={WEB_URL})

        assert StorePageExecutor(ANDROID, android_app, launcher).install(descriptor())
        assert launcher.opened == [MARKET_URL, WEB_URL]

    def test_download_url_is_last_resort(self, android_app):
        launcher = RecordingLauncher(accepts={"https://example.com/app.apk"})
        d = descriptor(download_url="https://example.com/app.apk")

        assert StorePageExecutor(ANDROID, android_app, launcher).install(d)
        assert launcher.opened[-1] == "https://example.com/app.apk"

    def test_nothing_opens(self, android_app):
        launcher = RecordingLauncher(accepts=set())

        assert not StorePageExecutor(ANDROID, android_app, launcher).install(descriptor())

    def test_backend_only_app_uses_download_url(self, android_app, backend_config):
        launcher = RecordingLauncher()
        d = descriptor(download_url="https://example.com/app.apk")

        assert StorePageExecutor(backend_config, android_app, launcher).install(d)
        assert launcher.opened == ["https://example.com/app.apk"]


class TestInAppUpdate:
    """On Android the store SDK installs the update without leaving the app."""

    def test_flexible_update_is_started_and_completed(self, analytics, recorder):
        sdk = FakeNativeStore()
        executor = InAppUpdateExecutor(ANDROID, sdk, RecordingFallback(), analytics)

        assert executor.install(descriptor())
        assert sdk.calls == ["check", "flexible", "complete"]
        assert recorder.names == ["update_install_started", "update_install_completed"]

    def test_immediate_strategy(self, analytics):
        sdk = FakeNativeStore()
        config = ANDROID.replace(strategy=UpdateStrategy.IMMEDIATE)

        assert InAppUpdateExecutor(config, sdk, RecordingFallback(), analytics).install(descriptor())
        assert sdk.calls == ["check", "immediate"]

    def test_forced_update_is_immediate(self, analytics):
        sdk = FakeNativeStore()

        InAppUpdateExecutor(ANDROID, sdk, RecordingFallback(), analytics).install(descriptor(is_forced=True))

        assert sdk.calls == ["check", "immediate"]

    def test_user_denial_is_a_failure(self, analytics, recorder):
        sdk = FakeNativeStore(result=InAppUpdateResult.USER_DENIED)

        assert not InAppUpdateExecutor(ANDROID, sdk, RecordingFallback(), analytics).install(descriptor())
        assert "complete" not in sdk.calls
        name, data = recorder.events[-1]
        assert name == "update_install_failed"
        assert data["error"] == "user_denied"

    def test_sdk_without_update_falls_back_to_store_page(self, analytics):
        sdk = FakeNativeStore(NativeUpdateStatus(update_available=False))
        fallback = RecordingFallback()

        assert InAppUpdateExecutor(ANDROID, sdk, fallback, analytics).install(descriptor())
        assert fallback.calls == 1
        assert sdk.calls == ["check"]

    def test_sdk_crash_falls_back_to_store_page(self, analytics, recorder):
        class CrashingSdk(FakeNativeStore):
            def start_flexible_update(self):
                raise RuntimeError("activity gone")

        fallback = RecordingFallback()

        assert InAppUpdateExecutor(ANDROID, CrashingSdk(), fallback, analytics).install(descriptor())
        assert fallback.calls == 1
        assert "update_install_failed" in recorder.names


class TestPerformUpdate:

    def test_executor_result_is_returned(self):
        assert PerformUpdateUseCase(RecordingFallback()).execute(descriptor())

    def test_executor_crash_is_a_failure(self):
        class Crashing(InstallExecutorPort):
            def install(self, descriptor):
                raise RuntimeError("boom")

        assert PerformUpdateUseCase(Crashing()).execute(descriptor()) is False
