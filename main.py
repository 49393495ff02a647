"""Entry point: check an installed app for updates, or run one background check.

Usage:
    python main.py <distribution>                 show the update dialog if needed
    python main.py <distribution> --background    run one scheduled background check
"""

import logging
import sys


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    if not args:
        print(__doc__)
        sys.exit(2)

    from importlib.metadata import PackageNotFoundError

    from app_update.adapters.cache.json_store import JsonKeyValueStore
    from app_update.adapters.config.json_config_adapter import JsonConfigAdapter
    from app_update.adapters.network.detector import PsutilNetworkDetector
    from app_update.adapters.system.app_info import package_info_from_distribution
    from app_update.domain.errors import AppUpdateError

    try:
        package = package_info_from_distribution(args[0])
    except PackageNotFoundError:
        print(f"Distribution not installed: {args[0]}")
        sys.exit(1)

    store = JsonKeyValueStore()
    config = JsonConfigAdapter(store).load()
    if config is None:
        print("No update configuration found. Create a session with enable_background_check=True first.")
        sys.exit(1)

    from app_update.session import UpdateSession

    try:
        session = UpdateSession(config, package, store, network=PsutilNetworkDetector())
    except AppUpdateError as e:
        print(f"Update configuration rejected: {e}")
        sys.exit(1)

    if "--background" in sys.argv:
        ok = session.worker.run_once()
        sys.exit(0 if ok else 1)

    _run_dialog(session)


def _run_dialog(session):
    import threading

    import flet as ft

    from app_update.domain.errors import NetworkPolicyError
    from app_update.ui.update_dialog import FletUpdatePresenter

    def app(page: ft.Page):
        page.title = f"Update check: {session.package.package_name} {session.current_version}"
        status = ft.Text("Checking for updates...")
        page.add(status)

        def check():
            try:
                if session.config.show_dialog_automatically:
                    result = session.check_and_present(FletUpdatePresenter(page))
                    status.value = f"Update check finished: {result.state.value}"
                else:
                    descriptor = session.check_for_update()
                    if descriptor is not None and descriptor.update_available:
                        status.value = f"Version {descriptor.latest_version} is available"
                    else:
                        status.value = "No update available"
            except NetworkPolicyError as e:
                status.value = str(e)
            page.update()

        threading.Thread(target=check, daemon=True).start()

    ft.app(target=app)


if __name__ == "__main__":
    main()
