"""Flet update dialog. Shows an available update and reports the user's choice."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import flet as ft

from app_update.domain.model import UpdateDescriptor, UserChoice
from app_update.domain.ports import UpdatePresenterPort

logger = logging.getLogger("app_update.ui")

ACCENT = "#1DB954"
DANGER = "#EF4444"
FG = "#E2E8F0"
FG_DIM = "#94A3B8"


@dataclass(frozen=True)
class UpdateUIConfig:
    title: Optional[str] = None
    message: Optional[str] = None
    update_button_text: str = "Update"
    later_button_text: str = "Later"
    cancel_button_text: str = "Cancel"
    show_release_notes: bool = True
    show_file_size: bool = True


def dialog_title(descriptor: UpdateDescriptor, forced: bool, ui_config: UpdateUIConfig) -> str:
    if ui_config.title:
        return ui_config.title
    if forced:
        return "Update Required"
    if descriptor.is_critical:
        return "Critical Update Available"
    return "Update Available"


def dialog_message(forced: bool, ui_config: UpdateUIConfig) -> str:
    if ui_config.message:
        return ui_config.message
    if forced:
        return "A new version is required to continue using the app. Please update now."
    return "A new version of the app is available. Would you like to update?"


def build_update_dialog(
    descriptor: UpdateDescriptor,
    forced: bool,
    on_choice: Callable[[UserChoice], None],
    ui_config: Optional[UpdateUIConfig] = None,
) -> ft.AlertDialog:
    """Forced dialogs are modal and only carry the update action."""
    ui_config = ui_config or UpdateUIConfig()

    body: list[ft.Control] = [
        ft.Text(dialog_message(forced, ui_config), size=14, color=FG),
        ft.Text(
            f"Current version: {descriptor.current_version}    Latest version: {descriptor.latest_version}",
            size=12,
            color=FG_DIM,
        ),
    ]
    if ui_config.show_release_notes and descriptor.release_notes:
        body.append(ft.Text("What's new", size=13, weight=ft.FontWeight.BOLD, color=FG))
        body.append(ft.Text(descriptor.release_notes, size=12, color=FG_DIM, selectable=True))
    if ui_config.show_file_size and descriptor.file_size_bytes is not None:
        body.append(ft.Text(f"Download size: {descriptor.formatted_file_size}", size=12, color=FG_DIM))
    if descriptor.is_critical:
        body.append(ft.Text("This is a critical update.", size=12, weight=ft.FontWeight.BOLD, color=DANGER))

    actions: list[ft.Control] = []
    if not forced:
        actions.append(
            ft.TextButton(
                ui_config.later_button_text,
                data=UserChoice.DEFERRED,
                on_click=lambda _: on_choice(UserChoice.DEFERRED),
            )
        )
        actions.append(
            ft.TextButton(
                ui_config.cancel_button_text,
                data=UserChoice.DISMISSED,
                on_click=lambda _: on_choice(UserChoice.DISMISSED),
            )
        )
    actions.append(
        ft.FilledButton(
            ui_config.update_button_text,
            data=UserChoice.ACCEPTED,
            on_click=lambda _: on_choice(UserChoice.ACCEPTED),
        )
    )

    return ft.AlertDialog(
        modal=forced,
        title=ft.Text(dialog_title(descriptor, forced, ui_config), weight=ft.FontWeight.BOLD),
        content=ft.Column(body, tight=True, spacing=10),
        actions=actions,
        on_dismiss=None if forced else (lambda _: on_choice(UserChoice.DISMISSED)),
    )


class FletUpdatePresenter(UpdatePresenterPort):
    """Blocks the calling worker thread until the user answers the dialog.

    Must not be called from the Flet event loop itself.
    """

    def __init__(self, page: ft.Page, ui_config: Optional[UpdateUIConfig] = None):
        self._page = page
        self.ui_config = ui_config or UpdateUIConfig()

    def present(self, descriptor: UpdateDescriptor, forced: bool) -> UserChoice:
        decided = threading.Event()
        outcome = {"choice": UserChoice.DISMISSED}

        def on_choice(choice: UserChoice) -> None:
            if decided.is_set():
                return
            outcome["choice"] = choice
            decided.set()
            dialog.open = False
            self._page.update()

        dialog = build_update_dialog(descriptor, forced, on_choice, self.ui_config)
        self._page.overlay.append(dialog)
        dialog.open = True
        self._page.update()
        logger.info("Update dialog shown (latest=%s forced=%s)", descriptor.latest_version, forced)

        decided.wait()
        if dialog in self._page.overlay:
            self._page.overlay.remove(dialog)
        return outcome["choice"]
