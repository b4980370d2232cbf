import locale
import logging
import tkinter as tk
from typing import Any, Optional

import ttkbootstrap as ttk
from ttkbootstrap.dialogs import Messagebox

from ...features import LANGUAGES, Language, language_for_locale


def system_language() -> Language:
    """Return the menu language matching the operating system locale."""

    try:
        code = locale.getlocale()[0]
    except ValueError:
        code = None
    return language_for_locale(code)


class SettingsView:
    """Language selection and settings reset."""

    def __init__(self, app: Any, parent: tk.Widget) -> None:
        """Create the settings view."""

        self.app = app
        self.frame = parent
        state = self.app.state
        self.lang_var = tk.StringVar(value=self.language_name(state.get("lang_idx")))
        self.use_game_lang_var = tk.BooleanVar(value=bool(state.get("useGameLang")))
        self.current_lang_var = tk.StringVar(value=self.current_language_text())

        self.build()

    def build(self) -> None:
        """Construct all widgets for the settings tab."""

        frame = ttk.LabelFrame(self.frame, text="Language")
        frame.pack(fill="both", expand=True, padx=10, pady=10)

        ttk.Label(frame, textvariable=self.current_lang_var).pack(anchor="w")
        ttk.Checkbutton(
            frame,
            text="Use system language",
            variable=self.use_game_lang_var,
            command=self.toggle_game_language,
        ).pack(anchor="w", pady=5)

        ttk.Label(frame, text="Custom language:").pack(anchor="w", pady=(10, 0))
        self.lang_combobox = ttk.Combobox(frame, textvariable=self.lang_var, state="readonly")
        self.lang_combobox["values"] = [language.name for language in LANGUAGES]
        self.lang_combobox.pack(fill="x", pady=5)
        ttk.Button(frame, text="Save", command=self.save_language).pack()
        self.update_language_widgets()

        ttk.Button(
            self.frame,
            text="Reset Settings",
            bootstyle="danger",
            command=self.reset_settings,
        ).pack(pady=10)

    # ------------------------------------------------------------------
    @staticmethod
    def language_name(index: Optional[int]) -> str:
        try:
            return LANGUAGES[int(index or 0)].name
        except (IndexError, TypeError, ValueError):
            return LANGUAGES[0].name

    def current_language_text(self) -> str:
        return f"Current language: {self.app.state.get('current_lang')}"

    def update_language_widgets(self) -> None:
        """Lock the custom selection while the system language is in use."""

        combobox = getattr(self, "lang_combobox", None)
        if combobox is not None:
            combobox.configure(state="disabled" if self.use_game_lang_var.get() else "readonly")

    def toggle_game_language(self) -> None:
        """Follow or stop following the system language."""

        enabled = bool(self.use_game_lang_var.get())
        self.app.state.use_game_language(enabled, system_language() if enabled else None)
        self.current_lang_var.set(self.current_language_text())
        self.lang_var.set(self.language_name(self.app.state.get("lang_idx")))
        self.update_language_widgets()

    def save_language(self) -> None:
        """Persist the language picked in the combobox."""

        name = self.lang_var.get()
        index = next((i for i, language in enumerate(LANGUAGES) if language.name == name), None)
        if index is None:
            self.app.log(f"Unknown language: {name}", logging.WARNING)
            return
        language = self.app.state.select_language(index)
        self.current_lang_var.set(self.current_language_text())
        self.app.log(f"Language set to {language.name}.")
        Messagebox.show_info(
            "Language settings saved. Please restart the menu to apply the changes.",
            title="Tweak Menu",
        )

    def reset_settings(self) -> None:
        """Reset every setting to its default after confirmation."""

        answer = Messagebox.yesno(
            "Are you sure you want to reset all settings to default?",
            title="Reset Settings",
        )
        if answer != "Yes":
            return
        self.app.state.reset()
        self.app.refresh()
        self.app.log("Settings reset to defaults.")

    def refresh(self) -> None:
        """Reload widget variables from the menu state."""

        self.use_game_lang_var.set(bool(self.app.state.get("useGameLang")))
        self.lang_var.set(self.language_name(self.app.state.get("lang_idx")))
        self.current_lang_var.set(self.current_language_text())
        self.update_language_widgets()
