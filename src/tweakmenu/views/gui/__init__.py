import logging
import tkinter as tk
from tkinter.scrolledtext import ScrolledText
from typing import List, Optional

import ttkbootstrap as ttk
from ttkbootstrap.dialogs import Messagebox

from ...features import FEATURE_TABS, SLIDERS, MenuState, default_config
from ...utils import config_utils, logging_config
from ...utils.config_store import ConfigStore
from ..settings import SettingsView
from ..toggles import FeatureTabView

# Module-level logger for this module
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Custom logging handler to write to GUI widgets
# ---------------------------------------------------------------------------
class WidgetLoggerHandler(logging.Handler):
    def __init__(self, widget):
        super().__init__()
        self.widget = widget

    def emit(self, record):
        """Append a log record to the text widget.

        Tkinter widgets are not thread-safe, so the update is scheduled via
        the widget's ``after`` method and runs on Tk's main thread.
        """

        message = self.format(record)

        if self.widget:
            def append() -> None:
                self.widget.insert("end", message + "\n")
                self.widget.see("end")

            self.widget.after(0, append)


def show_store_error(title: str, message: str) -> None:
    """Surface a settings write failure to the user."""

    Messagebox.show_error(message, title=title)


class TweakMenuApp:
    """Main window holding one tab per feature group."""

    def log(self, message, level=logging.INFO):
        """Log messages using the module-level logger."""
        logger.log(level, message)

    def __init__(self, root, state: MenuState):
        self.root = root
        self.root.title("Tweak Menu")
        self.root.geometry("520x640")
        self.state = state
        self.views: List[object] = []

        self.build_interface()

        gui_handler = WidgetLoggerHandler(self.log_console)
        gui_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(gui_handler)

    # ------------------------------------------------------------------
    def build_interface(self):
        self.tabs = ttk.Notebook(self.root)
        self.tabs.pack(fill="both", expand=True)

        for name, toggles in FEATURE_TABS.items():
            tab = ttk.Frame(self.tabs)
            self.tabs.add(tab, text=name)
            sliders = [slider for slider in SLIDERS if slider.tab == name]
            self.views.append(FeatureTabView(self, tab, toggles, sliders))
            if name == "Settings":
                self.settings_view = SettingsView(self, tab)
                self.views.append(self.settings_view)

        self.log_console = ScrolledText(self.root, wrap=tk.WORD, height=6)
        self.log_console.pack(fill="x", padx=10, pady=(0, 10))

    def refresh(self):
        """Reload every view after the state changed underneath it."""

        for view in self.views:
            view.refresh()


def launch(config: Optional[str] = None) -> None:
    logging_config.configure()
    root = ttk.Window(themename="darkly")
    store = ConfigStore(
        config_utils.config_path(config),
        defaults=default_config,
        retry=config_utils.retry_policy_from_env(),
        on_error=show_store_error,
    )
    state = MenuState.load(store)

    TweakMenuApp(root, state)
    root.lift()
    root.mainloop()


__all__ = ["TweakMenuApp", "WidgetLoggerHandler", "launch"]


if __name__ == "__main__":
    launch()
