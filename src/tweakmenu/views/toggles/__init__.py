import logging
import tkinter as tk
from typing import Any, Dict, Iterable

import ttkbootstrap as ttk
from ttkbootstrap.tooltip import ToolTip

from ...features import Slider, Toggle


class FeatureTabView:
    """One tab of feature checkboxes, plus any sliders that belong to it."""

    def __init__(
        self,
        app: Any,
        parent: tk.Widget,
        toggles: Iterable[Toggle],
        sliders: Iterable[Slider] = (),
    ) -> None:
        """Create the tab view."""

        self.app = app
        self.frame = parent
        self.toggles = list(toggles)
        self.sliders = list(sliders)
        self.vars: Dict[str, Any] = {}
        self.widgets: Dict[str, Any] = {}

        self.build()

    def build(self) -> None:
        """Construct a checkbutton per toggle and a spinbox per slider."""

        state = self.app.state
        show_tooltips = not state.get("disableTooltips")

        frame = ttk.Frame(self.frame)
        frame.pack(fill="both", expand=True, padx=10, pady=10)

        for toggle in self.toggles:
            var = tk.BooleanVar(value=bool(state.get(toggle.key)))
            button = ttk.Checkbutton(
                frame,
                text=toggle.label,
                variable=var,
                command=lambda t=toggle: self.on_toggle(t),
            )
            button.pack(anchor="w", pady=2)
            if toggle.tooltip and show_tooltips:
                ToolTip(button, text=toggle.tooltip)
            self.vars[toggle.key] = var
            self.widgets[toggle.key] = button

        for slider in self.sliders:
            ttk.Label(frame, text=f"{slider.label}:").pack(anchor="w", pady=(10, 0))
            var = tk.IntVar(value=slider.clamp(state.get(slider.key)))
            spinbox = ttk.Spinbox(
                frame,
                from_=slider.minimum,
                to=slider.maximum,
                textvariable=var,
                width=5,
                wrap=False,
                command=lambda s=slider: self.on_slider(s),
            )
            spinbox.pack(anchor="w")
            self.vars[slider.key] = var
            self.widgets[slider.key] = spinbox

        self.update_availability()

    # ------------------------------------------------------------------
    def on_toggle(self, toggle: Toggle) -> None:
        """Persist a checkbox change."""

        value = bool(self.vars[toggle.key].get())
        switched_off = self.app.state.set(toggle.key, value)
        self.app.log(f"{toggle.label} {'enabled' if value else 'disabled'}")
        if switched_off in self.vars:
            self.vars[switched_off].set(False)
        self.update_availability()

    def on_slider(self, slider: Slider) -> None:
        """Persist a slider change, clamped to its range."""

        var = self.vars[slider.key]
        try:
            raw = int(var.get())
        except (tk.TclError, TypeError, ValueError):
            self.app.log(f"Ignoring invalid {slider.label} value", logging.WARNING)
            return
        value = self.app.state.set_slider(slider.key, raw)
        var.set(value)
        self.app.log(f"{slider.label} set to {value}")

    def update_availability(self) -> None:
        """Disable checkboxes and sliders whose prerequisite toggle is off."""

        for item in [*self.toggles, *self.sliders]:
            if item.requires is None or item.key not in self.widgets:
                continue
            available = self.app.state.is_available(item)
            self.widgets[item.key].configure(state="normal" if available else "disabled")

    def refresh(self) -> None:
        """Reload every widget variable from the menu state."""

        for toggle in self.toggles:
            self.vars[toggle.key].set(bool(self.app.state.get(toggle.key)))
        for slider in self.sliders:
            self.vars[slider.key].set(slider.clamp(self.app.state.get(slider.key)))
        self.update_availability()
