"""Catalogue of menu features and the live menu state.

:func:`default_config` describes every persisted setting. The tab, slider and
language tables drive the views, and :class:`MenuState` keeps the in-memory
values and the settings file in step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .utils.config_store import ConfigStore

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the default settings map."""

    return {
        "Regen": False,
        "objectiveTP": False,
        "disableTooltips": False,
        "phoneAnim": False,
        "sprintInside": False,
        "lockPick": False,
        "replaceSneakAnim": False,
        "disableSound": False,
        "disableActionMode": False,
        "Triggerbot": False,
        "aimEnemy": False,
        "autoKill": False,
        "disableUiSounds": False,
        "driftMode": False,
        "DriftTires": False,
        "speedBoost": False,
        "nosvfx": False,
        "hornLight": False,
        "nosPurge": False,
        "rgbLights": False,
        "loud_radio": False,
        "launchCtrl": False,
        "popsNbangs": False,
        "limitVehOptions": False,
        "louderPops": False,
        "autobrklight": False,
        "holdF": False,
        "noJacking": False,
        "useGameLang": False,
        "lang_idx": 0,
        "DriftIntensity": 0,
        "lightSpeed": 1,
        "LANG": "en-US",
        "current_lang": "English",
    }


@dataclass(frozen=True)
class Toggle:
    """A boolean feature shown as a checkbox.

    ``requires`` names another toggle that must be enabled first.
    ``excludes`` names a toggle that is switched off when this one is enabled.
    """

    key: str
    label: str
    tooltip: str = ""
    requires: Optional[str] = None
    excludes: Optional[str] = None


@dataclass(frozen=True)
class Slider:
    """An integer setting restricted to ``minimum..maximum``.

    ``requires`` names the toggle that must be on for the slider to be used.
    """

    key: str
    label: str
    minimum: int
    maximum: int
    tab: str
    requires: Optional[str] = None

    def clamp(self, value: Any) -> int:
        """Return ``value`` limited to the range, or ``minimum`` if it is not a number."""

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return self.minimum
        return max(self.minimum, min(self.maximum, int(value)))


@dataclass(frozen=True)
class Language:
    name: str
    iso: str


FEATURE_TABS: Dict[str, Tuple[Toggle, ...]] = {
    "Self": (
        Toggle("Regen", "Auto-Heal", "Slowly regenerates health and armour."),
        Toggle("objectiveTP", "Teleport To Objective", "Teleports you to the current mission objective."),
        Toggle("replaceSneakAnim", "Crouch Instead Of Sneak", "Replaces stealth mode with a crouch."),
        Toggle("phoneAnim", "Enable Phone Animations", "Restores phone animations in online sessions."),
        Toggle("sprintInside", "Sprint Inside Interiors", "Allows sprinting inside buildings."),
        Toggle("lockPick", "Use Lockpick Animation", "Breaks into locked cars instead of smashing the window."),
        Toggle("disableActionMode", "Disable Action Mode", "Stops the tense action-mode walk after combat."),
    ),
    "Weapon": (
        Toggle("Triggerbot", "Triggerbot", "Fires automatically when aiming at a ped."),
        Toggle("aimEnemy", "Enemies Only", "Only trigger on hostile peds.", requires="Triggerbot"),
        Toggle("autoKill", "Auto-Kill Enemies", "Kills hostile peds as soon as they spawn."),
    ),
    "Vehicle": (
        Toggle("driftMode", "Drift Mode", "Hold shift to lower grip and drift.", excludes="DriftTires"),
        Toggle(
            "DriftTires", "Use Low Grip Tires", "Equips drift tyres while drift mode is held.", excludes="driftMode"
        ),
        Toggle("limitVehOptions", "Limit Options To Suitable Vehicles"),
        Toggle("launchCtrl", "Launch Control"),
        Toggle("speedBoost", "NOS"),
        Toggle("nosvfx", "NOS Screen Effects", requires="speedBoost"),
        Toggle("nosPurge", "NOS Purge"),
        Toggle("loud_radio", "Big Subwoofer"),
        Toggle("popsNbangs", "Pops & Bangs", "Exhaust crackles and backfires on deceleration."),
        Toggle("louderPops", "Louder Pops", requires="popsNbangs"),
        Toggle("hornLight", "High Beams on Horn"),
        Toggle("autobrklight", "Auto Brake Lights"),
        Toggle("holdF", "Keep Engine On", "Hold the exit key to leave the engine running."),
        Toggle("noJacking", "Can't Touch This!", "Prevents NPCs from jacking your car."),
        Toggle("rgbLights", "RGB Headlights"),
    ),
    "Settings": (
        Toggle("disableTooltips", "Disable Tooltips"),
        Toggle("disableUiSounds", "Disable UI Sounds", "Mutes the sounds played when using menu widgets."),
    ),
}

SLIDERS: Tuple[Slider, ...] = (
    Slider("DriftIntensity", "Drift Intensity", 0, 3, tab="Vehicle", requires="driftMode"),
    Slider("lightSpeed", "RGB Speed", 1, 3, tab="Vehicle", requires="rgbLights"),
)

LANGUAGES: Tuple[Language, ...] = (
    Language("English", "en-US"),
    Language("French", "fr-FR"),
    Language("German", "de-DE"),
    Language("Chinese (Traditional)", "zh-TW"),
    Language("Chinese (Simplified)", "zh-CN"),
    Language("Spanish", "es-ES"),
    Language("Portuguese", "pt-BR"),
)

_EXCLUSIONS: Dict[str, str] = {
    toggle.key: toggle.excludes
    for toggles in FEATURE_TABS.values()
    for toggle in toggles
    if toggle.excludes
}


def find_toggle(key: str) -> Toggle:
    """Return the toggle definition for ``key``.

    Raises
    ------
    KeyError
        If no tab declares ``key``.
    """

    for toggles in FEATURE_TABS.values():
        for toggle in toggles:
            if toggle.key == key:
                return toggle
    raise KeyError(key)


def find_slider(key: str) -> Slider:
    for slider in SLIDERS:
        if slider.key == key:
            return slider
    raise KeyError(key)


def language_for_locale(code: Optional[str]) -> Language:
    """Map a locale code such as ``de_DE`` or ``pt-BR`` to a menu language.

    The full code is matched first, then the language part alone. Anything
    unknown falls back to English.
    """

    if not code:
        return LANGUAGES[0]
    iso = code.split(".")[0].replace("_", "-")
    for language in LANGUAGES:
        if language.iso.lower() == iso.lower():
            return language
    prefix = iso.split("-")[0].lower()
    for language in LANGUAGES:
        if language.iso.split("-")[0].lower() == prefix:
            return language
    return LANGUAGES[0]


@dataclass
class MenuState:
    """In-memory view of the settings, written through to a :class:`ConfigStore`.

    The views read values with :meth:`get` and change them with :meth:`set`,
    which persists each change immediately.
    """

    store: ConfigStore
    values: Dict[str, Any] = field(default_factory=default_config)

    @classmethod
    def load(cls, store: ConfigStore) -> "MenuState":
        state = cls(store)
        state.reload()
        return state

    def reload(self) -> None:
        """Refresh :attr:`values` from the settings file."""

        values = default_config()
        stored = self.store.read_and_decode(default_config())
        if stored is None:
            logger.error("Settings could not be loaded; using defaults")
        else:
            values.update(stored)
        self.values = values

    def get(self, key: str) -> Any:
        return self.values.get(key)

    def set(self, key: str, value: Any) -> Optional[str]:
        """Store ``value`` and persist it.

        Enabling a toggle that excludes another one also saves the other as
        ``False``; the key switched off is returned so views can update it.
        """

        self.values[key] = value
        self.store.save(key, value)
        logger.debug(f"{key} set to {value!r}")
        other = _EXCLUSIONS.get(key)
        if value is True and other is not None:
            self.values[other] = False
            self.store.save(other, False)
            logger.debug(f"{other} switched off by {key}")
            return other
        return None

    def set_slider(self, key: str, value: int) -> int:
        """Clamp ``value`` into the slider's range, save it and return it."""

        value = find_slider(key).clamp(value)
        self.set(key, value)
        return value

    def is_available(self, item: Union[Toggle, Slider]) -> bool:
        """Return ``True`` if the toggle or slider prerequisite (if any) is enabled."""

        return item.requires is None or bool(self.get(item.requires))

    @property
    def language(self) -> Language:
        return Language(self.get("current_lang"), self.get("LANG"))

    def select_language(self, index: int) -> Language:
        """Switch to ``LANGUAGES[index]`` and persist the choice."""

        if not 0 <= index < len(LANGUAGES):
            raise IndexError(f"language index {index} out of range")
        language = LANGUAGES[index]
        self.set("lang_idx", index)
        self.set("LANG", language.iso)
        self.set("current_lang", language.name)
        logger.info(f"Language set to {language.name} ({language.iso})")
        return language

    def use_game_language(self, enabled: bool, language: Optional[Language] = None) -> None:
        """Follow the host language instead of the custom selection.

        When enabled, ``language`` (English if omitted) becomes current and the
        custom selection index resets to the first entry.
        """

        self.set("useGameLang", bool(enabled))
        if enabled:
            language = language or LANGUAGES[0]
            self.set("LANG", language.iso)
            self.set("current_lang", language.name)
            self.set("lang_idx", 0)

    def reset(self) -> None:
        """Restore every setting to its default."""

        self.store.reset(default_config())
        self.values = default_config()
