"""Keybind settings stored as a dictionary config keyed by action."""

from enum import StrEnum

from questvault import constants
from questvault.config.manager import ConfigManager

KEYBINDS_CONFIG_NAME = f"{constants.SETTINGS_SUBFOLDER}/keybinds"


class ActionType(StrEnum):
    """Actions a key can be bound to."""

    ESCAPE = "escape"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    STATS = "stats"
    SAVE = "save"


DEFAULT_KEYBINDS: dict[ActionType, list[str]] = {
    ActionType.ESCAPE: ["escape"],
    ActionType.UP: ["up", "w"],
    ActionType.DOWN: ["down", "s"],
    ActionType.LEFT: ["left", "a"],
    ActionType.RIGHT: ["right", "d"],
    ActionType.ENTER: ["enter"],
    ActionType.STATS: ["e"],
    ActionType.SAVE: ["ctrl+s"],
}


def _serialize_action(action: ActionType) -> str:
    return action.value


def load_keybinds(manager: ConfigManager, just_recreate: bool = False) -> dict[ActionType, list[str]]:
    """Load the keybinds, recreating the file from the defaults if it is unusable.

    Actions missing from the file are filled in from the defaults.
    """
    keybinds = manager.try_get_config_dict(
        KEYBINDS_CONFIG_NAME,
        DEFAULT_KEYBINDS,
        _serialize_action,
        ActionType,
        list[str],
        just_recreate=just_recreate,
    )
    return {**DEFAULT_KEYBINDS, **keybinds}


def save_keybinds(manager: ConfigManager, keybinds: dict[ActionType, list[str]]) -> None:
    """Write the keybinds config."""
    manager.set_config_dict(KEYBINDS_CONFIG_NAME, keybinds, _serialize_action)
