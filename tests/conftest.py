import logging
import logging.handlers
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import structlog
from structlog.testing import CapturingLogger

from questvault.config.manager import ConfigManager
from questvault.json_utils.correcter import JsonDataCorrecter
from questvault.models.entity import Entity
from questvault.models.enums import EntityType, Material
from questvault.models.inventory import Inventory
from questvault.models.item import Item
from questvault.models.random_states import RandomStates
from questvault.models.save_data import SaveData
from questvault.system.event_logger import EventLogger
from questvault.system.path_resolver import PathResolver


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver rooted in a temporary data folder.

    Every path the persistence layer writes (configs, saves, backups, logs)
    lives below the root, so a single temp root isolates each test.
    """
    root_dir = tmp_path / "questvault"
    root_dir.mkdir()
    return PathResolver(root_dir)


@pytest.fixture
def capturing_logger() -> CapturingLogger:
    """Provide a structlog logger that records every call."""
    return CapturingLogger()


@pytest.fixture
def event_logger(capturing_logger: CapturingLogger) -> EventLogger:
    """Provide an EventLogger whose records end up in ``capturing_logger.calls``."""
    return EventLogger(capturing_logger)


@pytest.fixture
def correcter(event_logger: EventLogger) -> JsonDataCorrecter:
    """Provide a correcter for the current save version with a capturing logger."""
    return JsonDataCorrecter(logger=event_logger)


@pytest.fixture
def config_manager(path_resolver: PathResolver, event_logger: EventLogger) -> ConfigManager:
    """Provide a ConfigManager rooted in the temporary data folder."""
    return ConfigManager(path_resolver.get_root_dir(), config_version="v4", logger=event_logger)


@pytest.fixture
def player() -> Entity:
    """Provide a player carrying a small inventory."""
    return Entity(
        entity_type=EntityType.PLAYER,
        name="Ayla",
        base_max_hp=20,
        current_hp=17,
        base_attack=5,
        base_defence=3,
        base_agility=4,
        x_position=12,
        y_position=-3,
        inventory=Inventory(
            [
                Item("pa:weapon/sword", Material.STEEL, 1),
                Item("pa:misc/material", Material.WOOD, 2.5),
            ]
        ),
    )


@pytest.fixture
def save_data(player: Entity) -> SaveData:
    """Provide a complete save with deterministic random states."""
    return SaveData(
        save_name="adventure",
        player=player,
        display_name="My Adventure",
        last_save=datetime(2024, 5, 17, 18, 30, 0),
        playtime=timedelta(hours=3, minutes=25),
        random_states=RandomStates.new(seed=1234),
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo global structlog and root logger configuration done by a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
