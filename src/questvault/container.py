"""Dependency injection container for questvault."""

from dependency_injector import containers, providers

from questvault import constants
from questvault.config.manager import ConfigManager
from questvault.json_utils.correcter import JsonDataCorrecter
from questvault.json_utils.registry import ConvertibleRegistry
from questvault.saves.manager import SaveManager
from questvault.system.event_logger import EventLogger
from questvault.system.path_resolver import PathResolver


def create_config_manager(
    resolver: PathResolver, logger: EventLogger, config_version: str
) -> ConfigManager:
    """Create a ConfigManager rooted in the data folder, creating the folder if needed."""
    root_dir = resolver.get_root_dir()
    root_dir.mkdir(parents=True, exist_ok=True)
    return ConfigManager(root_dir, config_version=config_version, logger=logger)


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Everything the persistence layer needs is a singleton wired from the same
    path resolver and logger, so tests can override either one.
    """

    # Core infrastructure - singletons
    path_resolver = providers.Singleton(PathResolver)
    event_logger = providers.Singleton(EventLogger)

    correcter = providers.Singleton(
        JsonDataCorrecter,
        save_version=constants.SAVE_VERSION,
        logger=event_logger,
    )

    config_manager = providers.Singleton(
        create_config_manager,
        resolver=path_resolver,
        logger=event_logger,
        config_version=constants.CONFIG_VERSION,
    )

    registry = providers.Singleton(ConvertibleRegistry)

    save_manager = providers.Singleton(
        SaveManager,
        path_resolver=path_resolver,
        correcter=correcter,
        logger=event_logger,
    )
