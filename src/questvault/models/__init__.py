"""Persisted domain models.

Every concrete :class:`~questvault.json_utils.JsonConvertible` defined in a
module of this package is picked up by the convertible registry.
"""

from questvault.models.display_save_data import DisplaySaveData
from questvault.models.entity import Entity
from questvault.models.enums import EntityType, Material, TileNoiseType
from questvault.models.inventory import Inventory
from questvault.models.item import Item
from questvault.models.random_states import RandomStates
from questvault.models.save_data import SaveData

__all__ = [
    "DisplaySaveData",
    "Entity",
    "EntityType",
    "Inventory",
    "Item",
    "Material",
    "RandomStates",
    "SaveData",
    "TileNoiseType",
]
