"""Entities: the player and the monsters it meets."""

from dataclasses import dataclass
from typing import ClassVar, Self

from questvault.json_utils.convertible import CorrectionEntry, JsonConvertible
from questvault.json_utils.corrections import remap_keys_if_exist, rename_key_if_exists, transform_value
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary
from questvault.models.enums import EntityType, get_specific_namespaced_string
from questvault.models.inventory import Inventory


def _wrap_player_inventory(tree: JsonDictionary) -> JsonDictionary:
    # player inventory used to be a bare list of items
    if tree.get("type") == "player":
        tree["inventory"] = {"items": tree.get("inventory")}
    return tree


def _speed_to_agility(tree: JsonDictionary) -> JsonDictionary:
    return rename_key_if_exists(tree, "baseSpeed", "baseAgility")


def _snake_case_keys(tree: JsonDictionary) -> JsonDictionary:
    return remap_keys_if_exist(
        tree,
        {
            "baseMaxHp": "base_max_hp",
            "currentHp": "current_hp",
            "baseAttack": "base_attack",
            "baseDefence": "base_defence",
            "baseAgility": "base_agility",
            "originalTeam": "original_team",
            "currentTeam": "current_team",
            "xPos": "x_position",
            "yPos": "y_position",
        },
    )


def _namespace_type(tree: JsonDictionary) -> JsonDictionary:
    transform_value(tree, "type", lambda value: (True, get_specific_namespaced_string(value)), str)
    return tree


@dataclass
class Entity(JsonConvertible):
    """A creature in the world. Only players carry an inventory."""

    entity_type: EntityType
    name: str
    base_max_hp: int
    current_hp: int
    base_attack: int
    base_defence: int
    base_agility: int
    original_team: int = 0
    current_team: int = 0
    x_position: int = 0
    y_position: int = 0
    inventory: Inventory | None = None

    version_correcters: ClassVar[list[CorrectionEntry]] = [
        # 2.0 -> 2.0.1
        CorrectionEntry(_wrap_player_inventory, "2.0.1"),
        # 2.1 -> 2.1.1
        CorrectionEntry(_speed_to_agility, "2.1.1"),
        # 2.1.1 -> 2.2
        CorrectionEntry(_snake_case_keys, "2.2"),
        # 2.4 -> 2.4.1
        CorrectionEntry(_namespace_type, "2.4.1"),
    ]

    def to_json(self) -> JsonDictionary:
        document: JsonDictionary = {
            "type": self.entity_type.value,
            "name": self.name,
            "base_max_hp": self.base_max_hp,
            "current_hp": self.current_hp,
            "base_attack": self.base_attack,
            "base_defence": self.base_defence,
            "base_agility": self.base_agility,
            "original_team": self.original_team,
            "current_team": self.current_team,
            "x_position": self.x_position,
            "y_position": self.y_position,
        }
        if self.inventory is not None:
            document["inventory"] = self.inventory.to_json()
        return document

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        entity_type = fields.value("type", EntityType, critical=True)
        base_max_hp = fields.value("base_max_hp", int, default=1)
        current_hp = fields.value("current_hp", int, default=base_max_hp)

        inventory = None
        if entity_type == EntityType.PLAYER:
            inventory = fields.convertible("inventory", Inventory, default=Inventory())

        return cls(
            entity_type=entity_type,
            name=fields.value("name", str, default=""),
            base_max_hp=base_max_hp,
            current_hp=current_hp,
            base_attack=fields.value("base_attack", int, default=0),
            base_defence=fields.value("base_defence", int, default=0),
            base_agility=fields.value("base_agility", int, default=0),
            original_team=fields.value("original_team", int, default=0),
            current_team=fields.value("current_team", int, default=0),
            x_position=fields.value("x_position", int, default=0),
            y_position=fields.value("y_position", int, default=0),
            inventory=inventory,
        )
