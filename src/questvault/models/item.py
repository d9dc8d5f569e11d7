"""Inventory items."""

from dataclasses import dataclass
from typing import ClassVar, Self

from questvault.json_utils.convertible import CorrectionEntry, JsonConvertible
from questvault.json_utils.corrections import transform_multiple_values, transform_value
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary
from questvault.models.enums import Material, get_specific_namespaced_string

MATERIAL_ITEM_TYPE = "pa:misc/material"

# Integer item ids used before items were stored by name.
LEGACY_ITEM_TYPE_NAMES: dict[int, str] = {
    0: "weapon/wooden_sword",
    1: "weapon/stone_sword",
    2: "weapon/steel_sword",
    3: "weapon/wooden_bow",
    4: "weapon/steel_arrow",
    5: "weapon/wooden_club",
    6: "weapon/club_with_teeth",
    7: "defence/wooden_shield",
    8: "defence/leather_helmet",
    9: "defence/leather_chestplate",
    10: "defence/leather_pants",
    11: "defence/leather_boots",
    12: "misc/bottle",
    13: "misc/wool",
    14: "misc/cloth",
    15: "misc/wood",
    16: "misc/stone",
    17: "misc/steel",
    18: "misc/gold",
    19: "misc/copper",
    20: "misc/iron",
    21: "misc/flint",
}

# Item names from before the material was split out of the item type.
LEGACY_ITEM_MATERIALS: dict[str, tuple[str, str]] = {
    "weapon/wooden_sword": ("weapon/sword", "WOOD"),
    "weapon/stone_sword": ("weapon/sword", "STONE"),
    "weapon/steel_sword": ("weapon/sword", "STEEL"),
    "weapon/wooden_bow": ("weapon/bow", "WOOD"),
    "weapon/steel_arrow": ("weapon/arrow", "STEEL"),
    "weapon/wooden_club": ("weapon/club", "WOOD"),
    "weapon/club_with_teeth": ("weapon/club_with_teeth", "WOOD"),
    "defence/wooden_shield": ("defence/shield", "WOOD"),
    "defence/leather_helmet": ("defence/helmet", "LEATHER"),
    "defence/leather_chestplate": ("defence/chestplate", "LEATHER"),
    "defence/leather_pants": ("defence/pants", "LEATHER"),
    "defence/leather_boots": ("defence/boots", "LEATHER"),
    "misc/bottle": ("misc/bottle", "GLASS"),
    "misc/wool": ("misc/material", "WOOL"),
    "misc/cloth": ("misc/material", "CLOTH"),
    "misc/wood": ("misc/material", "WOOD"),
    "misc/stone": ("misc/material", "STONE"),
    "misc/steel": ("misc/material", "STEEL"),
    "misc/gold": ("misc/material", "GOLD"),
    "misc/copper": ("misc/material", "COPPER"),
    "misc/iron": ("misc/material", "IRON"),
    "misc/flint": ("misc/material", "FLINT"),
}


def _item_ids_to_names(tree: JsonDictionary) -> JsonDictionary:
    transform_value(
        tree,
        "type",
        lambda item_id: (item_id in LEGACY_ITEM_TYPE_NAMES, LEGACY_ITEM_TYPE_NAMES.get(item_id)),
        int,
    )
    return tree


def _split_item_material(tree: JsonDictionary) -> JsonDictionary:
    transform_multiple_values(
        tree,
        "type",
        lambda type_name: (type_name in LEGACY_ITEM_MATERIALS, LEGACY_ITEM_MATERIALS.get(type_name)),
        lambda fixed: {"type": fixed[0], "material": fixed[1]},
        str,
    )
    return tree


def _namespace_type_and_material(tree: JsonDictionary) -> JsonDictionary:
    transform_value(tree, "type", lambda type_name: (True, get_specific_namespaced_string(type_name)), str)
    transform_value(
        tree,
        "material",
        lambda material: (bool(material.strip()), get_specific_namespaced_string(material.lower())),
        str,
    )
    return tree


@dataclass
class Item(JsonConvertible):
    """A stack of one kind of item made of one material."""

    item_type: str
    material: Material
    amount: float = 1

    version_correcters: ClassVar[list[CorrectionEntry]] = [
        # 2.0.2 -> 2.1
        CorrectionEntry(_item_ids_to_names, "2.1"),
        # 2.1.1 -> 2.2
        CorrectionEntry(_split_item_material, "2.2"),
        # 2.3 -> 2.4
        CorrectionEntry(_namespace_type_and_material, "2.4"),
    ]

    def to_json(self) -> JsonDictionary:
        return {
            "type": self.item_type,
            "material": self.material.value,
            "amount": self.amount,
        }

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        item_type = fields.value("type", str, critical=True)
        material = fields.value("material", Material, critical=True)
        amount = fields.value("amount", float, default=1.0)
        if amount <= 0:
            fields.fail(f"item amount must be positive, got {amount}", critical=True, field_name="amount")
        return cls(item_type=item_type, material=material, amount=amount)
