from dataclasses import dataclass, field
from typing import Self

from questvault.json_utils.convertible import JsonConvertible
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary
from questvault.models.item import Item


@dataclass
class Inventory(JsonConvertible):
    """An ordered collection of item stacks."""

    items: list[Item] = field(default_factory=list)

    def to_json(self) -> JsonDictionary:
        return {"items": [item.to_json() for item in self.items]}

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        return cls(items=fields.convertible_list("items", Item))
