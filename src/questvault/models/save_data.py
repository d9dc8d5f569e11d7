from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import ClassVar, Self

from pydantic_core import to_jsonable_python

from questvault.json_utils.convertible import CorrectionEntry, JsonConvertible
from questvault.json_utils.corrections import remap_keys_if_exist, rename_key_if_exists
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary
from questvault.models.entity import Entity
from questvault.models.random_states import RandomStates

SAVE_NAME_KEY = "save_name"


def _seeds_to_random_states(tree: JsonDictionary) -> JsonDictionary:
    return rename_key_if_exists(tree, "seeds", "randomStates")


def _snake_case_keys(tree: JsonDictionary) -> JsonDictionary:
    return remap_keys_if_exist(
        tree,
        {
            "displayName": "display_name",
            "lastSave": "last_save",
            "randomStates": "random_states",
        },
    )


@dataclass
class SaveData(JsonConvertible):
    """Everything stored in the main line of a save file.

    The save name is the name of the save folder, so it is not written by
    :meth:`to_json`; the loader injects it under ``save_name`` before parsing.
    """

    save_name: str
    player: Entity
    display_name: str = ""
    last_save: datetime = field(default_factory=datetime.now)
    playtime: timedelta = field(default_factory=timedelta)
    random_states: RandomStates = field(default_factory=RandomStates.new)

    version_correcters: ClassVar[list[CorrectionEntry]] = [
        # 2.0 -> 2.0.1
        CorrectionEntry(_seeds_to_random_states, "2.0.1"),
        # 2.1.1 -> 2.2
        CorrectionEntry(_snake_case_keys, "2.2"),
    ]

    def to_json(self) -> JsonDictionary:
        return {
            "display_name": self.display_name,
            "last_save": to_jsonable_python(self.last_save),
            "playtime": to_jsonable_python(self.playtime),
            "player": self.player.to_json(),
            "random_states": self.random_states.to_json(),
        }

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        save_name = fields.value(SAVE_NAME_KEY, str, critical=True)
        player = fields.convertible("player", Entity, critical=True)
        random_states = fields.convertible("random_states", RandomStates)
        return cls(
            save_name=save_name,
            player=player,
            display_name=fields.value("display_name", str, default=save_name),
            last_save=fields.value("last_save", datetime, default=datetime.now()),
            playtime=fields.value("playtime", timedelta, default=timedelta()),
            random_states=random_states if random_states is not None else RandomStates.new(),
        )
