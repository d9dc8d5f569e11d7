"""Save metadata shown in the save selection list."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, ClassVar, Self

from pydantic_core import to_jsonable_python

from questvault import constants
from questvault.json_utils.convertible import CorrectionEntry, JsonConvertible
from questvault.json_utils.corrections import remap_keys_if_exist
from questvault.json_utils.parsing import FieldParser
from questvault.json_utils.value_tree import JsonDictionary

if TYPE_CHECKING:
    from questvault.models.save_data import SaveData


def _snake_case_keys(tree: JsonDictionary) -> JsonDictionary:
    return remap_keys_if_exist(
        tree,
        {
            "saveVersion": "save_version",
            "displayName": "display_name",
            "playerName": "player_name",
            "lastSave": "last_save",
        },
    )


@dataclass
class DisplaySaveData(JsonConvertible):
    """The first line of a save file: enough to list a save without loading it."""

    save_version: str = constants.SAVE_VERSION
    display_name: str = ""
    last_save: datetime = field(default_factory=datetime.now)
    playtime: timedelta = field(default_factory=timedelta)
    player_name: str = ""

    version_correcters: ClassVar[list[CorrectionEntry]] = [
        # 2.1.1 -> 2.2
        CorrectionEntry(_snake_case_keys, "2.2"),
    ]

    @classmethod
    def from_save_data(cls, save_data: "SaveData") -> Self:
        """Build the display data of a save that is about to be written."""
        return cls(
            save_version=constants.SAVE_VERSION,
            display_name=save_data.display_name,
            last_save=save_data.last_save,
            playtime=save_data.playtime,
            player_name=save_data.player.name,
        )

    def to_json(self) -> JsonDictionary:
        return {
            "save_version": self.save_version,
            "display_name": self.display_name,
            "last_save": to_jsonable_python(self.last_save),
            "playtime": to_jsonable_python(self.playtime),
            "player_name": self.player_name,
        }

    @classmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        return cls(
            save_version=fields.value("save_version", str, default=file_version),
            display_name=fields.value("display_name", str, default=""),
            last_save=fields.value("last_save", datetime, default=datetime.now()),
            playtime=fields.value("playtime", timedelta, default=timedelta()),
            player_name=fields.value("player_name", str, default=""),
        )
