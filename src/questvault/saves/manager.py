"""Save folder management: writing, listing, loading and backing up saves."""

import os
import shutil
from datetime import datetime
from pathlib import Path

from questvault import constants
from questvault.errors import SaveError, SaveVersionError, ValueTreeError
from questvault.json_utils.correcter import JsonDataCorrecter
from questvault.json_utils.parsing import ParseOutcome
from questvault.json_utils.value_tree import JsonDictionary, dump_tree, parse_tree, validate_tree
from questvault.models.display_save_data import DisplaySaveData
from questvault.models.save_data import SAVE_NAME_KEY, SaveData
from questvault.system.event_logger import EventLogger, LogSeverity
from questvault.system.path_resolver import PathResolver
from questvault.versioning import is_up_to_date


class SaveManager:
    """Reads and writes saves stored as ``<root>/saves/<name>/data.json``.

    The data file holds two JSON lines: the display data, which carries the
    save version, and the main save data.
    """

    def __init__(
        self,
        path_resolver: PathResolver | None = None,
        correcter: JsonDataCorrecter | None = None,
        logger: EventLogger | None = None,
    ):
        self.path_resolver = path_resolver or PathResolver()
        self.logger = logger or EventLogger()
        self.correcter = correcter or JsonDataCorrecter(logger=self.logger)

    def save(self, save_data: SaveData) -> Path:
        """Write a save wholesale.

        Returns:
            Path of the written data file

        Raises:
            ValueTreeError: If a document is not a well-formed tree
        """
        display_tree = validate_tree(DisplaySaveData.from_save_data(save_data).to_json())
        main_tree = validate_tree(save_data.to_json())
        text = f"{dump_tree(display_tree)}\n{dump_tree(main_tree)}\n"

        file_path = self.path_resolver.get_save_data_path(save_data.save_name)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = file_path.with_name(f"{file_path.name}.tmp")
        try:
            temp_path.write_text(text, encoding="utf-8")
            os.replace(temp_path, file_path)
        finally:
            temp_path.unlink(missing_ok=True)
        self.logger.log("Game saved", f"save name: {save_data.save_name}")
        return file_path

    def get_save_names(self) -> list[str]:
        """Names of every save folder that contains a data file."""
        saves_dir = self.path_resolver.get_saves_dir()
        if not saves_dir.is_dir():
            return []
        return sorted(
            folder.name
            for folder in saves_dir.iterdir()
            if folder.is_dir() and self.path_resolver.get_save_data_path(folder.name).is_file()
        )

    def _read_lines(self, save_name: str, line_count: int) -> list[JsonDictionary]:
        file_path = self.path_resolver.get_save_data_path(save_name)
        lines = file_path.read_text(encoding="utf-8").splitlines()
        if len(lines) < line_count:
            raise SaveError(f"Save file of {save_name!r} has {len(lines)} line(s), expected {line_count}")
        try:
            return [parse_tree(line) for line in lines[:line_count]]
        except ValueTreeError as e:
            raise SaveError(f"Save file of {save_name!r} is corrupted: {e}") from e

    @staticmethod
    def _stored_version(display_tree: JsonDictionary) -> str | None:
        version = display_tree.get("save_version", display_tree.get("saveVersion"))
        return version if isinstance(version, str) else None

    def load_display_data(self, save_name: str) -> ParseOutcome[DisplaySaveData]:
        """Load only the display line of a save.

        A missing version is assumed to be the current one.
        """
        (display_tree,) = self._read_lines(save_name, 1)
        version = self._stored_version(display_tree)
        return DisplaySaveData.from_json(display_tree, version, correcter=self.correcter)

    def load(self, save_name: str, *, backup: bool = True) -> ParseOutcome[SaveData]:
        """Load a full save, correcting it to the current version.

        Args:
            save_name: Name of the save folder
            backup: Back the save up before correcting data from another version

        Raises:
            FileNotFoundError: If the save has no data file
            SaveError: If the data file is malformed
            SaveVersionError: If the version is missing or older than the oldest
                version that can still be corrected
        """
        display_tree, main_tree = self._read_lines(save_name, 2)
        version = self._stored_version(display_tree)
        if version is None:
            self.logger.log("Save load error", f"save {save_name!r} has no version", LogSeverity.ERROR)
            raise SaveVersionError(f"Save {save_name!r} has no version")
        if not is_up_to_date(constants.OLDEST_SAVE_VERSION, version):
            self.logger.log(
                "Save load error",
                f"save {save_name!r} is too old: {version} < {constants.OLDEST_SAVE_VERSION}",
                LogSeverity.ERROR,
            )
            raise SaveVersionError(
                f"Save {save_name!r} has version {version}, "
                f"the oldest supported version is {constants.OLDEST_SAVE_VERSION}"
            )

        if version != self.correcter.save_version:
            self.logger.log(
                "Loading save from another version",
                f"{version} -> {self.correcter.save_version}",
                LogSeverity.WARN,
            )
            if backup:
                self.create_backup(save_name)

        main_tree[SAVE_NAME_KEY] = save_name
        return SaveData.from_json(main_tree, version, correcter=self.correcter)

    def create_backup(self, save_name: str) -> Path:
        """Zip a save folder into the backups folder.

        Returns:
            Path of the created archive
        """
        save_dir = self.path_resolver.get_save_dir(save_name)
        if not save_dir.is_dir():
            raise FileNotFoundError(f"Save folder not found: {save_dir}")

        backups_dir = self.path_resolver.get_backups_dir()
        backups_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S-%f")
        archive = shutil.make_archive(
            str(backups_dir / f"{save_name}_{timestamp}"), constants.BACKUP_EXT, root_dir=save_dir
        )
        self.logger.log("Made save backup", f"backup path: {archive}")
        return Path(archive)
