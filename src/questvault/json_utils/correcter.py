"""Driver for per-type version correction chains."""

from collections.abc import Callable, Sequence
from typing import NamedTuple

from questvault import constants
from questvault.json_utils.value_tree import JsonDictionary
from questvault.system.event_logger import EventLogger, LogSeverity
from questvault.versioning import is_up_to_date


class CorrectionEntry(NamedTuple):
    """One step of a correction chain.

    ``mutate`` rewrites the document in place (and returns it) so that it
    matches the shape the type had at ``target_version``.
    """

    mutate: Callable[[JsonDictionary], JsonDictionary]
    target_version: str


class JsonDataCorrecter:
    """Brings an old document up to the current shape of its type.

    Each type supplies an ordered list of :class:`CorrectionEntry`. Every entry
    whose target version is newer than the document's (tracked) version is
    applied in list order, advancing the tracked version to its target.
    """

    def __init__(self, save_version: str = constants.SAVE_VERSION, logger: EventLogger | None = None):
        """Initialize JsonDataCorrecter.

        Args:
            save_version: Version of the data the application currently writes
            logger: Logger for correction records. If None, a default EventLogger is used.
        """
        self.save_version = save_version
        self.logger = logger or EventLogger()

    def correct_json_data(
        self,
        type_name: str,
        document: JsonDictionary,
        correcters: Sequence[CorrectionEntry],
        file_version: str,
    ) -> str:
        """Run the correction chain of a type over a document, in place.

        Args:
            type_name: Name of the type, used in log records
            document: The document to correct
            correcters: The type's correction entries, sorted by target version
            file_version: The version the document was written with

        Returns:
            The version the document is at after correction
        """
        if (
            not correcters
            or is_up_to_date(self.save_version, file_version)
            or is_up_to_date(correcters[-1].target_version, file_version)
        ):
            return file_version

        self.logger.log(f"{type_name} json data is old", f"version: {file_version}")
        version = file_version
        for entry in correcters:
            version = self.correct_json_data_version(type_name, document, entry, version)
        self.logger.log(f"{type_name} json data corrected", f"version: {version}")
        return version

    def correct_json_data_version(
        self,
        type_name: str,
        document: JsonDictionary,
        entry: CorrectionEntry,
        file_version: str,
    ) -> str:
        """Apply a single correction entry if the document is older than its target.

        Returns:
            The entry's target version if it ran, ``file_version`` otherwise
        """
        if is_up_to_date(entry.target_version, file_version):
            return file_version

        entry.mutate(document)
        self.logger.log(
            f"Corrected {type_name} json data",
            f"{file_version} -> {entry.target_version}",
            LogSeverity.DEBUG,
        )
        return entry.target_version
