import os
from pathlib import Path

from questvault import constants


class PathResolver:
    """Central authority for all file path resolution in questvault.

    Uses environment variables for configuration with sensible defaults.
    Everything the persistence layer writes lives below a single root folder.
    """

    def __init__(self, root_dir: Path | str | None = None) -> None:
        """Initialize PathResolver with environment-based configuration.

        Args:
            root_dir: Optional explicit root folder. Falls back to the
                QUESTVAULT_ROOT environment variable, then to
                ``~/.local/share/questvault``.
        """
        if root_dir is None:
            root_dir = os.getenv("QUESTVAULT_ROOT", str(Path.home() / ".local" / "share" / "questvault"))
        self.root_dir = Path(root_dir)

    def get_root_dir(self) -> Path:
        """Get the root data directory."""
        return self.root_dir

    def get_configs_dir(self) -> Path:
        """Get the directory holding versioned config files."""
        return self.root_dir / constants.CONFIGS_FOLDER

    def get_saves_dir(self) -> Path:
        """Get the directory holding one sub-folder per save."""
        return self.root_dir / constants.SAVES_FOLDER

    def get_save_dir(self, save_name: str) -> Path:
        """Get the folder of a single save."""
        return self.get_saves_dir() / save_name

    def get_save_data_path(self, save_name: str) -> Path:
        """Get the path to the data file of a save.

        The file holds two JSON lines: the display data and the main data.
        """
        return self.get_save_dir(save_name) / f"{constants.SAVE_FILE_NAME_DATA}.{constants.SAVE_EXT}"

    def get_backups_dir(self) -> Path:
        """Get the directory for zipped save backups."""
        return self.root_dir / constants.BACKUPS_FOLDER

    def get_logs_dir(self) -> Path:
        """Get the directory for log files."""
        return self.root_dir / constants.LOGS_FOLDER

    def get_log_file_path(self) -> Path:
        """Get the path to the main log file."""
        return self.get_logs_dir() / "questvault.log"
