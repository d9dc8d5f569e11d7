"""Version numbers, folder names and file extensions shared across questvault."""

# Saves
SAVE_VERSION = "2.4.1"  # Schema version written into new save files
OLDEST_SAVE_VERSION = "2.0"  # Older saves can no longer be corrected
SAVES_FOLDER = "saves"
SAVE_FILE_NAME_DATA = "data"
SAVE_EXT = "json"

# Configs
CONFIG_VERSION = "v4"
CONFIGS_FOLDER = "configs"
CONFIG_EXT = "json"
SETTINGS_SUBFOLDER = "settings"

# Backups and logs
BACKUPS_FOLDER = "backups"
BACKUP_EXT = "zip"
LOGS_FOLDER = "logs"

# Namespace used for built-in type identifiers ("pa:player", "pa:misc/material")
VANILLA_NAMESPACE = "pa"
