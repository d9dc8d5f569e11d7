"""System domain package.

This package contains the components the persistence layer is wired with:
- EventLogger: the ``log(message, detail, severity)`` logging collaborator
- PathResolver: Path resolution for configs, saves, backups and logs
- structlog_configurator: Structured logging setup
"""
