#!/usr/bin/env python3
"""Command-line tool for inspecting and converting questvault saves and configs.

This script provides:
- Version comparison using the same rules the correction chains use
- Conversion of old documents to the current shape
- Listing of the saves in the data folder
- Regeneration of settings files from their defaults
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from questvault import constants
from questvault.config.keybinds import KEYBINDS_CONFIG_NAME, load_keybinds
from questvault.config.models import AppSettings, LoggingConfig
from questvault.container import Container
from questvault.errors import SaveError, ValueTreeError
from questvault.json_utils.value_tree import parse_tree
from questvault.models.save_data import SAVE_NAME_KEY, SaveData
from questvault.system.structlog_configurator import configure_structlog
from questvault.versioning import compare_versions

APP_SETTINGS_CONFIG_NAME = f"{constants.SETTINGS_SUBFOLDER}/app"
RESETTABLE_CONFIGS = ("app", "keybinds")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show informational log records")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write log records to this file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: Path | None) -> None:
    """Manage questvault saves and configuration files."""
    configure_structlog(
        LoggingConfig(level="DEBUG" if verbose else "WARNING", json_logs=False), log_file=log_file
    )

    ctx.ensure_object(dict)
    ctx.obj["container"] = Container()


@cli.command()
@click.argument("version_a")
@click.argument("version_b")
def compare(version_a: str, version_b: str) -> None:
    """Compare two version strings."""
    relation = {-1: "<", 0: "==", 1: ">"}[compare_versions(version_a, version_b)]
    click.echo(f"{version_a} {relation} {version_b}")


@cli.command()
@click.argument("type_name")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--version", "file_version", required=True, help="Version the document was written with")
@click.option("--yaml", "as_yaml", is_flag=True, help="Print the result as YAML instead of JSON")
@click.pass_obj
def convert(obj: dict[str, Any], type_name: str, file: Path, file_version: str, as_yaml: bool) -> None:
    """Correct a document of TYPE_NAME stored in FILE to the current version."""
    container = obj["container"]
    registry = container.registry()

    if type_name not in registry.names():
        click.echo(click.style(f"Unknown type: {type_name}", fg="red"), err=True)
        click.echo(f"Known types: {', '.join(registry.names())}", err=True)
        sys.exit(1)

    try:
        document = parse_tree(file.read_text(encoding="utf-8"))
    except (ValueTreeError, UnicodeDecodeError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if type_name == SaveData.json_type_name:
        document.setdefault(SAVE_NAME_KEY, file.stem)

    outcome = registry.from_json(type_name, document, file_version, correcter=container.correcter())
    if outcome.value is None:
        click.echo(click.style(f"Error: document is not a valid {type_name}", fg="red"), err=True)
        sys.exit(1)
    if not outcome.success:
        click.echo(click.style("Warning: some fields fell back to defaults", fg="yellow"), err=True)

    if as_yaml:
        click.echo(yaml.safe_dump(document, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(document, indent=2, ensure_ascii=False))


@cli.command()
@click.pass_obj
def saves(obj: dict[str, Any]) -> None:
    """List the saves in the data folder."""
    save_manager = obj["container"].save_manager()
    save_names = save_manager.get_save_names()
    if not save_names:
        click.echo("No saves found.")
        return

    for save_name in save_names:
        try:
            outcome = save_manager.load_display_data(save_name)
        except SaveError as e:
            click.echo(f"{save_name}: {click.style(str(e), fg='red')}")
            continue

        display = outcome.value
        if display is None:
            click.echo(f"{save_name}: {click.style('unreadable display data', fg='red')}")
            continue
        click.echo(
            f"{save_name}: {display.display_name} ({display.player_name}), "
            f"v{display.save_version}, last saved {display.last_save:%Y-%m-%d %H:%M:%S}, "
            f"playtime {display.playtime}"
        )


@cli.command("reset-config")
@click.argument("name", type=click.Choice(RESETTABLE_CONFIGS))
@click.pass_obj
def reset_config(obj: dict[str, Any], name: str) -> None:
    """Regenerate a settings file from its defaults."""
    config_manager = obj["container"].config_manager()

    if name == "keybinds":
        load_keybinds(config_manager, just_recreate=True)
        config_name = KEYBINDS_CONFIG_NAME
    else:
        config_manager.try_get_config(APP_SETTINGS_CONFIG_NAME, AppSettings, AppSettings(), just_recreate=True)
        config_name = APP_SETTINGS_CONFIG_NAME

    click.echo(
        click.style(f"✓ Recreated {config_manager.get_config_file_path(config_name)}", fg="green")
    )


def main() -> None:
    """Entry point for the save management CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
