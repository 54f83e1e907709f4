import pathlib

import click
import tomlkit
from pydantic import TypeAdapter

from flashpool.cli import cli
from flashpool.config import CONFIG_FILE, Settings, save_config_to_file, settings


def _render(config: Settings, output_format: str) -> str:
    match output_format:
        case "json":
            return TypeAdapter(dict).dump_json(config.model_dump(), indent=2).decode()
        case _:
            return tomlkit.dumps(config.model_dump())


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    default=True,
    help="Show configuration in TOML format (default)",
)
def config_show(output_format: str) -> None:
    """
    Display the active configuration, including environment overrides.
    """

    click.echo(_render(settings, output_format))


@config.command("save")
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    default=CONFIG_FILE,
    show_default=True,
    help="Destination TOML file",
)
def config_save(config_path: pathlib.Path) -> None:
    """
    Write the active configuration to a TOML file, where it is loaded from on the next start.
    """

    save_config_to_file(settings, config_path)
    click.echo(f"Saved configuration to {config_path}")
