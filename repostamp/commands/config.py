"""
Handles the 'config' commands: inspect and initialise ~/.repostamp.
"""

import json

import click
import yaml

from repostamp.config import (
    load_config, save_config, get_config_path, get_default_config, check_describe_config
)
from repostamp.exit_codes import ConfigError, CONFIG_ERROR


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Indented JSON instead of single-line JSONL")
@click.option("--yaml", "as_yaml", is_flag=True, help="Show as YAML")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@click.option("--check", is_flag=True, help="Validate the describe settings and exit non-zero if unusable")
def show_config(pretty, as_yaml, path, check):
    """Show the effective configuration.

    Defaults, the config file and REPOSTAMP_* environment overrides are
    merged in that order.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config()

    if check:
        try:
            check_describe_config(config)
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(CONFIG_ERROR)

    if as_yaml:
        print(yaml.safe_dump(config, default_flow_style=False, sort_keys=False).rstrip("\n"))
    elif pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init_config(force):
    """Write the default configuration to the config file path."""
    config_path = get_config_path()
    if config_path.exists() and config_path.stat().st_size > 0 and not force:
        click.echo(f"Config already exists at {config_path} (use --force to overwrite)", err=True)
        raise SystemExit(CONFIG_ERROR)

    save_config(get_default_config())
    print(json.dumps({"config_path": str(get_config_path())}))
