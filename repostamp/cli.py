#!/usr/bin/env python3

import click

from repostamp.config import load_config, configure_logging
from repostamp.commands.situation import situation_handler
from repostamp.commands.describe import describe_handler
from repostamp.commands.tags import tags_handler
from repostamp.commands.stamp import stamp_handler
from repostamp.commands.config import config_cmd


@click.group()
@click.version_option(package_name='repostamp')
def cli():
    """repostamp - Stamp build artifacts with repository provenance.

    Reports the commit, commit time, branch, tags and cleanliness of a
    git revision, and describes it by its nearest matching release tag.
    """
    configure_logging(load_config())


cli.add_command(situation_handler)
cli.add_command(describe_handler)
cli.add_command(tags_handler)
cli.add_command(stamp_handler)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
