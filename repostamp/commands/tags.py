"""
Handles the 'tags' command: tags pointing exactly at a revision.
"""

import click

from ..config import load_config
from ..cli_utils import standard_command, add_common_options, open_repository


@click.command(name='tags')
@click.argument('path', default='.', required=False, type=click.Path(file_okay=False))
@add_common_options('revision', 'verbose', 'quiet', 'format')
@standard_command(streaming=True)
def tags_handler(path, revision, progress, **kwargs):
    """List tags pointing at a revision, newest first.

    Outputs one record per tag: {"tag": ..., "position": ...}.

    PATH: Directory inside the repository (default: current directory)
    """
    config = load_config()
    rs = open_repository(path, config)
    names = rs.tags(revision)
    progress(f"{len(names)} tag(s) at {revision}")

    def records():
        for position, name in enumerate(names):
            yield {'tag': name, 'position': position}

    return records()
