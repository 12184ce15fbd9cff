"""
Handles the 'stamp' command: full provenance record for build artifacts.
"""

import click

from ..config import load_config
from ..cli_utils import standard_command, add_common_options, open_repository


@click.command(name='stamp')
@click.argument('path', default='.', required=False, type=click.Path(file_okay=False))
@add_common_options('revision')
@click.option('-m', '--match', 'pattern', default=None,
              help='Regular expression the whole tag name must match')
@click.option('--max-depth', type=click.IntRange(min=0), default=None,
              help='Give up looking for a tag after this many commits')
@add_common_options('verbose', 'quiet', 'format')
@standard_command()
def stamp_handler(path, revision, pattern, max_depth, progress, **kwargs):
    """Print situation, description and version string in one record.

    PATH: Directory inside the repository (default: current directory)

    \b
    Examples:
        repostamp stamp > build-info.json
        repostamp stamp -f yaml --match 'release-.*'
    """
    config = load_config()
    rs = open_repository(path, config, tag_pattern=pattern, max_depth=max_depth)
    progress(f"Stamping {revision} in {rs.git.path}")
    return rs.stamp(revision)
