"""
Handles the 'describe' command: nearest matching tag on the first-parent chain.
"""

import click

from ..config import load_config
from ..cli_utils import standard_command, add_common_options, open_repository


@click.command(name='describe')
@click.argument('path', default='.', required=False, type=click.Path(file_okay=False))
@add_common_options('revision')
@click.option('-m', '--match', 'pattern', default=None,
              help='Regular expression the whole tag name must match (default: from config, ".*")')
@click.option('--max-depth', type=click.IntRange(min=0), default=None,
              help='Give up after this many commits')
@click.option('--text', is_flag=True, help='Print only the git-describe style string')
@click.option('--long', 'long_format', is_flag=True, help='Always include depth and commit id in --text output')
@click.option('--dirty', 'dirty_suffix', default=None, is_flag=False, flag_value='-dirty',
              help='Append suffix (default "-dirty") to --text output when the work tree has changes')
@click.option('--abbrev', type=click.IntRange(min=4, max=40), default=None,
              help='Abbreviated commit id length for --text output')
@add_common_options('verbose', 'quiet', 'format')
@standard_command()
def describe_handler(path, revision, pattern, max_depth, text, long_format, dirty_suffix, abbrev, progress, **kwargs):
    """Describe a revision by its nearest matching ancestor tag.

    Only first parents are followed, so the depth counts commits on
    this line of history since the tag.

    PATH: Directory inside the repository (default: current directory)

    \b
    Examples:
        repostamp describe
        repostamp describe --match 'v\\d+\\.\\d+\\.\\d+'
        repostamp describe --text --dirty        # v1.2.0-3-g1a2b3c4-dirty
    """
    config = load_config()
    rs = open_repository(path, config, tag_pattern=pattern, max_depth=max_depth)
    progress(f"Describing {revision} in {rs.git.path}")

    description = rs.describe(revision)
    if not text:
        return description.to_dict()

    suffix = None
    if dirty_suffix and not rs.situation(revision).clean:
        suffix = dirty_suffix
    if abbrev is None:
        abbrev = config.get('describe', {}).get('abbrev', 7)
    return description.format(abbrev=abbrev, long=long_format, dirty=suffix)
