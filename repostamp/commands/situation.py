"""
Handles the 'situation' command for showing where a repository stands.
"""

import sys
import click

from ..config import load_config
from ..cli_utils import standard_command, add_common_options, open_repository
from ..render import render_situation_table


@click.command(name='situation')
@click.argument('path', default='.', required=False, type=click.Path(file_okay=False))
@add_common_options('revision')
@click.option('--table/--no-table', default=None, help='Display as formatted table (auto-detected by default)')
@add_common_options('verbose', 'quiet', 'format')
@standard_command()
def situation_handler(path, revision, table, progress, **kwargs):
    """Show commit, time, branch, tags and cleanliness of a revision.

    PATH: Directory inside the repository (default: current directory)

    \b
    Examples:
        repostamp situation
        repostamp situation ~/projects/app --rev v1.2.0
        repostamp situation --table
    """
    if table is None:
        table = sys.stdout.isatty() and kwargs.get('format') in (None, 'jsonl')

    config = load_config()
    rs = open_repository(path, config)
    progress(f"Reading {rs.git.path}")

    situation = rs.situation(revision)
    if table and not kwargs.get('quiet'):
        render_situation_table(situation, rs.describe(revision))
        return None
    return situation.to_dict()
