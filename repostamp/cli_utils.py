"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from typing import Any, Generator
from .progress import get_progress
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)
from .format_utils import FORMATS, format_output, get_format_from_env


def standard_command(streaming: bool = False):
    """
    Decorator that provides standard CLI behavior:
    - Progress reporting on stderr
    - Clean data output on stdout (JSONL unless --format says otherwise)
    - --quiet/-q to suppress data output
    - Errors reported as a JSON object with a matching exit code

    Commands return a dict, a list of dicts, a generator of dicts, a
    plain string (printed as-is), or None when they printed themselves.

    Args:
        streaming: If True, output JSONL as items are produced.
                  If False, collect results and output at end.
    """
    def decorator(func):

        @wraps(func)
        def wrapper(*args, **kwargs):
            # Extract flags
            verbose = kwargs.get('verbose', False)
            quiet = kwargs.get('quiet', False)
            output_format = kwargs.get('format', None)

            # Get format from env if not specified
            if output_format is None:
                output_format = get_format_from_env('jsonl')
                kwargs['format'] = output_format

            # Initialize progress reporter
            progress = get_progress(enabled=verbose or None)

            # Inject progress into kwargs
            kwargs['progress'] = progress

            try:
                result = func(*args, **kwargs)

                if quiet:
                    # In quiet mode, consume the generator but don't output
                    if isinstance(result, Generator):
                        for _ in result:
                            pass
                elif result is None:
                    # Command handles its own output
                    pass
                elif isinstance(result, str):
                    print(result, flush=True)
                else:
                    if isinstance(result, dict):
                        items: Any = [result]
                    elif isinstance(result, Generator) and streaming:
                        items = result
                    else:
                        items = list(result)
                    # Only a dict return renders as a bare json/yaml object
                    single = isinstance(result, dict)
                    for line in format_output(iter(items), output_format, single=single):
                        print(line, flush=True)

                sys.exit(SUCCESS)

            except KeyboardInterrupt:
                progress.error("Interrupted by user")
                sys.exit(INTERRUPTED)
            except click.ClickException:
                # Click exceptions already have their exit code
                raise
            except CommandError as e:
                progress.error(str(e))
                if not quiet:
                    error_obj = {
                        "error": str(e),
                        "type": type(e).__name__,
                        "exit_code": e.exit_code
                    }
                    print(json.dumps(error_obj, ensure_ascii=False), flush=True)
                sys.exit(e.exit_code)
            except Exception as e:
                progress.error(f"Command failed: {e}")
                exit_code = get_exit_code_for_exception(e)
                if not quiet:
                    error_obj = {
                        "error": str(e),
                        "type": type(e).__name__,
                        "exit_code": exit_code
                    }
                    print(json.dumps(error_obj, ensure_ascii=False), flush=True)
                sys.exit(exit_code)

        return wrapper
    return decorator


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                            help='Force progress output even when piped'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                          help='Suppress data output, show only progress'),
    'format': click.option('-f', '--format',
                           type=click.Choice(list(FORMATS)),
                           help='Output format (default: jsonl, or from REPOSTAMP_FORMAT env)'),
    'revision': click.option('-r', '--rev', 'revision', default='HEAD', show_default=True,
                             help='Revision to inspect'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'quiet')
        def my_command(verbose, quiet):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator


def open_repository(path: str, config: dict, **overrides):
    """
    Open a RepoStamp session on the work tree containing path.

    Raises:
        ConfigError: the describe settings in config are unusable
        NotARepositoryError: path is not inside a git work tree
    """
    from .api import RepoStamp
    from .config import check_describe_config
    from .exit_codes import NotARepositoryError
    from .infra import GitClient

    check_describe_config(config)

    timeout = config.get('git', {}).get('timeout', 30)
    root = GitClient(path, timeout=timeout).toplevel()
    if root is None:
        raise NotARepositoryError(path)
    return RepoStamp(root, config=config, **overrides)
