"""
Standard exit codes and errors for repostamp.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Data format or validation error
REPOSITORY_READ_ERROR = 72   # Reading repository state failed
REVISION_NOT_FOUND = 73      # A required revision did not resolve
NOT_A_REPOSITORY = 74        # Path is not inside a git work tree
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class RepositoryReadError(CommandError):
    """
    Raised when reading repository state fails.

    Covers I/O failures, corrupt references and unreadable objects.
    Never retried; carries which operation failed and on what.
    """
    def __init__(self, operation: str, target: Optional[str] = None, detail: Optional[str] = None):
        message = f"Failed to {operation}"
        if target:
            message += f" '{target}'"
        if detail:
            message += f": {detail}"
        super().__init__(message, REPOSITORY_READ_ERROR)
        self.operation = operation
        self.target = target
        self.detail = detail


class RevisionNotFoundError(CommandError):
    """Raised when a revision that must exist does not resolve."""
    def __init__(self, revision: str):
        super().__init__(f"Revision not found: {revision}", REVISION_NOT_FOUND)
        self.revision = revision


class NotARepositoryError(CommandError):
    """Raised when a path is not inside a git work tree."""
    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}", NOT_A_REPOSITORY)
        self.path = path


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
