"""Exceptions raised inside the lab engine.

Handlers raise these with shell-styled messages. The CommandProcessor
catches them at the execute() boundary and turns the message into an
error CommandResult, so none of them ever reach a caller of execute().

Exception Hierarchy:
    LabCommandError (base)
    ├── PathNotFoundError - path does not resolve to a node
    ├── WrongTypeError - file where a directory is expected or vice versa
    └── UsageError - missing or malformed command arguments
"""


class LabCommandError(Exception):
    """Base exception for every error a command handler can signal.

    Attributes:
        message: Shell-styled message shown verbatim to the learner.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class PathNotFoundError(LabCommandError):
    """Raised when a path cannot be resolved in the virtual filesystem.

    Args:
        message: Shell-styled message, e.g. "cat: x: No such file or directory".
        path: The path as the learner typed it.
    """

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(message)


class WrongTypeError(LabCommandError):
    """Raised when a node exists but has the wrong type for the operation.

    Args:
        message: Shell-styled message, e.g. "cd: notes.txt: Not a directory".
        path: The path as the learner typed it.
    """

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(message)


class UsageError(LabCommandError):
    """Raised when a command is missing a required argument."""

    pass
