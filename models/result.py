"""Command result model."""

from enum import Enum

from pydantic import BaseModel, Field


class ResultType(str, Enum):
    """How the terminal should present a command's output."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class CommandResult(BaseModel):
    """Outcome of executing exactly one command line.

    This is the only channel between the CommandProcessor and its caller:
    normal output and error text both travel in `output`.

    Args:
        output: Text to display, possibly multi-line or empty.
        type: Presentation category of the output.
    """

    output: str = Field(default="", description="Text produced by the command")
    type: ResultType = Field(
        default=ResultType.SUCCESS, description="Presentation category"
    )

    @classmethod
    def success(cls, output: str = "") -> "CommandResult":
        return cls(output=output, type=ResultType.SUCCESS)

    @classmethod
    def error(cls, output: str) -> "CommandResult":
        return cls(output=output, type=ResultType.ERROR)

    @classmethod
    def info(cls, output: str = "") -> "CommandResult":
        return cls(output=output, type=ResultType.INFO)

    @property
    def is_error(self) -> bool:
        return self.type == ResultType.ERROR
