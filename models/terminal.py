"""Line-buffered terminal surface for a lab session.

The terminal sits between a learner's input widget and the
CommandProcessor. It keeps the on-screen transcript, handles "clear"
itself, and serializes command execution so one command finishes before
the next prompt appears.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from models.filesystem import DEFAULT_USER
from models.history import Direction
from models.processor import CommandProcessor
from models.result import CommandResult, ResultType

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = 'Cyber Coach Terminal v2.0\nType "help" for available commands.'
HOSTNAME = "cyber-coach"
CLEAR_COMMAND = "clear"


class TranscriptEntry(BaseModel):
    """One block of terminal output.

    Args:
        command: The line that produced this output ("" for banners).
        output: Text shown below the command.
        type: Presentation category of the output.
        timestamp: When the output was produced.
    """

    command: str = Field(default="", description="Line that produced the output")
    output: str = Field(description="Displayed output")
    type: ResultType = Field(description="Presentation category")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the output was produced",
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "output": self.output,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }


class Terminal:
    """Terminal surface wrapping one CommandProcessor.

    Attributes:
        processor: The engine commands are sent to.
        transcript: Output blocks currently on screen.
    """

    def __init__(self, processor: Optional[CommandProcessor] = None) -> None:
        self.processor = processor if processor is not None else CommandProcessor()
        self.transcript: list[TranscriptEntry] = [
            TranscriptEntry(output=WELCOME_MESSAGE, type=ResultType.INFO)
        ]
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        """Whether a command is currently in flight."""
        return self._lock.locked()

    @property
    def prompt(self) -> str:
        """Shell prompt, abbreviating the home directory as "~"."""
        cwd = self.processor.fs.get_current_path()
        home = self.processor.fs.home_path
        if cwd == home:
            cwd = "~"
        elif cwd.startswith(home + "/"):
            cwd = "~" + cwd[len(home):]
        return f"{DEFAULT_USER}@{HOSTNAME}:{cwd}$"

    async def submit(self, line: str) -> Optional[CommandResult]:
        """Run a line typed at the prompt.

        Blank lines do nothing. "clear" wipes the transcript without reaching
        the processor. Everything else waits for any in-flight command, then
        runs and is appended to the transcript.

        Args:
            line: Raw input line.

        Returns:
            The command's result, or None for blank lines and "clear".
        """
        command = line.strip()
        if not command:
            return None

        if command == CLEAR_COMMAND:
            self.transcript.clear()
            return None

        async with self._lock:
            result = await self.processor.execute(command)

        self.transcript.append(
            TranscriptEntry(command=command, output=result.output, type=result.type)
        )
        return result

    def recall(self, direction: Direction) -> str:
        """Fetch a history entry to place in the input buffer."""
        return self.processor.get_history(direction)

    def get_snapshot(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "current_path": self.processor.fs.get_current_path(),
            "busy": self.busy,
            "history_size": len(self.processor.history),
            "transcript": [entry.to_dict() for entry in self.transcript],
        }
