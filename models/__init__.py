"""Virtual lab engine models package.

This package contains the in-browser lab engine: the virtual filesystem,
the network simulator with its static host registry, the command
processor, and the terminal and session layers built on top of them.
"""

from models.errors import LabCommandError, PathNotFoundError, UsageError, WrongTypeError
from models.filesystem import FileSystemNode, NodeType, VirtualFileSystem
from models.history import CommandHistory
from models.network import NetworkResponse, NetworkSimulator, PortInfo, ScanResult
from models.processor import CommandProcessor, Verb
from models.registry import DEFAULT_TARGETS, NetworkTarget, Vulnerability
from models.result import CommandResult, ResultType
from models.session import LabSession, SessionLimitError, SessionNotFoundError, SessionRegistry
from models.terminal import Terminal, TranscriptEntry

__all__ = [
    "LabCommandError",
    "PathNotFoundError",
    "UsageError",
    "WrongTypeError",
    "FileSystemNode",
    "NodeType",
    "VirtualFileSystem",
    "CommandHistory",
    "NetworkResponse",
    "NetworkSimulator",
    "PortInfo",
    "ScanResult",
    "CommandProcessor",
    "Verb",
    "DEFAULT_TARGETS",
    "NetworkTarget",
    "Vulnerability",
    "CommandResult",
    "ResultType",
    "LabSession",
    "SessionLimitError",
    "SessionNotFoundError",
    "SessionRegistry",
    "Terminal",
    "TranscriptEntry",
]
