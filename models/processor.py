"""Command processor for the lab terminal.

The CommandProcessor is the orchestrator of a lab session. It tokenizes a
command line, dispatches the verb through a lookup table to its handler,
records history, and always answers with exactly one CommandResult.
Filesystem handlers delegate to the VirtualFileSystem, network handlers
to the NetworkSimulator.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional

from models.errors import LabCommandError, UsageError
from models.filesystem import DEFAULT_USER, FileSystemNode, VirtualFileSystem
from models.history import CommandHistory, Direction
from models.network import NetworkSimulator
from models.result import CommandResult

logger = logging.getLogger(__name__)

# ANSI colors used by ls
DIRECTORY_COLOR = "\x1b[34m"
FILE_COLOR = "\x1b[37m"
RESET_COLOR = "\x1b[0m"

NMAP_SCANNED_PORTS = 1000

HELP_TEXT = """Available Commands:
  System:
    ls [path]       List directory contents
    cd <path>       Change directory
    pwd             Print working directory
    cat <file>      Read file content
    touch <file>    Create empty file
    clear           Clear terminal screen
    whoami          Display current user

  Network & Recon:
    nmap <target>   Network exploration and port scanner
    curl <url>      Transfer data from URL

  Exploitation:
    sqlmap -u <url> Automate SQL injection detection and exploitation"""

SQLMAP_BANNER = r"""        ___
       __H__
 ___ ___[']_____ ___ ___  {1.5.11#stable}
|_ -| . ["]     | .'| . |
|___|_  ["]_|_|_|__,|  _|
      |_|V...       |_|   http://sqlmap.org"""

SQLMAP_FINDINGS = (
    "[INFO] testing connection to the target URL",
    "[INFO] checking if the target is protected by some WAF/IPS",
    "[INFO] testing if the target URL content is stable",
    "[INFO] target URL content is stable",
    "[INFO] testing if GET parameter 'id' is dynamic",
    "[INFO] GET parameter 'id' appears to be dynamic",
    "[INFO] heuristic (basic) test shows that GET parameter 'id' might be injectable (possible DBMS: 'MySQL')",
    "[INFO] testing for SQL injection on GET parameter 'id'",
    "[INFO] testing 'AND boolean-based blind - WHERE or HAVING clause'",
    "[INFO] GET parameter 'id' appears to be 'AND boolean-based blind - WHERE or HAVING clause' injectable",
    "[INFO] testing 'MySQL >= 5.0 AND error-based - WHERE, HAVING, ORDER BY or GROUP BY clause (FLOOR)'",
    "[INFO] testing 'MySQL >= 5.0 time-based blind - Parameter replace'",
    "[INFO] GET parameter 'id' is 'MySQL >= 5.0 time-based blind - Parameter replace' injectable",
)

CURL_HELP_HINT = "curl: try 'curl --help' for more information"


class Verb(str, Enum):
    """Commands the processor understands.

    "clear" is deliberately absent: wiping the screen belongs to the
    terminal surface, not to engine state.
    """

    HELP = "help"
    LS = "ls"
    CD = "cd"
    PWD = "pwd"
    CAT = "cat"
    TOUCH = "touch"
    WHOAMI = "whoami"
    NMAP = "nmap"
    CURL = "curl"
    SQLMAP = "sqlmap"


Handler = Callable[[list[str]], Awaitable[CommandResult]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CommandProcessor:
    """Parses and executes lab command lines.

    execute() never raises: handler exceptions become error results.
    Concurrent execute() calls are not guarded here; callers that need one
    command at a time (the terminal surface) must serialize them.

    Args:
        filesystem: Filesystem for this session (a fresh seed tree by default).
        network: Network simulator for this session.
        clock: Source of the current time for report timestamps.

    Attributes:
        fs: The session's VirtualFileSystem.
        net: The session's NetworkSimulator.
        history: Lines executed so far.
    """

    def __init__(
        self,
        filesystem: Optional[VirtualFileSystem] = None,
        network: Optional[NetworkSimulator] = None,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        self.fs = filesystem if filesystem is not None else VirtualFileSystem()
        self.net = network if network is not None else NetworkSimulator()
        self.history = CommandHistory()
        self._clock = clock

        self._handlers: dict[Verb, Handler] = {
            Verb.HELP: self._help,
            Verb.LS: self._ls,
            Verb.CD: self._cd,
            Verb.PWD: self._pwd,
            Verb.CAT: self._cat,
            Verb.TOUCH: self._touch,
            Verb.WHOAMI: self._whoami,
            Verb.NMAP: self._nmap,
            Verb.CURL: self._curl,
            Verb.SQLMAP: self._sqlmap,
        }
        missing = [verb.value for verb in Verb if verb not in self._handlers]
        if missing:
            raise RuntimeError(f"No handler registered for verbs: {missing}")

    # ===== Public interface =====

    async def execute(self, command_line: str) -> CommandResult:
        """Execute one command line.

        A blank line is a no-op that does not touch history. Any other line
        is recorded verbatim before dispatch, even if the verb is unknown or
        the handler fails.

        Args:
            command_line: Raw text typed by the learner.

        Returns:
            The single result of the command.
        """
        parts = command_line.split()
        if not parts:
            return CommandResult.info("")

        self.history.append(command_line)
        name, args = parts[0], parts[1:]

        try:
            verb = Verb(name)
        except ValueError:
            return CommandResult.error(f"{name}: command not found")

        logger.debug(f"Dispatching '{verb.value}' with args {args}")
        try:
            return await self._handlers[verb](args)
        except LabCommandError as e:
            return CommandResult.error(e.message)
        except Exception as e:
            logger.exception(f"Unexpected failure while executing {command_line!r}")
            return CommandResult.error(str(e) or type(e).__name__)

    def get_history(self, direction: Direction) -> str:
        """Recall a previous command line without executing it.

        Args:
            direction: "up" for older entries, "down" for newer ones.

        Returns:
            The recalled line, or "" past the newest entry.
        """
        return self.history.navigate(direction)

    # ===== Filesystem handlers =====

    async def _help(self, args: list[str]) -> CommandResult:
        return CommandResult.info(HELP_TEXT)

    async def _ls(self, args: list[str]) -> CommandResult:
        nodes = self.fs.list_directory(args[0] if args else ".")
        lines = [self._format_listing(node) for node in sorted(nodes, key=lambda n: n.name)]
        return CommandResult.success("\n".join(lines))

    @staticmethod
    def _format_listing(node: FileSystemNode) -> str:
        color = DIRECTORY_COLOR if node.is_directory else FILE_COLOR
        return (
            f"{node.permissions} {node.owner} {node.group} {node.size:>6} "
            f"{node.modified.strftime('%H:%M:%S')} {color}{node.name}{RESET_COLOR}"
        )

    async def _cd(self, args: list[str]) -> CommandResult:
        self.fs.change_directory(args[0] if args else "~")
        return CommandResult.success()

    async def _pwd(self, args: list[str]) -> CommandResult:
        return CommandResult.success(self.fs.get_current_path())

    async def _cat(self, args: list[str]) -> CommandResult:
        if not args:
            raise UsageError("cat: missing file operand")
        return CommandResult.success(self.fs.read_file(args[0]))

    async def _touch(self, args: list[str]) -> CommandResult:
        if not args:
            raise UsageError("touch: missing file operand")

        node = self.fs.resolve_path(args[0])
        if node is not None and node.is_directory:
            node.modified = self._clock()
        else:
            self.fs.write_file(args[0], "")
        return CommandResult.success()

    async def _whoami(self, args: list[str]) -> CommandResult:
        return CommandResult.success(DEFAULT_USER)

    # ===== Network handlers =====

    async def _nmap(self, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult.error("nmap: missing target specification")
        if len(args) > 1:
            raise UsageError("nmap: only one target specification is supported")

        target = args[0]
        scan = self.net.scan(target)
        if not scan.is_up:
            return CommandResult.error(
                "Note: Host seems down. If it is really up, but blocking our ping probes, try -Pn\n"
                "Nmap done: 1 IP address (0 hosts up) scanned in 3.02 seconds"
            )

        lines = [
            f"Starting Nmap 7.92 ( https://nmap.org ) at {self._clock().strftime('%Y-%m-%d %H:%M %Z')}",
            f"Nmap scan report for {target} ({scan.ip})",
            "Host is up (0.0024s latency).",
            f"Not shown: {NMAP_SCANNED_PORTS - len(scan.ports)} closed tcp ports (reset)",
            "PORT     STATE SERVICE",
        ]
        for port in scan.ports:
            lines.append(f"{f'{port.port}/tcp':<8} {port.state:<5} {port.service}")
        lines.append("")
        lines.append("Nmap done: 1 IP address (1 host up) scanned in 1.45 seconds")
        return CommandResult.success("\n".join(lines))

    async def _curl(self, args: list[str]) -> CommandResult:
        include_headers = False
        urls: list[str] = []
        for arg in args:
            if arg in ("-i", "--include"):
                include_headers = True
            elif arg in ("-s", "--silent"):
                continue
            elif arg.startswith("-"):
                return CommandResult.error(f"curl: option {arg}: is unknown\n{CURL_HELP_HINT}")
            else:
                urls.append(arg)

        if not urls:
            return CommandResult.error(CURL_HELP_HINT)
        if len(urls) > 1:
            raise UsageError("curl: only one URL is supported")

        response = await self.net.fetch(urls[0])

        output = response.data
        if include_headers:
            header_lines = [f"HTTP/1.1 {response.status} {response.status_text}"]
            header_lines.extend(f"{key}: {value}" for key, value in response.headers.items())
            output = "\n".join(header_lines) + "\n\n" + response.data

        if not response.resolved:
            return CommandResult.error(output)
        return CommandResult.success(output)

    async def _sqlmap(self, args: list[str]) -> CommandResult:
        if "-u" not in args:
            return CommandResult.error("sqlmap: missing url parameter (-u)")
        url_index = args.index("-u") + 1
        if url_index >= len(args):
            return CommandResult.error("sqlmap: missing url")

        # The transcript is canned and never depends on the URL.
        started = self._clock().strftime("%H:%M:%S")
        lines = [SQLMAP_BANNER, "", f"[*] starting at {started}", ""]
        lines.extend(SQLMAP_FINDINGS)
        lines.append("")
        lines.append(f"[*] ending @ {self._clock().strftime('%H:%M:%S')}")
        return CommandResult.success("\n".join(lines))
