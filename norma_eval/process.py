import shlex
import subprocess
from typing import Iterator, List, Optional

from norma_eval.exceptions import DriverInvocationError
from norma_eval.logging_config import get_logger

logger = get_logger("process")


class ScopedProcess:
    """Child process whose stdout and stderr are merged into one line stream.

    Use as a context manager: the output pipe is closed and the child reaped on
    every exit path. If the block is left through an exception the child is
    terminated first.
    """

    def __init__(self, cmd: List[str]):
        self.cmd = list(cmd)
        self.process: Optional[subprocess.Popen] = None
        self.returncode: Optional[int] = None

    @property
    def command_line(self) -> str:
        return shlex.join(self.cmd)

    def start(self) -> "ScopedProcess":
        """Spawn the child; raises DriverInvocationError if it cannot be started."""
        try:
            self.process = subprocess.Popen(
                self.cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                errors="replace",
            )
        except OSError as e:
            raise DriverInvocationError(
                f"Failed to start '{self.command_line}': {e}"
            ) from e
        logger.debug(
            f"Started '{self.command_line}' (pid {self.process.pid})",
            extra={"command": self.command_line, "pid": self.process.pid},
        )
        return self

    def lines(self) -> Iterator[str]:
        """Yield output lines as the child produces them, newline included."""
        if self.process is None:
            raise RuntimeError("Process has not been started")
        for line in self.process.stdout:
            yield line

    def wait(self) -> int:
        if self.process is None:
            raise RuntimeError("Process has not been started")
        self.returncode = self.process.wait()
        return self.returncode

    def stop(self, terminate: bool = False) -> None:
        """Release the child: optionally terminate it, drain the pipe, reap it."""
        if self.process is None:
            return
        if terminate and self.process.poll() is None:
            logger.warning(
                f"Terminating '{self.command_line}' (pid {self.process.pid})",
                extra={"command": self.command_line, "pid": self.process.pid},
            )
            self.process.terminate()
            try:
                self.process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self.process.kill()
        if self.process.stdout is not None:
            if not terminate:
                # Unread output would block the child on a full pipe
                for _ in self.process.stdout:
                    pass
            self.process.stdout.close()
        self.returncode = self.process.wait()
        logger.debug(
            f"'{self.command_line}' exited with status {self.returncode}",
            extra={"command": self.command_line, "returncode": self.returncode},
        )
        self.process = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop(terminate=exc_type is not None)
