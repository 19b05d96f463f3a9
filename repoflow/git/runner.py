"""Run git subprocesses against a working directory.

git must never stop to ask for credentials or open an editor: the workflow
does all prompting itself. Output is forced to the C locale so failure
text can be classified in git.remote.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

LOCAL_TIMEOUT = 30

# pull, push and ls-remote talk to the network
NETWORK_TIMEOUT = 120

GIT_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_EDITOR": "true",
    "LC_ALL": "C",
}


@dataclass
class GitResult:
    """Exit status and captured output of one git invocation."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Failure text: stderr, or stdout when git reported there."""
        return self.stderr or self.stdout


def run_git(args: list[str], cwd: Path, timeout: int = LOCAL_TIMEOUT) -> GitResult:
    """Run `git -C cwd <args>`.

    A timeout or a missing git executable comes back as a failed
    GitResult, never as an exception.
    """
    logger.debug(f"git {' '.join(args)} (in {cwd})")
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            env={**os.environ, **GIT_ENV},
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"git {args[0]} timed out after {timeout}s")
        return GitResult(-1, "", f"git {args[0]} timed out after {timeout}s", timed_out=True)
    except FileNotFoundError:
        return GitResult(127, "", "git executable not found on PATH")
    return GitResult(proc.returncode, proc.stdout, proc.stderr)
