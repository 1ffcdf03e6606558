"""Local git operations (clone, pull request checkout) run as subprocesses."""

import asyncio
import logging
import os
from typing import Optional

from gh_mcp.errors import GitCommandError

logger = logging.getLogger(__name__)


class LocalGit:
    def __init__(self, executable: str = "git"):
        self.executable = executable

    async def run(self, *args: str, cwd: Optional[str] = None) -> str:
        logger.info("Running git %s (cwd=%s)", " ".join(args), cwd or ".")
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            # stdin is the MCP transport; git must never read from it
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
            )
        except OSError as e:
            raise GitCommandError(args, None, str(e)) from e

        stdout_b, stderr_b = await proc.communicate()
        stdout = (stdout_b or b"").decode("utf-8", errors="replace")
        stderr = (stderr_b or b"").decode("utf-8", errors="replace")
        if proc.returncode != 0:
            logger.error("git %s exited with %s: %s", args[0], proc.returncode, stderr.strip())
            raise GitCommandError(args, proc.returncode, stderr)
        return stdout

    async def clone(self, url: str, dest: Optional[str] = None) -> str:
        """Clone url and return the destination directory."""
        # "--" keeps a caller-supplied destination from being read as an option
        args = ["clone", "--", url]
        if dest:
            args.append(dest)
        await self.run(*args)
        return dest or default_clone_dir(url)

    async def checkout_pull(self, path: str, number: int, branch: str) -> None:
        await self.run("fetch", "origin", f"pull/{number}/head:{branch}", cwd=path)
        await self.run("checkout", branch, "--", cwd=path)


def default_clone_dir(url: str) -> str:
    """The directory name `git clone` picks when none is given."""
    name = url.rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name
