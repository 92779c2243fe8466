"""Subversion backend built on the ``svn`` command-line client.

Repository layout::

    <svn_url>/<repo>/components/<component path>/<revision>/<file>

where ``<revision>`` is ``trunk``, ``tags/<name>``, or ``branches/<name>``.
Only the read operations the dependency expander needs are implemented, plus
a connection check.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from icw.core.component.models import Component
from icw.exceptions import OperationCancelledError, TransportError
from icw.vcs.base import DescriptorSource
from icw.vcs.credentials import get_password, get_username
from icw.vcs.settings import Settings

logger = logging.getLogger(__name__)

SVN_BINARY = "svn"

# Error codes svn reports when the requested path does not exist.
_NOT_FOUND_CODES: tuple[str, ...] = ("E160013", "W160013", "E200009", "E170000")


class SvnClient(DescriptorSource):
    """Read-only Subversion client.

    Args:
        url: Server base URL (e.g. "svn://anyvej11.dk").
        repo: Repository name.
        username: Subversion user name.
        password: Subversion password. Empty lets ``svn`` use its own cache.
    """

    def __init__(self, url: str, repo: str, username: str, password: str = "") -> None:
        self.url = url.rstrip("/")
        self.repo = repo
        self.username = username
        self.password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> SvnClient:
        """Build a client from resolved settings and stored credentials.

        Raises:
            ConfigurationError: If no repository name is configured.
        """
        return cls(
            url=settings.svn_url,
            repo=settings.require_repo(),
            username=get_username(),
            password=get_password(),
        )

    @property
    def repo_url(self) -> str:
        return f"{self.url}/{self.repo}"

    def component_url(self, component: Component, filename: str = "") -> str:
        url = f"{self.repo_url}/components/{component.path}/{component.revision}"
        return f"{url}/{filename}" if filename else url

    def _auth_args(self) -> list[str]:
        args = ["--username", self.username, "--non-interactive", "--trust-server-cert"]
        if self.password:
            args += ["--password", self.password]
        return args

    def _run(self, args: list[str], timeout: float | None) -> subprocess.CompletedProcess:
        """Run an svn subcommand and return its output decoded as UTF-8.

        Raises:
            TransportError: If svn is missing or its output is not UTF-8.
            OperationCancelledError: If ``timeout`` expires.
        """
        command = [SVN_BINARY, *args, *self._auth_args()]
        logger.debug("Running svn %s", " ".join(args))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                timeout=timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise TransportError(
                f"'{SVN_BINARY}' command not found; install a Subversion client"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise OperationCancelledError(
                f"svn {args[0]} timed out after {timeout:.1f}s"
            ) from exc

        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TransportError(
                f"svn {args[0]} {args[1]} returned output that is not valid UTF-8"
            ) from exc
        stderr = result.stderr.decode("utf-8", errors="replace")
        return subprocess.CompletedProcess(command, result.returncode, stdout, stderr)

    def fetch_descriptor_text(
        self,
        component: Component,
        filename: str,
        *,
        timeout: float | None = None,
    ) -> str | None:
        """Read a file with ``svn cat`` without checking the component out."""
        url = self.component_url(component, filename)
        result = self._run(["cat", url], timeout)
        if result.returncode == 0:
            return result.stdout
        stderr = result.stderr.strip()
        if any(code in stderr for code in _NOT_FOUND_CODES):
            logger.debug("%s does not exist", url)
            return None
        raise TransportError(f"svn cat {url} failed: {stderr or result.returncode}")

    def is_checked_out_locally(self, path: Path) -> bool:
        return (path / ".svn").is_dir()

    def test_connection(self, timeout: float | None = None) -> None:
        """List the repository root to check server and credentials.

        Raises:
            TransportError: If the repository cannot be listed.
        """
        result = self._run(["list", self.repo_url, "--depth", "immediates"], timeout)
        if result.returncode != 0:
            raise TransportError(
                f"failed to connect to {self.repo_url}: {result.stderr.strip()}"
            )
