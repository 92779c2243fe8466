"""Repository settings resolution.

The repository name and server URL come from the first source that sets
them, in priority order:

1. Explicit arguments (CLI options).
2. Environment variables ``ICW_REPO`` and ``ICW_SVN_URL``.
3. ``set repo`` / ``set svn_url`` lines in workspace.config.
4. Built-in default (server URL only).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from icw.core.config.parser import DescriptorSettings
from icw.exceptions import ConfigurationError

REPO_ENV = "ICW_REPO"
SVN_URL_ENV = "ICW_SVN_URL"
DEFAULT_SVN_URL = "svn://anyvej11.dk"


@dataclass(frozen=True)
class Settings:
    """Resolved repository settings.

    Attributes:
        repo: Repository name, or None if no source sets it.
        svn_url: Server base URL.
        repo_source: Where ``repo`` came from ("option", "environment",
            "workspace.config"), or None.
    """

    repo: str | None
    svn_url: str
    repo_source: str | None = None

    def require_repo(self) -> str:
        """Return the repository name.

        Raises:
            ConfigurationError: If no source sets a repository name.
        """
        if not self.repo:
            raise ConfigurationError(
                f"{REPO_ENV} not set\n"
                f"Please set it with: export {REPO_ENV}=repo_name\n"
                'Or add to workspace.config: set repo "repo_name"'
            )
        return self.repo


def resolve_settings(
    repo: str | None = None,
    svn_url: str | None = None,
    descriptor: DescriptorSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Combine explicit values, environment, and descriptor settings."""
    env = os.environ if environ is None else environ
    declared = descriptor or DescriptorSettings()

    candidates = [
        (repo, "option"),
        (env.get(REPO_ENV), "environment"),
        (declared.repo, "workspace.config"),
    ]
    resolved_repo, repo_source = next(
        ((value, source) for value, source in candidates if value), (None, None)
    )

    resolved_url = svn_url or env.get(SVN_URL_ENV) or declared.svn_url or DEFAULT_SVN_URL
    return Settings(repo=resolved_repo, svn_url=resolved_url.rstrip("/"), repo_source=repo_source)
