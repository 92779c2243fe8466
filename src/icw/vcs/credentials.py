"""Subversion credential lookup.

The password comes from ``ICW_SVN_PASSWORD`` or, failing that, from the
``~/.icw/credentials`` file. An empty password lets ``svn`` fall back on its
own cached credentials.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

PASSWORD_ENV = "ICW_SVN_PASSWORD"
DEFAULT_USERNAME = "anonymous"


def credentials_file(home: Path | None = None) -> Path:
    """Return the path of the stored-credentials file."""
    return (home or Path.home()) / ".icw" / "credentials"


def get_username(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return env.get("USER") or DEFAULT_USERNAME


def get_password(
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> str:
    """Return the Subversion password, or an empty string if none is stored.

    Raises:
        OSError: If the credentials file exists but cannot be read.
    """
    env = os.environ if environ is None else environ
    password = env.get(PASSWORD_ENV)
    if password:
        return password

    path = credentials_file(home)
    if not path.is_file():
        return ""
    logger.debug("Using stored credentials from %s", path)
    return path.read_text(encoding="utf-8").strip()
