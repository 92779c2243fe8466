"""Version-control read surface: descriptor sources and repository settings."""

from icw.vcs.base import DescriptorSource
from icw.vcs.settings import DEFAULT_SVN_URL, Settings, resolve_settings
from icw.vcs.svn import SvnClient

__all__ = [
    "DEFAULT_SVN_URL",
    "DescriptorSource",
    "Settings",
    "SvnClient",
    "resolve_settings",
]
