"""Line grammar for workspace.config and depend.config descriptors.

Each descriptor line is one of::

    set repo "<name>"
    set svn_url "<url>"
    use component("<path>", "<category>", "<revision>")
    use component("<path>", "<category>")      # revision defaults to trunk
    use component("<path>")                    # category inferred from path
    use ref("<path>")                          # local reference, never fetched
    # comment

Forms are tried in the order above and the first match wins. Whitespace
inside the parentheses and around commas is insignificant; values are
double-quoted and may not contain quotes. Any other line that mentions
``use`` is a syntax error; everything else is ignored so that newer
directives do not break older tools.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from icw.core.component.models import (
    DEFAULT_REVISION,
    LOCAL_REVISION,
    Category,
    Component,
    VcsKind,
    infer_category,
    infer_vcs,
)
from icw.exceptions import ConfigSyntaxError

logger = logging.getLogger(__name__)

_QUOTED = r'"([^"]+)"'

_SET_REPO_RE = re.compile(r"set\s+repo\s+" + _QUOTED)
_SET_SVN_URL_RE = re.compile(r"set\s+svn_url\s+" + _QUOTED)
_COMPONENT_FULL_RE = re.compile(
    r"use\s+component\s*\(\s*" + _QUOTED + r"\s*,\s*" + _QUOTED
    + r"\s*,\s*" + _QUOTED + r"\s*\)"
)
_COMPONENT_TYPED_RE = re.compile(
    r"use\s+component\s*\(\s*" + _QUOTED + r"\s*,\s*" + _QUOTED + r"\s*\)"
)
_COMPONENT_PATH_RE = re.compile(r"use\s+component\s*\(\s*" + _QUOTED + r"\s*\)")
_REF_RE = re.compile(r"use\s+ref\s*\(\s*" + _QUOTED + r"\s*\)")
_USE_TOKEN_RE = re.compile(r"\buse\b")


@dataclass(frozen=True)
class SetDirective:
    """A ``set <key> "<value>"`` line.

    Attributes:
        key: Either "repo" or "svn_url".
        value: The quoted value.
    """

    key: str
    value: str


LineResult = Union[SetDirective, Component, None]


def parse_line(line: str, line_number: int = 0, source: str = "<string>") -> LineResult:
    """Parse one descriptor line.

    Args:
        line: Raw line text (surrounding whitespace is ignored).
        line_number: 1-based line number, used in error messages.
        source: Descriptor name, used in error messages.

    Returns:
        A ``SetDirective``, a ``Component`` with an empty ``declared_by``,
        or None for blank, comment, and unrecognized lines.

    Raises:
        ConfigSyntaxError: If the line mentions ``use`` but matches no form.
    """
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    match = _SET_REPO_RE.search(text)
    if match:
        return SetDirective("repo", match.group(1))
    match = _SET_SVN_URL_RE.search(text)
    if match:
        return SetDirective("svn_url", match.group(1))

    match = _COMPONENT_FULL_RE.search(text)
    if match:
        path, category_name, revision = match.groups()
        return _declared_component(path, category_name, revision, line_number, source)

    match = _COMPONENT_TYPED_RE.search(text)
    if match:
        path, category_name = match.groups()
        return _declared_component(path, category_name, DEFAULT_REVISION, line_number, source)

    match = _COMPONENT_PATH_RE.search(text)
    if match:
        path = match.group(1)
        return _make_component(path, infer_category(path), DEFAULT_REVISION)

    match = _REF_RE.search(text)
    if match:
        path = match.group(1)
        return Component(
            name=path,
            path=path,
            category=infer_category(path),
            revision=LOCAL_REVISION,
            vcs=VcsKind.LOCAL,
        )

    if _USE_TOKEN_RE.search(text):
        raise ConfigSyntaxError(source, line_number, line)

    return None


def _make_component(
    path: str, category: Category, revision: str, vcs: VcsKind | None = None
) -> Component:
    return Component(
        name=path,
        path=path,
        category=category,
        revision=revision,
        vcs=infer_vcs(category) if vcs is None else vcs,
    )


def _declared_component(
    path: str, category_name: str, revision: str, line_number: int, source: str
) -> Component:
    """Build a component from an explicitly typed declaration.

    An unknown category name keeps the path-inferred category for display
    but always maps to Subversion.
    """
    category = Category.from_name(category_name)
    if category is not None:
        return _make_component(path, category, revision)
    category = infer_category(path)
    logger.warning(
        "%s:%d: unknown category %r for %s, shown as %s and read from svn",
        source, line_number, category_name, path, category.value,
    )
    return _make_component(path, category, revision, VcsKind.SVN)
