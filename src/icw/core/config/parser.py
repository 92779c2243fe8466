"""Whole-descriptor parsing.

``parse_descriptor`` turns descriptor text into an immutable
``ParsedDescriptor``: the ``set`` directives, the declared components, and
every syntax error found. Parsing has no side effects; registering the
components in a workspace is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from icw.core.component.models import Component
from icw.core.config.grammar import SetDirective, parse_line
from icw.exceptions import ConfigSyntaxError, DescriptorReadError


@dataclass(frozen=True)
class DescriptorSettings:
    """Repository settings declared with ``set`` lines.

    The last ``set`` line for a key wins. None means the descriptor does not
    set the key.

    Attributes:
        repo: Repository name from ``set repo``.
        svn_url: Server base URL from ``set svn_url``.
    """

    repo: str | None = None
    svn_url: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.repo is None and self.svn_url is None


@dataclass(frozen=True)
class ParsedDescriptor:
    """Result of parsing one descriptor.

    Attributes:
        source: Descriptor name used in diagnostics.
        settings: Repository settings from ``set`` lines.
        components: Declared components in line order. Each carries
            ``declared_by = [<declarer>]``.
        errors: Syntax errors in line order.
    """

    source: str
    settings: DescriptorSettings = field(default_factory=DescriptorSettings)
    components: tuple[Component, ...] = ()
    errors: tuple[ConfigSyntaxError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the first syntax error, if any."""
        if self.errors:
            raise self.errors[0]


def parse_descriptor(
    text: str,
    source: str = "<string>",
    declared_by: str | None = None,
) -> ParsedDescriptor:
    """Parse descriptor text line by line.

    Args:
        text: Full descriptor content.
        source: Descriptor name used in error messages.
        declared_by: Declarer recorded on every parsed component. Defaults
            to ``source``.

    Returns:
        A ``ParsedDescriptor``. Syntax errors are collected, not raised.
    """
    declarer = declared_by if declared_by is not None else source
    repo: str | None = None
    svn_url: str | None = None
    components: list[Component] = []
    errors: list[ConfigSyntaxError] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        try:
            result = parse_line(line, line_number, source)
        except ConfigSyntaxError as exc:
            errors.append(exc)
            continue

        if isinstance(result, SetDirective):
            if result.key == "repo":
                repo = result.value
            else:
                svn_url = result.value
        elif isinstance(result, Component):
            result.declared_by.append(declarer)
            components.append(result)

    return ParsedDescriptor(
        source=source,
        settings=DescriptorSettings(repo=repo, svn_url=svn_url),
        components=tuple(components),
        errors=tuple(errors),
    )


def read_descriptor(path: Path, declared_by: str | None = None) -> ParsedDescriptor:
    """Read a descriptor file as UTF-8 and parse it.

    Raises:
        DescriptorReadError: If the file cannot be read or is not UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DescriptorReadError(
            str(path), f"not valid UTF-8 (byte {exc.start})"
        ) from exc
    except OSError as exc:
        raise DescriptorReadError(str(path), exc.strerror or str(exc)) from exc
    return parse_descriptor(text, source=str(path), declared_by=declared_by)
