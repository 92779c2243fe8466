"""Descriptor grammar, parsing, and workspace file handling."""

from icw.core.config.files import (
    DEPEND_CONFIG,
    create_workspace_config,
    find_workspace_root,
    load_workspace,
    workspace_exists,
)
from icw.core.config.grammar import SetDirective, parse_line
from icw.core.config.parser import (
    DescriptorSettings,
    ParsedDescriptor,
    parse_descriptor,
    read_descriptor,
)

__all__ = [
    "DEPEND_CONFIG",
    "DescriptorSettings",
    "ParsedDescriptor",
    "SetDirective",
    "create_workspace_config",
    "find_workspace_root",
    "load_workspace",
    "parse_descriptor",
    "parse_line",
    "read_descriptor",
    "workspace_exists",
]
