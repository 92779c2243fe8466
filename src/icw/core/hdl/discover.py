"""HDL source discovery for digital components.

Files in a component directory are sorted into three groups:

- **package**: VHDL files declaring a ``package`` (or ``package body``).
- **rtl**: synthesizable sources. Verilog/SystemVerilog files and headers,
  and VHDL files whose architecture is named ``rtl``, ``impl``,
  ``structural``, ``behavioral``, or anything unrecognised.
- **behav**: testbenches. ``*_tb.v``/``*_tb.sv`` files and VHDL files whose
  architecture is named ``testbench``, ``asim``, or ``sim``.

Only the top level of the component directory is searched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class HdlFileType(str, Enum):
    PACKAGE = "package"
    RTL = "rtl"
    BEHAV = "behav"


_ARCHITECTURE_TYPES: dict[str, HdlFileType] = {
    "rtl": HdlFileType.RTL,
    "impl": HdlFileType.RTL,
    "structural": HdlFileType.RTL,
    "behavioral": HdlFileType.RTL,
    "testbench": HdlFileType.BEHAV,
    "asim": HdlFileType.BEHAV,
    "sim": HdlFileType.BEHAV,
}

_ARCHITECTURE_RE = re.compile(r"architecture\s+(\w+)\s+of\s+(\w+)\s+is", re.IGNORECASE)
_PACKAGE_RE = re.compile(r"package\s+(body\s+)?(\w+)\s+is", re.IGNORECASE)


@dataclass
class HdlFiles:
    """Categorized HDL files of one component.

    Attributes:
        package: VHDL package files.
        rtl: Synthesizable sources.
        behav: Behavioural and testbench sources.
    """

    package: list[Path] = field(default_factory=list)
    rtl: list[Path] = field(default_factory=list)
    behav: list[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.package or self.rtl or self.behav)

    def groups(self) -> list[tuple[HdlFileType, list[Path]]]:
        """Return the non-empty groups in display order."""
        ordered = [
            (HdlFileType.PACKAGE, self.package),
            (HdlFileType.RTL, self.rtl),
            (HdlFileType.BEHAV, self.behav),
        ]
        return [(kind, files) for kind, files in ordered if files]


def classify_vhdl_file(path: Path) -> HdlFileType:
    """Classify a VHDL file by its package and architecture declarations.

    Raises:
        OSError: If the file cannot be read.
    """
    text = path.read_text(encoding="utf-8", errors="replace")
    if _PACKAGE_RE.search(text):
        return HdlFileType.PACKAGE
    file_type = HdlFileType.RTL
    for match in _ARCHITECTURE_RE.finditer(text):
        file_type = _ARCHITECTURE_TYPES.get(match.group(1).lower(), HdlFileType.RTL)
    return file_type


def discover_files(component_dir: Path) -> HdlFiles:
    """Find and categorize the HDL files of a component.

    A directory that does not exist (component not checked out) yields
    empty groups. Unreadable VHDL files are skipped with a warning.
    """
    files = HdlFiles()
    if not component_dir.is_dir():
        return files

    for suffix in ("*.v", "*.sv"):
        for path in sorted(component_dir.glob(suffix)):
            if path.stem.endswith("_tb"):
                files.behav.append(path)
            else:
                files.rtl.append(path)

    files.rtl.extend(sorted(component_dir.glob("*.svh")))

    for path in sorted(component_dir.glob("*.vhd")):
        try:
            file_type = classify_vhdl_file(path)
        except OSError:
            logger.warning("Cannot read %s", path, exc_info=True)
            continue
        if file_type is HdlFileType.PACKAGE:
            files.package.append(path)
        elif file_type is HdlFileType.BEHAV:
            files.behav.append(path)
        else:
            files.rtl.append(path)

    return files


def shorten_path(path: Path, workspace_root: Path) -> str:
    """Replace the workspace root prefix of ``path`` with ``...``."""
    try:
        return str(Path("...") / path.relative_to(workspace_root))
    except ValueError:
        return str(path)
