"""HDL file discovery for digital components."""

from icw.core.hdl.discover import (
    HdlFiles,
    HdlFileType,
    classify_vhdl_file,
    discover_files,
    shorten_path,
)

__all__ = [
    "HdlFiles",
    "HdlFileType",
    "classify_vhdl_file",
    "discover_files",
    "shorten_path",
]
