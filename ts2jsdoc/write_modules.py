"""Logic for writing rendered modules to disk."""

import shutil
from pathlib import Path

from ts2jsdoc.assemble_modules import OutputUnit


def empty_dir(path: Path) -> None:
    """Create ``path`` if needed and remove everything inside it."""
    path.mkdir(parents=True, exist_ok=True)
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def write_modules(units: list[OutputUnit], out_root: Path) -> int:
    """Replace the contents of ``out_root`` with one file per output unit."""
    empty_dir(out_root)
    written = 0
    for unit in units:
        (out_root / unit.file_name).write_text(unit.content, encoding="utf-8")
        written += 1
    return written
