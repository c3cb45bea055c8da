"""
File collaborators for the CIF editor: reading, writing and path discovery.
"""

from pathlib import Path
from typing import List, Optional, Union
import logging

from .cif_edit import CifEditor
from .instruction_set import InstructionSet

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = "_modified"
CIF_EXTENSION = ".cif"

PathLike = Union[str, Path]


def read_cif_lines(path: PathLike) -> List[str]:
    """Read a CIF file into lines without line terminators."""
    return Path(path).read_text(encoding="utf-8").splitlines()


def write_cif_lines(path: PathLike, lines: List[str]) -> None:
    """Write lines joined by '\\n'."""
    Path(path).write_text("\n".join(lines), encoding="utf-8")


def modified_path(path: PathLike, suffix: str = DEFAULT_SUFFIX) -> Path:
    """'dir/BaTiO3.cif' -> 'dir/BaTiO3_modified.cif'"""
    path = Path(path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


def directory_content_from_path(path: PathLike) -> List[Path]:
    """
    Entries of a directory, or the path itself for a file.

    Raises:
        FileNotFoundError: the path does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"The path does not exist: {path}")
    if path.is_dir():
        return sorted(path.iterdir())
    return [path]


def collect_cif_paths(path: PathLike, suffix: str = DEFAULT_SUFFIX) -> List[Path]:
    """CIF files under `path`, leaving out outputs of earlier runs."""
    paths = [
        p for p in directory_content_from_path(path)
        if p.is_file() and p.suffix.lower() == CIF_EXTENSION and not p.stem.endswith(suffix)
    ]
    logger.debug(f"Paths: {[str(p) for p in paths]}")
    return paths


def apply_instructions_to_cif_file(
    path: PathLike,
    instruction_set: InstructionSet,
    editor: Optional[CifEditor] = None
) -> List[str]:
    """
    Read a CIF file and return its rewritten lines. Nothing is written.

    Raises:
        ParseError, RangeError: a targeted value could not be edited
    """
    if editor is None:
        editor = CifEditor()

    lines = read_cif_lines(path)
    new_lines, modified = editor.apply_instructions_to_lines(lines, instruction_set)
    logger.debug(f"Modified {modified} lines in {path}")
    return new_lines
