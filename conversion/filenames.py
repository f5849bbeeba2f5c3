import os

from conversion.errors import FilenameError
from conversion.settings import (
    MAX_FILENAME_LENGTH,
    READ_INDEX_WIDTH,
    TIF_EXTENSION,
    VTK_EXTENSION,
)


def check_filename(filename: str) -> str:
    """
    Make sure a file name can be created on disk.

    Only the base name is limited in length, not the full path.
    """
    basename = os.path.basename(filename)
    if not basename:
        raise FilenameError(f"'{filename}' does not name a file")
    if len(basename) > MAX_FILENAME_LENGTH:
        raise FilenameError(
            f"File name is {len(basename)} characters long, "
            f"maximum is {MAX_FILENAME_LENGTH}: {basename[:32]}…"
        )
    return filename


def sequence_filename(
    prefix: str, index: int, width: int = READ_INDEX_WIDTH
) -> str:
    """
    {prefix}{index}.tif with the index zero-padded to at least `width` digits.

    Indices needing more digits are written in full (e.g. im100.tif for a
    width of 2), so names of a sequence never collide.
    """
    if index < 0:
        raise FilenameError(f"Slice index must be positive, currently: {index}")
    return check_filename(f"{prefix}{index:0{width}d}{TIF_EXTENSION}")


def sequence_filenames(
    prefix: str, n_files: int, width: int = READ_INDEX_WIDTH
) -> list:
    return [sequence_filename(prefix, i, width) for i in range(n_files)]


def stack_filename(prefix: str) -> str:
    """Multi-paged TIF file: {prefix}.tif"""
    return check_filename(prefix + TIF_EXTENSION)


def vtk_filename(prefix: str) -> str:
    return check_filename(prefix + VTK_EXTENSION)
