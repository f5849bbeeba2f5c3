import logging
import os
import tempfile

import numpy as np
import pyvista as pv
import tifffile

from conversion.errors import UnsupportedScalarTypeError, VolumeIOError
from conversion.filenames import check_filename, sequence_filename
from conversion.settings import (
    VTK_EXTENSION,
    VTK_FILE_VERSION,
    VTK_SCALARS_NAME,
    VTK_TITLE,
    WRITE_INDEX_WIDTH,
)
from conversion.volume import ScalarType, Volume


def _structured_points_header(volume: Volume) -> bytes:
    """
    Header of a binary legacy VTK file holding the volume
    as unsigned char scalars with the default lookup table.
    """
    nx, ny, nz = volume.dimensions
    spacing = " ".join(f"{s:.11g}" for s in volume.spacing)
    origin = " ".join(f"{o:.11g}" for o in volume.origin)
    header = (
        f"# vtk DataFile Version {VTK_FILE_VERSION}\n"
        f"{VTK_TITLE}\n"
        "BINARY\n"
        "DATASET STRUCTURED_POINTS\n"
        f"DIMENSIONS {nx} {ny} {nz}\n"
        f"SPACING {spacing}\n"
        f"ORIGIN {origin}\n"
        f"POINT_DATA {volume.n_voxels}\n"
        f"SCALARS {VTK_SCALARS_NAME} unsigned_char 1\n"
        "LOOKUP_TABLE default\n"
    )
    return header.encode("ascii")


def _write_structured_points(volume: Volume, filename: str):
    # x varies fastest in the buffer, as VTK expects; bytes have no endianness
    with open(filename, "wb") as fp:
        fp.write(_structured_points_header(volume))
        fp.write(volume.buffer.tobytes())
        fp.write(b"\n")


def _default_file_mode() -> int:
    """Permissions of a file created with open(), given the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_vtk(volume: Volume, filename: str):
    """
    Save a 8-bit volume as a binary VTK structured points file.

    The header follows the classic legacy format (version 3.0) that VTK
    readers of any version can read, and the voxels are stored as
    unsigned char SCALARS (not COLOR_SCALARS, which readers normalise
    to [0, 1]).

    Rows are written in the order of the TIF files (y = 0 is the first
    row of a TIF page), while vtkTIFFReader uses a lower-left origin:
    VTK files written by VTK's own TIF reader are mirrored along y
    compared to the ones written here.

    The file is first written next to its destination and then moved
    in place, so that a failing write does not leave a partial file.
    """
    if volume.scalar_type != ScalarType.UINT8:
        raise UnsupportedScalarTypeError(
            f"Only 8-bit volumes can be saved as VTK, "
            f"currently: {volume.scalar_type.bit_depth}-bit"
        )
    check_filename(filename)

    out_folder = os.path.dirname(os.path.abspath(filename))
    try:
        fd, tmp_file = tempfile.mkstemp(
            suffix=VTK_EXTENSION, prefix=".tmp_", dir=out_folder
        )
        os.close(fd)
    except OSError as e:
        raise VolumeIOError(f"Can't write in {out_folder}: {e}") from e

    logging.info(f"Saving VTK file: {filename}")
    try:
        _write_structured_points(volume, tmp_file)
        # mkstemp creates files readable by their owner only
        os.chmod(tmp_file, _default_file_mode())
        os.replace(tmp_file, filename)
    except OSError as e:
        raise VolumeIOError(f"Can't write {filename}: {e}") from e
    finally:
        if os.path.exists(tmp_file):
            os.remove(tmp_file)


def read_vtk(filename: str) -> Volume:
    """Load a volume from a VTK structured points file."""
    if not os.path.isfile(filename):
        raise VolumeIOError(f"Can't open {filename}: no such file")

    logging.info(f"Loading VTK file: {filename}")
    try:
        grid = pv.read(filename)
    except (OSError, RuntimeError, ValueError) as e:
        raise VolumeIOError(f"Can't read {filename}: {e}") from e

    if not isinstance(grid, pv.ImageData):
        raise VolumeIOError(
            f"{filename} is not a structured points file, "
            f"it contains a {grid.__class__.__name__}"
        )

    scalars = grid.active_scalars
    if scalars is None and grid.point_data.keys():
        scalars = grid.point_data[grid.point_data.keys()[0]]
    if scalars is None or scalars.ndim != 1:
        raise VolumeIOError(f"{filename} does not hold one scalar per voxel")

    nx, ny, nz = grid.dimensions
    data = np.array(scalars).reshape((nz, ny, nx))
    return Volume(data, spacing=grid.spacing, origin=grid.origin)


def write_tiff_sequence(
    volume: Volume, prefix: str, width: int = WRITE_INDEX_WIDTH
) -> list:
    """
    Save each slice of a volume in its own TIF file:
    {prefix}0000.tif, {prefix}0001.tif, …

    :return: the list of the written files
    """
    filenames = [
        sequence_filename(prefix, z, width) for z in range(volume.data.shape[0])
    ]
    logging.info(f"Saving {len(filenames)} TIF slices: {filenames[0]} …")
    for filename, image in zip(filenames, volume.data):
        _write_tif(filename, image)
    return filenames


def write_tiff_stack(volume: Volume, filename: str):
    """Save a volume as a single multi-paged TIF file."""
    logging.info(f"Saving TIF stack: {filename}")
    _write_tif(check_filename(filename), volume.data)


def _write_tif(filename: str, data: np.ndarray):
    try:
        tifffile.imwrite(filename, data, photometric="minisblack")
    except OSError as e:
        raise VolumeIOError(f"Can't write {filename}: {e}") from e
