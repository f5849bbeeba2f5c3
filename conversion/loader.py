import logging
import os

import numpy as np
import tifffile

from conversion.errors import (
    SliceMismatchError,
    UnsupportedScalarTypeError,
    VolumeIOError,
)
from conversion.filenames import sequence_filenames, stack_filename
from conversion.volume import Volume


def _read_tif(filename: str) -> np.ndarray:
    """
    Read all the pages of the first series of a TIF file.

    Colour images (samples axis 'S') are rejected.
    """
    if not os.path.isfile(filename):
        raise VolumeIOError(f"Can't open {filename}: no such file")
    try:
        with tifffile.TiffFile(filename) as tif:
            series = tif.series[0]
            if "S" in series.axes:
                raise UnsupportedScalarTypeError(
                    f"{filename} is a colour image (axes: {series.axes}), "
                    "only grayscale images are supported"
                )
            return series.asarray()
    except (OSError, ValueError) as e:
        raise VolumeIOError(f"Can't read {filename}: {e}") from e


def load_sequence(prefix: str, n_files: int) -> Volume:
    """
    Load a volume stored as a sequence of 2D TIF files:
    {prefix}00.tif, {prefix}01.tif, …, {prefix}{n_files-1}.tif

    Slices are stacked along z in the order of their index.
    """
    filenames = sequence_filenames(prefix, n_files)

    slices = []
    for filename in filenames:
        image = _read_tif(filename)
        if image.ndim != 2:
            raise SliceMismatchError(
                f"{filename} must be a single 2D slice, "
                f"currently of shape: {image.shape}"
            )
        if slices and (
            image.shape != slices[0].shape or image.dtype != slices[0].dtype
        ):
            raise SliceMismatchError(
                f"{filename} ({image.shape}, {image.dtype}) does not match "
                f"{filenames[0]} ({slices[0].shape}, {slices[0].dtype})"
            )
        slices.append(image)

    return Volume(np.stack(slices, axis=0))


def load_stack(prefix: str) -> Volume:
    """Load a volume stored as a single multi-paged TIF file: {prefix}.tif"""
    return Volume(_read_tif(stack_filename(prefix)))


def load(prefix: str, n_files: int = 1) -> Volume:
    """
    Load a TIF volume.

    :param prefix: stem of the file(s) to read
    :param n_files: number of files of the sequence; if lower or equal
     to one, a single (possibly multi-paged) file is read
    :return: the volume, as 8-bit or 16-bit voxels
    """
    if n_files > 1:
        logging.info("Running image sequence mode")
        volume = load_sequence(prefix, n_files)
    else:
        logging.info("Running multi-paged mode")
        volume = load_stack(prefix)

    logging.info(f"Loaded volume")
    logging.info(f"  Dimensions : {volume.dimensions}")
    logging.info(f"  Bit depth  : {volume.scalar_type.bit_depth}")
    return volume
