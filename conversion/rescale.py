import logging

import numpy as np

from conversion.volume import ScalarType, Volume


def intensity_range(volume: Volume) -> (int, int):
    """Minimum and maximum voxel values of the full volume."""
    return int(volume.data.min()), int(volume.data.max())


def rescale_to_8bit(volume: Volume) -> Volume:
    """
    Convert a 16-bit volume to 8-bit by mapping linearly its intensities
    range [min, max] onto [0, 255]:

        y = trunc(255 * (x - min) / (max - min))

    This is the same scaling as the one ImageJ performs when converting
    to 8-bit: https://imagej.nih.gov/ij/docs/guide/146-28.html

    8-bit volumes are returned as is. A constant volume (max == min)
    gets converted to zeros.
    """
    if volume.scalar_type == ScalarType.UINT8:
        return volume

    logging.info("Converting from 16-bit to 8-bit...")
    low, high = intensity_range(volume)
    logging.info(f"Original intensities range: [{low}-{high}]")

    if high == low:
        logging.warning(
            f"Constant volume (all voxels equal {low}): converted to zeros"
        )
        return volume.with_data(np.zeros(volume.data.shape, dtype=np.uint8))

    # Same order of operations as the formula above:
    # 255 * (high - low) / (high - low) is exactly 255 in float64
    scaled = 255.0 * (volume.data.astype(np.float64) - low) / (high - low)
    scaled = np.clip(np.trunc(scaled), 0, 255)

    return volume.with_data(scaled.astype(np.uint8))
