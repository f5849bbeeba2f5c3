from enum import Enum

import numpy as np

from conversion.errors import UnsupportedScalarTypeError
from conversion.settings import DEFAULT_ORIGIN, DEFAULT_SPACING


class ScalarType(Enum):
    """
    Supported voxel scalar types.

    The value of each member is the numpy dtype of the buffer.
    """

    UINT8 = np.dtype(np.uint8)
    UINT16 = np.dtype(np.uint16)

    @classmethod
    def from_dtype(cls, dtype) -> "ScalarType":
        dtype = np.dtype(dtype)
        for scalar_type in cls:
            if scalar_type.value == dtype:
                return scalar_type
        raise UnsupportedScalarTypeError(
            f"Voxels of type {dtype} are not supported: "
            "must be unsigned 8-bit or 16-bit integers"
        )

    @property
    def bit_depth(self) -> int:
        return self.value.itemsize * 8


class Volume:
    """
    Dense 3D scalar grid held in memory.

    The voxels are stored in a C-ordered numpy array of shape (nz, ny, nx),
    hence the flat buffer has x varying fastest, then y, then z.

    A 2D array is considered as a volume of a single slice.
    """

    def __init__(self, data: np.ndarray, spacing=None, origin=None):
        data = np.asarray(data)
        if data.ndim == 2:
            data = data[np.newaxis, ...]
        if data.ndim != 3:
            raise ValueError(
                f"A volume must be a 2D or 3D array, currently: {data.ndim}D"
            )
        if 0 in data.shape:
            raise ValueError(f"A volume can't be empty, shape: {data.shape}")

        self.scalar_type: ScalarType = ScalarType.from_dtype(data.dtype)
        self.data: np.ndarray = np.ascontiguousarray(data)
        if spacing is None:
            spacing = DEFAULT_SPACING
        if origin is None:
            origin = DEFAULT_ORIGIN
        self.spacing: tuple = tuple(float(s) for s in spacing)
        self.origin: tuple = tuple(float(o) for o in origin)

        assert len(self.spacing) == 3, "Spacing must have 3 components"
        assert len(self.origin) == 3, "Origin must have 3 components"

    @property
    def dimensions(self) -> tuple:
        """(nx, ny, nz)"""
        nz, ny, nx = self.data.shape
        return nx, ny, nz

    @property
    def n_voxels(self) -> int:
        return self.data.size

    @property
    def buffer(self) -> np.ndarray:
        """Flat view of the voxels: x fastest, then y, then z."""
        return self.data.ravel()

    def with_data(self, data: np.ndarray) -> "Volume":
        """
        Return a new volume sharing this volume geometry
        but using another buffer of the same shape.
        """
        if data.shape != self.data.shape:
            raise ValueError(
                f"Shape mismatch: {data.shape} and {self.data.shape}"
            )
        return Volume(data, spacing=self.spacing, origin=self.origin)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(dimensions={self.dimensions}, "
            f"scalar_type={self.scalar_type.name}, spacing={self.spacing})"
        )
