class ConversionError(Exception):
    """Base class of the errors raised while converting a volume."""


class UnsupportedScalarTypeError(ConversionError, TypeError):
    """The voxels are neither unsigned 8-bit nor unsigned 16-bit integers."""


class VolumeIOError(ConversionError, IOError):
    """A volume file can't be read or written."""


class SliceMismatchError(ConversionError, ValueError):
    """The slices of a sequence don't share the same shape or scalar type."""


class FilenameError(ConversionError, ValueError):
    """A file name derived from the prefix is invalid."""
