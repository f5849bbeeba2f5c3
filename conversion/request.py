from conversion.errors import FilenameError
from conversion.filenames import (
    check_filename,
    sequence_filename,
    stack_filename,
    vtk_filename,
)
from conversion.settings import DEFAULT_PREFIX, WRITE_INDEX_WIDTH

TIFF2VTK = "tiff2vtk"
VTK2TIFFSEQ = "vtk2tiffseq"


class ConversionRequest:
    """
    Settings of a single conversion, validated before any file is touched.

    :param mode: "tiff2vtk" or "vtk2tiffseq"
    :param prefix: stem of the TIF file(s) (and of the VTK file when
     converting to a TIF sequence)
    :param n_files: number of TIF files of the sequence,
     1 for a single multi-paged TIF file
    :param out_file: VTK file to write; defaults to {prefix}.vtk
    """

    def __init__(
        self, mode=TIFF2VTK, prefix=DEFAULT_PREFIX, n_files=1, out_file=None
    ):
        self.mode: str = mode
        self.prefix: str = prefix
        self.n_files: int = n_files
        self.out_file: str = out_file or vtk_filename(prefix)

        self.validate()

    def validate(self):
        if self.mode not in (TIFF2VTK, VTK2TIFFSEQ):
            raise ValueError(f"Mode {self.mode} is not recognised")
        if not self.prefix:
            raise FilenameError("The prefix can't be empty")
        if not isinstance(self.n_files, int):
            raise TypeError(
                f"The number of files must be an integer: {self.n_files}"
            )

        # Every name derived from the prefix must be valid: checking
        # the last index is enough as it is the longest of the sequence.
        if self.mode == TIFF2VTK:
            if self.n_files > 1:
                sequence_filename(self.prefix, self.n_files - 1)
            else:
                stack_filename(self.prefix)
            check_filename(self.out_file)
        else:
            vtk_filename(self.prefix)
            sequence_filename(self.prefix, 0, WRITE_INDEX_WIDTH)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(mode={self.mode!r}, "
            f"prefix={self.prefix!r}, n_files={self.n_files}, "
            f"out_file={self.out_file!r})"
        )
