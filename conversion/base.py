import logging
from abc import ABC, abstractmethod

from conversion import loader, writer
from conversion.filenames import sequence_filename, stack_filename, vtk_filename
from conversion.request import TIFF2VTK, VTK2TIFFSEQ, ConversionRequest
from conversion.rescale import intensity_range, rescale_to_8bit
from conversion.settings import DEFAULT_PREFIX
from conversion.volume import ScalarType


class ConversionPipeline(ABC):
    """
    General pipeline to convert a volume from a format to another.

    A pipeline converts a single volume per run: the volume is fully
    loaded in memory, optionally transformed and then written.
    """

    def __init__(self, prefix=DEFAULT_PREFIX):
        self.prefix: str = prefix

    @classmethod
    def from_request(cls, request: ConversionRequest) -> "ConversionPipeline":
        if request.mode == TIFF2VTK:
            return TIFF2VTKPipeline(
                prefix=request.prefix,
                n_files=request.n_files,
                out_file=request.out_file,
            )
        elif request.mode == VTK2TIFFSEQ:
            return VTK2TIFFSeqPipeline(prefix=request.prefix)
        raise RuntimeError(f"Mode {request.mode} is not recognised")

    @abstractmethod
    def run(self) -> dict:
        """
        Perform the conversion.

        :return: a report of the conversion
        """
        raise NotImplementedError()


class TIFF2VTKPipeline(ConversionPipeline):
    """
    Convert a TIF volume to a VTK file.

    Input: TIF stack or sequence of TIF slices (8-bit or 16-bit)
    Output: VTK structured points file (8-bit)

    16-bit volumes are converted to 8-bit beforehand.
    """

    def __init__(self, prefix=DEFAULT_PREFIX, n_files=1, out_file=None):
        super().__init__(prefix=prefix)
        self.n_files: int = n_files
        self.out_file: str = out_file or vtk_filename(prefix)

    def _input_description(self) -> str:
        if self.n_files > 1:
            first = sequence_filename(self.prefix, 0)
            last = sequence_filename(self.prefix, self.n_files - 1)
            return f"{first} … {last}"
        return stack_filename(self.prefix)

    def run(self) -> dict:
        volume = loader.load(self.prefix, self.n_files)
        input_scalar_type = volume.scalar_type
        low, high = intensity_range(volume)

        if volume.scalar_type == ScalarType.UINT16:
            logging.info(f"→ Intensities rescaling")
            volume = rescale_to_8bit(volume)

        logging.info(f"→ Writing")
        writer.write_vtk(volume, self.out_file)

        logging.info(f"Pipeline {self.__class__.__name__} done")
        return {
            "input": self._input_description(),
            "output": self.out_file,
            "dimensions": list(volume.dimensions),
            "spacing": list(volume.spacing),
            "input_scalar_type": input_scalar_type.name,
            "output_scalar_type": volume.scalar_type.name,
            "intensity_range": [low, high],
        }


class VTK2TIFFSeqPipeline(ConversionPipeline):
    """
    Convert a VTK file to a sequence of TIF slices.

    Input: {prefix}.vtk
    Output: {prefix}0000.tif, {prefix}0001.tif, …
    """

    def run(self) -> dict:
        vtk_file = vtk_filename(self.prefix)
        volume = writer.read_vtk(vtk_file)

        logging.info(f"→ Writing")
        tif_files = writer.write_tiff_sequence(volume, self.prefix)

        logging.info(f"Pipeline {self.__class__.__name__} done")
        return {
            "input": vtk_file,
            "output": tif_files,
            "dimensions": list(volume.dimensions),
            "spacing": list(volume.spacing),
            "input_scalar_type": volume.scalar_type.name,
            "output_scalar_type": volume.scalar_type.name,
            "intensity_range": list(intensity_range(volume)),
        }
