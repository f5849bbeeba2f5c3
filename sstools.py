#! /usr/bin/env python
import argparse
import logging
import sys

from conversion.cli import (
    add_common_arguments,
    parse_args_with_config,
    run_conversion,
    setup_logging,
)
from conversion.errors import FilenameError
from conversion.request import TIFF2VTK, VTK2TIFFSEQ, ConversionRequest

__doc__ = "Convert volumes between TIF files and VTK files"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="sstools",
        description=__doc__,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Mode
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-tiff2vtk",
        dest="mode",
        action="store_const",
        const=TIFF2VTK,
        help="Convert {prefix}.tif or {prefix}NN.tif files to a 8-bit VTK file",
    )
    mode.add_argument(
        "-vtk2tiffseq",
        dest="mode",
        action="store_const",
        const=VTK2TIFFSEQ,
        help="Convert {prefix}.vtk to {prefix}NNNN.tif files",
    )

    add_common_arguments(parser)
    parser.add_argument(
        "-n",
        type=int,
        help="Number of TIF files {prefix}00.tif, {prefix}01.tif, …; "
        "1 to read a single multi-paged {prefix}.tif",
        default=1,
    )
    parser.add_argument(
        "-save",
        help="Output VTK file (-tiff2vtk only); defaults to {prefix}.vtk",
        default=None,
    )

    return parse_args_with_config(parser, argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log)

    try:
        request = ConversionRequest(
            mode=args.mode,
            prefix=args.prefix,
            n_files=args.n,
            out_file=args.save,
        )
    except FilenameError as e:
        logging.error(str(e))
        return 1

    return run_conversion(request, report_file=args.report)


if __name__ == "__main__":
    sys.exit(main())
