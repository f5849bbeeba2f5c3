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
from conversion.request import TIFF2VTK, ConversionRequest
from conversion.settings import DEFAULT_OUT_FILE

__doc__ = "Convert a sequence of TIF files to a 8-bit VTK file"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="sstiff2vtk",
        description=__doc__,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-n",
        type=int,
        help="Number of TIF files {prefix}00.tif, {prefix}01.tif, …; "
        "1 to read a single multi-paged {prefix}.tif",
        default=None,
    )
    parser.add_argument(
        "-save", help="Output VTK file", default=DEFAULT_OUT_FILE
    )

    args = parse_args_with_config(parser, argv)

    # Checked here so that the count can also come from -config
    if not args.n:
        parser.error("The number of TIF files must be specified!")
    if args.n < 0:
        parser.error(f"The number of TIF files must be positive: {args.n}")

    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log)

    try:
        request = ConversionRequest(
            mode=TIFF2VTK,
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
