import argparse
import logging
import os

import yaml

from conversion.base import ConversionPipeline
from conversion.errors import ConversionError, UnsupportedScalarTypeError
from conversion.request import ConversionRequest
from conversion.settings import DEFAULT_PREFIX

# Options of the YAML configuration file, named after the flags they replace
CONFIG_TYPES = {
    "prefix": str,
    "n": int,
    "save": str,
    "log": str,
    "report": str,
}
CONFIG_KEYS = tuple(CONFIG_TYPES)


def add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "-prefix",
        help="Prefix of the TIF file(s)",
        default=DEFAULT_PREFIX,
    )
    parser.add_argument(
        "-config",
        help="YAML file giving default values to the other options",
        default=None,
    )
    parser.add_argument(
        "-log", help="Also log the conversion in this file", default=None
    )
    parser.add_argument(
        "-report",
        help="Save a summary of the conversion in this YAML file",
        default=None,
    )


def load_config(config_file: str) -> dict:
    with open(config_file, "r") as stream:
        config = yaml.safe_load(stream)

    if config is None:
        return dict()
    if not isinstance(config, dict):
        raise ValueError(f"{config_file} must contain a mapping of options")
    unknown_keys = set(config) - set(CONFIG_KEYS)
    if unknown_keys:
        unknown_keys = sorted(map(str, unknown_keys))
        raise ValueError(
            f"Unknown options in {config_file}: {unknown_keys}; "
            f"must be in {list(CONFIG_KEYS)}"
        )
    for key, value in config.items():
        expected_type = CONFIG_TYPES[key]
        if isinstance(value, bool) or not isinstance(value, expected_type):
            raise ValueError(
                f"Option {key} in {config_file} must be of type "
                f"{expected_type.__name__}, currently: {value!r}"
            )
    return config


def parse_args_with_config(parser: argparse.ArgumentParser, argv=None):
    """
    Parse the command line, using the values of the YAML file given
    with -config as defaults. Options given on the command line win.
    """
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("-config", default=None)
    known_args, _ = pre_parser.parse_known_args(argv)

    if known_args.config is not None:
        try:
            config = load_config(known_args.config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            parser.error(f"Can't load configuration: {e}")
        parser.set_defaults(**config)

    return parser.parse_args(argv)


def setup_logging(logfile=None):
    handlers = [logging.StreamHandler()]
    if logfile is not None:
        handlers.append(logging.FileHandler(logfile))

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
    )


def run_conversion(request: ConversionRequest, report_file=None) -> int:
    """
    Run the pipeline matching a request and report errors.

    :return: the exit code of the process
    """
    pipeline = ConversionPipeline.from_request(request)

    logging.info(f"Starting pipeline {pipeline.__class__.__name__}")
    logging.info(f"  Prefix     : {request.prefix}")
    logging.info(f"  Files      : {request.n_files}")
    try:
        report = pipeline.run()
    except UnsupportedScalarTypeError as e:
        # Not a failure: nothing gets written
        logging.error(str(e))
        logging.error("Bit Depth Not Supported.")
        return 0
    except ConversionError as e:
        logging.error(str(e))
        return 1

    logging.info("Conversion summary:")
    for k, v in report.items():
        key = k.replace("_", " ").capitalize()
        logging.info(f"   {key}: {v}")

    if report_file is not None:
        os.makedirs(
            os.path.dirname(os.path.abspath(report_file)), exist_ok=True
        )
        logging.info(f"Saving conversion summary in {report_file}")
        with open(report_file, "w") as fp:
            yaml.dump(report, fp, sort_keys=False)

    return 0
