"""Core nexrad-json execution logic.

``run_nexrad_json`` is the importable implementation; ``main`` only parses
arguments and maps errors to an exit status. scripts/ holds a thin wrapper.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from nexrad_json import __version__
from nexrad_json.contracts import NexradJsonError
from nexrad_json.pipeline.orchestrator import ElevationOrchestrator
from nexrad_json.radar.loader import RadarDataLoader
from nexrad_json.radar.transforms import TransformChain
from nexrad_json.schemas import InternalConfig, ParamConfig, load_user_config_dict, resolve_config

__all__ = ['run_nexrad_json', 'setup_logging', 'build_parser', 'main']

logger = logging.getLogger(__name__)


def setup_logging(config: InternalConfig) -> None:
    """Configure the root logger from ``config.logging``.

    Installs a console handler and, when ``config.logging.file`` is set, a
    file handler. Existing root handlers are replaced.
    """
    log_level = getattr(logging, config.logging.level)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if config.logging.file:
        log_path = Path(config.logging.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    logger.debug("Logging: level=%s, file=%s", config.logging.level, config.logging.file)


def run_nexrad_json(
    input_file: str,
    cli_args: Optional[Dict[str, Any]] = None,
    user_config_path: Optional[str] = None,
) -> Dict[int, Path]:
    """Convert one NEXRAD archive into per-elevation GeoJSON files.

    1. Resolve configuration (Param < User < CLI)
    2. Configure logging
    3. Read the archive into a RadarVolume
    4. Build the transform chain from the radar site
    5. Assemble and write the selected elevations

    Parameters
    ----------
    input_file : str
        Path to a NEXRAD Level-II archive.
    cli_args : dict, optional
        CLIConfig fields. None values are ignored.
    user_config_path : str, optional
        Python file with a CONFIG dict.

    Returns
    -------
    dict of int to Path
        Output file per processed elevation.

    Raises
    ------
    ConfigError
        Invalid configuration. Raised before the input is opened.
    InputOpenError, ProjectionSetupError, UnsupportedProductError,
    TransformError, OutputWriteError
        Fatal run errors.

    Examples
    --------
    >>> run_nexrad_json("KTLX20130520_201643_V06.gz", {"product": "vel", "elevations_til": 3})
    """
    user_cfg = load_user_config_dict(user_config_path) if user_config_path else None
    cli_dict = {k: v for k, v in (cli_args or {}).items() if v is not None}
    config = resolve_config(ParamConfig(), user_cfg, cli_dict)

    setup_logging(config)
    logger.info("nexrad-json %s: %s", __version__, input_file)

    volume = RadarDataLoader(config).load(input_file)

    latitude, longitude = volume.site_location()
    chain = TransformChain.from_location(latitude, longitude, config)
    logger.info("Radar site: lat=%.4f lon=%.4f", latitude, longitude)

    return ElevationOrchestrator(config, volume, chain).run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nexrad-json",
        description="nexrad-json generates GeoJSON from NEXRAD Level 2 (archive 2) data files.",
    )
    parser.add_argument("file", help="NEXRAD Level-II archive")
    parser.add_argument("-o", "--output", help="base name for output files (default: radar)")
    parser.add_argument("-p", "--product", help="product to produce: ref, vel, sw, rho (default: ref)")
    parser.add_argument("-e", "--elevation", type=int, help="elevation index to convert (default: 1)")
    parser.add_argument("--elevations-til", type=int,
                        help="convert all elevations up to and including this index")
    parser.add_argument("-m", "--minimum", type=float,
                        help="the minimum value to include in the output (default: 0.0)")
    parser.add_argument("-t", "--threads", type=int,
                        help=f"worker threads (default: {os.cpu_count() or 1})")
    parser.add_argument("-l", "--log-level", help="log level: debug, info, warn, error (default: warn)")
    parser.add_argument("--log-file", help="also write log messages to this file")
    parser.add_argument("-c", "--config", help="Python file with a CONFIG dict of overrides")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cli_args = {
        "output": args.output,
        "product": args.product,
        "elevation": args.elevation,
        "elevations_til": args.elevations_til,
        "minimum": args.minimum,
        "threads": args.threads,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }

    try:
        run_nexrad_json(args.file, cli_args, user_config_path=args.config)
    except NexradJsonError as e:
        if not logging.getLogger().handlers:
            logging.basicConfig(format='%(levelname)s - %(message)s')
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
