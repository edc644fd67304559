from __future__ import annotations

import argparse
import logging

from expire_files import NAME
from expire_files import __version__
from expire_files.expirer import Expirer
from expire_files.expirerconfig import DEFAULT_CONFIG_PATH
from expire_files.expirerconfig import DEFAULT_SESSION_DIR
from expire_files.expirerconfig import ExpirerConfig
from expire_files.expirerconfig import read_session_expiry

# Output is routed to syslog via cron/logger, which adds its own timestamps
LOG_FORMAT = "%(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s %(pathname)s:%(lineno)d %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=NAME,
        description=f"{NAME} v{__version__}: remove expired php session files.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-c",
        "--c",
        dest="config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="php config that contains the session.gc_maxlifetime variable. "
        f"Default: {DEFAULT_CONFIG_PATH}",
    )
    parser.add_argument(
        "-d",
        "--d",
        dest="directory",
        type=str,
        default=DEFAULT_SESSION_DIR,
        help=f"php file sessions directory. Default: {DEFAULT_SESSION_DIR}",
    )
    parser.add_argument(
        "-debug",
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-dryrun",
        "--dryrun",
        help="Count and log expired files without removing them.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "-logfile",
        "--logfile",
        type=str,
        default=None,
        help="Also append log lines to the given file.",
    )
    parser.add_argument(
        "-version",
        "--version",
        action="version",
        version=f"{NAME} v{__version__}",
    )
    return parser.parse_args(args)


def add_file_handler_to_logging(log_filepath: str, log_format: str) -> None:
    """Add a file handler to the root logger writing to the given path."""
    file_handler = logging.FileHandler(log_filepath)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    logging.getLogger().addHandler(file_handler)


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)
    config = ExpirerConfig.from_args(args)
    log_format = DEBUG_LOG_FORMAT if config.debug else LOG_FORMAT

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format=log_format,
        datefmt=DATE_FORMAT,
    )

    if args.logfile:
        add_file_handler_to_logging(args.logfile, log_format)

    logger.debug("Debugging enabled")

    try:
        expiry = read_session_expiry(config.config_path)
        expirer = Expirer(config, expiry)
        expirer.run()

    except (OSError, ValueError) as error:
        logger.error("%s", error)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
