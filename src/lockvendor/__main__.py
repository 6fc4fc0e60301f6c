"""
Command line entry point: install the packages of a lockfile.

    python -m lockvendor --lockfile composer.lock --install-root vendor
"""

import argparse
import logging
import sys
from typing import List, Optional

from lockvendor.installer import LockInstaller
from lockvendor.lock_models import Lock
from lockvendor.lockvendor_config import LockvendorConfig
from lockvendor.lockvendor_exceptions import LockvendorException
from lockvendor.lockvendor_logger import LockvendorLogger


def build_parser() -> argparse.ArgumentParser:
    defaults = LockvendorConfig()
    parser = argparse.ArgumentParser(
        prog="lockvendor",
        description="Download and extract every package of a lockfile into the install root.",
    )
    parser.add_argument("--lockfile", default=defaults.lockfile, help="Lockfile to read")
    parser.add_argument("--install-root", default=defaults.install_root, help="Directory packages are installed into")
    parser.add_argument("--include-dev", action="store_true", help="Also install packages-dev")
    parser.add_argument("--strict-paths", action="store_true", help="Reject archive entries escaping their package directory")
    parser.add_argument("--max-workers", type=int, default=None, help="Limit concurrent installs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")
    logger = LockvendorLogger(level=level)

    try:
        config = LockvendorConfig.from_dict(
            {
                "lockfile": args.lockfile,
                "install_root": args.install_root,
                "include_dev": args.include_dev,
                "strict_paths": args.strict_paths,
                "max_workers": args.max_workers,
            }
        )
        lock = Lock.from_file(config.lockfile)
    except LockvendorException as e:
        logger.log(str(e), logging.ERROR)
        return 1

    result = LockInstaller(config, logger).install(lock)

    summary = result.summary()
    logger.log(
        f"Install summary: {summary['completed']} completed, "
        f"{summary['failed']} failed, {summary['pending']} pending",
        logging.INFO,
        **summary,
    )

    if not result.ok:
        logger.log(f"Install failed: {result.error}", logging.ERROR)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
