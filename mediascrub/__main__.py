#!/usr/bin/env python3
"""mediascrub - strip image metadata and store uploads under derived keys.

Usage:
    python -m mediascrub upload photo.jpg scan.png --identity abc123 --user alice
    python -m mediascrub upload photo.jpg --identity abc123 --dry-run
    python -m mediascrub strip photo.jpg -o photo.clean.jpg
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from ._version import __version__
from .config import ConfigManager
from .config.manager import ConfigError
from .exceptions import MediaScrubError, UploadRejectedError
from .identity import StaticIdentityProvider
from .processing import UploadFile
from .sanitize import sanitize
from .storage import LocalObjectStore
from .upload import UploadService


def setup_logging(verbose: bool = False, config: Optional[ConfigManager] = None) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, enable DEBUG level logging
        config: Loaded configuration (adds a file handler if logging.file is set)
    """
    if verbose:
        level = logging.DEBUG
    elif config is not None:
        level = logging.getLevelName(str(config.get("logging.level", "INFO")).upper())
        if not isinstance(level, int):
            level = logging.INFO
    else:
        level = logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if config is None:
        return

    log_file = config.get("logging.file")
    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
        except OSError as e:
            root_logger.warning(f"Could not open log file {log_path}: {e}")
            return

        file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
        file_handler.setFormatter(logging.Formatter(
            config.get(
                "logging.format",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        ))
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="mediascrub",
        description="mediascrub - strip image metadata and store uploads under derived keys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload files for an identity into the configured store
  python -m mediascrub upload photo.jpg scan.png --identity abc123 --user alice

  # Show the keys that would be used, without storing anything
  python -m mediascrub upload photo.jpg --identity abc123 --dry-run

  # Strip a single file locally
  python -m mediascrub strip photo.jpg -o photo.clean.jpg
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mediascrub {__version__}"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to config file (default: ~/.mediascrub/config.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    upload_parser = subparsers.add_parser("upload", help="Strip and store files")
    upload_parser.add_argument("files", nargs="+", metavar="FILE", help="Files to upload")
    upload_parser.add_argument(
        "--identity",
        metavar="ID",
        help="Identity id for the storage prefix (default: identity.identity_id)"
    )
    upload_parser.add_argument(
        "--user",
        metavar="NAME",
        help="User name stored as object metadata (default: identity.username)"
    )
    upload_parser.add_argument(
        "--store-dir",
        metavar="DIR",
        help="Write to a local store at DIR instead of the configured backend"
    )
    upload_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Process files and print keys without storing"
    )

    strip_parser = subparsers.add_parser("strip", help="Strip metadata from one file")
    strip_parser.add_argument("input", metavar="INPUT", help="Image to strip")
    strip_parser.add_argument(
        "-o", "--output",
        metavar="OUTPUT",
        help="Output path (default: <name>.stripped<ext> next to the input)"
    )

    return parser.parse_args(argv)


def run_upload(args: argparse.Namespace, config: ConfigManager) -> int:
    """Run the ``upload`` command."""
    if args.identity:
        provider = StaticIdentityProvider(args.identity, args.user)
    else:
        if args.user:
            config.set("identity.username", args.user)
        provider = StaticIdentityProvider.from_config(config)
    identity = provider.get_identity()

    store = LocalObjectStore(args.store_dir) if args.store_dir else None
    service = UploadService(config, store=store, dry_run=args.dry_run)

    files = [UploadFile.from_path(path) for path in args.files]
    batch = service.upload(files, identity)

    print()
    for result in batch.results:
        if result.success:
            note = "stripped" if result.stripped else "unchanged"
            print(f"✓ {result.filename} -> {result.key} "
                  f"({result.original_size} -> {result.stored_size} bytes, {note})")
        else:
            print(f"✗ {result.filename}: {result.error}")

    print()
    print(f"Uploaded: {batch.uploaded}  Rejected: {batch.rejected}  Errors: {batch.errors}")
    if args.dry_run:
        print("Dry run complete! Nothing was stored.")

    return 1 if batch.errors or batch.rejected else 0


def run_strip(args: argparse.Namespace, config: ConfigManager) -> int:
    """Run the ``strip`` command."""
    input_path = Path(args.input).expanduser()
    if args.output:
        output_path = Path(args.output).expanduser()
    else:
        output_path = input_path.with_name(f"{input_path.stem}.stripped{input_path.suffix}")

    data = input_path.read_bytes()
    outcome = sanitize(data, max_bytes=config.get("sanitize.max_bytes"))
    cleaned = outcome.resolve(data)
    output_path.write_bytes(cleaned)

    if outcome.changed:
        print(f"✓ {input_path.name}: removed {outcome.removed} metadata block(s), "
              f"{len(data)} -> {len(cleaned)} bytes -> {output_path}")
    else:
        print(f"○ {input_path.name}: unchanged ({outcome.reason}) -> {output_path}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the mediascrub CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments(argv)
    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager.load(config_path=args.config)
        setup_logging(args.verbose, config)

        if args.command == "upload":
            return run_upload(args, config)
        return run_strip(args, config)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\n✗ Configuration Error: {e}")
        return 2

    except UploadRejectedError as e:
        logger.error(f"Upload rejected: {e}")
        print(f"\n✗ Upload rejected: {e}")
        return 1

    except MediaScrubError as e:
        logger.error(f"mediascrub error: {e}", exc_info=args.verbose)
        print(f"\n✗ Error: {e}")
        return 3

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    except OSError as e:
        logger.error(f"File error: {e}")
        print(f"\n✗ File Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
