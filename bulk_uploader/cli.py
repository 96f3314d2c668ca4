"""Command line interface for bulk_uploader package."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .cli_progress import RunProgressDisplay, print_error, render_configuration_summary
from .config import DEFAULT_ENDPOINT, DEFAULT_REGION, UploadConfig
from .errors import BulkUploaderError
from .orchestrator import UploadOrchestrator
from .services.storage import S3StorageService, create_s3_client

EXIT_OK = 0
EXIT_PARTIAL_FAILURE = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130


class CLIError(BulkUploaderError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default level is WARNING so traversal errors always reach stderr;
    --silent disables logging entirely. Returns a string describing
    effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    if silent:
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        requested = log_level or os.getenv("LOG_LEVEL") or "WARNING"
        level = getattr(logging, requested.upper(), logging.WARNING)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _build_config(args: argparse.Namespace) -> UploadConfig:
    config = UploadConfig.from_sources(
        {
            "access_key_id": args.access_key_id,
            "secret_access_key": args.secret_access_key,
            "region": args.region,
            "endpoint": args.endpoint,
            "bucket": args.bucket,
            "folder": args.folder,
            "prefix": args.prefix,
            "workers": args.workers,
        }
    )
    return config.validate()


async def _run_upload(config: UploadConfig) -> int:
    storage = S3StorageService(create_s3_client(config))
    orchestrator = UploadOrchestrator(storage, config)
    RunProgressDisplay().attach(orchestrator)

    result = await orchestrator.run()
    return result.exit_code


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bulk-up",
        description="Upload a folder tree to an S3-compatible bucket with bounded concurrency.",
    )
    parser.add_argument(
        "--access-key-id",
        "--accessKeyId",
        dest="access_key_id",
        default=None,
        help="Access key ID (default from AWS_ACCESS_KEY_ID)",
    )
    parser.add_argument(
        "--secret-access-key",
        "--secretAccessKey",
        dest="secret_access_key",
        default=None,
        help="Secret access key (default from AWS_SECRET_ACCESS_KEY)",
    )
    parser.add_argument(
        "--region",
        default=None,
        help=f"Region (default from AWS_REGION or {DEFAULT_REGION})",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help=f"S3 API endpoint (default from AWS_ENDPOINT_URL_S3 or {DEFAULT_ENDPOINT})",
    )
    parser.add_argument("-b", "--bucket", default=None, help="Destination bucket name")
    parser.add_argument("-f", "--folder", default=None, help="Path to the folder to upload")
    parser.add_argument(
        "-p",
        "--prefix",
        default=None,
        help="Optional key prefix in the bucket (subfolder)",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent uploads (default 10)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Disable logging output")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"bulk-up {__version__}",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print_error(str(exc))
            return EXIT_FATAL

    _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    try:
        config = _build_config(args)
    except BulkUploaderError as exc:
        print_error(str(exc))
        return EXIT_FATAL

    summary = config.summary()
    summary["Env File"] = str(used_env_file) if used_env_file else "-"
    render_configuration_summary(summary)

    try:
        return asyncio.run(_run_upload(config))
    except BulkUploaderError as exc:
        print_error(str(exc))
        return EXIT_FATAL
    except KeyboardInterrupt:
        print_error("Cancelled.")
        return EXIT_INTERRUPTED


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
