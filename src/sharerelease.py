"""sharerelease - latest desktop release lookup in a cloud-drive share.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
from pathlib import Path

from constants import ExitCodes, Constants
from common.http_client import UpdateSourceError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled, safe_url
from args import parse_args
from cli_config import configure
from registry.pan123 import client as pan123_client
from registry.pan123.download import download_package
from versioning.models import Platform
from versioning.platforms import get_runtime_platform
from versioning.service import UpdateService

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as e:
            logger.error("Log file couldn't be opened: %s", e)
            sys.exit(ExitCodes.FILE_ERROR.value)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def export_json(report, path):
    """Exports the report dict to a JSON file.

    Args:
        report (dict): Serializable report.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(report, file, ensure_ascii=False, indent=2)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def render_text(report, all_platforms=False) -> str:
    """Human-readable summary of a report."""
    lines = []
    if report.get("latest_version") is None:
        lines.append("No resolvable release found.")
    else:
        lines.append(f"Latest version: {report['latest_version']}")
    if report.get("current_version"):
        status = "update available" if report.get("update_available") else "up to date"
        lines.append(f"Current version: {report['current_version']} ({status})")
    platform = report.get("platform")
    lines.append(f"Platform: {platform or 'unknown'}")

    release = report.get("release") or {}
    for name, asset in (release.get("assets") or {}).items():
        if not all_platforms and name != platform:
            continue
        marker = "*" if name == platform else " "
        lines.append(f" {marker} {name:<8} {asset['file']['file_name']} ({asset['file']['size']} bytes)")
    if report.get("download_url"):
        lines.append(f"Download URL: {report['download_url']}")
    if report.get("downloaded_to"):
        lines.append(f"Downloaded to: {report['downloaded_to']}")
    return "\n".join(lines)


def _resolve_platform(choice):
    if choice and choice != "auto":
        return Platform.from_value(choice)
    return get_runtime_platform()


def _output_format(args) -> str:
    if args.OUTPUT_FORMAT:
        return args.OUTPUT_FORMAT
    if args.OUTPUT and args.OUTPUT.lower().endswith(".json"):
        return "json"
    return "text"


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    configure(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    service = UpdateService(
        source=pan123_client.ShareSource.from_constants(),
        timeout=Constants.REQUEST_TIMEOUT,
    )
    platform = _resolve_platform(args.PLATFORM)

    try:
        result = service.check(args.CURRENT_VERSION or "", platform=platform)
    except UpdateSourceError as exc:
        logger.error("Could not fetch the share listing: %s", exc)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    report = result.to_dict()
    exit_code = ExitCodes.SUCCESS

    if result.release is None:
        exit_code = ExitCodes.NO_RELEASE
    elif args.DOWNLOAD_URL or args.DOWNLOAD_DIR:
        if result.asset is None:
            logger.warning(
                "No %s asset for version %s",
                platform.value if platform else "unknown-platform",
                result.latest_version,
            )
            exit_code = ExitCodes.NO_ASSET
        else:
            try:
                url = service.download_url_for(result.asset)
                report["download_url"] = url
                if args.DOWNLOAD_DIR:
                    path = download_package(url, result.asset.file.file_name, Path(args.DOWNLOAD_DIR))
                    report["downloaded_to"] = str(path)
            except UpdateSourceError as exc:
                logger.error("Could not download the package: %s", exc)
                sys.exit(ExitCodes.CONNECTION_ERROR.value)
            except ValueError as exc:
                logger.error("Refusing to download: %s", exc)
                sys.exit(ExitCodes.CONNECTION_ERROR.value)
            except OSError as exc:
                logger.error("Package couldn't be written to disk: %s", exc)
                sys.exit(ExitCodes.FILE_ERROR.value)
            if is_debug_enabled(logger):
                logger.debug(
                    "Download link obtained",
                    extra=extra_context(
                        event="decision", component="cli", action="download_url",
                        outcome="success", target=safe_url(url),
                    )
                )

    fmt = _output_format(args)
    if args.OUTPUT:
        export_json(report, args.OUTPUT)
    if not args.QUIET:
        if fmt == "json":
            print(json.dumps(report, ensure_ascii=False, indent=2))
        else:
            print(render_text(report, all_platforms=args.ALL_PLATFORMS))

    sys.exit(exit_code.value)


if __name__ == "__main__":
    main()
