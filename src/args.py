"""Argument parsing functionality for sharerelease."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="sharerelease",
        description=(
            "sharerelease - find the latest desktop release in a cloud-drive share"
        ),
        add_help=True,
    )

    parser.add_argument("-c", "--current-version",
                        dest="CURRENT_VERSION",
                        help="Version currently installed; reports whether an update is available",
                        action="store", type=str)
    parser.add_argument("-P", "--platform",
                        dest="PLATFORM",
                        help="Target platform (default: auto-detect the running host)",
                        action="store", type=str.lower,
                        choices=Constants.PLATFORM_CHOICES,
                        default="auto")
    parser.add_argument("-a", "--all-platforms",
                        dest="ALL_PLATFORMS",
                        help="List the selected asset of every platform, not only the target one",
                        action="store_true")
    parser.add_argument("--download-url",
                        dest="DOWNLOAD_URL",
                        help="Also resolve a direct download link for the selected asset",
                        action="store_true")
    parser.add_argument("--download",
                        dest="DOWNLOAD_DIR",
                        help="Download the selected asset into this directory",
                        action="store", type=str)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json). Inferred as json when --output ends with .json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)

    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"Request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store", type=float)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML (or .json) config file",
                        action="store", type=str)
    parser.add_argument("--share-key",
                        dest="SHARE_KEY",
                        help="Override the share key",
                        action="store", type=str)
    parser.add_argument("--share-pwd",
                        dest="SHARE_PWD",
                        help="Override the share password",
                        action="store", type=str)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
