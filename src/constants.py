"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NO_RELEASE = 3
    NO_ASSET = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    Values may be replaced at runtime by ``cli_config`` overrides.
    """

    # Public share hosting the release artifacts
    SHARE_SITE_URL = "https://www.123865.com"
    SHARE_API_BASE_URL = "https://www.123865.com/b/api"
    SHARE_KEY = "ztf6jv-HUc0A"
    SHARE_PWD = "3FyF"
    SHARE_PAGE_URL = ""  # derived from SHARE_SITE_URL/SHARE_KEY when empty
    SHARE_LIST_LIMIT = 100

    REQUEST_TIMEOUT = 15  # Timeout in seconds for listing/download-url requests
    DOWNLOAD_TIMEOUT = 180
    DOWNLOAD_CHUNK_SIZE = 1024 * 1024
    DOWNLOAD_DIR = ""  # empty means <tempdir>/sharerelease-updates
    DOWNLOAD_CACHE_DIRNAME = "sharerelease-updates"
    DOWNLOAD_FALLBACK_NAME = "sharerelease-update.bin"
    DOWNLOAD_NAME_MAX_CHARS = 120
    TRUSTED_DOWNLOAD_HOST_SUFFIXES = [".cjjd19.com", ".123pan.com", ".123865.com"]

    USER_AGENT = "sharerelease/0.3"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    PLATFORM_CHOICES = ["auto", "windows", "macos", "linux"]
    OUTPUT_FORMATS = ["text", "json"]

    # Environment variables
    ENV_LOG_LEVEL = "SHARERELEASE_LOG_LEVEL"
    ENV_CONFIG = "SHARERELEASE_CONFIG"
    ENV_SHARE_KEY = "SHARERELEASE_SHARE_KEY"
    ENV_SHARE_PWD = "SHARERELEASE_SHARE_PWD"
    ENV_API_BASE_URL = "SHARERELEASE_API_BASE_URL"
    ENV_TIMEOUT = "SHARERELEASE_TIMEOUT"

    CONFIG_FILE_NAMES = ["sharerelease.yml", "sharerelease.yaml"]
    USER_CONFIG_DIR = "~/.config/sharerelease"
