"""Configuration loading and runtime overrides.

Precedence, lowest to highest: built-in ``Constants`` defaults, YAML/JSON
config file, environment variables, CLI flags. Applying overrides never
raises; bad values are logged and skipped so a typo cannot break an update
check.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


def candidate_config_paths(explicit: Optional[str] = None) -> List[Path]:
    """Return config file locations in lookup order."""
    if explicit:
        return [Path(explicit).expanduser()]
    env_path = os.environ.get(Constants.ENV_CONFIG, "").strip()
    if env_path:
        return [Path(env_path).expanduser()]
    paths = [Path.cwd() / name for name in Constants.CONFIG_FILE_NAMES]
    user_dir = Path(Constants.USER_CONFIG_DIR).expanduser()
    paths.extend(user_dir / name for name in Constants.CONFIG_FILE_NAMES)
    return paths


def _read_config_file(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        if path.suffix.lower() == ".json":
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def load_config(explicit: Optional[str] = None) -> Dict[str, Any]:
    """Load the first existing config file; an explicit path must exist."""
    for path in candidate_config_paths(explicit):
        if not path.is_file():
            if explicit:
                logger.warning("Config file not found: %s", path)
            continue
        try:
            cfg = _read_config_file(path)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", path, exc)
            return {}
        logger.debug("Loaded config from %s", path)
        return cfg
    return {}


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name)
    return value if isinstance(value, dict) else {}


def _set_timeout(value: Any, origin: str) -> None:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid timeout %r from %s", value, origin)
        return
    if timeout <= 0:
        logger.warning("Ignoring non-positive timeout %r from %s", value, origin)
        return
    Constants.REQUEST_TIMEOUT = timeout  # type: ignore[assignment]


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a loaded config mapping onto ``Constants``."""
    share = _section(cfg, "share")
    if share.get("key"):
        Constants.SHARE_KEY = str(share["key"])
    if share.get("password") is not None:
        Constants.SHARE_PWD = str(share["password"])
    if share.get("api_base_url"):
        Constants.SHARE_API_BASE_URL = str(share["api_base_url"])
    if share.get("page_url"):
        Constants.SHARE_PAGE_URL = str(share["page_url"])

    http = _section(cfg, "http")
    if http.get("timeout") is not None:
        _set_timeout(http["timeout"], "config")

    download = _section(cfg, "download")
    hosts = download.get("trusted_hosts")
    if isinstance(hosts, list) and all(isinstance(h, str) for h in hosts):
        Constants.TRUSTED_DOWNLOAD_HOST_SUFFIXES = list(hosts)
    elif hosts is not None:
        logger.warning("Ignoring download.trusted_hosts: expected a list of strings")
    if download.get("directory"):
        Constants.DOWNLOAD_DIR = str(download["directory"])


def apply_env_overrides(environ: Optional[Dict[str, str]] = None) -> None:
    env = os.environ if environ is None else environ
    if env.get(Constants.ENV_SHARE_KEY):
        Constants.SHARE_KEY = env[Constants.ENV_SHARE_KEY]
    if env.get(Constants.ENV_SHARE_PWD) is not None:
        Constants.SHARE_PWD = env[Constants.ENV_SHARE_PWD]
    if env.get(Constants.ENV_API_BASE_URL):
        Constants.SHARE_API_BASE_URL = env[Constants.ENV_API_BASE_URL]
    if env.get(Constants.ENV_TIMEOUT):
        _set_timeout(env[Constants.ENV_TIMEOUT], Constants.ENV_TIMEOUT)


def apply_cli_overrides(args) -> None:
    """Apply CLI flags; these win over every other source."""
    if getattr(args, "SHARE_KEY", None):
        Constants.SHARE_KEY = args.SHARE_KEY
    if getattr(args, "SHARE_PWD", None) is not None:
        Constants.SHARE_PWD = args.SHARE_PWD
    if getattr(args, "TIMEOUT", None) is not None:
        _set_timeout(args.TIMEOUT, "--timeout")


def configure(args) -> None:
    """Load and apply all configuration layers for a CLI run."""
    apply_config(load_config(getattr(args, "CONFIG", None)))
    apply_env_overrides()
    apply_cli_overrides(args)
