"""Runtime settings for docscope.

Every setting is resolved with the same precedence:

    1. Explicit argument (command line option)
    2. Environment variable
    3. Default (current working directory, all packages, INFO, structured)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from docscope.exceptions import ConfigurationError
from docscope.logging import LOG_FORMATS, LOG_LEVELS

ENV_ROOT_DIR = "DOCSCOPE_ROOT_DIR"
ENV_PKG_PATTERN = "DOCSCOPE_PKG_PATTERN"
ENV_LOG_LEVEL = "DOCSCOPE_LOG_LEVEL"
ENV_LOG_FORMAT = "DOCSCOPE_LOG_FORMAT"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings used to build an engine and its transport.

    Attributes
    ----------
    root_dir : Path
        Absolute root directory to load packages from
    selector : str | None
        Import path pattern restricting the loaded packages, None for all
    log_level : str
        Loguru level name
    log_format : str
        One of the formats accepted by ``configure_logging``
    """

    root_dir: Path
    selector: str | None = None
    log_level: str = "INFO"
    log_format: str = "structured"


def resolve_root_dir(cli_root_dir: str | None = None) -> Path:
    """Return the root directory, made absolute.

    Priority order: argument, ``DOCSCOPE_ROOT_DIR``, current directory.
    """
    if cli_root_dir:
        return Path(cli_root_dir).expanduser().resolve()
    if env_root_dir := os.getenv(ENV_ROOT_DIR):
        return Path(env_root_dir).expanduser().resolve()
    return Path.cwd()


def resolve_selector(cli_selector: str | None = None) -> str | None:
    """Return the package selector pattern.

    Priority order: argument, ``DOCSCOPE_PKG_PATTERN``, None (all packages).
    """
    if cli_selector:
        return cli_selector
    return os.getenv(ENV_PKG_PATTERN) or None


def load_settings(
    root_dir: str | None = None,
    selector: str | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
) -> Settings:
    """Build ``Settings`` from explicit values with environment fallbacks.

    Parameters
    ----------
    root_dir : str | None
        Explicit root directory
    selector : str | None
        Explicit package selector pattern
    log_level : str | None
        Explicit log level name
    log_format : str | None
        Explicit log format name

    Returns
    -------
    Settings
        Fully resolved settings

    Raises
    ------
    ConfigurationError
        If the log level or log format is not recognized
    """
    level = (log_level or os.getenv(ENV_LOG_LEVEL) or "INFO").upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError("log_level", f"unknown level {level!r}")

    fmt = (log_format or os.getenv(ENV_LOG_FORMAT) or "structured").lower()
    if fmt not in LOG_FORMATS:
        raise ConfigurationError("log_format", f"unknown format {fmt!r}")

    return Settings(
        root_dir=resolve_root_dir(root_dir),
        selector=resolve_selector(selector),
        log_level=level,
        log_format=fmt,
    )
