"""Master option validation and loading.

Options are a flat mapping validated with a voluptuous schema. Unknown
keys are dropped, missing keys fall back to the defaults in ``const``.
The same keys can be kept in a YAML file, either at the top level or
under a ``modbus:`` section.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import voluptuous as vol
import yaml

from .const import (
    BAUDRATE,
    BYTESIZE,
    CONF_BAUDRATE,
    CONF_BYTESIZE,
    CONF_DEFAULT_RETRY_COUNT,
    CONF_INTER_FRAME_DELAY,
    CONF_PARITY,
    CONF_PORT,
    CONF_QUEUE_TIMEOUT,
    CONF_RESPONSE_TIMEOUT,
    CONF_STOPBITS,
    DEFAULT_RETRY_COUNT,
    INTER_FRAME_DELAY,
    PARITY,
    QUEUE_TIMEOUT,
    RESPONSE_TIMEOUT,
    STOPBITS,
)

_LOGGER = logging.getLogger(__name__)

CONFIG_SECTION = "modbus"

_positive_seconds = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_RESPONSE_TIMEOUT, default=RESPONSE_TIMEOUT): _positive_seconds,
        vol.Optional(CONF_QUEUE_TIMEOUT, default=QUEUE_TIMEOUT): _positive_seconds,
        vol.Optional(CONF_INTER_FRAME_DELAY, default=INTER_FRAME_DELAY): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional(CONF_DEFAULT_RETRY_COUNT, default=DEFAULT_RETRY_COUNT): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_PORT, default=None): vol.Any(None, str),
        vol.Optional(CONF_BAUDRATE, default=BAUDRATE): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_BYTESIZE, default=BYTESIZE): vol.In([5, 6, 7, 8]),
        vol.Optional(CONF_PARITY, default=PARITY): vol.All(
            str, vol.Upper, vol.In(["N", "E", "O", "M", "S"])
        ),
        vol.Optional(CONF_STOPBITS, default=STOPBITS): vol.In([1, 1.5, 2]),
    },
    extra=vol.REMOVE_EXTRA,
)


def validate_options(options: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Validate master options and fill in defaults.

    Args:
        options: User options; None means all defaults

    Returns:
        Validated options dict containing every recognized key

    Raises:
        ValueError: If a recognized option has an invalid value

    Example:
        >>> validate_options({"response_timeout": 1, "colour": "blue"})["response_timeout"]
        1.0
    """
    options = dict(options or {})

    known = {str(key) for key in OPTIONS_SCHEMA.schema}
    unknown = sorted(str(key) for key in options if key not in known)
    if unknown:
        _LOGGER.debug("Ignoring unknown master options: %s", ", ".join(unknown))

    try:
        return OPTIONS_SCHEMA(options)
    except vol.Invalid as err:
        raise ValueError(f"Invalid master options: {err}") from err


def load_options_file(path: Union[str, Path]) -> dict[str, Any]:
    """Load and validate master options from a YAML file.

    Args:
        path: YAML file path

    Returns:
        Validated options dict

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML or an option value is invalid
    """
    config_file = Path(path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ValueError("Configuration file must contain a mapping")

    section = config.get(CONFIG_SECTION, config)
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' section must be a mapping")

    options = validate_options(section)

    _LOGGER.info(
        "Loaded master options from %s: port=%s, response_timeout=%.3fs, "
        "queue_timeout=%.3fs, default_retry_count=%d",
        config_file,
        options[CONF_PORT],
        options[CONF_RESPONSE_TIMEOUT],
        options[CONF_QUEUE_TIMEOUT],
        options[CONF_DEFAULT_RETRY_COUNT],
    )

    return options


async def async_load_options_file(path: Union[str, Path]) -> dict[str, Any]:
    """Load options without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, load_options_file, path)
