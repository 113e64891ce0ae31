"""
Runtime Configuration

Reads storefront settings from environment variables.

Includes:
- Database location
- Delete cascade policy for entities that own children
- Logging destination and level
- Pagination bounds for collection endpoints
"""
import os
import logging
from pathlib import Path

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes')
_FALSE_VALUES = ('false', '0', 'no', '')


def _get_bool(key: str, default: bool) -> bool:
    """
    Read a boolean environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset

    Returns:
        Parsed boolean

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    raw = os.environ.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got '{raw}'", missing_keys=[key])


def _get_int(key: str, default: int) -> int:
    """
    Read a positive integer environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset

    Returns:
        Parsed integer

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    raw = os.environ.get(key)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'", missing_keys=[key])
    if value < 1:
        raise ConfigurationError(f"{key} must be positive, got {value}", missing_keys=[key])
    return value


def get_database_url() -> str:
    """SQLAlchemy URL of the backing store."""
    return os.environ.get('STOREFRONT_DATABASE_URL', 'sqlite:///./storefront.db')


def is_cascade_delete_enabled() -> bool:
    """
    Check whether deleting an entity also deletes the entities that depend on it.

    Off by default: a delete is refused while dependants exist.
    """
    enabled = _get_bool('STOREFRONT_CASCADE_DELETE', False)
    if enabled:
        logger.info("Cascading delete ENABLED")
    return enabled


def get_log_dir() -> Path:
    """Directory for rotating log files."""
    return Path(os.environ.get('STOREFRONT_LOG_DIR', 'logs'))


def get_log_level() -> str:
    """Root logger level name."""
    level = os.environ.get('STOREFRONT_LOG_LEVEL', 'INFO').upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level '{level}'", missing_keys=['STOREFRONT_LOG_LEVEL'])
    return level


def get_default_page_size() -> int:
    return _get_int('STOREFRONT_DEFAULT_PAGE_SIZE', 20)


def get_max_page_size() -> int:
    return _get_int('STOREFRONT_MAX_PAGE_SIZE', 1000)


def get_app_name() -> str:
    """Application name used as the prefix of entity alert headers."""
    return os.environ.get('STOREFRONT_APP_NAME', 'storefrontApp')


def get_server_host() -> str:
    return os.environ.get('STOREFRONT_HOST', '127.0.0.1')


def get_server_port() -> int:
    return _get_int('STOREFRONT_PORT', 8000)
