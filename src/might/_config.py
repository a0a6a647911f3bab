"""Library configuration: MightConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from might._logging import configure_logging

__all__ = [
    'MightConfig',
    'get_config',
    'init',
]


@dataclass(frozen=True)
class MightConfig:
    """Configuration for might.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Emit JSON logs if True, console logs otherwise.
        catch: Exception types the adapters turn into domain failures when
            no explicit `exceptions=` is given.
    """

    log_level: str | None = None
    json_logs: bool = True
    catch: tuple[type[BaseException], ...] = (Exception,)


# Global configuration (set by init())
_config: MightConfig | None = None

_DEFAULT_CONFIG = MightConfig()


def _detect_log_level() -> str | None:
    """Read the log level from MIGHT_LOG_LEVEL, if set."""
    level = os.environ.get('MIGHT_LOG_LEVEL', '').strip()
    return level.upper() or None


def _detect_json_logs() -> bool:
    """Read the log format from MIGHT_LOG_FORMAT ("json" or "console")."""
    log_format = os.environ.get('MIGHT_LOG_FORMAT', '').lower()
    if log_format == 'console':
        return False
    if log_format and log_format != 'json':
        logging.warning("Unknown MIGHT_LOG_FORMAT value '%s', defaulting to json", log_format)
    return True


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    catch: tuple[type[BaseException], ...] | None = None,
) -> MightConfig:
    """Initialize might with the given configuration.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). Read from
            MIGHT_LOG_LEVEL if None. No level at all = logging untouched.
        json_logs: JSON vs console output. Read from MIGHT_LOG_FORMAT if None.
        catch: Exception types caught by mightify/mightify_async by default.

    Returns:
        The MightConfig that was set.

    Example:
        ```python
        import might

        might.init(log_level='DEBUG', catch=(ValueError, KeyError))
        ```
    """
    global _config  # noqa: PLW0603

    resolved_level = log_level if log_level is not None else _detect_log_level()
    resolved_json = json_logs if json_logs is not None else _detect_json_logs()

    if catch is not None and not catch:
        msg = 'catch must name at least one exception type'
        raise ValueError(msg)

    _config = MightConfig(
        log_level=resolved_level,
        json_logs=resolved_json,
        catch=catch if catch is not None else _DEFAULT_CONFIG.catch,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=resolved_json)

    return _config


def get_config() -> MightConfig:
    """Get the current configuration.

    Raises:
        RuntimeError: If init() has not been called.
    """
    if _config is None:
        msg = 'might not initialized. Call might.init() first.'
        raise RuntimeError(msg)
    return _config


def current_config() -> MightConfig:
    """Get the current configuration, or the defaults before init()."""
    return _config if _config is not None else _DEFAULT_CONFIG


def reset() -> None:
    """Forget the configuration set by init()."""
    global _config  # noqa: PLW0603
    _config = None
