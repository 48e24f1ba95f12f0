from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Charset used when callers do not provide one.
DEFAULT_CHARSET: str = 'utf-8'

DEFAULT_UA: str = 'restplate/1.0'

DEFAULT_TIMEOUT: float = 30.0

# Environment switches read by ClientConfig.from_env and the logging helpers.
ENV_PREFIX: str = 'RESTPLATE_'
ENV_TRACE_IO: str = 'RESTPLATE_TRACE_IO'
ENV_VERSION: str = 'RESTPLATE_VERSION'
