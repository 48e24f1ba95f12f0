from __future__ import annotations

"""Client configuration.

`ClientConfig` is an immutable settings blob. Values come from keyword
arguments or, through `ClientConfig.from_env`, from RESTPLATE_* variables:

    RESTPLATE_CHARSET            codec used for encoding (default utf-8)
    RESTPLATE_DECODE_SLASH       1/0, keep '/' unescaped in expanded values
    RESTPLATE_COLLECTION_FORMAT  exploded | csv | ssv | tsv | pipes
    RESTPLATE_USER_AGENT         User-Agent sent when the request has none
    RESTPLATE_TIMEOUT            seconds, float
    RESTPLATE_JSON_LOGS          1/0
    RESTPLATE_LOG_LEVEL          DEBUG | INFO | WARNING | ERROR
    RESTPLATE_INSECURE_TLS       1/0, disable certificate checks for https
"""

import codecs
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from restplate.collection_format import CollectionFormat
from restplate.constants import DEFAULT_CHARSET, DEFAULT_TIMEOUT, DEFAULT_UA, ENV_PREFIX

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f'{name} must be a boolean flag, got {raw!r}')


def _parse_level(name: str, raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f'{name} must be a logging level name, got {raw!r}')
    return level


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {raw!r}') from None


def _parse_format(name: str, raw: str) -> CollectionFormat:
    try:
        return CollectionFormat.from_name(raw)
    except ValueError:
        raise ValueError(f'{name} must be one of exploded, csv, ssv, tsv, pipes; got {raw!r}') from None


# (suffix, field, parser) triples read by ClientConfig.from_env.
_ENV_FIELDS = (
    ('CHARSET', 'charset', lambda _n, raw: raw.strip()),
    ('DECODE_SLASH', 'decode_slash', _parse_bool),
    ('COLLECTION_FORMAT', 'collection_format', _parse_format),
    ('USER_AGENT', 'user_agent', lambda _n, raw: raw),
    ('TIMEOUT', 'timeout', _parse_float),
    ('JSON_LOGS', 'json_logs', _parse_bool),
    ('LOG_LEVEL', 'log_level', _parse_level),
    ('INSECURE_TLS', 'insecure_tls', _parse_bool),
)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration used by Client and the CLI."""
    charset: str = DEFAULT_CHARSET
    decode_slash: bool = True
    collection_format: CollectionFormat = CollectionFormat.EXPLODED
    user_agent: str = DEFAULT_UA
    timeout: float = DEFAULT_TIMEOUT
    json_logs: bool = False
    log_level: int = logging.INFO
    insecure_tls: bool = False

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.charset)
        except LookupError:
            raise ValueError(f'unknown charset: {self.charset!r}') from None
        if self.timeout <= 0:
            raise ValueError('timeout must be positive')

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientConfig':
        """Build a config from RESTPLATE_* variables, defaults for anything unset."""
        env = os.environ if environ is None else environ

        kwargs = {}
        for key, field_name, parse in _ENV_FIELDS:
            raw = env.get(ENV_PREFIX + key)
            if raw is not None:
                kwargs[field_name] = parse(ENV_PREFIX + key, raw)
        return cls(**kwargs)
