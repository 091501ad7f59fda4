"""Configuration for the recovery service.

Values come from three sources, highest precedence first: command-line
arguments, environment variables and hard defaults. ``resolve`` merges
them field by field, so a lower source can fill a field a higher one
leaves unset.
"""

import argparse
import os
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .constants import DEFAULT_TIMEOUT_MS

__all__ = [
    "Config",
    "ConfigField",
    "CONFIG_FIELDS",
    "DEFAULT_CONFIG",
    "arg_config",
    "env_config",
    "resolve",
    "load_config",
]

PartialConfig = Dict[str, Any]


@dataclass(frozen=True)
class Config:
    """Resolved service configuration."""

    port: int
    bind: str
    env: str
    debug_namespace: List[str]
    disable_ssl: bool
    disable_proxy: bool
    disable_env_check: bool
    timeout: int  # milliseconds

    key_path: Optional[str] = None
    crt_path: Optional[str] = None
    log_file: Optional[str] = None
    custom_root_uri: Optional[str] = None
    custom_bitcoin_network: Optional[str] = None


def _cast_int(value: str) -> Optional[int]:
    # Unparsable or zero means "not set"
    try:
        return int(value) or None
    except ValueError:
        return None


def _cast_bool(value: str) -> bool:
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def _cast_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _cast_str(value: str) -> str:
    return value


@dataclass(frozen=True)
class ConfigField:
    """Where a config field is read from and how it is cast."""

    name: str
    env_var: str
    arg_name: str
    cast: Callable[[str], Any] = _cast_str


CONFIG_FIELDS: List[ConfigField] = [
    ConfigField("port", "BITGO_PORT", "port", _cast_int),
    ConfigField("bind", "BITGO_BIND", "bind"),
    ConfigField("env", "BITGO_ENV", "env"),
    ConfigField("debug_namespace", "BITGO_DEBUG_NAMESPACE", "debugnamespace", _cast_list),
    ConfigField("key_path", "BITGO_KEYPATH", "keypath"),
    ConfigField("crt_path", "BITGO_CRTPATH", "crtpath"),
    ConfigField("log_file", "BITGO_LOGFILE", "logfile"),
    ConfigField("disable_ssl", "DISABLE_SSL", "disablessl", _cast_bool),
    ConfigField("disable_proxy", "DISABLE_PROXY", "disableproxy", _cast_bool),
    ConfigField("disable_env_check", "DISABLE_ENV_CHECK", "disableenvcheck", _cast_bool),
    ConfigField("timeout", "BITGO_TIMEOUT", "timeout", _cast_int),
    ConfigField("custom_root_uri", "BITGO_CUSTOM_ROOT_URI", "customrooturi"),
    ConfigField("custom_bitcoin_network", "BITGO_CUSTOM_BITCOIN_NETWORK", "custombitcoinnetwork"),
]

DEFAULT_CONFIG: PartialConfig = {
    "port": 3080,
    "bind": "localhost",
    "env": "test",
    "debug_namespace": [],
    "log_file": "",
    "disable_ssl": False,
    "disable_proxy": False,
    "disable_env_check": False,
    "timeout": DEFAULT_TIMEOUT_MS,
}


def arg_config(args: Union[argparse.Namespace, Mapping[str, Any], None]) -> PartialConfig:
    """
    Build a partial config from parsed command-line arguments.

    Args:
        args: Namespace or mapping keyed by argument name (``debugnamespace``,
            ``keypath`` ...). String values of typed fields are cast.

    Returns:
        Partial config; absent arguments map to None
    """
    if args is None:
        return {}
    if isinstance(args, argparse.Namespace):
        args = vars(args)

    partial: PartialConfig = {}
    for f in CONFIG_FIELDS:
        value = args.get(f.arg_name)
        # Untyped string values get the same cast as the environment
        if isinstance(value, str) and f.cast is not _cast_str:
            value = f.cast(value)
        partial[f.name] = value
    return partial


def env_config(environ: Optional[Mapping[str, str]] = None) -> PartialConfig:
    """
    Build a partial config from environment variables.

    Args:
        environ: Environment mapping (default: ``os.environ``)

    Returns:
        Partial config; unset variables map to None
    """
    if environ is None:
        environ = os.environ

    partial: PartialConfig = {}
    for f in CONFIG_FIELDS:
        raw = environ.get(f.env_var)
        partial[f.name] = None if raw is None else f.cast(raw)
    return partial


def resolve(*sources: Optional[Mapping[str, Any]]) -> Config:
    """
    Merge partial configs, highest precedence first.

    Each field takes the first non-None value among the sources. Pure:
    no I/O and no mutation of the inputs.

    Args:
        *sources: Partial configs in precedence order

    Returns:
        Merged config. Complete whenever the last source is
        ``DEFAULT_CONFIG``; fields no source supplies stay None.
    """
    merged: PartialConfig = {}
    for f in fields(Config):
        merged[f.name] = next(
            (s[f.name] for s in sources if s and s.get(f.name) is not None),
            None,
        )

    # Lists are copied so the result never aliases a source
    if merged["debug_namespace"] is not None:
        merged["debug_namespace"] = list(merged["debug_namespace"])
    return Config(**merged)


def load_config(
    args: Union[argparse.Namespace, Mapping[str, Any], None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Resolve arguments, then environment, then defaults."""
    return resolve(arg_config(args), env_config(environ), DEFAULT_CONFIG)
