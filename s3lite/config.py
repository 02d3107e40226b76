# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Client configuration loaded from YAML.

The default location follows the XDG Base Directory Specification:

    ``$XDG_CONFIG_HOME/s3lite/s3lite.yaml``
    (typically ``~/.config/s3lite/s3lite.yaml``)

``!env VAR_NAME`` tags resolve values from environment variables, so
credentials do not have to be written into the file::

    credentials:
      access_key_id: !env AWS_ACCESS_KEY_ID
      secret_access_key: !env AWS_SECRET_ACCESS_KEY
    bucket:
      name: my-bucket
      region: eu-west-1
    debug: false
    timeout: 30

Before the file is read, ``.env`` files are loaded from the XDG config
directory and then the current directory.  Variables already present in
the environment are never overwritten.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from platformdirs import user_config_path

from s3lite.access import Access, LockedAccess
from s3lite.client import S3Client
from s3lite.logging import SecretFilter
from s3lite.transport import DEFAULT_TIMEOUT_SECONDS
from s3lite.types import Bucket, Region


logger = logging.getLogger(__name__)

#: Application name for XDG path resolution.
_APP_NAME = "s3lite"

_BOOL_TRUTHY = frozenset({"true", "1", "yes", "on"})
_BOOL_FALSY = frozenset({"false", "0", "no", "off"})

_dotenv_loaded = False


class ConfigError(Exception):
    """Configuration file is missing or invalid."""


def get_config_path() -> Path:
    """Return the default config file path (XDG)."""
    return user_config_path(_APP_NAME) / "s3lite.yaml"


def get_dotenv_path() -> Path:
    """Return the ``.env`` path inside the XDG config directory."""
    return user_config_path(_APP_NAME) / ".env"


def load_dotenv_once() -> None:
    """Load ``.env`` files into the environment, once per process."""
    global _dotenv_loaded
    if _dotenv_loaded:
        return

    for env_path in (get_dotenv_path(), Path.cwd() / ".env"):
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug("Loaded .env from %s", env_path)

    _dotenv_loaded = True


def reset_dotenv_state() -> None:
    """Forget that ``.env`` files were loaded. For testing only."""
    global _dotenv_loaded
    _dotenv_loaded = False


# ---------------------------------------------------------------------------
# YAML loading and value resolution
# ---------------------------------------------------------------------------


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


def _coerce_bool(value: object) -> bool:
    """Coerce a value to bool, handling string representations."""
    if isinstance(value, bool):
        return value
    s = str(value).lower().strip()
    if s in _BOOL_TRUTHY:
        return True
    if s in _BOOL_FALSY:
        return False
    raise ConfigError(f"Cannot convert {value!r} to bool")


def _raw_resolve(value: object) -> str | None:
    """Resolve an ``_EnvVar`` or stringify a literal.

    Unset and empty environment variables both resolve to None.
    """
    if isinstance(value, _EnvVar):
        return os.environ.get(value.var_name) or None
    if value is None:
        return None
    return str(value)


_MISSING = object()


def _resolve(
    value: object,
    coerce: type[Any],
    *,
    default: object = _MISSING,
    required: str = "",
) -> Any:
    """Resolve a YAML value, handling ``!env`` tags and type coercion.

    Args:
        value: Raw value from YAML.
        coerce: Target type (``str``, ``float``, ``bool``).
        default: Default when value is absent.
        required: Human-readable field name.  When set, raises
            ``ConfigError`` if the value is absent.

    Returns:
        The resolved, coerced value, or None when optional and absent.
    """
    if not isinstance(value, _EnvVar) and value is not None:
        if coerce is bool:
            return _coerce_bool(value)
        if isinstance(value, coerce):
            return value

    resolved = _raw_resolve(value)

    if resolved is None:
        if required:
            if isinstance(value, _EnvVar):
                raise ConfigError(
                    f"Required config '{required}': environment variable "
                    f"'{value.var_name}' is not set"
                )
            raise ConfigError(f"Required config '{required}' is missing")
        if default is not _MISSING:
            return default
        return None

    if coerce is bool:
        return _coerce_bool(resolved)
    try:
        return coerce(resolved)
    except ValueError as e:
        raise ConfigError(
            f"Invalid value {resolved!r} for {coerce.__name__}"
        ) from e


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{key}' must be a mapping")
    return value


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClientConfig:
    """Resolved client configuration.

    Attributes:
        access_key_id: Access key ID.
        secret_access_key: Secret access key.
        bucket_name: Default bucket.
        region: Region of the default bucket.
        debug: Log every HTTP exchange at DEBUG.
        timeout: Request timeout in seconds.
    """

    access_key_id: str
    secret_access_key: str = field(repr=False)
    bucket_name: str
    region: Region = Region.US_EAST_1
    debug: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        SecretFilter.register_secret(self.secret_access_key)

    @classmethod
    def from_yaml(cls, config_path: Path | None = None) -> "ClientConfig":
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML file.  Defaults to
                ``~/.config/s3lite/s3lite.yaml`` (XDG).

        Returns:
            ClientConfig instance.

        Raises:
            ConfigError: If the file is missing or a value is invalid.
        """
        load_dotenv_once()

        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            try:
                raw = yaml.load(f, Loader=_make_loader())
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(
                f"Config file must be a YAML mapping: {config_path}"
            )

        config = cls._from_raw(raw)
        logger.debug("Loaded config from %s: %r", config_path, config)
        return config

    @classmethod
    def _from_raw(cls, raw: dict) -> "ClientConfig":
        """Build config from a parsed (but unresolved) YAML dict."""
        credentials = _section(raw, "credentials")
        bucket = _section(raw, "bucket")

        region_code = _resolve(bucket.get("region"), str, default="us-east-1")
        try:
            region = Region.from_code(region_code)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        timeout = _resolve(
            raw.get("timeout"), float, default=DEFAULT_TIMEOUT_SECONDS
        )
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")

        return cls(
            access_key_id=_resolve(
                credentials.get("access_key_id"),
                str,
                required="credentials.access_key_id",
            ),
            secret_access_key=_resolve(
                credentials.get("secret_access_key"),
                str,
                required="credentials.secret_access_key",
            ),
            bucket_name=_resolve(
                bucket.get("name"), str, required="bucket.name"
            ),
            region=region,
            debug=_resolve(raw.get("debug"), bool, default=False),
            timeout=timeout,
        )

    def make_access(self, *, locked: bool = False) -> Access:
        """Create credentials for signing.

        Args:
            locked: Return a ``LockedAccess`` for use from several threads.
        """
        cls = LockedAccess if locked else Access
        return cls(self.access_key_id, self.secret_access_key)

    def make_bucket(self, name: str | None = None) -> Bucket:
        """Create the configured bucket, optionally under another name."""
        return Bucket(name or self.bucket_name, self.region)

    def make_client(self, *, debug: bool = False) -> S3Client:
        """Create a client with the configured timeout.

        Args:
            debug: Enable transport debug logging even when the
                configuration does not.
        """
        return S3Client(debug=self.debug or debug, timeout=self.timeout)
