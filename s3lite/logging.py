# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Logging configuration with secret redaction.

Library modules log through module-level loggers and never configure
handlers themselves.  Entry points (the ``s3lite`` command) call
:func:`configure_logging` once.

Usage:
    # In entry points
    from s3lite.logging import configure_logging
    configure_logging(level=logging.DEBUG)

    # In library modules
    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Uploading %s", name)
"""

import logging
import re
from typing import ClassVar


#: Third-party loggers that are only interesting when debugging requests.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


class SecretFilter(logging.Filter):
    """Logging filter that redacts registered secrets from log output.

    Secret access keys are registered when an ``Access`` is created, so
    they are replaced with ``[REDACTED]`` wherever they would otherwise
    appear in a log record.
    """

    _secrets: ClassVar[set[str]] = set()
    _pattern: ClassVar[re.Pattern[str] | None] = None

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact registered secrets from the record.

        Args:
            record: The log record to filter.

        Returns:
            Always True (records are modified, never suppressed).
        """
        if self._pattern is not None:
            record.msg = self._pattern.sub("[REDACTED]", str(record.msg))
            if record.args:
                record.args = tuple(
                    self._pattern.sub("[REDACTED]", arg)
                    if isinstance(arg, str)
                    else arg
                    for arg in record.args
                )
        return True

    @classmethod
    def register_secret(cls, secret: str) -> None:
        """Register a secret to be redacted from all log output.

        Args:
            secret: The secret string. Empty strings are ignored.
        """
        if secret and secret not in cls._secrets:
            cls._secrets.add(secret)
            cls._rebuild_pattern()

    @classmethod
    def clear_secrets(cls) -> None:
        """Clear all registered secrets. Primarily for testing."""
        cls._secrets.clear()
        cls._pattern = None

    @classmethod
    def _rebuild_pattern(cls) -> None:
        # Longest first so a secret containing another is redacted whole.
        escaped = [
            re.escape(s) for s in sorted(cls._secrets, key=len, reverse=True)
        ]
        cls._pattern = re.compile("|".join(escaped)) if escaped else None


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    add_secret_filter: bool = True,
) -> None:
    """Configure the root logger.

    The ``httpx`` and ``httpcore`` loggers are held at WARNING unless
    *level* is DEBUG, since their INFO output repeats every request.

    Args:
        level: The logging level (e.g. ``logging.INFO``).
        format_string: Custom format string. If None, uses default format.
        add_secret_filter: Whether to add the SecretFilter to redact secrets.
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string))

    if add_secret_filter:
        handler.addFilter(SecretFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    root_logger.addHandler(handler)

    transport_level = (
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
