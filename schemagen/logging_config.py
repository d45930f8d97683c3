"""Logging configuration for schemagen.

Library modules only create loggers through :func:`get_logger`; handlers
are installed by the command line entry point via :func:`setup_logging`.
"""

import logging
from typing import Any, MutableMapping

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "schemagen"
DEFAULT_FORMAT = "%(message)s"
PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the schemagen namespace.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.WARNING,
    use_rich: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Install a single handler on the package logger.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level for the package logger.
        use_rich: Render records through rich instead of plain text.
        console: Console for the rich handler (stderr by default).

    Returns:
        The configured package logger.
    """
    root = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root.addHandler(handler)
    root.setLevel(level)
    return root


class RunLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes every record with a generation run id."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]):
        extra = dict(self.extra or {})
        kwargs["extra"] = {**extra, **kwargs.get("extra", {})}
        return f"[run {extra.get('run_id', '-')}] {msg}", kwargs
