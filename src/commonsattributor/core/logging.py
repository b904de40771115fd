from __future__ import annotations

import logging

from rich.logging import RichHandler


def configure_logging(verbosity: int = 0) -> None:
    """Install a rich handler on the root logger.

    ``verbosity`` follows the CLI ``-v`` count: 0 is WARNING, 1 is INFO and
    anything higher is DEBUG. HTTP client loggers stay at WARNING below DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )

    http_level = logging.DEBUG if level == logging.DEBUG else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(http_level)
