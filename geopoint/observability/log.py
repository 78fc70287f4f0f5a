"""Structured logging initialisation utilities."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, List

import structlog
import yaml


def _processors() -> List[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _apply_stdlib_config(config_path: Path) -> None:
    if not config_path.exists():
        logging.basicConfig(level=logging.INFO)
        return
    with config_path.open("r", encoding="utf-8") as handle:
        config: Dict[str, Any] = yaml.safe_load(handle)
    logging.config.dictConfig(config)


def configure_logging(config_path: Path) -> None:
    """Route structlog events through stdlib handlers as JSON lines.

    Handlers and levels come from the YAML dictConfig at ``config_path``; a
    missing file falls back to ``logging.basicConfig`` at INFO. Context bound
    with ``bind_context`` is merged into every event either way.
    """
    _apply_stdlib_config(config_path)
    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
