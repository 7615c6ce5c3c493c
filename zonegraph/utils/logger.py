# -*- coding: utf-8 -*-
"""
Logging setup for the zone graph pipeline.

zonegraph.main configures handlers once at startup; library modules only ever
call get_logger(__name__) and never touch handlers themselves, so importing
the ingestion or retrieval packages from another program leaves its logging
alone.

Level conventions:
    INFO     stage banners and per-run totals
    DEBUG    one line per node or edge upsert, per query record
    WARNING  skipped rows, empty query results, ignored adjacency entries
    ERROR    process boundary only (main), right before exit

Examples:
    setup_logging(level=logging.DEBUG, log_file="logs/zonegraph.log")
    logger = get_logger(__name__)
"""
# Standard library
import logging
import sys
from pathlib import Path
from typing import List, Optional

_configured = False

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    driver_level: int = logging.WARNING,
) -> None:
    """
    Route pipeline logs to stdout and, when given, to ``log_file``.

    Later calls are ignored. The neo4j driver logs every bolt message at
    DEBUG, so its logger is held at ``driver_level`` (or ``level`` if higher)
    even when the pipeline itself runs at DEBUG.

    Args:
        level: Level for the pipeline's own loggers
        log_file: Optional log file; parent directories are created
        driver_level: Floor for the ``neo4j`` logger
    """
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger("neo4j").setLevel(max(level, driver_level))

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
