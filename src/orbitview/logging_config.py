"""
Logging Configuration
Sets up the 'orbitview' logger for the viewer.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    capture_warnings: bool = True
) -> logging.Logger:
    """
    Configures the logger for the 'orbitview' namespace and returns it.

    Args:
        level: Logging level (e.g. logging.DEBUG to trace camera state transitions).
        log_file: Optional path to save logs to a file.
        capture_warnings: Route `warnings.warn` output (pyvista/VTK deprecations)
            through logging instead of stderr.
    """
    logger = logging.getLogger("orbitview")
    logger.setLevel(level)

    # Re-running setup (e.g. window restart) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if capture_warnings:
        logging.captureWarnings(True)
        logging.getLogger("py.warnings").handlers = list(logger.handlers)

    logger.info(f"Logging initialized (level={logging.getLevelName(level)}).")
    return logger
