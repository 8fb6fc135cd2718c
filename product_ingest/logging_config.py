import logging
import os
import opentelemetry.trace
from azure.monitor.opentelemetry import configure_azure_monitor

from product_ingest.config import get_log_level

# Application Insights is only reachable from inside the Functions host
if os.environ.get("FUNCTIONS_WORKER_RUNTIME"):
    try:
        configure_azure_monitor()
        logging.info("Azure Monitor OpenTelemetry configured successfully")
    except Exception as e:
        logging.error(f"Error configuring Azure Monitor: {str(e)}")

tracer = opentelemetry.trace.get_tracer("product_ingest")

logger = logging.getLogger("product_ingest")


def configure_logger(level=None):
    """
    Set the package log level and attach a console handler once.

    The level defaults to LOG_LEVEL from the app settings (INFO if unset).
    """
    level = get_log_level() if level is None else level
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


configure_logger()


def get_child_logger(name):
    """Get a child logger with the given name."""
    return logger.getChild(name)
