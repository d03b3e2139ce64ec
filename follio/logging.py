"""logging.py
Holds configured loggers for the follio package.
"""
from typing import Literal
import logging
import os
import sys
from datetime import datetime
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, staging, production

LoggerType = Literal["default", "pytest", "flow", "ingestion_failure"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Logger type -> subfolder of the base log folder (development only)
LOG_SUBFOLDERS = {
    "default": "",
    "pytest": "tests",
    "flow": "flow",
    "ingestion_failure": "ingestion_failures",
}

# Logger type -> CloudWatch log group (staging/production only)
CLOUDWATCH_LOG_GROUPS = {
    "default": "follio_logs",
    "flow": "follio_flow_logs",
    "ingestion_failure": "follio_ingestion_failure_logs",
}


class LoggerFactory:
    """
    Factory to create configured loggers for the page flow, ingestion and tests.

    Where records go depends on ENV:
      - development / local / test: one timestamped file per logger under
        `logs/<subfolder>/` (see LOG_SUBFOLDERS).
      - staging / production: CloudWatch through watchtower, if installed.
    Console output is opt-out per logger. Loggers never propagate to the root
    logger and are only configured once per name.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        """
        Return the logger `name`, attaching handlers on first request.

        Args:
            name (str): Logger name; also the log file prefix.
            logger_type (LoggerType): Selects the log folder / log group.
            console (bool): Also write to stderr.
        """
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            return logger

        logger.propagate = False
        logger.setLevel(logging.DEBUG if logger_type in ("default", "pytest") else logging.INFO)
        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            self._add_console_handler(logger, formatter)

        if self.env in ("development", "local", "test"):
            self._add_file_handler(logger, self._get_log_folder_for_type(logger_type), name, formatter)
        elif self.env in ("staging", "production"):
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Never leave a logger without somewhere to write
        if not logger.handlers:
            self._add_console_handler(logger, formatter)

        return logger

    @lru_cache(maxsize=None)
    def get_ingestion_failure_logger(self, ingestor_name: str) -> logging.Logger:
        """
        Return a file-only logger for failures of one ingestion strategy.

        Example:
            logs/ingestion_failures/TextIngestor/TextIngestor_20251028_103022.log
        """
        name = f"ingestion_failures.{ingestor_name}"
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False
        formatter = logging.Formatter(LOG_FORMAT)

        if self.env in ("staging", "production"):
            self._add_cloudwatch_handler(logger, "ingestion_failure", formatter)
        else:
            log_folder = os.path.join(self._get_log_folder_for_type("ingestion_failure"), ingestor_name)
            self._add_file_handler(logger, log_folder, ingestor_name, formatter)

        if not logger.handlers:
            self._add_console_handler(logger, formatter)
        return logger

    def _get_log_folder_for_type(self, logger_type: LoggerType) -> str:
        """Return folder path based on logger type. Everything goes to logs/tests under pytest."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, "tests")
        return os.path.join(self.base_log_folder, LOG_SUBFOLDERS.get(logger_type, ""))

    @staticmethod
    def _add_console_handler(logger: logging.Logger, formatter: logging.Formatter):
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    @staticmethod
    def _add_file_handler(
        logger: logging.Logger,
        log_folder: str,
        file_prefix: str,
        formatter: logging.Formatter,
    ):
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        fh = logging.FileHandler(
            os.path.join(log_folder, f"{file_prefix}_{timestamp}.log"),
            mode="a",
            encoding="utf-8",
        )
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ):
        """Optional AWS CloudWatch logging for staging/production."""
        try:
            import watchtower
        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
            return

        aws_handler = watchtower.CloudWatchLogHandler(
            log_group=CLOUDWATCH_LOG_GROUPS.get(logger_type, CLOUDWATCH_LOG_GROUPS["default"])
        )
        aws_handler.setFormatter(formatter)
        logger.addHandler(aws_handler)
