import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from receptro.config import Config


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _log_dir() -> Path:
    return Path(Config.LOGGING.LOG_DIR)


def _today_log_file() -> Path:
    """Return path to today's log file (e.g. app-2026-10-19.log)."""
    return _log_dir() / f"app-{_utcnow().strftime('%Y-%m-%d')}.log"


def _cleanup_old_logs() -> None:
    """Delete log files older than the retention window."""
    cutoff = _utcnow().timestamp() - (Config.LOGGING.KEEP_DAYS * 86400)
    for f in _log_dir().glob("app-*.log"):
        try:
            if f.stat().st_mtime < cutoff:
                f.unlink()
        except OSError:
            pass


class StructuredLogger:
    """
    Structured logger that outputs logs in uvicorn-style format.

    Logs to:
    - Console (stdout)
    - File (date-based, e.g. app-2026-10-19.log) when LOG_TO_FILE is enabled
    """

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = logging.getLogger(f"receptro.{service_name}")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        # Loggers are process-wide; re-creating one must not stack handlers
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        self.logger.addHandler(console_handler)

        if Config.LOGGING.TO_FILE:
            _log_dir().mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                _today_log_file(), mode="a", encoding="utf-8"
            )
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(file_handler)

            _cleanup_old_logs()

    def log(
        self,
        level: str,
        message: str,
        context: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        """Log a structured message in uvicorn-style format."""
        timestamp = _utcnow().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level_padded = level.ljust(8)

        req_id = request_id or "-"
        log_line = (
            f"{timestamp} | {level_padded} | {self.service_name}:{req_id} - {message}"
        )

        if context:
            context_str = " ".join(f"{k}={v}" for k, v in context.items())
            log_line = f"{log_line} - {context_str}"

        log_method = getattr(self.logger, level.lower(), self.logger.info)
        log_method(log_line)

    def info(
        self,
        message: str,
        context: Optional[dict] = None,
        request_id: Optional[str] = None,
    ):
        self.log("INFO", message, context, request_id)

    def warning(
        self,
        message: str,
        context: Optional[dict] = None,
        request_id: Optional[str] = None,
    ):
        self.log("WARNING", message, context, request_id)

    def error(
        self,
        message: str,
        context: Optional[dict] = None,
        request_id: Optional[str] = None,
    ):
        self.log("ERROR", message, context, request_id)


def generate_request_id() -> str:
    """Generate a unique request ID for tracing one upload through the pipeline"""
    return f"req-{uuid.uuid4().hex[:12]}"


def get_logs_by_request_id(request_id: str, max_lines: int = 1000) -> list[str]:
    """Search log files, newest first, for entries matching a request ID."""
    matching_logs: list[str] = []
    log_files = sorted(_log_dir().glob("app-*.log"), reverse=True)

    for log_file in log_files:
        try:
            with open(log_file, "r", encoding="utf-8") as f:
                for line in f:
                    if request_id in line:
                        matching_logs.append(line.strip())
                        if len(matching_logs) >= max_lines:
                            return matching_logs
        except OSError:
            continue

    return matching_logs
