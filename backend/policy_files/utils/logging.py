# backend/policy_files/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler

from ..config import settings

LOG_DIR = settings.STORAGE_PATH / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Fields that tie a log line to an upload; every record carries them, "-" when unknown
CONTEXT_FIELDS = ("project_id", "backend", "stored_name", "document_id")
CONTEXT_PLACEHOLDER = "-"

CONTEXT_FORMAT = "[project=%(project_id)s backend=%(backend)s object=%(stored_name)s document=%(document_id)s]"

# Attributes every LogRecord has; anything else on a record came from `extra`
RECORD_ATTRS = set(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message", "asctime", "taskName"
}


class UploadContextFilter(logging.Filter):
    """Fill in the upload context fields a call site did not supply"""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in CONTEXT_FIELDS:
            if getattr(record, field, None) is None:
                setattr(record, field, CONTEXT_PLACEHOLDER)
        return True


class ContextFormatter(logging.Formatter):
    """Append `extra` values that are not upload context as key=value pairs"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        details = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in RECORD_ATTRS and key not in CONTEXT_FIELDS
        ]
        if not details:
            return line
        head, sep, trace = line.partition("\n")
        return f"{head} | {' '.join(details)}{sep}{trace}"


console_formatter = ContextFormatter(
    '\033[1;36m%(asctime)s\033[0m \033[1;33m%(name)s\033[0m \033[1;35m%(levelname)s\033[0m '
    '\033[2m' + CONTEXT_FORMAT + '\033[0m %(message)s'
)
file_formatter = ContextFormatter(
    '%(asctime)s %(name)s %(levelname)s [%(module)s:%(lineno)d] ' + CONTEXT_FORMAT + ' %(message)s'
)


class PolicyFilesLogger:
    """Logger for one area of the service (api, storage, database, service).

    Each area writes to its own rotating file under the storage path and to
    stdout. `extra` keys that collide with LogRecord attributes are prefixed
    with `extra_` instead of raising.
    """

    def __init__(self, name: str):
        self.area = name
        self.logger = logging.getLogger(f"policy_files.{name}")
        self.logger.setLevel(logging.INFO)
        self.setup_handlers()

    def setup_handlers(self):
        if self.logger.handlers:
            return

        self.logger.addFilter(UploadContextFilter())

        file_handler = RotatingFileHandler(
            LOG_DIR / f"{self.area}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

    def _sanitize_extra(self, extra):
        if not extra:
            return None
        return {
            (f"extra_{key}" if key in RECORD_ATTRS else key): value
            for key, value in extra.items()
        }

    def _log(self, level, msg, extra=None, exc_info=None):
        self.logger.log(level, msg, extra=self._sanitize_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self._log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self._log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self._log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self._log(logging.ERROR, msg, extra, exc_info)


api_logger = PolicyFilesLogger("api")
storage_logger = PolicyFilesLogger("storage")
db_logger = PolicyFilesLogger("database")
service_logger = PolicyFilesLogger("service")

__all__ = ["api_logger", "storage_logger", "db_logger", "service_logger", "UploadContextFilter"]
