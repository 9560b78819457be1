# core/logger.py
import logging
import os
from datetime import datetime

from greatwok.core import config
from greatwok.models.audit_log import AuditLog

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = None, log_dir: str = None):
    """Console logging always; combined.log and error.log when a log directory is configured."""
    level = level or config.LOG_LEVEL
    log_dir = log_dir if log_dir is not None else config.LOG_DIR

    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_dir, "combined.log")))
        error_handler = logging.FileHandler(os.path.join(log_dir, "error.log"))
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def log_action(db, user_email: str, action: str):
    """Record an admin or user action into the audit log."""
    try:
        db.add(AuditLog(user_email=user_email or "unknown", action=action, timestamp=datetime.utcnow()))
        db.commit()
    except Exception:
        logger.exception("Audit log error")
        db.rollback()
