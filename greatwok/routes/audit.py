# routes/audit.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from greatwok.core.db import get_db
from greatwok.core.security import require_admin
from greatwok.models.audit_log import AuditLog
from greatwok.models.user import User

router = APIRouter(tags=["audit"])


@router.get("/audit-logs")
def list_audit_logs(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    logs = db.query(AuditLog).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(200).all()
    return [log.to_dict() for log in logs]
