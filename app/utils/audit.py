"""
Security audit trail.

Account lifecycle events (signup, signin, deletion and the identity
provider's user.created / user.deleted) are written to the ``audit`` logger
as one JSON object per line. Emails are reduced to a short SHA-256 prefix;
passwords and tokens are never passed in.
"""
import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_logger = logging.getLogger("audit")

EMAIL_HASH_LENGTH = 12


def email_fingerprint(email: str) -> str:
    return hashlib.sha256(email.strip().lower().encode()).hexdigest()[:EMAIL_HASH_LENGTH]


def audit_record(event: str, email: Optional[str], user_id: Optional[Any], fields: Dict[str, Any]) -> Dict[str, Any]:
    record: Dict[str, Any] = {"ts": datetime.now(timezone.utc).isoformat(), "event": event}
    if email:
        record["email_hash"] = email_fingerprint(email)
    if user_id is not None:
        record["user_id"] = str(user_id)
    record.update(fields)
    return record


def audit(event: str, *, email: Optional[str] = None, user_id: Optional[Any] = None, **fields: Any) -> None:
    _logger.info(json.dumps(audit_record(event, email, user_id, fields), ensure_ascii=False, default=str))
