from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger("hcm_attendance.audit")


@dataclass(frozen=True)
class AuditEvent:
    action: str
    actor: Optional[int]
    at: datetime
    subject: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "actor": self.actor,
            "at": self.at.isoformat(),
            "subject": self.subject,
            "details": self.details,
        }


class AuditSink(Protocol):
    def emit(self, event: AuditEvent) -> None:
        raise NotImplementedError


class LoggingAuditSink(AuditSink):
    """One JSON line per event on the ``hcm_attendance.audit`` logger."""

    def emit(self, event: AuditEvent) -> None:
        logger.info(json.dumps(event.to_dict(), default=str, sort_keys=True))
