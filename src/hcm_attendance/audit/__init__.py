from .sink import AuditEvent, AuditSink, LoggingAuditSink

__all__ = ["AuditEvent", "AuditSink", "LoggingAuditSink"]
