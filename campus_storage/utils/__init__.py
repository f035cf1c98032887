# ================================
# UTILS PACKAGE INITIALIZATION (utils/__init__.py)
# ================================

"""
Utils Package

Pure helpers used by the services:
- Listing filter predicates and confirmed-booking overlap resolution
- Pagination and booking lifecycle rules
- Distance calculation and audit logging
"""

from campus_storage.utils.audit import AuditLogger

# Default audit logger instance for application-wide use
default_audit_logger = AuditLogger()

def get_audit_logger() -> AuditLogger:
    """Get the default audit logger instance"""
    return default_audit_logger

__all__ = ["AuditLogger", "default_audit_logger", "get_audit_logger"]
