"""Logging infrastructure package."""

from .logger import AppLogger, AuditLogger, get_app_logger, get_audit_logger

__all__ = ["AppLogger", "AuditLogger", "get_app_logger", "get_audit_logger"]
