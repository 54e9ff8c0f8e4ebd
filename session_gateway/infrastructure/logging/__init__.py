"""Structured logging adapters implementing LoggerProtocol."""

from session_gateway.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
