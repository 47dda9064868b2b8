"""
Structured logging for Zapboard.

JSON logs with timestamp, event_type and key/value context.
Use get_logger() in all modules for aggregation-friendly output.
"""

from zapboard.zap_logging.logger import bind_wallet, get_logger, short_key

__all__ = ["get_logger", "bind_wallet", "short_key"]
