"""Logging filters and utilities."""

import logging
import re
from typing import Any


# Query parameters that carry provider API keys
_SECRET_QUERY_PARAM = re.compile(r'(?i)\b(appid|key|api_key)=([^&\s]+)')

class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs."""

    MASK = '***MASKED***'

    def __init__(self, sensitive_fields: set[str] | None = None):
        """Initialize filter.

        Args:
            sensitive_fields: Set of field names to mask
        """
        super().__init__()
        self.sensitive_fields = sensitive_fields or {
            'appid', 'key', 'api_key', 'token', 'secret',
            'openweathermap_api_key', 'weatherapi_api_key'
        }

    def _mask_sensitive_data(self, obj: Any) -> Any:
        """Recursively mask sensitive data in object."""
        if isinstance(obj, dict):
            return {
                k: self.MASK if str(k).lower() in self.sensitive_fields else self._mask_sensitive_data(v)
                for k, v in obj.items()
            }
        if isinstance(obj, list):
            return [self._mask_sensitive_data(item) for item in obj]
        if isinstance(obj, str):
            return mask_query_secrets(obj)
        return obj

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in log record."""
        if hasattr(record, 'extra_fields'):
            record.extra_fields = self._mask_sensitive_data(record.extra_fields)
        message = record.getMessage()
        masked = mask_query_secrets(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True

def mask_query_secrets(text: str) -> str:
    """Mask API keys embedded as query parameters in URLs."""
    return _SECRET_QUERY_PARAM.sub(lambda m: f"{m.group(1)}={SensitiveDataFilter.MASK}", text)
