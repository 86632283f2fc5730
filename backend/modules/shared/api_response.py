"""
Cosmic Garden - API Response Envelope
{success, data | error, message, timestamp} bodies for the garden endpoints
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class APIResponse:
    success: bool
    data: Any = None
    error: Optional[str] = None
    message: Optional[str] = None
    timestamp: Optional[str] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; empty fields are left out"""
        body: Dict[str, Any] = {"success": self.success, "timestamp": self.timestamp}
        if self.data is not None:
            body["data"] = to_json_ready(self.data)
        if self.error is not None:
            body["error"] = self.error
        if self.message is not None:
            body["message"] = self.message
        return body


def success_response(data: Any = None, message: str = None) -> APIResponse:
    return APIResponse(success=True, data=data, message=message)


def error_response(error: str, message: str = None) -> APIResponse:
    return APIResponse(success=False, error=error, message=message)


def to_json_ready(value: Any) -> Any:
    """Records and datetimes become plain JSON types, recursively"""
    if hasattr(value, "to_dict"):
        return to_json_ready(value.to_dict())
    if isinstance(value, dict):
        return {k: to_json_ready(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_ready(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value
