"""Structured audit logging helpers."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

audit_logger = logging.getLogger("intake.audit")


def _to_serializable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_serializable(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return {k: _to_serializable(getattr(value, k)) for k in value.__dataclass_fields__}
    return str(value)


def log_audit_event(
    event_type: str,
    *,
    actor: Any = None,
    details: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event_type,
    }

    if actor is not None:
        payload.update(
            {
                "actor_id": getattr(actor, "id", None),
                "actor_name": getattr(actor, "name", None),
                "actor_role": getattr(actor, "role", None),
            }
        )

    if details:
        payload["details"] = _to_serializable(details)

    # Korean names and addresses stay readable in the log.
    audit_logger.info(json.dumps(payload, ensure_ascii=False))
    return payload
