from __future__ import annotations

import json
import logging
from collections import Counter
from enum import Enum
from threading import Lock
from typing import Any

logger = logging.getLogger("adops_portal")

# Dropped from every event even if a caller passes them by mistake.
_SECRET_FIELDS = frozenset({"password", "password_hash", "access_token", "token"})


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    return str(value)


def log_event(
    event: str,
    *,
    level: int = logging.INFO,
    request_id: str | None = None,
    **fields: Any,
) -> None:
    """Write one JSON line for `event`. Secret-bearing fields never reach the log."""
    payload: dict[str, Any] = {"event": event}
    if request_id:
        payload["request_id"] = request_id
    payload.update(
        (key, _jsonable(value))
        for key, value in fields.items()
        if key not in _SECRET_FIELDS
    )
    logger.log(level, json.dumps(payload, sort_keys=True))


class AuthCounters:
    """Process-local tallies of sign-in outcomes and route-guard rejections.

    Counts are keyed by principal kind (or route tree) and outcome (or
    reason); they reset on restart and are not shared between workers.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._sign_ins: Counter[tuple[str, str]] = Counter()
        self._session_rejections: Counter[tuple[str, str]] = Counter()

    def sign_in(self, principal_kind: str, outcome: str) -> None:
        with self._lock:
            self._sign_ins[(principal_kind, outcome)] += 1

    def session_rejected(self, tree: str, reason: str) -> None:
        with self._lock:
            self._session_rejections[(tree, reason)] += 1

    def snapshot(self) -> dict[str, dict[str, dict[str, int]]]:
        """Nested `{"sign_in": {kind: {outcome: n}}, "session_rejected": {tree: {reason: n}}}`."""
        with self._lock:
            return {
                "sign_in": _nest(self._sign_ins),
                "session_rejected": _nest(self._session_rejections),
            }

    def reset(self) -> None:
        with self._lock:
            self._sign_ins.clear()
            self._session_rejections.clear()


def _nest(counter: Counter[tuple[str, str]]) -> dict[str, dict[str, int]]:
    nested: dict[str, dict[str, int]] = {}
    for (outer, inner), count in sorted(counter.items()):
        nested.setdefault(outer, {})[inner] = count
    return nested


auth_counters = AuthCounters()


def record_sign_in(
    principal_kind: str,
    outcome: str,
    *,
    request_id: str | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Count a sign-in attempt and emit the matching `sign_in_<outcome>` event."""
    auth_counters.sign_in(principal_kind, outcome)
    log_event(
        f"sign_in_{outcome}",
        level=level,
        request_id=request_id,
        principal_kind=principal_kind,
        **fields,
    )


def record_session_rejected(
    tree: str,
    reason: str,
    *,
    request_id: str | None = None,
    **fields: Any,
) -> None:
    auth_counters.session_rejected(tree, reason)
    log_event(
        "session_rejected",
        request_id=request_id,
        tree=tree,
        reason=reason,
        **fields,
    )
