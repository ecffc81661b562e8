"""Request log repository - append-only audit rows in `request_logs`."""

from __future__ import annotations

from ...models import RequestLog
from ..store import REQUEST_LOGS, DataStore, Query, WriteOp


class RequestLogRepository:
    """Repository for RequestLog data access. Logs are never updated or deleted."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    @staticmethod
    def _payload(log: RequestLog) -> dict[str, object]:
        return {k: v for k, v in log.to_record().items() if k not in ("id", "created_at") and v is not None}

    def append(self, log: RequestLog) -> RequestLog:
        return RequestLog.from_record(self.store.insert(REQUEST_LOGS, self._payload(log)))

    def append_op(self, log: RequestLog) -> WriteOp:
        """Batch write appending `log`"""
        return WriteOp.create(REQUEST_LOGS, self._payload(log))

    def list_for_request(self, request_id: str) -> list[RequestLog]:
        """All log rows for a request, newest first"""
        query = Query().eq("request_id", request_id).order("created_at", descending=True)
        return [RequestLog.from_record(r) for r in self.store.select(REQUEST_LOGS, query)]
