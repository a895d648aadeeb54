# northwind_admin/services/mutation_coordinator.py
"""
Create / update / delete through an entity repository, each operation kind
tracked by its own MutationResult. Callers decide when to refetch.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar

from northwind_admin.db.repos.base_repo import EntityRepository
from northwind_admin.errors import DashboardError, TransportError
from simple_logger import Slogger

R = TypeVar("R")

KINDS = ("create", "update", "delete")


class MutationStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MutationResult:
    status: MutationStatus = MutationStatus.IDLE
    error: Optional[DashboardError] = None

    @property
    def is_pending(self) -> bool:
        return self.status is MutationStatus.PENDING


class MutationCoordinator:
    """Runs mutations and records their outcome; errors are re-raised."""

    def __init__(self, repository: EntityRepository[Any], *, name: str = "") -> None:
        self._repo = repository
        self._name = name or type(repository).__name__
        self.create_result = MutationResult()
        self.update_result = MutationResult()
        self.delete_result = MutationResult()
        self.last_error: Optional[DashboardError] = None
        self._running: Dict[str, int] = dict.fromkeys(KINDS, 0)   # calls in flight per kind
        self._latest: Dict[str, int] = dict.fromkeys(KINDS, 0)
        self._outcomes: Dict[str, MutationResult] = {}

    @property
    def is_pending(self) -> bool:
        return any(count > 0 for count in self._running.values())

    # ---------- operations --------------------------------------------------

    async def create(self, data: Mapping[str, Any]) -> Any:
        return await self._run("create", lambda: self._repo.create(data))

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._run("update", lambda: self._repo.update(record_id, data), record_id)

    async def delete(self, record_id: Any) -> None:
        """Delete unconditionally; confirming with the user happens upstream."""
        await self._run("delete", lambda: self._repo.delete(record_id), record_id)

    # ---------- internals ---------------------------------------------------

    async def _run(
        self, kind: str, call: Callable[[], Awaitable[R]], record_id: Any = None
    ) -> R:
        self._latest[kind] += 1
        token = self._latest[kind]
        self._running[kind] += 1
        setattr(self, f"{kind}_result", MutationResult(MutationStatus.PENDING))
        try:
            result = await call()
        except DashboardError as e:
            Slogger.warning(f"{self._name}.{kind} failed: {e.message}", {"id": record_id})
            self.last_error = e
            self._finish(kind, token, MutationResult(MutationStatus.FAILED, e))
            raise
        except Exception as e:
            Slogger.exception(e, f"{self._name}.{kind}: unexpected failure", {"id": record_id})
            error = TransportError(f"Could not {kind} the record: {e}")
            self.last_error = error
            self._finish(kind, token, MutationResult(MutationStatus.FAILED, error))
            raise error from e
        except asyncio.CancelledError:
            self._finish(kind, token, MutationResult())
            raise

        self._finish(kind, token, MutationResult(MutationStatus.SUCCEEDED))
        return result

    def _finish(self, kind: str, token: int, outcome: MutationResult) -> None:
        """Publish the outcome of the newest call once no call of `kind` is running."""
        self._running[kind] -= 1
        if token == self._latest[kind]:
            self._outcomes[kind] = outcome
        if self._running[kind] == 0:
            setattr(self, f"{kind}_result", self._outcomes.pop(kind, outcome))

    def reset(self) -> None:
        self.create_result = MutationResult()
        self.update_result = MutationResult()
        self.delete_result = MutationResult()
        self.last_error = None
        self._outcomes.clear()
