"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the connected adapter, the caller, the
dry-run flag and free-form metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        adapter: Connected :class:`DatabaseAdapter`; all work runs in its session.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, operations report what they would do.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    adapter: DatabaseAdapter
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def dialect(self) -> Dialect:
        return self.adapter.dialect
