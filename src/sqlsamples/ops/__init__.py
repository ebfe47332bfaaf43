"""
Operations layer for sqlsamples.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` instead of raising ``SampleError``
- ``dry_run`` is honoured by ``setup_schema`` and ``cleanup``

Usage::

    from sqlsamples.ops import OperationContext
    from sqlsamples.ops.samples import setup_schema, seed_data

    ctx = OperationContext(adapter=adapter)
    assert setup_schema(ctx).success
"""

from sqlsamples.ops.context import OperationContext
from sqlsamples.ops.result import OperationError, OperationResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
]
