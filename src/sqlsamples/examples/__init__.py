"""Sample queries grouped by topic.

Topic modules register their examples on import.  Use
:func:`get_registry` rather than the bare ``registry`` so every topic is
loaded.
"""

from sqlsamples.examples.base import (
    TOPIC_MODULES,
    ExampleRegistry,
    ExampleResult,
    SqlExample,
    Topic,
    get_registry,
    registry,
    run_example,
)

__all__ = [
    "ExampleRegistry",
    "ExampleResult",
    "SqlExample",
    "TOPIC_MODULES",
    "Topic",
    "get_registry",
    "registry",
    "run_example",
]
