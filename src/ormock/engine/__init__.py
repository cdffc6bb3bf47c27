"""Query-result resolution: result queues and the resolution chain."""

from ormock.engine.resolution import ResolutionEngine, invoke_handler, settle
from ormock.engine.result_queue import ResultQueue, is_error_like

__all__ = [
    "ResolutionEngine",
    "ResultQueue",
    "invoke_handler",
    "is_error_like",
    "settle",
]
