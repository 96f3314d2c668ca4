"""Orchestrator package - producer/bounded-consumer upload pipeline."""
from .core import RunState, UploadOrchestrator
from .error_sink import ErrorSink
from .limiter import ConcurrencyLimiter
from .path_stream import PathStream
from .worker import UploadWorker

__all__ = [
    "UploadOrchestrator",
    "RunState",
    "PathStream",
    "ConcurrencyLimiter",
    "UploadWorker",
    "ErrorSink",
]
