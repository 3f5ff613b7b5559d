from .trace_emitter import TraceEmitter
from .trace_store import TraceStoreJSONL

__all__ = ["TraceEmitter", "TraceStoreJSONL"]
