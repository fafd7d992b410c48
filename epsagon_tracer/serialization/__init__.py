from epsagon_tracer.serialization.serializer import TraceSerializer

__all__ = ["TraceSerializer"]
