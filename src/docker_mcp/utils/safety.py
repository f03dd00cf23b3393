"""Operation safety classification used for MCP tool annotations."""

from enum import Enum


class OperationSafety(str, Enum):
    """Classification of operation safety levels."""

    SAFE = "safe"  # Read-only operations (list, inspect, logs)
    MODERATE = "moderate"  # State-changing but reversible (create, start, stop, pull)
    DESTRUCTIVE = "destructive"  # Permanent changes (remove)
