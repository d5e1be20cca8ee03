"""Bridge entre os wrappers de operação e o conector HTTP."""

from app.bridge.operation_bridge import VALIDATION_MODES, OperationBridge

__all__ = ["VALIDATION_MODES", "OperationBridge"]
