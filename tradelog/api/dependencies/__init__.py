from .auth import AccessGate

__all__ = ["AccessGate"]
