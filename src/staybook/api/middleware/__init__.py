from .correlation import CORRELATION_ID_HEADER, CorrelationIdMiddleware
from .identity import IdentityMiddleware

__all__ = ["CORRELATION_ID_HEADER", "CorrelationIdMiddleware", "IdentityMiddleware"]
