"""Middleware modules for the application."""

from .payload_size import PayloadSizeMiddleware
from .prometheus import PrometheusMiddleware
from .request_id import RequestIDMiddleware

__all__ = ["PrometheusMiddleware", "PayloadSizeMiddleware", "RequestIDMiddleware"]
