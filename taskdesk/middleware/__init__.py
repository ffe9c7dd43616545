"""HTTP middleware. Applied in taskdesk.main."""

from taskdesk.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
