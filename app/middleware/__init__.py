"""HTTP middleware: timeout, request size limit, request ID.

Applied in main app; order matters (last added = outermost).
Import and use from app.main.
"""

from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.middleware.request_size_limit import RequestSizeLimitMiddleware
from app.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "TimeoutMiddleware",
    "request_id_var",
]
