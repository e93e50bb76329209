from linkedin_api.middleware.body_limit import BodySizeLimitMiddleware
from linkedin_api.middleware.cors import OriginAdmissionMiddleware, configure_cors, is_origin_allowed
from linkedin_api.middleware.logging import RequestLoggingMiddleware

__all__ = [
    "BodySizeLimitMiddleware",
    "OriginAdmissionMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "is_origin_allowed",
]
