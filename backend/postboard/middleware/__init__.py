"""
Postboard Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied around route handlers.

Request Flow:
    Request → [Access Log] → [GZip] → [CORS] → PipelineRoute driver
                                                   ├─ authenticate   (auth.py)
                                                   └─ FastAPI handler
                                                        ├─ body validation
                                                        ├─ existence resolvers
                                                        ├─ endpoint
                                                        └─ normalize  (response.py)

    Errors raised anywhere inside the driver become responses in
    `postboard.error_handlers`; the access log sees the final status.

Modules:
    - logging.py:  AccessLogMiddleware (entry and exit lines)
    - pipeline.py: RouteOptions, @route_options, PipelineRoute
    - auth.py:     bearer token gate
    - response.py: success envelope
"""
