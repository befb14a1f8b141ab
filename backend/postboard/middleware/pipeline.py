"""
Postboard Backend — Route Pipeline
====================================

What:  Per-route options (public access, response envelope) and the route
       class that runs every request through an explicit list of stages.
How:   Options are attached to the endpoint function with `@route_options`
       and read exactly once, when the router registers the route. Nothing
       in the request path inspects the URL to decide how to behave.
Who:   Every APIRouter in `postboard.routes` is created with
       `route_class=PipelineRoute`.

Usage:
    router = APIRouter(prefix="/health", route_class=PipelineRoute)

    @router.get("")
    @route_options(public=True, envelope=False)
    async def health_check(): ...

Stage order (fixed driver, first to last):
    1. authenticate   skipped when the route is public
    2. handler        FastAPI's own handler: body validation, dependencies
                      (existence resolvers), the endpoint, and then the
                      envelope when it is enabled for the route

A stage is `async (request, call_next) -> Response`. Raising aborts the
request; the exception handlers produce the response.
"""

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

from postboard.config import settings
from postboard.middleware.auth import authenticate
from postboard.middleware.response import normalize

Handler = Callable[[Request], Awaitable[Response]]
Stage = Callable[[Request, Handler], Awaitable[Response]]


@dataclass(frozen=True)
class RouteOptions:
    """
    Behavior switches for one route.

    Attributes:
        public:   admit requests without a bearer token
        envelope: wrap successful results with `normalize`; None means
                  "decide from the passthrough path list at registration"
    """

    public: bool = False
    envelope: Optional[bool] = None


def route_options(**options: Any) -> Callable[[Callable], Callable]:
    """Attach RouteOptions to an endpoint function (apply below the router decorator)."""

    def decorator(endpoint: Callable) -> Callable:
        endpoint.route_options = RouteOptions(**options)
        return endpoint

    return decorator


def is_passthrough_path(path: str, prefixes: Sequence[str]) -> bool:
    """Exact match or a path segment below one of the prefixes."""
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def resolve_options(path: str, endpoint: Callable) -> RouteOptions:
    options = getattr(endpoint, "route_options", None) or RouteOptions()
    if options.envelope is None:
        envelope = not is_passthrough_path(path, settings.response_passthrough_list)
        options = RouteOptions(public=options.public, envelope=envelope)
    return options


def enveloped(endpoint: Callable) -> Callable:
    """Wrap an async endpoint so its return value goes through `normalize`."""
    if getattr(endpoint, "__enveloped__", False):
        return endpoint

    @functools.wraps(endpoint)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return normalize(await endpoint(*args, **kwargs))

    wrapper.__enveloped__ = True
    return wrapper


def build_stages(options: RouteOptions) -> List[Stage]:
    stages: List[Stage] = []
    if not options.public:
        stages.append(authenticate)
    return stages


async def run_stages(stages: Sequence[Stage], request: Request, handler: Handler) -> Response:
    """Run `stages` in order, each handing over to the next, ending at `handler`."""

    async def call(index: int, req: Request) -> Response:
        if index == len(stages):
            return await handler(req)
        return await stages[index](req, functools.partial(call, index + 1))

    return await call(0, request)


class PipelineRoute(APIRoute):
    """APIRoute whose handler is the stage driver for the route's options."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any):
        options = resolve_options(path, endpoint)
        if options.envelope:
            endpoint = enveloped(endpoint)
            # The envelope is the response body; no model is inferred from the annotation
            kwargs["response_model"] = None
        # APIRoute.__init__ builds the handler, so the stages must exist first
        self.options = options
        self.stages = build_stages(options)
        super().__init__(path, endpoint, **kwargs)

    def get_route_handler(self) -> Handler:
        handler = super().get_route_handler()
        stages = self.stages

        async def pipeline_handler(request: Request) -> Response:
            return await run_stages(stages, request, handler)

        return pipeline_handler
