"""Request synthesizer — turns one route into a Postman request description."""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from postman_gen.generator.examples import generate_example
from postman_gen.generator.routes import Route

HOST = "localhost"
PROTOCOL = "http"
SAMPLE_QUERY_VALUE = "sampleValue"


class QueryParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class UrlDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    protocol: str = PROTOCOL
    host: list[str] = [HOST]
    port: str
    path: list[str]
    query: list[QueryParam] = []


class BodyDescriptor(BaseModel):
    """Request body: ``mode="none"`` or raw JSON content."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["none", "raw"] = "none"
    raw: str | None = None
    options: dict | None = None


class RequestDescriptor(BaseModel):
    """A synthesized Postman request for a single route."""

    model_config = ConfigDict(frozen=True)

    method: str
    header: list[dict] = []
    url: UrlDescriptor
    body: BodyDescriptor = BodyDescriptor()


def synthesize_request(route: Route, port: str) -> RequestDescriptor:
    """Build the request description for a route on ``http://localhost:<port>``."""
    pattern = route.pattern
    query: list[QueryParam] = []
    body_content: dict[str, Any] = {}
    has_body = False

    for param in route.handler.parameters:
        if param.binding == "body":
            has_body = True
            body_content.update(generate_example(param.type))
        elif param.binding == "query":
            key = param.alias or param.name
            query.append(QueryParam(key=key, value=SAMPLE_QUERY_VALUE))
        elif param.binding == "path":
            # Path variables keep their literal {name} token.
            pass

    raw = f"{PROTOCOL}://{HOST}:{port}{pattern}"
    if query:
        raw += "?" + "&".join(f"{q.key}={q.value}" for q in query)

    url = UrlDescriptor(raw=raw, port=port, path=split_path(pattern), query=query)
    return RequestDescriptor(method=route.method, url=url, body=_build_body(has_body, body_content))


def split_path(pattern: str) -> list[str]:
    """Split a pattern on '/', keeping the leading empty segment.

    Trailing empty segments are dropped, so ``"/users/"`` gives ``["", "users"]``.
    """
    segments = pattern.split("/")
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def _build_body(has_body: bool, content: dict[str, Any]) -> BodyDescriptor:
    if not has_body:
        return BodyDescriptor(mode="none")
    return BodyDescriptor(
        mode="raw",
        raw=json.dumps(content, indent=2),
        options={"raw": {"language": "json"}},
    )
