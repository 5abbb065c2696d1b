import importlib
import logging
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI, File, Form, UploadFile

from postman_gen.generator.request import synthesize_request
from postman_gen.generator.routes import enumerate_routes
from postman_gen.registry.asgi import FastAPIRouteRegistry
from postman_gen.registry.base import LegacyPatterns, PathPatterns

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="module")
def sample_app():
    sys.path.insert(0, str(FIXTURES))
    try:
        return importlib.import_module("sample_app").app
    finally:
        sys.path.remove(str(FIXTURES))


@pytest.fixture
def mappings(sample_app):
    return {m.handler.name: m for m in FastAPIRouteRegistry(sample_app).mappings()}


class TestApiRoutes:
    def test_path_patterns(self, mappings):
        m = mappings["get_user"]
        assert isinstance(m.patterns, PathPatterns)
        assert m.patterns.values == ["/users/{user_id}"]
        assert m.methods == ["GET"]

    def test_multiple_methods(self, mappings):
        assert mappings["update_item"].patterns.values == ["/items/{item_id}"]
        assert mappings["update_item"].methods == ["PATCH", "PUT"]

    def test_query_params_with_alias(self, mappings):
        params = mappings["list_users"].handler.parameters
        assert [(p.name, p.binding, p.alias) for p in params] == [
            ("page", "query", ""),
            ("size", "query", "pageSize"),
        ]

    def test_body_param_type(self, mappings):
        (param,) = mappings["create_user"].handler.parameters
        assert param.binding == "body"
        assert param.type.name == "UserRequest"
        assert [(f.name, f.kind) for f in param.type.fields] == [("name", "text"), ("age", "integer")]

    def test_path_and_body_in_declaration_order(self, mappings):
        params = mappings["update_item"].handler.parameters
        assert [(p.name, p.binding) for p in params] == [("item_id", "path"), ("item", "body")]


class TestOtherRoutes:
    def test_plain_starlette_route_is_legacy(self, mappings):
        m = mappings["health"]
        assert isinstance(m.patterns, LegacyPatterns)
        assert m.patterns.values == ["/health"]
        assert m.methods == ["GET", "HEAD"]
        assert [(p.name, p.binding) for p in m.handler.parameters] == [("request", "other")]

    def test_mount_has_no_patterns(self, sample_app):
        mounts = [m for m in FastAPIRouteRegistry(sample_app).mappings() if m.patterns is None]
        assert len(mounts) == 1

    def test_enumerated_routes(self, sample_app, caplog):
        with caplog.at_level(logging.WARNING):
            routes = list(enumerate_routes(FastAPIRouteRegistry(sample_app)))

        assert len(routes) == 7
        assert ("POST", "/users", "create_user") in {(r.method, r.pattern, r.handler.name) for r in routes}
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1


class TestFormRoutes:
    def test_form_and_file_fields_are_not_json_bodies(self):
        app = FastAPI(openapi_url=None, docs_url=None, redoc_url=None)

        @app.post("/login")
        def login(username: str = Form(...), password: str = Form(...), avatar: UploadFile = File(None)):
            return {}

        (mapping,) = FastAPIRouteRegistry(app).mappings()
        assert [(p.name, p.binding) for p in mapping.handler.parameters] == [
            ("username", "other"),
            ("password", "other"),
            ("avatar", "other"),
        ]

        (route,) = enumerate_routes(FastAPIRouteRegistry(app))
        assert synthesize_request(route, "8080").body.mode == "none"
