"""Startup hook — generate the collection when a FastAPI app starts."""

from contextlib import asynccontextmanager
from pathlib import Path

from postman_gen.config import GeneratorSettings
from postman_gen.generator.collection import generate_collection
from postman_gen.registry.asgi import FastAPIRouteRegistry


def postman_lifespan(settings: GeneratorSettings | None = None, output_path: Path | None = None):
    """Return a lifespan that writes the app's Postman collection on startup.

    Usage::

        app = FastAPI(lifespan=postman_lifespan(GeneratorSettings.from_yaml(Path("application.yml"))))

    Without a configured app name the app's title is used.
    """

    @asynccontextmanager
    async def lifespan(app):
        resolved = settings or GeneratorSettings()
        if "app_name" not in resolved.model_fields_set:
            resolved = resolved.model_copy(update={"app_name": app.title})
        generate_collection(FastAPIRouteRegistry(app), resolved, output_path)
        yield

    return lifespan
