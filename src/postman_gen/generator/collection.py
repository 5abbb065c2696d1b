"""Document assembler and output sink for Postman collections."""

import logging
import uuid
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from postman_gen.config import GeneratorSettings
from postman_gen.generator.request import RequestDescriptor, synthesize_request
from postman_gen.generator.routes import Route, enumerate_routes
from postman_gen.registry.base import RouteRegistry

logger = logging.getLogger(__name__)

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


class CollectionInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    postman_id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_postman_id")
    name: str
    schema_url: str = Field(default=POSTMAN_SCHEMA, alias="schema")


class CollectionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str  # handler function name, not the HTTP method
    request: RequestDescriptor


class CollectionDocument(BaseModel):
    """A Postman v2.1 collection: metadata plus the ordered request list."""

    info: CollectionInfo
    item: list[CollectionItem] = []

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def build_collection(routes: Iterable[Route], app_name: str, port: str) -> CollectionDocument:
    """Synthesize a request per route and collect them under one document."""
    items = [
        CollectionItem(name=route.handler.name, request=synthesize_request(route, port))
        for route in routes
    ]
    return CollectionDocument(info=CollectionInfo(name=app_name), item=items)


def write_collection(document: CollectionDocument, output_path: Path) -> Path:
    """Serialize the document as indented JSON and write it to ``output_path``."""
    text = document.to_json()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path.resolve()


def generate_collection(
    registry: RouteRegistry,
    settings: GeneratorSettings | None = None,
    output_path: Path | None = None,
) -> Path | None:
    """Full pipeline: enumerate routes -> synthesize requests -> write the file.

    Returns the absolute path written, or None when generation failed.
    Failures are logged and never propagate to the caller.
    """
    settings = settings or GeneratorSettings()
    output_path = output_path or settings.output_path
    try:
        document = build_collection(enumerate_routes(registry), settings.app_name, settings.port)
        written = write_collection(document, output_path)
    except (OSError, ValueError, TypeError) as e:
        logger.exception("Error while creating Postman collection %s: %s", output_path, e)
        return None

    logger.info("Postman collection created successfully: %s", written)
    return written
