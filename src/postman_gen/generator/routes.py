"""Route enumerator — expands registry mappings into individual routes."""

import logging
from typing import Iterator

from pydantic import BaseModel

from postman_gen.registry.base import HandlerSignature, RouteRegistry

logger = logging.getLogger(__name__)


class Route(BaseModel):
    """One URL pattern + one HTTP method served by a handler."""

    pattern: str
    method: str
    handler: HandlerSignature


def enumerate_routes(registry: RouteRegistry) -> Iterator[Route]:
    """Yield one Route per pattern x method of every mapping.

    Mappings without any patterns are skipped with a warning.
    """
    for mapping in registry.mappings():
        if mapping.patterns is None or not mapping.patterns.values:
            logger.warning("No patterns found for handler %r, skipping", mapping.handler.name)
            continue

        for pattern in mapping.patterns.values:
            for method in mapping.methods:
                yield Route(pattern=pattern, method=method, handler=mapping.handler)
