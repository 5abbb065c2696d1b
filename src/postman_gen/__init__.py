"""Generate Postman collections from a web application's route table."""

from postman_gen.config import GeneratorSettings
from postman_gen.generator.collection import generate_collection
from postman_gen.hooks import postman_lifespan

__all__ = ["GeneratorSettings", "generate_collection", "postman_lifespan"]
