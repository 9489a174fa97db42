"""Swagger 2.0 to Postman collection conversion entry points.

``convert`` runs the whole pipeline: load, dereference and validate the
source, then assemble the collection. ``convert_document`` is the
synchronous core for a document that is already resolved.
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

import pydantic

from swagger2postman.config import ConversionOptions
from swagger2postman.errors import DocumentValidationError
from swagger2postman.generator.collection import Collection, CollectionInfo, Description, Environment
from swagger2postman.generator.context import BaseUrl, ConversionContext
from swagger2postman.generator.environment import EnvironmentBuilder
from swagger2postman.generator.items import assemble_items
from swagger2postman.parser.loader import load_document
from swagger2postman.parser.models import ApiDocument

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """The generated collection and, when requested, its environment."""

    collection: Collection
    environment: Environment | None = None

    def collection_dict(self) -> dict:
        return self.collection.to_dict()

    def environment_dict(self) -> dict | None:
        if self.environment is None:
            return None
        return self.environment.to_dict()

    def to_json(self, indent: int = 4) -> str:
        return json.dumps(self.collection_dict(), indent=indent)


async def convert(
    source: str | Path | dict,
    options: ConversionOptions | None = None,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> ConversionResult:
    """Load ``source`` and convert it.

    Raises DocumentValidationError when the source cannot be loaded or is
    not a valid Swagger 2.0 document; nothing is produced in that case.
    """
    log = log or logger
    log.debug("reading API spec from: %s", source if not isinstance(source, dict) else "<mapping>")
    try:
        api = await asyncio.to_thread(load_document, source)
    except DocumentValidationError as e:
        log.error("%s", e)
        raise
    return convert_document(api, options, log)


def convert_document(
    document: dict | ApiDocument,
    options: ConversionOptions | None = None,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> ConversionResult:
    """Convert an already dereferenced Swagger 2.0 document."""
    options = options or ConversionOptions()
    log = log or logger
    log.debug("using options: %s", options.model_dump_json(by_alias=True))

    if isinstance(document, ApiDocument):
        api = document
    else:
        try:
            api = ApiDocument.model_validate(document)
        except pydantic.ValidationError as e:
            raise DocumentValidationError(f"spec is not valid: {e}") from e

    ctx = build_context(api, options, log)
    collection = Collection(info=build_info(api))
    collection.item = assemble_items(api.paths, ctx)
    log.debug("Conversion successful")

    return ConversionResult(collection=collection, environment=ctx.environment.build())


def build_context(api: ApiDocument, options: ConversionOptions, log) -> ConversionContext:
    environment = EnvironmentBuilder(options.environment_target)
    base_url = build_base_url(api, options)
    environment.add_placeholders(base_url.host)
    return ConversionContext(
        options=options,
        logger=log,
        consumes=tuple(api.consumes),
        produces=tuple(api.produces),
        security=tuple(api.security),
        security_definitions=dict(api.security_definitions),
        base_url=base_url,
        environment=environment,
    )


def build_base_url(api: ApiDocument, options: ConversionOptions) -> BaseUrl:
    host = options.host or api.host or "localhost"
    protocol = "https" if "https" in api.schemes else "http"
    path: tuple[str, ...] = ()
    if api.base_path:
        path = tuple(segment for segment in api.base_path.split("/") if segment)
    return BaseUrl(protocol=protocol, host=host, path=path)


def build_info(api: ApiDocument) -> CollectionInfo:
    info = CollectionInfo(name=api.info.title, postman_id=str(uuid.uuid4()))
    if api.info.description:
        info.description = Description(content=api.info.description)
    return info
