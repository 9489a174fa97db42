"""Swagger document loader.

Reads a Swagger 2.0 document from a file, URL or mapping, inlines every
``$ref`` and validates the result against the Swagger 2.0 meta-schema.
"""

import json
import logging
from pathlib import Path

from prance import ResolvingParser, ValidationError
from prance.util.formats import ParseError
from prance.util.url import ResolutionError

from swagger2postman.errors import DocumentValidationError

logger = logging.getLogger(__name__)

BACKEND = "openapi-spec-validator"


def load_document(source: str | Path | dict) -> dict:
    """Load, dereference and validate a Swagger 2.0 document.

    Raises DocumentValidationError for anything that is not a valid,
    resolvable Swagger 2.0 document.
    """
    try:
        if isinstance(source, dict):
            parser = ResolvingParser(spec_string=json.dumps(source), backend=BACKEND, strict=False)
        else:
            logger.debug("reading API spec from: %s", source)
            parser = ResolvingParser(str(source), backend=BACKEND, strict=False)
    except (ValidationError, ResolutionError, ParseError, OSError, ValueError) as e:
        raise DocumentValidationError(f"spec is not valid: {e}") from e

    spec = parser.specification
    if str(spec.get("swagger", "")) != "2.0":
        raise DocumentValidationError("spec is not valid: only Swagger 2.0 documents are supported")

    logger.debug("validation of spec complete")
    return spec
