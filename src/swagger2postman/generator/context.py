"""Per-conversion state shared by the generator components."""

import logging
from dataclasses import dataclass, field

from swagger2postman.config import ConversionOptions
from swagger2postman.parser.models import SecurityDefinition, SecurityRequirement

from .environment import EnvironmentBuilder


@dataclass(frozen=True)
class BaseUrl:
    protocol: str = "http"
    host: str = "localhost"
    path: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConversionContext:
    """Everything one conversion needs, created fresh for every call.

    Only the environment builder accumulates; the rest is fixed once the
    document globals have been extracted.
    """

    options: ConversionOptions = field(default_factory=ConversionOptions)
    logger: logging.Logger | logging.LoggerAdapter = field(
        default_factory=lambda: logging.getLogger("swagger2postman")
    )
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    security: tuple[SecurityRequirement, ...] = ()
    security_definitions: dict[str, SecurityDefinition] = field(default_factory=dict)
    base_url: BaseUrl = BaseUrl()
    environment: EnvironmentBuilder = field(default_factory=EnvironmentBuilder)
