"""Models for a resolved Swagger 2.0 document.

The loader hands over a plain mapping with every ``$ref`` already inlined;
these models give the generator typed access to the parts it maps.
Schema fragments stay plain dicts because they are rendered, not inspected.
"""

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

META_KEY = "x-postman-meta"

METHODS = ("get", "put", "post", "patch", "delete", "options", "head")

SecurityRequirement = dict[str, list[str]]


def _is_extension(key) -> bool:
    return isinstance(key, str) and key.startswith("x-")


class SwaggerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Info(SwaggerModel):
    title: str = ""
    description: str | None = None
    version: str | None = None


class Parameter(SwaggerModel):
    """A single operation parameter."""

    name: str
    location: Literal["query", "header", "path", "body", "formData"] = Field(alias="in")
    required: bool = False
    type: str | None = None
    description: str | None = None
    schema_: dict | None = Field(default=None, alias="schema")


class Response(SwaggerModel):
    description: str = ""
    schema_: dict | None = Field(default=None, alias="schema")


class PostmanMeta(SwaggerModel):
    """Manual overrides carried by the ``x-postman-meta`` key of an operation."""

    auth: dict | None = None
    tests: list[str] | None = None

    @field_validator("tests", mode="before")
    @classmethod
    def _split_script(cls, value):
        if isinstance(value, str):
            return value.splitlines()
        return value


class Operation(SwaggerModel):
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[Parameter] = []
    consumes: list[str] | None = None
    produces: list[str] | None = None
    security: list[SecurityRequirement] | None = None
    responses: dict[str, Response] = {}
    tags: list[str] | None = None
    meta: PostmanMeta | None = Field(default=None, alias=META_KEY)

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_status(cls, value):
        # YAML loads unquoted status codes as integers
        if isinstance(value, dict):
            return {str(status): resp for status, resp in value.items() if not _is_extension(status)}
        return value


class PathItem(SwaggerModel):
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    patch: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    parameters: list[Parameter] = []

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(VERB, operation)`` pairs in the fixed verb order."""
        for verb in METHODS:
            operation = getattr(self, verb)
            if operation is not None:
                yield verb.upper(), operation


class OAuth2Definition(SwaggerModel):
    type: Literal["oauth2"]
    description: str | None = None
    flow: str | None = None
    scopes: dict[str, str] = {}


class BasicDefinition(SwaggerModel):
    type: Literal["basic"]
    description: str | None = None


class ApiKeyDefinition(SwaggerModel):
    type: Literal["apiKey"]
    name: str
    location: Literal["header", "query"] = Field(alias="in")
    description: str | None = None


SecurityDefinition = Annotated[
    Union[OAuth2Definition, BasicDefinition, ApiKeyDefinition],
    Field(discriminator="type"),
]


class ApiDocument(SwaggerModel):
    """The root of a resolved Swagger 2.0 document."""

    swagger: str = "2.0"
    info: Info = Info()
    host: str | None = None
    base_path: str | None = Field(default=None, alias="basePath")
    schemes: list[str] = []
    consumes: list[str] = []
    produces: list[str] = []
    security: list[SecurityRequirement] = []
    security_definitions: dict[str, SecurityDefinition] = Field(
        default={}, alias="securityDefinitions"
    )
    paths: dict[str, PathItem] = {}

    @field_validator("paths", mode="before")
    @classmethod
    def _drop_path_extensions(cls, value):
        if isinstance(value, dict):
            return {endpoint: item for endpoint, item in value.items() if not _is_extension(endpoint)}
        return value
