"""Postman collection v2.1 and environment models.

The generator builds these incrementally; ``to_dict`` produces the JSON
shape Postman imports (aliases applied, unset optional keys omitted).
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


class PostmanModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Description(PostmanModel):
    content: str = ""
    type: str = "text/markdown"


class KeyValue(PostmanModel):
    """A header, query parameter or path variable."""

    key: str
    value: str
    description: str | None = None


class FormField(PostmanModel):
    key: str
    value: str
    enabled: bool = True
    description: Description = Description()


class Body(PostmanModel):
    mode: str = "raw"
    raw: str | None = None
    urlencoded: list[FormField] | None = None
    formdata: list[FormField] | None = None


class Auth(PostmanModel):
    """Request auth block; the type-specific settings live under ``<type>``."""

    model_config = ConfigDict(extra="allow")

    type: str


class Url(PostmanModel):
    protocol: str = "http"
    host: str = "localhost"
    path: list[str] = []
    variable: list[KeyValue] | None = None
    query: list[KeyValue] | None = None


class Request(PostmanModel):
    url: Url
    method: str
    description: str | None = None
    header: list[KeyValue] = []
    auth: Auth | None = None
    body: Body | None = None


class Script(PostmanModel):
    type: str = "text/javascript"
    exec: list[str] = []


class Event(PostmanModel):
    listen: str = "test"
    script: Script


class Item(PostmanModel):
    name: str | None = None
    request: Request
    response: list[dict] = []
    events: list[Event] | None = None


class Folder(PostmanModel):
    name: str
    description: str | None = None
    item: list[Item] = []


class CollectionInfo(PostmanModel):
    name: str
    postman_id: str = Field(alias="_postman_id")
    schema_: str = Field(default=POSTMAN_SCHEMA, alias="schema")
    description: Description | None = None


class Collection(PostmanModel):
    info: CollectionInfo
    item: list[Union[Item, Folder]] = []


class EnvironmentValue(PostmanModel):
    key: str
    value: str = ""
    type: str = "text"
    enabled: bool = True


class Environment(PostmanModel):
    id: str
    name: str
    timestamp: int
    scope: str = Field(default="environment", alias="_postman_variable_scope")
    values: list[EnvironmentValue] = []
