"""Project Swagger security requirements onto a Postman request."""

from swagger2postman.parser.models import (
    ApiKeyDefinition,
    BasicDefinition,
    OAuth2Definition,
    SecurityRequirement,
)

from .collection import Auth, KeyValue, Request
from .context import ConversionContext

AUTH_TYPES = (
    "awsv4",
    "basic",
    "bearer",
    "digest",
    "hawk",
    "noauth",
    "oauth1",
    "oauth2",
    "ntlm",
    "apikey",
    "edgegrid",
)


def select_requirement(
    requirements: list[SecurityRequirement], preferred: str | None
) -> SecurityRequirement | None:
    """Pick the one requirement to apply: the preferred scheme if listed, else the first."""
    if not requirements:
        return None
    if preferred:
        for requirement in requirements:
            if preferred in requirement:
                return requirement
    return requirements[0]


def apply_override(auth: dict, request: Request, ctx: ConversionContext) -> bool:
    """Copy an ``x-postman-meta`` auth block onto the request.

    Returns False (request untouched) when the block is not a recognised
    Postman auth shape.
    """
    auth_type = auth.get("type")
    if auth_type not in AUTH_TYPES or auth_type not in auth:
        ctx.logger.warning("Ignoring unsupported x-postman-meta auth of type: %s", auth_type)
        return False
    request.auth = Auth.model_validate(auth)
    ctx.environment.add_placeholders(auth)
    return True


def apply_security(requirement: SecurityRequirement, request: Request, ctx: ConversionContext) -> Request:
    for name, scopes in requirement.items():
        definition = ctx.security_definitions.get(name)
        if definition is None:
            ctx.logger.warning("Unknown security requirement: %s", name)
            continue

        ctx.logger.debug("Adding security details to request of type: %s", definition.type)
        if isinstance(definition, OAuth2Definition):
            if scopes:
                request.auth = Auth(type="oauth2", oauth2={"scope": " ".join(scopes)})
            request.header.append(
                KeyValue(
                    key="Authorization",
                    value="Bearer " + _variable(name, "access_token", ctx),
                    description=definition.description,
                )
            )

        elif isinstance(definition, BasicDefinition):
            request.auth = Auth(
                type="basic",
                basic={
                    "username": _variable(name, "username", ctx),
                    "password": _variable(name, "password", ctx),
                },
            )

        elif isinstance(definition, ApiKeyDefinition):
            entry = KeyValue(
                key=definition.name,
                value=_variable(name, "apikey", ctx),
                description=definition.description,
            )
            if definition.location == "header":
                request.header.append(entry)
            else:
                if request.url.query is None:
                    request.url.query = []
                request.url.query.append(entry)

    return request


def _variable(scheme: str, suffix: str, ctx: ConversionContext) -> str:
    key = f"{scheme}_{suffix}"
    ctx.environment.add(key)
    return "{{%s}}" % key
