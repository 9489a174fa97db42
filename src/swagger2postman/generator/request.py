"""Compose one Swagger operation into a Postman request."""

from swagger2postman.parser.models import Operation, Parameter

from .collection import Body, KeyValue, Request, Url
from .context import ConversionContext
from .parameters import FORM_URLENCODED, MULTIPART_FORM, apply_parameter, merge_parameters
from .security import apply_override, apply_security, select_requirement


def build_url(endpoint: str, ctx: ConversionContext) -> Url:
    # skip the leading "/" so the path does not start with an empty segment
    parts = endpoint[1:].split("/")
    base = ctx.base_url
    return Url(protocol=base.protocol, host=base.host, path=list(base.path) + parts)


def build_request(
    endpoint: str,
    method: str,
    operation: Operation,
    inherited: list[Parameter],
    ctx: ConversionContext,
) -> Request:
    """Build the request for ``method endpoint``.

    ``endpoint`` must already use ``:name`` path placeholders.
    """
    request = Request(
        url=build_url(endpoint, ctx),
        method=method,
        description=operation.description or operation.summary,
    )

    consumes = operation.consumes if operation.consumes is not None else list(ctx.consumes)
    produces = operation.produces if operation.produces is not None else list(ctx.produces)
    security = operation.security if operation.security is not None else list(ctx.security)

    if produces:
        accept = produces[0]
        if ctx.options.default_produces_type in produces:
            accept = ctx.options.default_produces_type
        request.header.append(KeyValue(key="Accept", value=accept))

    overridden = False
    if operation.meta is not None and operation.meta.auth is not None:
        overridden = apply_override(operation.meta.auth, request, ctx)

    # requirements are alternatives; exactly one is applied
    requirement = select_requirement(security, ctx.options.default_security)
    if not overridden and requirement is not None:
        request = apply_security(requirement, request, ctx)

    for param in merge_parameters(inherited, operation.parameters):
        request = apply_parameter(param, consumes, request, ctx)

    request.header = unique_headers(request.header)
    return apply_default_body(consumes, request)


def unique_headers(headers: list[KeyValue]) -> list[KeyValue]:
    """Drop repeated header keys, keeping the first occurrence."""
    seen = set()
    result = []
    for header in headers:
        if header.key not in seen:
            seen.add(header.key)
            result.append(header)
    return result


def apply_default_body(consumes: list[str], request: Request) -> Request:
    if request.body is not None:
        return request
    if FORM_URLENCODED in consumes:
        request.body = Body(mode="urlencoded", urlencoded=[])
    elif MULTIPART_FORM in consumes:
        request.body = Body(mode="formdata", formdata=[])
    else:
        request.body = Body(mode="raw", raw="")
    return request
