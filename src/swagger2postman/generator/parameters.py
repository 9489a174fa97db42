"""Project Swagger operation parameters onto a Postman request."""

from swagger2postman.parser.models import Parameter

from .collection import Body, Description, FormField, KeyValue, Request
from .context import ConversionContext
from .schema import render_body

FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART_FORM = "multipart/form-data"


def merge_parameters(inherited: list[Parameter], own: list[Parameter]) -> list[Parameter]:
    """Merge path-item and operation parameters by name.

    Operation entries replace inherited ones in place; new names are
    appended after the inherited set.
    """
    merged: dict[str, Parameter] = {}
    for param in inherited:
        merged[param.name] = param
    for param in own:
        merged[param.name] = param
    return list(merged.values())


def apply_parameter(param: Parameter, consumes: list[str], request: Request, ctx: ConversionContext) -> Request:
    ctx.logger.debug("Processing param: %s (%s)", param.name, param.location)

    if param.location == "query":
        _apply_query(param, request, ctx)
    elif param.location == "header":
        request.header.append(_placeholder(param))
        ctx.environment.add(param.name)
    elif param.location == "path":
        if request.url.variable is None:
            request.url.variable = []
        request.url.variable.append(_placeholder(param))
        ctx.environment.add(param.name)
    elif param.location == "body":
        _apply_body(param, consumes, request, ctx)
    elif param.location == "formData":
        _apply_form_field(param, consumes, request, ctx)

    return request


def _apply_query(param: Parameter, request: Request, ctx: ConversionContext) -> None:
    options = ctx.options
    if options.exclude_query_params:
        return
    if not param.required and options.exclude_optional_query_params:
        return
    if request.url.query is None:
        request.url.query = []
    request.url.query.append(_placeholder(param))
    ctx.environment.add(param.name)


def _apply_body(param: Parameter, consumes: list[str], request: Request, ctx: ConversionContext) -> None:
    if request.body is None:
        request.body = Body()
    request.body.mode = "raw"

    content_type = next((ct for ct in consumes if "json" in ct), None)
    if not ctx.options.exclude_body_template and param.schema_ and content_type:
        request.header.append(KeyValue(key="Content-Type", value=content_type))
        request.body.raw = render_body(param.schema_)

    if not request.body.raw:
        request.body.raw = param.description or ""


def _apply_form_field(param: Parameter, consumes: list[str], request: Request, ctx: ConversionContext) -> None:
    if request.body is None:
        request.body = Body()
    field = FormField(
        key=param.name,
        value="{{%s}}" % param.name,
        description=Description(content=param.description or ""),
    )
    ctx.environment.add(param.name)

    if FORM_URLENCODED in consumes:
        request.body.mode = "urlencoded"
        if request.body.urlencoded is None:
            request.body.urlencoded = []
        request.body.urlencoded.append(field)
        request.header.append(KeyValue(key="Content-Type", value=FORM_URLENCODED))
    else:
        # multipart unless the operation says urlencoded
        request.body.mode = "formdata"
        if request.body.formdata is None:
            request.body.formdata = []
        request.body.formdata.append(field)


def _placeholder(param: Parameter) -> KeyValue:
    return KeyValue(key=param.name, value="{{%s}}" % param.name, description=param.description)
