"""Turn Swagger paths into Postman items grouped into folders."""

from swagger2postman.parser.models import Operation, Parameter, PathItem

from .collection import Event, Folder, Item, Script
from .context import ConversionContext
from .request import build_request
from .scripts import generate_tests


def postman_path(endpoint: str) -> str:
    """Rewrite ``{name}`` path templates as ``:name``."""
    return endpoint.replace("{", ":").replace("}", "")


def folder_name(endpoint: str) -> str | None:
    """First non-empty path segment, or None for the root endpoint."""
    return next((segment for segment in endpoint.split("/") if segment), None)


def tag_filter_matches(paths: dict[str, PathItem], tag: str) -> bool:
    """Whether any operation in the document carries ``tag``."""
    return any(
        tag in (operation.tags or [])
        for path_item in paths.values()
        for _, operation in path_item.operations()
    )


def is_included(operation: Operation, ctx: ConversionContext, untagged_only: bool) -> bool:
    tag = ctx.options.tag_filter
    if not tag:
        return True
    if untagged_only:
        return not operation.tags
    return tag in (operation.tags or [])


def build_item(
    endpoint: str,
    method: str,
    operation: Operation,
    inherited: list[Parameter],
    ctx: ConversionContext,
) -> Item:
    item = Item(
        name=operation.summary,
        request=build_request(endpoint, method, operation, inherited, ctx),
    )

    if not ctx.options.exclude_tests:
        ctx.logger.debug("Adding test for: %s %s", method, endpoint)
        if operation.meta is not None and operation.meta.tests is not None:
            tests = list(operation.meta.tests)
        else:
            tests = generate_tests(operation.responses)
        item.events = [Event(listen="test", script=Script(exec=tests))]

    return item


def build_item_list(endpoint: str, path_item: PathItem, ctx: ConversionContext, untagged_only: bool = False) -> list[Item]:
    items = []
    lpath = postman_path(endpoint)
    for method, operation in path_item.operations():
        if not is_included(operation, ctx, untagged_only):
            ctx.logger.debug(
                "Excluding %s %s due to tagFilter: %s", method, endpoint, ctx.options.tag_filter
            )
            continue
        ctx.logger.debug("Processing operation %s %s", method, endpoint)
        items.append(build_item(lpath, method, operation, path_item.parameters, ctx))
    return items


def assemble_items(paths: dict[str, PathItem], ctx: ConversionContext) -> list[Item | Folder]:
    """Build every item and bucket it by first path segment.

    Root endpoints stay at the top level. Folders and top-level items are
    sorted by name (unnamed first); folder contents keep discovery order.
    """
    untagged_only = False
    if ctx.options.tag_filter and not tag_filter_matches(paths, ctx.options.tag_filter):
        ctx.logger.debug("No operation tagged %s; keeping untagged operations", ctx.options.tag_filter)
        untagged_only = True

    folders: dict[str, Folder] = {}
    items: list[Item] = []
    for endpoint, path_item in paths.items():
        item_list = build_item_list(endpoint, path_item, ctx, untagged_only)
        if not item_list:
            continue
        name = folder_name(endpoint)
        if name is None:
            ctx.logger.debug("Adding path item %s", endpoint)
            items.extend(item_list)
        elif name in folders:
            folders[name].item.extend(item_list)
        else:
            ctx.logger.debug("Adding path item to folder: %s", name)
            folders[name] = Folder(name=name, description=f"Folder for {name}", item=item_list)

    return sorted([*items, *folders.values()], key=lambda entry: entry.name or "")
