"""Generate Postman test scripts from Swagger response definitions."""

import json

from swagger2postman.errors import SchemaRecursionError
from swagger2postman.parser.models import Response


def generate_tests(responses: dict[str, Response]) -> list[str]:
    """Build the lines of a Postman ``test`` script.

    The first assertion checks the status code against every declared one;
    each 2xx response with a schema adds a tv4 schema check.
    """
    status_codes = [status for status in responses if status.isdigit()]
    tests = [
        'tests["Status code is expected"] = [%s].indexOf(responseCode.code) > -1;'
        % ",".join(status_codes)
    ]

    for status, response in responses.items():
        if not (status.isdigit() and 200 <= int(status) < 300 and response.schema_):
            continue
        try:
            schema = json.dumps(response.schema_, indent=4)
        except ValueError as e:
            raise SchemaRecursionError(f"response schema for status {status} refers back to itself") from e
        tests.extend([
            "",
            f"if (responseCode.code === {status}) {{",
            "\tvar data = JSON.parse(responseBody);",
            f"\tvar schema = {schema};",
            '\ttests["Response Body respects JSON schema documentation"] = tv4.validate(data, schema);',
            '\tif (tests["Response Body respects JSON schema documentation"] === false) {',
            "\t\tconsole.log(tv4.error);",
            "\t}",
            "}",
        ])

    return tests
