import asyncio
import json
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from swagger2postman.config import ConversionOptions
from swagger2postman.converter import convert, convert_document
from swagger2postman.errors import DocumentValidationError, SchemaRecursionError
from swagger2postman.generator.collection import POSTMAN_SCHEMA

FIXTURES = Path(__file__).parent / "fixtures"


def _document(**overrides) -> dict:
    doc = {
        "swagger": "2.0",
        "info": {"title": "Sample API", "description": "Sample description", "version": "1.0"},
        "consumes": ["application/json"],
        "produces": ["application/json"],
        "securityDefinitions": {
            "a": {"type": "basic"},
            "b": {"type": "apiKey", "name": "X-Key", "in": "header"},
        },
        "security": [{"a": []}, {"b": []}],
        "paths": {
            "/pets": {
                "get": {
                    "summary": "List pets",
                    "parameters": [{"name": "limit", "in": "query", "type": "integer"}],
                    "responses": {"200": {"description": "ok", "schema": {"type": "array", "items": {"type": "string"}}}, "404": {"description": "missing"}},
                },
                "post": {
                    "summary": "Create pet",
                    "parameters": [{
                        "name": "body",
                        "in": "body",
                        "schema": {"type": "object", "properties": {"name": {"type": "string"}}},
                    }],
                    "responses": {"201": {"description": "created"}},
                },
            },
            "/pets/{petId}": {
                "parameters": [{"name": "petId", "in": "path", "required": True, "type": "string"}],
                "get": {"summary": "Get pet", "responses": {"200": {"description": "ok"}}},
            },
            "/": {"get": {"summary": "Root", "responses": {"200": {"description": "ok"}}}},
        },
    }
    doc.update(overrides)
    return doc


def _requests(collection: dict) -> list[dict]:
    found = []
    for entry in collection["item"]:
        for item in entry.get("item", [entry]):
            found.append(item["request"])
    return found


def _strip_generated(data: dict) -> dict:
    data = json.loads(json.dumps(data))
    data["info"].pop("_postman_id")
    return data


class TestCollectionShape:
    def test_info(self):
        collection = convert_document(_document()).collection_dict()
        assert collection["info"]["name"] == "Sample API"
        assert collection["info"]["schema"] == POSTMAN_SCHEMA
        assert collection["info"]["description"] == {"content": "Sample description", "type": "text/markdown"}
        assert "_postman_id" in collection["info"]

    def test_top_level_sorted(self):
        collection = convert_document(_document()).collection_dict()
        assert [entry["name"] for entry in collection["item"]] == ["Root", "pets"]

    def test_path_template_converted(self):
        collection = convert_document(_document()).collection_dict()
        get_pet = collection["item"][1]["item"][2]["request"]
        assert get_pet["url"]["path"] == ["pets", ":petId"]
        assert get_pet["url"]["variable"] == [{"key": "petId", "value": "{{petId}}"}]

    def test_body_template(self):
        collection = convert_document(_document()).collection_dict()
        create = collection["item"][1]["item"][1]["request"]
        assert json.loads(create["body"]["raw"]) == {"name": ""}
        assert {"key": "Content-Type", "value": "application/json"} in create["header"]

    def test_to_json(self):
        result = convert_document(_document())
        assert json.loads(result.to_json())["info"]["name"] == "Sample API"


class TestBaseUrl:
    def test_default_host_is_localhost(self):
        collection = convert_document(_document()).collection_dict()
        assert {r["url"]["host"] for r in _requests(collection)} == {"localhost"}
        assert {r["url"]["protocol"] for r in _requests(collection)} == {"http"}

    def test_document_host_and_scheme(self):
        collection = convert_document(_document(host="api.example.com", schemes=["http", "https"], basePath="/v2/")).collection_dict()
        list_pets = _requests(collection)[1]
        assert list_pets["url"]["host"] == "api.example.com"
        assert list_pets["url"]["protocol"] == "https"
        assert list_pets["url"]["path"] == ["v2", "pets"]

    def test_host_option_wins(self):
        options = ConversionOptions(host="my.example.com")
        collection = convert_document(_document(host="api.example.com"), options).collection_dict()
        assert {r["url"]["host"] for r in _requests(collection)} == {"my.example.com"}


class TestSecurityDefaulting:
    def test_first_requirement(self):
        collection = convert_document(_document()).collection_dict()
        request = _requests(collection)[0]
        assert request["auth"]["type"] == "basic"

    def test_default_security_option(self):
        collection = convert_document(_document(), ConversionOptions(default_security="b")).collection_dict()
        request = _requests(collection)[0]
        assert "auth" not in request
        assert {"key": "X-Key", "value": "{{b_apikey}}"} in request["header"]


class TestTestScripts:
    def test_status_assertion(self):
        collection = convert_document(_document()).collection_dict()
        list_pets = collection["item"][1]["item"][0]
        assert list_pets["events"][0]["script"]["exec"][0] == (
            'tests["Status code is expected"] = [200,404].indexOf(responseCode.code) > -1;'
        )

    def test_exclude_tests(self):
        collection = convert_document(_document(), ConversionOptions(exclude_tests=True)).collection_dict()
        assert all("events" not in entry for entry in collection["item"][1]["item"])


class TestEnvironment:
    def test_no_environment_by_default(self):
        result = convert_document(_document())
        assert result.environment is None
        assert result.environment_dict() is None

    def test_environment_values(self):
        result = convert_document(_document(), ConversionOptions(environment_target="/tmp/sample-env.json"))
        env = result.environment_dict()
        assert env["name"] == "sample-env"
        assert [v["key"] for v in env["values"]] == ["a_username", "a_password", "limit", "petId"]

    def test_every_placeholder_has_one_entry(self):
        options = ConversionOptions(environment_target="env.json", default_security="b", host="{{baseUrl}}")
        result = convert_document(_document(), options)
        tokens = set(re.findall(r"\{\{([^{}]+)\}\}", result.to_json()))
        keys = [v["key"] for v in result.environment_dict()["values"]]
        assert len(keys) == len(set(keys))
        assert tokens == set(keys)


class TestIdempotence:
    def test_same_output_twice(self):
        options = ConversionOptions(environment_target="env.json")
        first = convert_document(_document(), options)
        second = convert_document(_document(), options)
        assert _strip_generated(first.collection_dict()) == _strip_generated(second.collection_dict())
        assert first.environment_dict()["values"] == second.environment_dict()["values"]

    def test_conversions_do_not_share_state(self):
        options = ConversionOptions(environment_target="env.json")
        first = convert_document(_document(), options)
        convert_document(_document(paths={"/other": {"get": {"parameters": [{"name": "q", "in": "query"}], "responses": {}}}}), options)
        assert "q" not in [v.key for v in first.environment.values]


class TestErrors:
    def test_invalid_model_raises_validation_error(self):
        doc = _document(securityDefinitions={"weird": {"type": "magic"}})
        with pytest.raises(DocumentValidationError):
            convert_document(doc)

    def test_recursive_schema_is_fatal(self):
        node = {"type": "object", "properties": {}}
        node["properties"]["self"] = node
        doc = _document(paths={"/loop": {"post": {"parameters": [{"name": "body", "in": "body", "schema": node}], "responses": {}}}})
        with pytest.raises(SchemaRecursionError):
            convert_document(doc)

    def test_recursive_response_schema_is_fatal(self):
        node = {"type": "object", "properties": {}}
        node["properties"]["self"] = node
        doc = _document(paths={"/loop": {"get": {"responses": {"200": {"description": "ok", "schema": node}}}}})
        with pytest.raises(SchemaRecursionError):
            convert_document(doc)

    def test_vendor_extensions_ignored(self):
        doc = _document()
        doc["paths"]["x-owner"] = "team-a"
        doc["paths"]["/pets"]["get"]["responses"]["x-cache"] = True
        collection = convert_document(doc).collection_dict()
        assert [entry["name"] for entry in collection["item"]] == ["Root", "pets"]
        script = collection["item"][1]["item"][0]["events"][0]["script"]["exec"]
        assert script[0] == 'tests["Status code is expected"] = [200,404].indexOf(responseCode.code) > -1;'


class TestConvert:
    def test_convert_fixture(self):
        result = asyncio.run(convert(FIXTURES / "petstore.yaml", ConversionOptions(environment_target="petstore.json")))
        collection = result.collection_dict()
        assert collection["info"]["name"] == "Swagger Petstore"
        assert [entry["name"] for entry in collection["item"]] == ["API root", "pets", "store"]
        create = collection["item"][1]["item"][1]["request"]
        assert json.loads(create["body"]["raw"]) == {"name": "", "tag": ""}
        assert create["url"]["path"] == ["v1", "pets"]
        assert create["url"]["protocol"] == "https"

    def test_invalid_document_rejected(self):
        with patch("swagger2postman.converter.convert_document") as mock_convert:
            with pytest.raises(DocumentValidationError):
                asyncio.run(convert(FIXTURES / "no_paths.yaml"))
        mock_convert.assert_not_called()

    def test_convert_in_memory_mapping(self):
        result = asyncio.run(convert(_document()))
        assert result.collection_dict()["info"]["name"] == "Sample API"
