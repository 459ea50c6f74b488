"""Data models for a parsed Swagger 2.0 document.

The loader validates raw YAML/JSON into these models so the path-tree
builder and the request translators work on typed values. Only the fields
the importer reads are modelled; everything else is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

INTEGRATION_KEY = "x-amazon-apigateway-integration"

HTTP_VERBS = ("get", "put", "post", "delete", "options", "head", "patch")


class _DocModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Info(_DocModel):
    title: str
    version: str | None = None


class Parameter(_DocModel):
    """A single operation parameter."""

    name: str
    location: str = Field(alias="in")  # query / path / header / body / formData
    required: bool = False
    schema_: dict | None = Field(default=None, alias="schema")


class Response(_DocModel):
    """One declared status code of an operation."""

    description: str = ""
    headers: dict[str, dict] = {}
    schema_: dict | None = Field(default=None, alias="schema")


class IntegrationResponse(_DocModel):
    """Backend response routed by one selection pattern."""

    status_code: str = Field(alias="statusCode")
    response_templates: dict[str, str] = Field(default={}, alias="responseTemplates")
    response_parameters: dict[str, str] = Field(default={}, alias="responseParameters")

    @field_validator("status_code", mode="before")
    @classmethod
    def _status_code_as_str(cls, value):
        return str(value)


class Integration(_DocModel):
    """The ``x-amazon-apigateway-integration`` vendor extension."""

    type: str
    http_method: str | None = Field(default=None, alias="httpMethod")
    uri: str | None = None
    credentials: str | None = None
    request_templates: dict[str, str] = Field(default={}, alias="requestTemplates")
    cache_namespace: str | None = Field(default=None, alias="cacheNamespace")
    cache_key_parameters: list[str] = Field(default=[], alias="cacheKeyParameters")
    responses: dict[str, IntegrationResponse] = {}


class Operation(_DocModel):
    """One HTTP verb entry of a path."""

    summary: str = ""
    parameters: list[Parameter] = []
    security: list[dict] | None = None
    consumes: list[str] = []
    responses: dict[str, Response] = {}
    integration: Integration | None = Field(default=None, alias=INTEGRATION_KEY)

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_str(cls, value):
        # YAML reads unquoted status codes as ints
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value


class SwaggerDocument(_DocModel):
    """A Swagger 2.0 document reduced to what the importer needs."""

    info: Info
    base_path: str = Field(default="/", alias="basePath")
    consumes: list[str] = []
    security: list[dict] | None = None
    paths: dict[str, dict[str, Operation]] = {}

    @model_validator(mode="before")
    @classmethod
    def _normalize_paths(cls, data):
        if not isinstance(data, dict) or not isinstance(data.get("paths"), dict):
            return data

        security = data.get("security")
        consumes = data.get("consumes")
        paths = {}
        for path, item in data["paths"].items():
            item = item or {}
            if not isinstance(item, dict):
                # Left for field validation to report
                paths[path] = item
                continue
            shared = item.get("parameters", [])
            operations = {}
            for verb, operation in item.items():
                if not isinstance(verb, str) or verb.lower() not in HTTP_VERBS:
                    continue
                if operation is None:
                    operation = {}
                if not isinstance(operation, dict):
                    operations[verb.lower()] = operation
                    continue
                operation = dict(operation)
                operation["parameters"] = _merge_parameters(shared, operation.get("parameters", []))
                if operation.get("security") is None and security is not None:
                    operation["security"] = security
                if not operation.get("consumes") and consumes:
                    operation["consumes"] = consumes
                operations[verb.lower()] = operation
            paths[path] = operations

        return {**data, "paths": paths}


def _merge_parameters(shared: list[dict], own: list[dict]) -> list[dict]:
    """Path-level parameters apply to every operation unless overridden by (name, in)."""
    if not isinstance(shared, list) or not isinstance(own, list):
        return own
    overridden = {(p.get("name"), p.get("in")) for p in own if isinstance(p, dict)}
    return [p for p in shared if not isinstance(p, dict) or (p.get("name"), p.get("in")) not in overridden] + own
