"""Translate the integration extension into putIntegration / putIntegrationResponse requests."""

from apigateway_importer.parser.base import Integration, Operation

from .method import request_location
from .models import IntegrationRequest, IntegrationResponseRequest

DEFAULT_SELECTION = "default"
PASS_THROUGH_TYPES = {"HTTP", "HTTP_PROXY"}


def integration_request(operation: Operation, verb: str, resource_id: str | None, api_id: str | None) -> IntegrationRequest:
    integration: Integration = operation.integration
    integration_type = integration.type.upper()
    cache_names = {key.split(".")[-1] for key in integration.cache_key_parameters}

    request_parameters = {}
    cache_key_parameters = []
    for param in operation.parameters:
        if param.location == "body":
            continue

        key = f"request.{request_location(param)}.{param.name}"
        if param.name in cache_names:
            cache_key_parameters.append(f"method.{key}")
        if integration_type in PASS_THROUGH_TYPES:
            request_parameters[f"integration.{key}"] = f"method.{key}"

    return IntegrationRequest(
        rest_api_id=api_id,
        resource_id=resource_id,
        http_method=verb,
        type=integration_type,
        integration_http_method=integration.http_method,
        uri=integration.uri,
        credentials=integration.credentials,
        request_parameters=request_parameters,
        request_templates=integration.request_templates,
        cache_namespace=integration.cache_namespace,
        cache_key_parameters=cache_key_parameters,
    )


def integration_responses(operation: Operation, verb: str, resource_id: str | None, api_id: str | None) -> list[IntegrationResponseRequest]:
    """One request per selection pattern; ``default`` is sent without a pattern."""
    return [
        IntegrationResponseRequest(
            rest_api_id=api_id,
            resource_id=resource_id,
            http_method=verb,
            status_code=response.status_code,
            selection_pattern=None if pattern == DEFAULT_SELECTION else pattern,
            response_templates=response.response_templates,
            response_parameters=response.response_parameters,
        )
        for pattern, response in operation.integration.responses.items()
    ]
