"""Translate an operation into putMethod / putMethodResponse requests."""

from apigateway_importer.parser.base import Operation, Parameter, Response

from .models import MethodRequest, MethodResponseRequest

DEFAULT_CONTENT_TYPE = "application/json"


def request_location(param: Parameter) -> str:
    """API Gateway calls the query string ``querystring``."""
    return "querystring" if param.location == "query" else param.location


def ref_name(schema: dict | None) -> str | None:
    """Last segment of a ``$ref``, e.g. ``#/definitions/User`` -> ``User``."""
    if not schema or "$ref" not in schema:
        return None
    return schema["$ref"].split("/")[-1]


def authorization(security: list[dict] | None) -> tuple[str, bool]:
    authorization_type = "NONE"
    api_key_required = False

    for item in security or []:
        if "sigv4" in item:
            authorization_type = "AWS_IAM"
        if "api_key" in item:
            api_key_required = True

    return authorization_type, api_key_required


def method_request(operation: Operation, verb: str, resource_id: str | None, api_id: str | None) -> MethodRequest:
    authorization_type, api_key_required = authorization(operation.security)
    content_type = operation.consumes[0] if operation.consumes else DEFAULT_CONTENT_TYPE

    request_models = {}
    request_parameters = {}
    for param in operation.parameters:
        if param.location == "body":
            request_models[content_type] = ref_name(param.schema_) or param.name
        else:
            request_parameters[f"method.request.{request_location(param)}.{param.name}"] = param.required

    return MethodRequest(
        rest_api_id=api_id,
        resource_id=resource_id,
        http_method=verb,
        authorization_type=authorization_type,
        api_key_required=api_key_required,
        request_parameters=request_parameters,
        request_models=request_models,
    )


def method_response(response: Response, status_code: str, verb: str, resource_id: str | None, api_id: str | None) -> MethodResponseRequest:
    model = ref_name(response.schema_)

    return MethodResponseRequest(
        rest_api_id=api_id,
        resource_id=resource_id,
        http_method=verb,
        status_code=status_code,
        response_parameters={f"method.response.header.{header}": True for header in response.headers},
        response_models={DEFAULT_CONTENT_TYPE: model} if model else {},
    )


def method_responses(operation: Operation, verb: str, resource_id: str | None, api_id: str | None) -> list[MethodResponseRequest]:
    """One request per declared status code, in document order."""
    return [
        method_response(response, status_code, verb, resource_id, api_id)
        for status_code, response in operation.responses.items()
    ]
