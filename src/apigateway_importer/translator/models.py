"""Immutable request values for the API Gateway control plane.

Field names are snake_case; ``to_params`` emits the camelCase keyword
arguments the remote operations expect, dropping unset values.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RemoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    operation: str = ""

    rest_api_id: str | None
    resource_id: str | None
    http_method: str

    def to_params(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"operation"})


class MethodRequest(RemoteRequest):
    operation: str = "putMethod"

    authorization_type: str = "NONE"
    api_key_required: bool = False
    request_parameters: dict[str, bool] = {}
    request_models: dict[str, str] = {}


class IntegrationRequest(RemoteRequest):
    operation: str = "putIntegration"

    type: str
    integration_http_method: str | None = None
    uri: str | None = None
    credentials: str | None = None
    request_parameters: dict[str, str] = {}
    request_templates: dict[str, str] = {}
    cache_namespace: str | None = None
    cache_key_parameters: list[str] = []


class MethodResponseRequest(RemoteRequest):
    operation: str = "putMethodResponse"

    status_code: str
    response_parameters: dict[str, bool] = {}
    response_models: dict[str, str] = {}


class IntegrationResponseRequest(RemoteRequest):
    operation: str = "putIntegrationResponse"

    status_code: str
    selection_pattern: str | None = None
    response_templates: dict[str, str] = {}
    response_parameters: dict[str, str] = {}
