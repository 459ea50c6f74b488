"""API Gateway control-plane client.

The importer talks to the control plane through one coroutine,
``call(operation, params)``. ApiGatewayClient implements it on top of boto3,
running each blocking SDK call in a worker thread.
"""

import asyncio
import re
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from apigateway_importer.errors import RemoteOperationError


class RemoteClient(Protocol):
    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]: ...


def to_snake(operation: str) -> str:
    """``createRestApi`` -> ``create_rest_api``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", operation).lower()


class ApiGatewayClient:
    """boto3 ``apigateway`` client behind the RemoteClient interface."""

    def __init__(self, region: str | None = None, profile: str | None = None, client=None):
        if client is None:
            session = boto3.session.Session(region_name=region, profile_name=profile)
            client = session.client("apigateway")
        self.client = client

    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        method = getattr(self.client, to_snake(operation))
        try:
            response = await asyncio.to_thread(method, **params)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise RemoteOperationError(
                operation,
                error.get("Code", "ClientError"),
                error.get("Message", str(e)),
                status=e.response.get("ResponseMetadata", {}).get("HTTPStatusCode"),
            ) from e
        except ParamValidationError as e:
            raise RemoteOperationError(operation, "MissingRequiredParameter", str(e)) from e
        except BotoCoreError as e:
            raise RemoteOperationError(operation, type(e).__name__, str(e)) from e

        response.pop("ResponseMetadata", None)
        return response
