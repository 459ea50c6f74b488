"""Shared fixtures: an in-memory API Gateway that records every call."""

import copy
import itertools
from pathlib import Path

import pytest

from apigateway_importer.config import ImporterOptions
from apigateway_importer.errors import RemoteOperationError
from apigateway_importer.importer import ApiImporter

FIXTURES = Path(__file__).parent / "fixtures"

UNSCOPED_OPERATIONS = {"getRestApis", "createRestApi"}


def throttled(operation: str = "createResource") -> RemoteOperationError:
    return RemoteOperationError(operation, "TooManyRequestsException", "Too Many Requests", status=429)


class FakeGateway:
    """RemoteClient double holding APIs and resources in dicts.

    ``calls`` lists every (operation, params) in order, including failed ones.
    Errors queued with ``fail`` are raised by the next calls of that operation.
    """

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.apis: dict[str, dict] = {}
        self.resources: dict[str, dict[str, dict]] = {}
        self.failures: dict[str, list[Exception]] = {}
        self._ids = itertools.count(1)

    def fail(self, operation: str, *errors: Exception) -> None:
        self.failures.setdefault(operation, []).extend(errors)

    def operations(self, name: str | None = None) -> list:
        if name is None:
            return [op for op, _ in self.calls]
        return [params for op, params in self.calls if op == name]

    def add_api(self, name: str) -> str:
        api_id = f"api{next(self._ids)}"
        self.apis[api_id] = {"id": api_id, "name": name}
        root_id = f"root{next(self._ids)}"
        self.resources[api_id] = {root_id: {"id": root_id, "path": "/"}}
        return api_id

    def add_resource(self, api_id: str, parent_id: str, path_part: str) -> str:
        resources = self.resources[api_id]
        parent = resources[parent_id]
        resource_id = f"res{next(self._ids)}"
        path = parent["path"].rstrip("/") + "/" + path_part
        resources[resource_id] = {"id": resource_id, "parentId": parent_id, "pathPart": path_part, "path": path}
        return resource_id

    def root_id(self, api_id: str) -> str:
        return next(r["id"] for r in self.resources[api_id].values() if r["path"] == "/")

    def paths(self, api_id: str) -> list[str]:
        return sorted(r["path"] for r in self.resources[api_id].values())

    async def call(self, operation: str, params: dict) -> dict:
        self.calls.append((operation, params))

        queued = self.failures.get(operation)
        if queued:
            raise queued.pop(0)

        if operation not in UNSCOPED_OPERATIONS and "restApiId" not in params:
            raise RemoteOperationError(operation, "MissingRequiredParameter", "Missing required key 'restApiId' in params")
        if "restApiId" in params and params["restApiId"] not in self.apis:
            raise RemoteOperationError(operation, "NotFoundException", "Invalid API identifier specified", status=404)

        return getattr(self, f"_{operation}")(**params)

    def _getRestApis(self, limit, position=None):
        return {"items": list(self.apis.values())}

    def _createRestApi(self, name):
        api_id = self.add_api(name)
        return dict(self.apis[api_id])

    def _deleteRestApi(self, restApiId):
        del self.apis[restApiId]
        del self.resources[restApiId]
        return {}

    def _getResources(self, restApiId, limit, position=None):
        return {"items": copy.deepcopy(list(self.resources[restApiId].values()))}

    def _createResource(self, restApiId, parentId, pathPart):
        resource_id = self.add_resource(restApiId, parentId, pathPart)
        return dict(self.resources[restApiId][resource_id])

    def _deleteResource(self, restApiId, resourceId):
        resources = self.resources[restApiId]
        doomed = {resourceId}
        changed = True
        while changed:
            children = {r["id"] for r in resources.values() if r.get("parentId") in doomed}
            changed = not children <= doomed
            doomed |= children
        for rid in doomed:
            del resources[rid]
        return {}

    def _putMethod(self, restApiId, resourceId, httpMethod, **params):
        resource = self.resources[restApiId][resourceId]
        resource.setdefault("resourceMethods", {})[httpMethod] = {}
        return {"httpMethod": httpMethod, **params}

    def _deleteMethod(self, restApiId, resourceId, httpMethod):
        del self.resources[restApiId][resourceId]["resourceMethods"][httpMethod]
        return {}

    def _putIntegration(self, restApiId, resourceId, httpMethod, **params):
        return {"type": params["type"]}

    def _putMethodResponse(self, restApiId, resourceId, httpMethod, statusCode, **params):
        return {"statusCode": statusCode}

    def _putIntegrationResponse(self, restApiId, resourceId, httpMethod, statusCode, **params):
        return {"statusCode": statusCode}

    def _createDeployment(self, restApiId, stageName):
        return {"id": f"dep{next(self._ids)}", "stageName": stageName}


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def importer(gateway) -> ApiImporter:
    return ApiImporter(FIXTURES / "swagger.yaml", ImporterOptions(log_level="silent", delay=0.001), client=gateway)
