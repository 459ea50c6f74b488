"""Resource reconciliation driver.

Creates, lists and deletes the remote objects of one REST API. Every remote
call goes through the rate-limit retry, and calls are issued one at a time:
parents before children, siblings in tree order, and per verb
method -> integration -> method responses -> integration responses.
"""

import logging
from typing import Any

from apigateway_importer.client import RemoteClient
from apigateway_importer.errors import NameCollisionError, RootResourceMissingError
from apigateway_importer.parser.base import Operation
from apigateway_importer.parser.paths import ROOT_PATH, ResourceNode, ResourceTree
from apigateway_importer.retry import call_with_retry
from apigateway_importer.translator.integration import integration_request, integration_responses
from apigateway_importer.translator.method import method_request, method_responses

PAGE_SIZE = 500


def _params(**kwargs) -> dict[str, Any]:
    # Unset ids are left out so the control plane reports them missing
    return {key: value for key, value in kwargs.items() if value is not None}


class ResourceDriver:
    """Reconciles a resource tree against one remote control plane."""

    def __init__(self, client: RemoteClient, delay: float = 0.3, logger: logging.Logger | None = None):
        self.client = client
        self.delay = delay
        self.logger = logger or logging.getLogger(__name__)

    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        return await call_with_retry(self.client, operation, params, self.delay, log=self.logger)

    async def _paged(self, operation: str, params: dict[str, Any]) -> list[dict]:
        items = []
        position = None
        while True:
            data = await self.call(operation, _params(limit=PAGE_SIZE, position=position, **params))
            items.extend(data.get("items", []))
            position = data.get("position")
            if not position:
                return items

    # APIs

    async def list_apis(self) -> list[dict]:
        return await self._paged("getRestApis", {})

    async def find_api_id(self, name: str) -> str | None:
        """Id of the API whose name equals ``name`` exactly, or None."""
        for api in await self.list_apis():
            if api.get("name") == name:
                return api["id"]
        return None

    async def create_api(self, name: str) -> str:
        if await self.find_api_id(name) is not None:
            raise NameCollisionError(name)

        self.logger.info("Creating API: %s", name)
        data = await self.call("createRestApi", {"name": name})
        self.logger.info("API created: %s", data["id"])
        return data["id"]

    async def delete_api(self, api_id: str | None) -> None:
        self.logger.info("Deleting API: %s", api_id)
        await self.call("deleteRestApi", _params(restApiId=api_id))

    async def deploy(self, api_id: str | None, stage_name: str) -> dict[str, Any]:
        self.logger.info("Deploying API %s to stage: %s", api_id, stage_name)
        return await self.call("createDeployment", _params(restApiId=api_id, stageName=stage_name))

    # Resources

    async def get_resources(self, api_id: str | None) -> list[dict]:
        return await self._paged("getResources", _params(restApiId=api_id))

    @staticmethod
    def find_root(resources: list[dict], api_id: str | None) -> dict:
        roots = [item for item in resources if item.get("path") == ROOT_PATH]
        if not roots:
            raise RootResourceMissingError(api_id)
        return roots[0]

    async def get_root_resource(self, api_id: str | None) -> dict:
        self.logger.debug("Getting root resource for API %s", api_id)
        return self.find_root(await self.get_resources(api_id), api_id)

    async def create_resources(self, api_id: str, parent_id: str, tree: ResourceTree) -> None:
        """Materialize ``tree`` under ``parent_id``, depth first, in tree order."""
        for path_part, node in tree.items():
            if path_part == ROOT_PATH:
                await self.install_methods(api_id, parent_id, node)
                continue

            self.logger.info("Creating resource: %s", path_part)
            resource = await self.call(
                "createResource",
                {"restApiId": api_id, "parentId": parent_id, "pathPart": path_part},
            )
            await self.install_methods(api_id, resource["id"], node)

            if node.has_children:
                await self.create_resources(api_id, resource["id"], node.paths)

    async def delete_resources(self, api_id: str | None) -> str:
        """Strip the root's methods and delete every level-one resource.

        Deleting a resource removes its descendants, so deeper levels need no
        calls. Returns the root resource id.
        """
        resources = await self.get_resources(api_id)
        root = self.find_root(resources, api_id)

        for verb in root.get("resourceMethods", {}):
            self.logger.info("Deleting method: %s /", verb)
            await self.call("deleteMethod", {"restApiId": api_id, "resourceId": root["id"], "httpMethod": verb})

        for resource in resources:
            if resource.get("parentId") != root["id"]:
                continue
            self.logger.info("Deleting resource: %s", resource.get("path"))
            await self.call("deleteResource", {"restApiId": api_id, "resourceId": resource["id"]})

        return root["id"]

    # Methods

    async def install_methods(self, api_id: str, resource_id: str, node: ResourceNode) -> None:
        for verb, operation in node.methods.items():
            await self.install_method(api_id, resource_id, verb, operation)

    async def install_method(self, api_id: str, resource_id: str, verb: str, operation: Operation) -> None:
        self.logger.info("Creating method: %s", verb)
        await self.put(method_request(operation, verb, resource_id, api_id))

        if operation.integration is None:
            self.logger.warning("No integration declared for %s, skipping integration", verb)
        else:
            self.logger.info("Creating integration: %s", verb)
            await self.put(integration_request(operation, verb, resource_id, api_id))

        for request in method_responses(operation, verb, resource_id, api_id):
            self.logger.info("Creating method response: %s", request.status_code)
            await self.put(request)

        if operation.integration is not None:
            for request in integration_responses(operation, verb, resource_id, api_id):
                self.logger.info("Creating integration response: %s", request.selection_pattern or "default")
                await self.put(request)

    async def put(self, request) -> dict[str, Any]:
        return await self.call(request.operation, request.to_params())
