"""Importer session: one document, one remote API.

Holds the loaded document, its resource tree and the remote API id. The id
is set by create or get_api_id and cleared by delete. Failures are raised to
the caller; a failed create leaves the partial API in place until the caller
deletes it.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from apigateway_importer.client import ApiGatewayClient, RemoteClient
from apigateway_importer.config import ImporterOptions, session_logger
from apigateway_importer.driver import ResourceDriver
from apigateway_importer.parser.base import SwaggerDocument
from apigateway_importer.parser.paths import build_tree
from apigateway_importer.parser.swagger import load_document


class ApiImporter:
    """Imports a Swagger document into API Gateway."""

    def __init__(
        self,
        document: str | Path | Mapping | SwaggerDocument,
        options: ImporterOptions | None = None,
        client: RemoteClient | None = None,
    ):
        self.options = options or ImporterOptions()
        self.logger = session_logger(self.options.log_level)
        self.document = load_document(document)
        self.paths = build_tree(self.document.paths)
        self.api_id: str | None = None

        if client is None:
            client = ApiGatewayClient(region=self.options.region, profile=self.options.profile)
        self.driver = ResourceDriver(client, delay=self.options.delay, logger=self.logger)

    @property
    def title(self) -> str:
        return self.document.info.title

    @property
    def stage_name(self) -> str:
        return self.document.base_path.removeprefix("/")

    async def create(self) -> str:
        """Create the API and all of its resources; returns the new API id."""
        self.api_id = await self.driver.create_api(self.title)
        root = await self.driver.get_root_resource(self.api_id)
        try:
            await self.create_resources(root["id"])
        except Exception:
            self.logger.error("Error creating API %s", self.api_id)
            raise

        self.logger.info("API created")
        return self.api_id

    async def create_resources(self, root_id: str) -> None:
        await self.driver.create_resources(self.api_id, root_id, self.paths)

    async def deploy(self) -> dict[str, Any]:
        data = await self.driver.deploy(self.api_id, self.stage_name)
        self.logger.info("Deployed API")
        return data

    async def delete(self) -> None:
        await self.driver.delete_api(self.api_id)
        self.api_id = None

    async def get_api_id(self) -> bool:
        """Look the API up by title; sets ``api_id`` and returns True when found."""
        api_id = await self.driver.find_api_id(self.title)
        if api_id is not None:
            self.api_id = api_id
        return api_id is not None

    async def get_resources(self) -> list[dict]:
        return await self.driver.get_resources(self.api_id)

    async def delete_resources(self) -> str:
        """Remove every resource below the root; returns the root resource id."""
        return await self.driver.delete_resources(self.api_id)

    async def update_api(self) -> None:
        """Replace all resources with the document's. Not atomic."""
        root_id = await self.delete_resources()
        await self.create_resources(root_id)
        self.logger.info("API updated")
