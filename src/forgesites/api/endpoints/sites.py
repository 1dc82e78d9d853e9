"""Site API endpoints."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from forgesites.api.client import ForgeClient
from forgesites.api.exceptions import InvalidArgumentError
from forgesites.api.models import Site

logger = logging.getLogger(__name__)


class ProjectType(str, Enum):
    PHP = "php"
    HTML = "html"
    SYMFONY = "symfony"
    SYMFONY_DEV = "symfony_dev"
    SYMFONY_FOUR = "symfony_four"


class SiteBuilder:
    """Collects the options of a new site until ``on`` sends them.

    Usage: ``await sites.create("example.org").as_php().on(server_id)``
    """

    def __init__(self, client: ForgeClient, domain: str) -> None:
        if not isinstance(domain, str) or not domain.strip():
            raise InvalidArgumentError("Site domain must be a non-empty string")
        self._client = client
        self._domain = domain
        self._project_type: ProjectType | None = None
        self._options: dict[str, Any] = {}

    def with_project_type(self, project_type: ProjectType | str) -> SiteBuilder:
        try:
            self._project_type = ProjectType(project_type)
        except ValueError:
            supported = ", ".join(t.value for t in ProjectType)
            raise InvalidArgumentError(
                f"Unsupported project type {project_type!r} (expected one of: {supported})"
            ) from None
        return self

    def as_php(self) -> SiteBuilder:
        return self.with_project_type(ProjectType.PHP)

    def as_html(self) -> SiteBuilder:
        return self.with_project_type(ProjectType.HTML)

    def as_symfony(self) -> SiteBuilder:
        return self.with_project_type(ProjectType.SYMFONY)

    def as_symfony_dev(self) -> SiteBuilder:
        return self.with_project_type(ProjectType.SYMFONY_DEV)

    def as_symfony_four(self) -> SiteBuilder:
        return self.with_project_type(ProjectType.SYMFONY_FOUR)

    def with_directory(self, directory: str) -> SiteBuilder:
        self._options["directory"] = directory
        return self

    def with_wildcards(self, enabled: bool = True) -> SiteBuilder:
        self._options["wildcards"] = enabled
        return self

    def with_aliases(self, *aliases: str) -> SiteBuilder:
        self._options["aliases"] = list(aliases)
        return self

    def with_php_version(self, version: str) -> SiteBuilder:
        self._options["php_version"] = version
        return self

    def with_database(self, database: str) -> SiteBuilder:
        self._options["database"] = database
        return self

    def payload(self) -> dict[str, Any]:
        if self._project_type is None:
            raise InvalidArgumentError(
                f"No project type selected for {self._domain}; call as_php() or similar"
            )
        return {
            "domain": self._domain,
            "project_type": self._project_type.value,
            **self._options,
        }

    async def on(self, server_id: int) -> Site:
        payload = self.payload()
        data = await self._client.post(f"/servers/{server_id}/sites", data=payload)
        site = Site.from_api(self._client, server_id, data["site"])
        logger.info("Created site %s (%s) on server %s", site.id, site.domain, server_id)
        return site


class SitesAPI:
    def __init__(self, client: ForgeClient) -> None:
        self._client = client

    async def list(self, server_id: int) -> list[Site]:
        data = await self._client.get(f"/servers/{server_id}/sites")
        return [Site.from_api(self._client, server_id, s) for s in data.get("sites", [])]

    async def get(self, server_id: int, site_id: int) -> Site:
        data = await self._client.get(f"/servers/{server_id}/sites/{site_id}")
        return Site.from_api(self._client, server_id, data["site"])

    def create(self, domain: str) -> SiteBuilder:
        return SiteBuilder(self._client, domain)
