"""Pydantic models for Forge API responses."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from forgesites.api.applications import Application, application_path
from forgesites.api.client import ForgeClient
from forgesites.api.exceptions import ForgeClientError, InvalidArgumentError

logger = logging.getLogger(__name__)

# Fields the Forge API accepts on PUT servers/{server}/sites/{site}.
UPDATABLE_FIELDS = frozenset({"name", "directory", "wildcards", "aliases", "php_version"})


class _ForgeModel(BaseModel):
    """Base model that ignores extra fields from the API."""
    model_config = ConfigDict(extra="ignore")


def _none_to_list(v: list | None) -> list:
    """Coerce None to empty list for API fields that may return null."""
    return v if v is not None else []


def _none_to_false(v: bool | None) -> bool:
    """Coerce None to False for API fields that may return null."""
    return v if v is not None else False


class Site(_ForgeModel):
    """A site on a Forge server, as last returned by the API.

    Sites produced by ``SitesAPI`` are bound to the client and server they
    came from, so they can update, delete and (un)install applications on
    themselves. Attribute values only change after a successful ``update``
    or ``refresh``; ``id`` never changes.
    """

    id: int = Field(frozen=True)
    server_id: int | None = None
    name: str
    directory: str | None = None
    wildcards: bool = False
    status: str | None = None
    repository: str | None = None
    repository_provider: str | None = None
    repository_branch: str | None = None
    repository_status: str | None = None
    quick_deploy: bool = False
    project_type: str | None = None
    app: str | None = None
    app_status: str | None = None
    hipchat_room: str | None = None
    slack_channel: str | None = None
    created_at: str | None = None
    php_version: str | None = None
    deployment_url: str | None = None
    aliases: list[str] = Field(default_factory=list)
    is_secured: bool = False
    tags: list[dict] = Field(default_factory=list)

    _client: ForgeClient | None = PrivateAttr(default=None)

    @field_validator("aliases", "tags", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)

    @field_validator("quick_deploy", "wildcards", "is_secured", mode="before")
    @classmethod
    def _coerce_bools(cls, v):
        return _none_to_false(v)

    @classmethod
    def from_api(cls, client: ForgeClient, server_id: int, data: dict[str, Any]) -> Site:
        """Build a site from a decoded ``site`` object and bind it."""
        return cls(**data).bind(client, server_id)

    def bind(self, client: ForgeClient, server_id: int) -> Site:
        self._client = client
        if self.server_id is None:
            self.server_id = server_id
        return self

    @property
    def domain(self) -> str:
        return self.name

    @property
    def path(self) -> str:
        return f"/servers/{self.server_id}/sites/{self.id}"

    def _bound_client(self) -> ForgeClient:
        if self._client is None or self.server_id is None:
            raise ForgeClientError(f"Site {self.id} is not bound to a Forge client")
        return self._client

    def _replace_state(self, data: dict[str, Any]) -> None:
        fresh = type(self)(**data)
        for name in type(self).model_fields:
            if name == "id":
                continue
            if name == "server_id" and fresh.server_id is None:
                continue
            setattr(self, name, getattr(fresh, name))

    async def update(self, payload: dict[str, Any]) -> bool:
        """PUT *payload* as-is and refresh this site from the response.

        Raises InvalidArgumentError without sending anything when *payload*
        holds none of ``UPDATABLE_FIELDS``.
        """
        if not payload or UPDATABLE_FIELDS.isdisjoint(payload):
            raise InvalidArgumentError(
                "Update payload must contain at least one of: "
                + ", ".join(sorted(UPDATABLE_FIELDS))
            )
        client = self._bound_client()
        data = await client.put(self.path, data=dict(payload))
        if data.get("site"):
            self._replace_state(data["site"])
        else:
            logger.warning("Update of site %s returned no site object; local state not refreshed", self.id)
        logger.info("Updated site %s (%s)", self.id, ", ".join(payload))
        return True

    async def refresh(self) -> Site:
        client = self._bound_client()
        data = await client.get(self.path)
        self._replace_state(data["site"])
        return self

    async def install(self, app: Application) -> bool:
        """Install *app* on this site.

        The install runs asynchronously on the server; call ``refresh`` to
        follow ``app_status``/``repository_status``.
        """
        if not app.is_configured:
            raise InvalidArgumentError(
                f"Cannot install an unconfigured {app.type.value} application"
            )
        client = self._bound_client()
        await client.post(f"{self.path}/{application_path(app)}", data=app.to_payload())
        logger.info("Installing %s application on site %s", app.type.value, self.id)
        return True

    async def uninstall(self, app: Application) -> bool:
        client = self._bound_client()
        await client.delete(f"{self.path}/{application_path(app)}")
        logger.info("Uninstalled %s application from site %s", app.type.value, self.id)
        return True

    async def delete(self) -> bool:
        client = self._bound_client()
        await client.delete(self.path)
        logger.info("Deleted site %s on server %s", self.id, self.server_id)
        return True
