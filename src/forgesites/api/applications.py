"""Applications that can be installed onto a site.

Each application carries an ``ApplicationType`` tag. The tag alone decides
which path segment ``Site.install``/``Site.uninstall`` talk to; the
application only knows how to turn itself into a request body.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Union

from forgesites.api.exceptions import InvalidArgumentError


class ApplicationType(str, Enum):
    GIT = "git"
    WORDPRESS = "wordpress"


class GitProvider(str, Enum):
    GITHUB = "github"
    BITBUCKET = "bitbucket"
    GITLAB = "gitlab"
    CUSTOM = "custom"


APPLICATION_PATHS: dict[ApplicationType, str] = {
    ApplicationType.GIT: "git",
    ApplicationType.WORDPRESS: "wordpress",
}


@dataclass(frozen=True)
class GitApplication:
    """A git repository deployed onto a site.

    An instance built with no arguments is enough to uninstall the
    repository; installing one requires a provider and a repository, which
    the ``from_*`` constructors set.
    """

    type: ClassVar[ApplicationType] = ApplicationType.GIT

    provider: GitProvider | None = None
    repository: str | None = None
    branch: str | None = None
    composer: bool | None = None

    @classmethod
    def from_github(cls, repository: str) -> GitApplication:
        return cls(provider=GitProvider.GITHUB, repository=repository)

    @classmethod
    def from_bitbucket(cls, repository: str) -> GitApplication:
        return cls(provider=GitProvider.BITBUCKET, repository=repository)

    @classmethod
    def from_gitlab(cls, repository: str) -> GitApplication:
        return cls(provider=GitProvider.GITLAB, repository=repository)

    @classmethod
    def from_git(cls, url: str) -> GitApplication:
        """Self-hosted remote, e.g. ``git@example.org:user/repo.git``."""
        return cls(provider=GitProvider.CUSTOM, repository=url)

    def using_branch(self, branch: str) -> GitApplication:
        return replace(self, branch=branch)

    def with_composer(self, enabled: bool = True) -> GitApplication:
        return replace(self, composer=enabled)

    def without_composer(self) -> GitApplication:
        return self.with_composer(False)

    @property
    def is_configured(self) -> bool:
        return self.provider is not None and bool(self.repository)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.provider is not None:
            payload["provider"] = self.provider.value
        if self.repository:
            payload["repository"] = self.repository
        if self.branch:
            payload["branch"] = self.branch
        if self.composer is not None:
            payload["composer"] = self.composer
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> GitApplication:
        provider = data.get("provider")
        try:
            git_provider = GitProvider(provider) if provider else None
        except ValueError:
            supported = ", ".join(p.value for p in GitProvider)
            raise InvalidArgumentError(
                f"Unsupported git provider {provider!r} (expected one of: {supported})"
            ) from None
        return cls(
            provider=git_provider,
            repository=data.get("repository"),
            branch=data.get("branch"),
            composer=data.get("composer"),
        )


@dataclass(frozen=True)
class WordPressApplication:
    """WordPress installed onto a site, backed by an existing database."""

    type: ClassVar[ApplicationType] = ApplicationType.WORDPRESS

    database: str | None = None
    user: str | None = None

    @classmethod
    def using_database(cls, database: str, user: str) -> WordPressApplication:
        return cls(database=database, user=user)

    @property
    def is_configured(self) -> bool:
        return bool(self.database) and bool(self.user)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.database:
            payload["database"] = self.database
        if self.user:
            payload["user"] = self.user
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> WordPressApplication:
        return cls(database=data.get("database"), user=data.get("user"))


Application = Union[GitApplication, WordPressApplication]


def application_path(app: Application) -> str:
    """Path segment under ``servers/{server}/sites/{site}`` for *app*."""
    return APPLICATION_PATHS[app.type]
