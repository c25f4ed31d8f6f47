"""Provider Factory — builds the single Provider instance for the process.

Invariants:
    - Exactly one provider per process, chosen by settings.provider
    - The local provider requires an initialized DatabaseSessionManager
    - Callers own the returned provider and must await provider.close() on shutdown
"""

import logging

from app.config import Settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.github_client import GitHubContentClient, build_github_http_client
from app.infrastructure.local_provider import LocalProvider
from app.infrastructure.remote_provider import RemoteProvider, build_remote_http_client

logger = logging.getLogger(__name__)


def build_github_client(settings: Settings) -> GitHubContentClient:
    return GitHubContentClient(
        settings.github_raw_base_url,
        settings.github_default_branch,
        build_github_http_client(settings.github_timeout_seconds),
    )


def build_provider(
    settings: Settings, db: DatabaseSessionManager | None = None,
) -> LocalProvider | RemoteProvider:
    """Instantiate the configured provider."""
    github = build_github_client(settings)
    if settings.provider == "remote":
        logger.info(
            f"Using remote provider at {settings.remote_provider_url}",
            extra={"provider": "remote"},
        )
        return RemoteProvider(
            build_remote_http_client(
                settings.remote_provider_url,
                settings.remote_provider_timeout_seconds,
            ),
            github,
        )

    if db is None:
        raise RuntimeError("Local provider requires an initialized database")
    logger.info("Using local provider", extra={"provider": "local"})
    return LocalProvider(db, github)
