"""Object graph for one running client: one session, one listing store."""

from dataclasses import dataclass

import httpx

from config.settings import Settings, settings
from src.cm_campus.domain.resolver import is_campus_email
from src.cm_catalog.application.service import CatalogApplicationService
from src.cm_catalog.application.store import ListingStore
from src.cm_catalog.domain.repository import ListingRepositoryProtocol
from src.cm_catalog.infrastructure.persistence import ListingRepository
from src.cm_gateway.auth.local_storage import LocalStorage
from src.cm_gateway.auth.provider import AuthProviderProtocol
from src.cm_gateway.auth.supabase_auth import SupabaseAuthProvider
from src.cm_gateway.session.controller import SessionController
from src.cm_gateway.user.service import AuthService


@dataclass
class AppContainer:
    provider: AuthProviderProtocol
    store: ListingStore
    controller: SessionController
    auth: AuthService
    catalog: CatalogApplicationService


def build_container(
    provider: AuthProviderProtocol,
    repo: ListingRepositoryProtocol,
    storage: LocalStorage,
    config: Settings = settings,
) -> AppContainer:
    store = ListingStore(repo, placeholder_image=config.PLACEHOLDER_IMAGE)
    return AppContainer(
        provider=provider,
        store=store,
        controller=SessionController(provider, store, storage),
        auth=AuthService(provider, oauth_domain_hint=config.OAUTH_DOMAIN_HINT),
        catalog=CatalogApplicationService(store, currency=config.CURRENCY_SYMBOL),
    )


def build_hosted_container(
    client: httpx.AsyncClient, config: Settings = settings
) -> AppContainer:
    """Container wired to the hosted auth + row API."""
    storage = LocalStorage(config.LOCAL_STORAGE_PATH)
    provider = SupabaseAuthProvider(
        client,
        storage,
        redirect_url=config.OAUTH_REDIRECT_URL,
        email_gate=is_campus_email,
    )
    repo = ListingRepository(
        client, access_token=provider.access_token, placeholder_image=config.PLACEHOLDER_IMAGE
    )
    return build_container(provider, repo, storage, config)
