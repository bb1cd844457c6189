"""Tests for the hosted-backend wiring in src.bootstrap."""

from pathlib import Path

import httpx

from config.settings import Settings
from src.bootstrap import build_hosted_container
from src.cm_catalog.infrastructure.persistence import ListingRepository
from src.cm_common.supabase_client import create_http_client
from src.cm_gateway.auth.supabase_auth import SupabaseAuthProvider
from tests.fakes import make_listing


def _settings(tmp_path: Path) -> Settings:
    return Settings(
        SUPABASE_URL="http://backend.test",
        LOCAL_STORAGE_PATH=tmp_path / "local_storage.json",
        PLACEHOLDER_IMAGE="/static/none.png",
    )


class TestHostedContainer:
    def test_wires_hosted_adapters(self, tmp_path: Path) -> None:
        client = create_http_client(
            base_url="http://backend.test", transport=httpx.MockTransport(lambda r: httpx.Response(200))
        )
        container = build_hosted_container(client, _settings(tmp_path))
        assert isinstance(container.provider, SupabaseAuthProvider)
        assert isinstance(container.store._repo, ListingRepository)

    async def test_row_requests_use_provider_token(self, tmp_path: Path) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = create_http_client(
            base_url="http://backend.test", anon_key="anon", transport=httpx.MockTransport(handler)
        )
        container = build_hosted_container(client, _settings(tmp_path))
        await container.store.load(make_listing().campus)

        assert seen[0].headers["Authorization"] == "Bearer anon"

    async def test_placeholder_setting_reaches_row_mapper(self, tmp_path: Path) -> None:
        row = {
            "id": "1", "title": "Lab Coat", "description": "Size M", "price": "450",
            "category": "Miscellaneous", "condition": "Good", "seller_name": "Priya",
            "whatsapp_number": "+919812345678", "seller_email": "priya@iitd.ac.in",
            "campus": "iitd-ac-in", "image_url": None, "created_at": "2026-01-15T10:00:00Z",
        }
        client = create_http_client(
            base_url="http://backend.test",
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[row])),
        )
        container = build_hosted_container(client, _settings(tmp_path))
        listings = await container.store.load("iitd-ac-in")

        assert listings[0].image_ref == "/static/none.png"
