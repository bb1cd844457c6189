"""ListingRepository — concrete implementation of ListingRepositoryProtocol.

Talks to the hosted row API (PostgREST) over httpx. Row-level security on
the `products` table is the authority on who may read or update a row, so
every request carries the signed-in user's access token.

A PATCH that RLS filters out still answers 200 with an empty body; that is
reported as a rejected update.
"""

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from src.cm_catalog.domain.models import Listing, NewListing
from src.cm_common.datetime_utils import parse_timestamp
from src.cm_common.enums import Category, Condition
from src.cm_common.errors import ListingNotFoundError, PersistenceError
from src.cm_common.money import PAISE_PER_RUPEE, paise_to_amount
from src.cm_common.supabase_client import bearer

_TABLE_PATH = "/rest/v1/products"

_COLUMNS = (
    "id,title,description,price,category,condition,seller_name,"
    "whatsapp_number,seller_email,campus,image_url,created_at,sold"
)

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _price_to_paise(value: Any) -> int:
    # numeric columns come back as JSON numbers or strings; go through str
    # so 799.5 never passes through binary float arithmetic
    try:
        paise = Decimal(str(value)) * PAISE_PER_RUPEE
    except InvalidOperation:
        raise ValueError(f"Not a numeric price: {value!r}") from None
    if paise != paise.to_integral_value():
        raise ValueError(f"Price has sub-paise precision: {value}")
    return int(paise)


def row_to_listing(row: dict[str, Any], placeholder_image: str = "/placeholder.svg") -> Listing:
    return Listing(
        id=str(row["id"]),
        title=row["title"],
        description=row["description"],
        price=_price_to_paise(row["price"]),
        category=Category(row["category"]),
        condition=Condition(row["condition"]),
        seller_name=row["seller_name"],
        seller_contact=row["whatsapp_number"],
        seller_email=row.get("seller_email") or "",
        campus=row["campus"],
        image_ref=row.get("image_url") or placeholder_image,
        created_at=parse_timestamp(row["created_at"]),
        sold=bool(row.get("sold", False)),
    )


def listing_to_row(listing: NewListing) -> dict[str, Any]:
    return {
        "title": listing.title,
        "description": listing.description,
        "price": paise_to_amount(listing.price),
        "category": listing.category.value,
        "condition": listing.condition.value,
        "seller_name": listing.seller_name,
        "whatsapp_number": listing.seller_contact,
        "seller_email": listing.seller_email,
        "campus": listing.campus,
        "image_url": listing.image_ref,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ListingRepository:
    """Row API client for the `products` table."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_token: Callable[[], str | None],
        placeholder_image: str = "/placeholder.svg",
    ) -> None:
        self._client = client
        self._access_token = access_token
        self._placeholder_image = placeholder_image

    async def list_by_campus(self, campus: str) -> list[Listing]:
        rows = await self._request(
            "GET",
            params={
                "select": _COLUMNS,
                "campus": f"eq.{campus}",
                "order": "created_at.desc",
            },
        )
        return [self._to_listing(row) for row in rows]

    async def insert(self, listing: NewListing) -> Listing:
        rows = await self._request(
            "POST",
            params={"select": _COLUMNS},
            json=[listing_to_row(listing)],
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise PersistenceError(3006, "Insert returned no row")
        return self._to_listing(rows[0])

    async def update_sold(self, listing_id: str, sold: bool) -> None:
        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{listing_id}", "select": "id"},
            json={"sold": sold},
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            # missing row, or row-level security filtered it out
            raise ListingNotFoundError(listing_id)

    def _to_listing(self, row: Any) -> Listing:
        try:
            return row_to_listing(row, self._placeholder_image)
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(3005, f"Malformed listing row: {exc!r}") from exc

    async def _request(
        self,
        method: str,
        params: dict[str, str],
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        request_headers = bearer(self._access_token(), self._client.headers.get("apikey"))
        if headers:
            request_headers.update(headers)
        try:
            response = await self._client.request(
                method, _TABLE_PATH, params=params, json=json, headers=request_headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PersistenceError(
                3007, f"Row API error {exc.response.status_code}: {_error_detail(exc.response)}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(3008, f"Row API unreachable: {exc}") from exc
        try:
            body = response.json()
        except ValueError as exc:
            raise PersistenceError(3005, "Row API answered with a non-JSON body") from exc
        if not isinstance(body, list):
            raise PersistenceError(3005, f"Expected a row array, got {type(body).__name__}")
        return body


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
