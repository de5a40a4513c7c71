from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar
from types import TracebackType

import httpx
from pydantic import BaseModel, ValidationError

from ..application.dtos import (
    CreatePayoutRequest,
    MerchantFilter,
    MerchantPage,
    PayoutFilter,
    PayoutPage,
)
from ..domain.entities import Payout, PayoutStats
from ..domain.errors import ApiError
from .http.http_client import AsyncHttpClient

MALFORMED_RESPONSE_MESSAGE = "Unexpected response from the payout service"

M = TypeVar("M", bound=BaseModel)


class AdminPayoutClient:
    """Asynchronous client for the admin payout endpoints.

    Responses are validated into domain models so the rest of the package
    never handles raw JSON. A successful status with a body that cannot be
    read raises ``ApiError`` with code ``MALFORMED_RESPONSE`` and the
    original 2xx status.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # base_url is expected to already contain the API prefix (e.g. /api)
        self._http = AsyncHttpClient(
            base_url, timeout=timeout, token=token, transport=transport
        )

    async def get_payout_stats(self) -> PayoutStats:
        resp = await self._http.get("/admin/payout/stats")
        return _result(resp, PayoutStats)

    async def list_payout_merchants(self, filters: MerchantFilter) -> MerchantPage:
        resp = await self._http.get(
            "/admin/payout/merchants", params=filters.to_query_params()
        )
        try:
            return MerchantPage.from_response(_body(resp), filters)
        except (TypeError, ValueError) as e:
            raise _malformed(resp) from e

    async def list_payouts(self, filters: PayoutFilter) -> PayoutPage:
        resp = await self._http.get("/admin/payouts", params=filters.to_query_params())
        try:
            return PayoutPage.from_response(_body(resp), filters)
        except (TypeError, ValueError) as e:
            raise _malformed(resp) from e

    async def get_payout(self, payout_id: str) -> Payout:
        resp = await self._http.get(f"/admin/payouts/{payout_id}")
        return _result(resp, Payout)

    async def create_payout(self, request: CreatePayoutRequest) -> Payout:
        resp = await self._http.post("/admin/payout", json=request.to_payload())
        return _result(resp, Payout)

    async def delete_payout(self, payout_id: str) -> None:
        await self._http.delete(f"/admin/payouts/{payout_id}")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AdminPayoutClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()


def _malformed(resp: httpx.Response) -> ApiError:
    return ApiError(MALFORMED_RESPONSE_MESSAGE, resp.status_code, "MALFORMED_RESPONSE")


def _body(resp: httpx.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError as e:
        raise _malformed(resp) from e
    if not isinstance(body, dict):
        raise _malformed(resp)
    return body


def _result(resp: httpx.Response, model: Type[M]) -> M:
    body = _body(resp)
    if "result" not in body:
        raise _malformed(resp)
    try:
        return model.model_validate(body["result"])
    except ValidationError as e:
        raise _malformed(resp) from e
