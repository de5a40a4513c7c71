"""Write-side use cases: creating and deleting payouts."""

from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram

from ...domain.entities import MerchantAggregate, Payout
from ...domain.errors import (
    ApiError,
    CommandError,
    CommandInFlightError,
    DeleteNotAllowedError,
)
from ...domain.shared.admin_client_protocol import AdminPayoutClientProtocol
from ...domain.status import is_deletable
from ...infrastructure.query_cache import PayoutKeys, QueryCache
from ..dtos import CreatePayoutRequest, PayoutDraft
from .payout_validators import validate_or_raise

logger = logging.getLogger(__name__)

payout_commands_total = Counter(
    "payout_commands_total",
    "Total payout commands issued",
    ["command", "status"],
)

payout_command_duration_seconds = Histogram(
    "payout_command_duration_seconds",
    "Wall time of a payout command round trip",
    ["command", "status"],
)


class PayoutCommandService:
    """Issues create/delete commands against the payout ledger.

    Commands are never retried; no idempotency key is sent. At most one
    create and one delete may be pending at a time; ``is_creating`` and
    ``is_deleting`` mirror the disabled state of the triggering controls.
    """

    def __init__(self, client: AdminPayoutClientProtocol, cache: QueryCache) -> None:
        self.client = client
        self.cache = cache
        self._creating = False
        self._deleting = False

    @property
    def is_creating(self) -> bool:
        return self._creating

    @property
    def is_deleting(self) -> bool:
        return self._deleting

    async def create(self, request: CreatePayoutRequest) -> Payout:
        """Submit a validated payout request.

        Raises:
            CommandInFlightError: If another create is still pending.
            CommandError: If the service rejects the payout or its reply is
                unreadable. Cached reads are dropped in the latter case.
        """
        if self._creating:
            raise CommandInFlightError("A payout is already being created")
        self._creating = True
        start_time = time.perf_counter()
        try:
            payout = await self.client.create_payout(request)
        except ApiError as e:
            self._observe("create", _failure_status(e), start_time)
            self._invalidate_if_accepted(e)
            logger.warning(
                "Payout creation for shop %s rejected: %s", request.shop_id, e.message
            )
            raise CommandError.from_api_error(e) from e
        finally:
            self._creating = False

        self._observe("create", "success", start_time)
        self._invalidate()
        logger.info(
            "Created payout %s for shop %s: %s on %s",
            payout.id,
            request.shop_id,
            request.amount,
            request.network,
        )
        return payout

    async def create_from_draft(
        self, merchant: MerchantAggregate, draft: PayoutDraft
    ) -> Payout:
        """Validate a draft and submit it.

        Raises:
            PayoutValidationError: If the draft fails validation; nothing is sent.
        """
        request = validate_or_raise(merchant, draft)
        return await self.create(request)

    async def delete(self, payout: Payout, *, confirmed: bool = False) -> None:
        """Delete a pending payout after the operator confirmed it.

        The server remains the authority on deletability; this only refuses
        requests the console would never offer.

        Raises:
            DeleteNotAllowedError: If not confirmed or the payout is not pending.
            CommandInFlightError: If another delete is still pending.
            CommandError: If the service rejects the deletion.
        """
        if not confirmed:
            raise DeleteNotAllowedError("Payout deletion must be confirmed")
        if not is_deletable(payout.status):
            raise DeleteNotAllowedError(
                f"Payout {payout.id} is {payout.status}; only pending payouts can be deleted"
            )
        await self.delete_by_id(payout.id)

    async def delete_by_id(self, payout_id: str) -> None:
        if self._deleting:
            raise CommandInFlightError("A payout is already being deleted")
        self._deleting = True
        start_time = time.perf_counter()
        try:
            await self.client.delete_payout(payout_id)
        except ApiError as e:
            self._observe("delete", _failure_status(e), start_time)
            self._invalidate_if_accepted(e)
            logger.warning("Deleting payout %s rejected: %s", payout_id, e.message)
            raise CommandError.from_api_error(e) from e
        finally:
            self._deleting = False

        self._observe("delete", "success", start_time)
        self._invalidate()
        logger.info("Deleted payout %s", payout_id)

    def _invalidate_if_accepted(self, error: ApiError) -> None:
        # A 2xx with an unreadable body means the ledger did change.
        if _accepted(error):
            logger.warning(
                "Payout command accepted but response unreadable: %s", error.message
            )
            self._invalidate()

    def _invalidate(self) -> None:
        # Merchant totals, history and stats all change with any payout command.
        dropped = self.cache.invalidate(PayoutKeys.PAYOUTS)
        logger.debug("Invalidated %d cached payout reads", dropped)

    @staticmethod
    def _observe(command: str, status: str, start_time: float) -> None:
        payout_commands_total.labels(command=command, status=status).inc()
        elapsed = time.perf_counter() - start_time
        payout_command_duration_seconds.labels(command=command, status=status).observe(
            elapsed
        )


def _accepted(error: ApiError) -> bool:
    return 200 <= error.status < 300


def _failure_status(error: ApiError) -> str:
    return "malformed" if _accepted(error) else "rejected"
