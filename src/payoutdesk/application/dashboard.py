"""State holder for the admin payout screen.

Wires the filter builder, readers and command service together and turns their
errors into the notices and failure states the screen shows.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Literal, Optional, TypeVar, Union

from ..domain.entities import MerchantAggregate, Payout, PayoutStats
from ..domain.errors import (
    CommandError,
    CommandInFlightError,
    DeleteNotAllowedError,
    PayoutValidationError,
    QueryError,
    StaleResponseError,
    UnknownPayoutStatusError,
)
from ..domain.shared.admin_client_protocol import AdminPayoutClientProtocol
from ..infrastructure.query_cache import QueryCache
from .dtos import MerchantPage, PayoutDraft, PayoutPage
from .filters import FilterBuilder, PayoutSelection
from .use_cases.payout_commands import PayoutCommandService
from .use_cases.readers import (
    MerchantAggregateReader,
    PayoutDetailReader,
    PayoutHistoryReader,
    PayoutStatsReader,
)

logger = logging.getLogger(__name__)

Tab = Literal["merchants", "payouts"]
T = TypeVar("T")


@dataclass(frozen=True)
class Notice:
    """A toast-style message for the operator."""

    level: Literal["success", "error"]
    message: str


@dataclass(frozen=True)
class TableState(Generic[T]):
    """Rows for one table region; ``error`` set means only this region failed."""

    items: List[T]
    total_count: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0
    error: Optional[str] = None


@dataclass(frozen=True)
class ScreenState:
    """Whole-screen state. A stats failure fails the entire screen."""

    stats: Optional[PayoutStats]
    table: Optional[Union[TableState[MerchantAggregate], TableState[Payout]]]
    error: Optional[str] = None


STATS_FAILURE = "Failed to load payout statistics. Please try again."


class PayoutDashboard:
    def __init__(
        self,
        client: AdminPayoutClientProtocol,
        cache: Optional[QueryCache] = None,
        page_size: int = 20,
    ) -> None:
        self.client = client
        self.cache = cache or QueryCache()
        self.filters = FilterBuilder()
        self.merchants = MerchantAggregateReader(client, self.cache)
        self.payouts = PayoutHistoryReader(client, self.cache)
        self.payout_details = PayoutDetailReader(client, self.cache)
        self.stats = PayoutStatsReader(client, self.cache)
        self.commands = PayoutCommandService(client, self.cache)
        self.active_tab: Tab = "merchants"
        self.selection = PayoutSelection(page_size=page_size)

    def select(self, **changes: Any) -> PayoutSelection:
        """Update filter widgets. Changing any filter sends the operator back to page 1."""
        if "page" not in changes and any(
            getattr(self.selection, name) != value for name, value in changes.items()
        ):
            changes["page"] = 1
        self.selection = dataclasses.replace(self.selection, **changes)
        return self.selection

    def set_page(self, page: int) -> PayoutSelection:
        return self.select(page=max(1, page))

    def switch_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    async def load(self) -> ScreenState:
        try:
            stats = await self.stats.fetch()
        except QueryError as e:
            logger.warning("Payout stats unavailable: %s", e.message)
            return ScreenState(stats=None, table=None, error=STATS_FAILURE)
        except StaleResponseError:
            return ScreenState(stats=None, table=None)
        return ScreenState(stats=stats, table=await self.load_table())

    async def load_table(
        self,
    ) -> Optional[Union[TableState[MerchantAggregate], TableState[Payout]]]:
        """Load the active tab's table. Returns None when a newer load superseded this one."""
        page: Union[MerchantPage, PayoutPage]
        try:
            if self.active_tab == "merchants":
                page = await self.merchants.fetch(
                    self.filters.merchant_filter(self.selection)
                )
            else:
                page = await self.payouts.fetch(
                    self.filters.payout_filter(self.selection)
                )
        except StaleResponseError:
            return None
        except QueryError as e:
            return TableState(items=[], page=self.selection.page, error=e.message)
        return TableState(
            items=list(page.items),
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )

    async def open_payout(self, payout_id: str) -> Payout:
        return await self.payout_details.fetch(payout_id)

    async def submit_payout(
        self, merchant: MerchantAggregate, draft: PayoutDraft
    ) -> Notice:
        try:
            await self.commands.create_from_draft(merchant, draft)
        except PayoutValidationError as e:
            return Notice("error", e.message)
        except (CommandError, CommandInFlightError) as e:
            return Notice("error", str(e) or "Failed to create payout")
        return Notice("success", "Payout created successfully!")

    async def delete_payout(self, payout: Payout, *, confirmed: bool) -> Notice:
        try:
            await self.commands.delete(payout, confirmed=confirmed)
        except (
            CommandError,
            CommandInFlightError,
            DeleteNotAllowedError,
            UnknownPayoutStatusError,
        ) as e:
            return Notice("error", str(e) or "Failed to delete payout")
        return Notice("success", "Payout deleted successfully")

    async def aclose(self) -> None:
        await self.client.aclose()
