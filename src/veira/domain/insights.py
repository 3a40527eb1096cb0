"""Business insights and chat answers from the remote assistant.

The assistant only ever reads already-committed data. Any failure on the
remote side is turned into a fixed fallback message here and never reaches
the catalog or ledger.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from requests import RequestException

from veira.assistant.client import AssistantClient, AssistantError, ChatTurn
from veira.domain.entities import AppState, BusinessType, OwnerProfile, UserRole
from veira.domain.reporting import ReportingService
from veira.utils.money import format_kes

logger = logging.getLogger(__name__)

INSIGHTS_FALLBACK = "Records look okay. No issues found."
CHAT_FALLBACK = "Sorry, I'm having trouble connecting. Your records are safe."
INSIGHTS_LOW_STOCK_THRESHOLD = 10

PROFILE_FOCUS = {
    OwnerProfile.SURVIVAL: "Small shop owner. Focus on cash in hand.",
    OwnerProfile.BURNED: "Careful owner. Watch for theft or loss.",
    OwnerProfile.GROWTH: "Growth-minded. Focus on trends and improvement.",
    OwnerProfile.COMPLIANCE: "Record-keeper. Focus on tax and receipts.",
    OwnerProfile.HANDS_OFF: "Hands-off. Use quick summaries only.",
}


@dataclass(frozen=True)
class BusinessContext:
    """Read-only summary handed to the assistant."""

    total_sales: Decimal
    total_cost: Decimal
    anomaly_count: int
    low_stock_count: int
    business_type: BusinessType
    user_role: UserRole
    owner_profile: OwnerProfile

    @classmethod
    def from_state(cls, state: AppState) -> "BusinessContext":
        report = ReportingService.from_state(state)
        totals = report.totals()
        return cls(
            total_sales=totals.revenue,
            total_cost=totals.cost_of_goods,
            anomaly_count=report.anomaly_count(),
            low_stock_count=len(report.low_stock(INSIGHTS_LOW_STOCK_THRESHOLD)),
            business_type=state.settings.business_type,
            user_role=state.settings.user_role,
            owner_profile=state.settings.owner_profile,
        )

    def to_prompt(self) -> str:
        return "\n".join(
            [
                f"Shop Type: {self.business_type.value}",
                f"Role: {self.user_role.value}",
                f"Total Sales: {format_kes(self.total_sales)}",
                f"Total Cost: {format_kes(self.total_cost)}",
                f"Problems Found: {self.anomaly_count}",
                f"Low Stock Items: {self.low_stock_count}",
            ]
        )


def system_instruction(context: BusinessContext) -> str:
    return "\n".join(
        [
            "Your name is Veira. You are a helpful business assistant for shops in Kenya.",
            f"PROFILE: {PROFILE_FOCUS[context.owner_profile]}",
            f"USER ROLE: {context.user_role.value}.",
            "Use simple English, KES for money, and keep answers short.",
        ]
    )


class InsightsService:
    """Service asking the remote assistant about the business."""

    def __init__(self, client: AssistantClient):
        """Initialize insights service.

        Args:
            client: Assistant backend
        """
        self.client = client

    def _ask(self, context: BusinessContext, message: str, history, fallback: str) -> str:
        try:
            reply = self.client.generate(
                system_instruction(context) + "\n\nBusiness Context:\n" + context.to_prompt(),
                message,
                history,
            )
        except (AssistantError, RequestException) as e:
            logger.warning("Assistant unavailable: %s", e)
            return fallback
        return reply or fallback

    def business_insights(self, state: AppState) -> str:
        """Two-sentence summary of how the shop is doing."""
        context = BusinessContext.from_state(state)
        return self._ask(
            context,
            "Write a 2-sentence summary of how the shop is doing. Use simple words.",
            None,
            INSIGHTS_FALLBACK,
        )

    def ask(
        self,
        message: str,
        state: AppState,
        history: Optional[list[ChatTurn]] = None,
    ) -> str:
        """Answer a free-text question about the business."""
        context = BusinessContext.from_state(state)
        return self._ask(context, message, history, CHAT_FALLBACK)
