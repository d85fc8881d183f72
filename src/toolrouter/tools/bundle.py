"""Mint bundle analysis tool.

The analysis itself is done by an external ``BundleAnalyticsService``;
this module defines the report shape and the tool wrapper around it.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from pydantic import Field

from ..ai.tools import ToolContext, ToolDefinition
from .base import CamelModel, NOT_CONFIGURED_ERROR


logger = logging.getLogger(__name__)

MIN_SLOT_TRANSACTIONS = 2
ANALYSIS_FAILED_ERROR = "Failed to analyze bundles"


class BundleEntry(CamelModel):
    """One group of wallets that bought in the same slot."""
    bundle_address: str
    supply_percentage: float = 0.0
    total_bought: float = 0.0
    total_sold: float = 0.0
    current_holdings: float = 0.0
    sol_spent: float = 0.0
    sell_amount: float = 0.0
    profit_loss: float = 0.0
    first_purchase_time: float = 0.0  # epoch milliseconds
    last_purchase_time: float = 0.0  # epoch milliseconds
    purchase_velocity: Optional[float] = None  # tokens per hour
    transactions: List[Dict[str, Any]] = Field(default_factory=list)
    is_pumpfun_bundle: bool = False

    @property
    def time_window_seconds(self) -> float:
        return (self.last_purchase_time - self.first_purchase_time) / 1000


class SuspiciousPatterns(CamelModel):
    snipers: List[BundleEntry] = Field(default_factory=list)
    rapid_accumulation: List[BundleEntry] = Field(default_factory=list)
    coordinated_buying: List[BundleEntry] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.snipers or self.rapid_accumulation or self.coordinated_buying)


class MintBundleAnalysis(CamelModel):
    """Bundle report for a token mint."""
    mint_address: Optional[str] = None
    total_bundles: int = 0
    total_sol_spent: float = 0.0
    total_profit_loss: float = 0.0
    total_unique_wallets: int = 0
    total_supply: float = 0.0
    total_bought: float = 0.0
    total_sold: float = 0.0
    suspicious_patterns: SuspiciousPatterns = Field(default_factory=SuspiciousPatterns)
    largest_bundle: Optional[BundleEntry] = None
    bundles: List[BundleEntry] = Field(default_factory=list)

    @property
    def total_sol_volume(self) -> float:
        """SOL spent plus the absolute profit or loss."""
        return self.total_sol_spent + abs(self.total_profit_loss)


class BundleResult(CamelModel):
    """Result returned to the assistant by the bundle tool."""
    success: bool
    data: Optional[MintBundleAnalysis] = None
    error: Optional[str] = None


class BundleAnalyticsService(Protocol):
    """On-chain analytics backend."""

    async def analyze_mint_bundles(self, mint_address: str,
                                   min_slot_transactions: int) -> Optional[MintBundleAnalysis]:
        ...


class BundleTools:
    """Bundle analysis tool bound to an analytics service."""

    def __init__(self, service: Optional[BundleAnalyticsService]):
        self.service = service

    async def analyze_bundles(self, context: ToolContext, mint_address: str) -> BundleResult:
        if self.service is None:
            return BundleResult(success=False, error=NOT_CONFIGURED_ERROR.format(service="Bundle analytics"))

        try:
            analysis = await self.service.analyze_mint_bundles(
                mint_address=mint_address,
                min_slot_transactions=MIN_SLOT_TRANSACTIONS,
            )
        except Exception as e:
            logger.error(f"Bundle analysis failed for {mint_address}: {e}")
            return BundleResult(success=False, error=str(e) or ANALYSIS_FAILED_ERROR)

        if analysis is None:
            return BundleResult(success=False, error=ANALYSIS_FAILED_ERROR)

        logger.debug(f"Bundle analysis for {mint_address}: {analysis.total_bundles} bundle(s)")
        return BundleResult(success=True, data=analysis)

    def definitions(self) -> list[ToolDefinition]:
        """Tool definitions for the registry."""
        from ..ui.renderers import render_bundle_analysis

        return [
            ToolDefinition(
                name="analyzeBundles",
                display_name="🔍 Analyze Mint Bundles",
                description=(
                    "Analyze potential bundles and snipers for a given mint address, including "
                    "statistics about supply percentage, estimated SOL spent, and current holdings."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "mintAddress": {"type": "string", "description": "The token's mint address"},
                    },
                    "required": ["mintAddress"],
                },
                execute=self._execute,
                render=render_bundle_analysis,
                result_model=BundleResult,
                is_collapsible=True,
            ),
        ]

    async def _execute(self, context: ToolContext, mintAddress: str) -> BundleResult:
        # Model-facing parameter names are camelCase
        return await self.analyze_bundles(context, mint_address=mintAddress)
