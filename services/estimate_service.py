"""
Estimate service.

Collects the inputs for one estimate from the configured press defaults and
a request's overrides, runs the layout engine, and adds what a quoting
screen needs around the raw estimate: a sanitized job label, display
figures, and the margin against a sale price. The sale price is the quoted
`sale_price` when given, otherwise the storefront price from modules/pricing.py.

Override precedence for the substrate cost per roll:
    1. material_cost_per_roll  (edited by hand)
    2. sticker_type            (catalog substrate)
    3. roll_width_in           (catalog roll-width price)
    4. Config.DEFAULT_STICKER_TYPE

The service keeps no per-request state; one instance is shared by all
Flask worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Mapping, Optional, Type

import bleach

from config import Config
from core.exceptions import ConfigurationError, RollLayoutError
from logging_config import get_logger
from models.layout_result import LayoutEstimate
from models.specs import InkProfile, as_float
from modules import catalog
from modules.formatting import estimate_summary
from modules.layout_engine import LayoutOutcome, compute_layout, no_result_from_error
from modules.pricing import StorefrontPrice, price_tables_from_config, storefront_price
from modules.validator import to_exact

logger = get_logger(__name__)

# Constants
MAX_JOB_NAME_LENGTH = 100


def _sanitize_text(text: Any, max_length: int = None) -> str:
    """Sanitize user input text."""
    if not text:
        return ""
    text = str(text).strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


@dataclass(frozen=True)
class MarginSummary:
    """Profit of a job against the price it sells for."""

    sale_price: Fraction
    """Quoted price, or the storefront price when none was quoted."""

    total_cost: Fraction
    profit: Fraction
    """sale_price - total_cost, never below zero."""

    margin_percent: Fraction
    """(sale_price - total_cost) / sale_price * 100; negative when sold at a loss."""

    profit_per_unit: Fraction
    price_source: str = "sale_price"
    """"sale_price" when quoted by the caller, "storefront" when derived."""

    @classmethod
    def from_estimate(
        cls, sale_price: Fraction, estimate: LayoutEstimate, price_source: str = "sale_price"
    ) -> "MarginSummary":
        total_cost = estimate.costs.total_cost
        quantity = estimate.sticker.quantity
        margin = (sale_price - total_cost) / sale_price * 100 if sale_price > 0 else Fraction(0)
        return cls(
            sale_price=sale_price,
            total_cost=total_cost,
            profit=max(Fraction(0), sale_price - total_cost),
            margin_percent=margin,
            profit_per_unit=max(Fraction(0), sale_price / quantity - estimate.costs.cost_per_unit),
            price_source=price_source,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sale_price": as_float(self.sale_price),
            "total_cost": as_float(self.total_cost),
            "profit": as_float(self.profit),
            "margin_percent": as_float(self.margin_percent),
            "profit_per_unit": as_float(self.profit_per_unit),
            "price_source": self.price_source,
        }


@dataclass(frozen=True)
class EstimateResponse:
    """Engine outcome plus the quoting extras."""

    outcome: LayoutOutcome
    job_name: str = ""
    margin: Optional[MarginSummary] = None
    storefront: Optional[StorefrontPrice] = None

    @property
    def has_result(self) -> bool:
        return bool(self.outcome)

    def to_dict(self) -> Dict[str, Any]:
        if not self.has_result:
            return {
                "job_name": self.job_name,
                "result": None,
                "no_result": self.outcome.to_dict(),
            }
        return {
            "job_name": self.job_name,
            "result": self.outcome.to_dict(),
            "summary": estimate_summary(self.outcome),
            "margin": self.margin.to_dict() if self.margin else None,
            "storefront": self.storefront.to_dict() if self.storefront else None,
        }


class EstimateService:
    """Builds engine inputs from configuration defaults and request overrides."""

    def __init__(self, config: Type[Config] = Config) -> None:
        self.config = config
        self.ink_profile = InkProfile.from_reference(
            reference_area_sq_in=config.INK_REFERENCE_AREA_SQ_IN,
            reference_volume_ml=config.INK_REFERENCE_VOLUME_ML,
            cartridge_cost=config.INK_CARTRIDGE_COST,
            cartridge_size_ml=config.INK_CARTRIDGE_SIZE_ML,
            overhead_multiplier=config.INK_OVERHEAD_MULTIPLIER,
        )
        self.price_tables = price_tables_from_config(
            config.PRICING_BASE_PRICE_CSV,
            config.PRICING_QUANTITY_DISCOUNT_CSV,
            catalog.STOREFRONT_BASE_PRICES,
            catalog.STOREFRONT_QUANTITY_DISCOUNTS,
        )

    def defaults(self) -> Dict[str, Any]:
        """Configured defaults, as the request fields they fill in."""
        cfg = self.config
        return {
            "sticker_type": cfg.DEFAULT_STICKER_TYPE,
            "laminate": cfg.DEFAULT_LAMINATE,
            "roll_width_in": float(cfg.PRESS_ROLL_WIDTH_IN),
            "usable_width_in": float(cfg.PRESS_USABLE_WIDTH_IN),
            "spacing_in": float(cfg.PRESS_SPACING_IN),
            "max_section_length_in": float(cfg.PRESS_MAX_SECTION_LENGTH_IN),
            "roll_length_ft": float(cfg.PRESS_ROLL_LENGTH_FT),
            "gap_allowance_in": float(cfg.PRESS_GAP_ALLOWANCE_IN),
            "leader_allowance_in": float(cfg.PRESS_LEADER_ALLOWANCE_IN),
            "seconds_per_section": float(cfg.PRESS_SECONDS_PER_SECTION),
            "ink_ml_per_sq_in": float(self.ink_profile.ml_per_sq_in),
            "ink_cost_per_ml": float(self.ink_profile.cost_per_ml),
            "ink_overhead_multiplier": float(self.ink_profile.overhead_multiplier),
            "packaging_breakpoint_qty": cfg.PACKAGING_BREAKPOINT_QTY,
            "packaging_cost_below": float(cfg.PACKAGING_COST_BELOW),
            "packaging_cost_at_or_above": float(cfg.PACKAGING_COST_AT_OR_ABOVE),
            "promo_cost_per_job": float(cfg.PROMO_COST_PER_JOB),
            "enabled_cost_lines": list(cfg.DEFAULT_COST_LINES),
        }

    def estimate(self, request: Mapping[str, Any]) -> EstimateResponse:
        """
        Produce an estimate for one request.

        Args:
            request: Job fields plus any setting overrides (see module docstring)

        Returns:
            EstimateResponse; its outcome is a NoResult when the request is
            incomplete or names an unknown catalog entry
        """
        job_name = _sanitize_text(request.get("job_name"), MAX_JOB_NAME_LENGTH)
        cfg = self.config

        try:
            material_cost = self._material_cost_per_roll(request)
            laminate_cost = self._laminate_cost_per_roll(request)
        except RollLayoutError as e:
            logger.info(f"Estimate '{job_name}': {e.message}")
            return EstimateResponse(outcome=no_result_from_error(e), job_name=job_name)

        outcome = compute_layout(
            sticker_width_in=request.get("sticker_width_in"),
            sticker_height_in=request.get("sticker_height_in"),
            quantity=request.get("quantity"),
            usable_width_in=self._pick(request, "usable_width_in", cfg.PRESS_USABLE_WIDTH_IN),
            spacing_in=self._pick(request, "spacing_in", cfg.PRESS_SPACING_IN),
            max_section_length_in=self._pick(request, "max_section_length_in", cfg.PRESS_MAX_SECTION_LENGTH_IN),
            roll_length_ft=self._pick(request, "roll_length_ft", cfg.PRESS_ROLL_LENGTH_FT),
            gap_allowance_in=self._pick(request, "gap_allowance_in", cfg.PRESS_GAP_ALLOWANCE_IN),
            leader_allowance_in=self._pick(request, "leader_allowance_in", cfg.PRESS_LEADER_ALLOWANCE_IN),
            material_cost_per_roll=material_cost,
            laminate_cost_per_roll=laminate_cost,
            ink_ml_per_sq_in=self.ink_profile.ml_per_sq_in,
            ink_cost_per_ml=self.ink_profile.cost_per_ml,
            ink_overhead_multiplier=self._pick(
                request, "ink_overhead_multiplier", self.ink_profile.overhead_multiplier
            ),
            seconds_per_section=self._pick(request, "seconds_per_section", cfg.PRESS_SECONDS_PER_SECTION),
            packaging_breakpoint_qty=self._pick(request, "packaging_breakpoint_qty", cfg.PACKAGING_BREAKPOINT_QTY),
            packaging_cost_below=self._pick(request, "packaging_cost_below", cfg.PACKAGING_COST_BELOW),
            packaging_cost_at_or_above=self._pick(
                request, "packaging_cost_at_or_above", cfg.PACKAGING_COST_AT_OR_ABOVE
            ),
            promo_cost_per_job=self._pick(request, "promo_cost_per_job", cfg.PROMO_COST_PER_JOB),
            enabled_cost_lines=self._pick(request, "enabled_cost_lines", cfg.DEFAULT_COST_LINES),
            packaging_cost_override=self._optional(request, "packaging_cost_override"),
            roll_width_in=self._pick(request, "roll_width_in", cfg.PRESS_ROLL_WIDTH_IN),
        )

        if not outcome:
            logger.info(f"Estimate '{job_name}': no result ({outcome.reason.value}, {outcome.field})")
            return EstimateResponse(outcome=outcome, job_name=job_name)

        sticker_type = request.get("sticker_type") or cfg.DEFAULT_STICKER_TYPE
        storefront = storefront_price(self.price_tables, outcome.sticker, sticker_type)

        margin = None
        sale_price = self._optional(request, "sale_price")
        if sale_price is None:
            margin = MarginSummary.from_estimate(storefront.total_price, outcome, "storefront")
        else:
            try:
                margin = MarginSummary.from_estimate(
                    to_exact(sale_price, "sale_price", ConfigurationError, allow_zero=True), outcome
                )
            except RollLayoutError as e:
                logger.info(f"Estimate '{job_name}': margin skipped, {e.message}")

        logger.info(
            f"Estimate '{job_name}': {outcome.sticker.quantity} x "
            f"{float(outcome.sticker.width_in)}x{float(outcome.sticker.height_in)}in, "
            f"{outcome.packing.sections_needed} section(s), total ${float(outcome.costs.total_cost):.2f}"
        )
        return EstimateResponse(outcome=outcome, job_name=job_name, margin=margin, storefront=storefront)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _pick(request: Mapping[str, Any], key: str, default: Any) -> Any:
        value = request.get(key)
        return default if value is None else value

    @staticmethod
    def _optional(request: Mapping[str, Any], key: str) -> Any:
        """A cleared form field (empty string) means the value was not given."""
        value = request.get(key)
        return None if value == "" else value

    def _material_cost_per_roll(self, request: Mapping[str, Any]) -> Any:
        if request.get("material_cost_per_roll") is not None:
            return request["material_cost_per_roll"]
        if request.get("sticker_type"):
            return catalog.get_substrate(request["sticker_type"]).cost_per_roll
        if request.get("roll_width_in") is not None:
            width = to_exact(request["roll_width_in"], "roll_width_in", ConfigurationError)
            return catalog.material_cost_for_roll_width(width)
        return catalog.get_substrate(self.config.DEFAULT_STICKER_TYPE).cost_per_roll

    def _laminate_cost_per_roll(self, request: Mapping[str, Any]) -> Any:
        if request.get("laminate_cost_per_roll") is not None:
            return request["laminate_cost_per_roll"]
        return catalog.get_laminate(request.get("laminate") or self.config.DEFAULT_LAMINATE).cost_per_roll
