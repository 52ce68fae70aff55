"""Cost estimator for material, laminate, ink, packaging and promo inserts."""

from __future__ import annotations

from fractions import Fraction
from typing import FrozenSet, Optional

from core.exceptions import ConfigurationError, InvalidInputError
from logging_config import get_logger
from models.layout_result import CostBreakdown, PackingResult
from models.specs import (
    CostLine,
    InkProfile,
    MaterialCostTable,
    PackagingTable,
    StickerSpec,
)


class CostEstimator:
    """
    Prices one job from its packing result.

    Material and laminate are charged by the foot of roll actually consumed,
    ink by printed area, packaging by a quantity step function, and the promo
    insert as a flat per-job amount.

    Every line is computed whether or not it is enabled; enabled_lines only
    decides which of them add up to total_cost, so a caller can show a
    disabled line crossed out without recomputing.
    """

    def __init__(
        self,
        costs: MaterialCostTable,
        ink: InkProfile,
        packaging: PackagingTable,
        promo_cost_per_job: Fraction = Fraction(0),
    ) -> None:
        self.costs = costs
        self.ink = ink
        self.packaging = packaging
        self.promo_cost_per_job = promo_cost_per_job
        self.logger = get_logger(__name__)

    def estimate(
        self,
        sticker: StickerSpec,
        packing: PackingResult,
        enabled_lines: FrozenSet[CostLine],
        packaging_cost_override: Optional[Fraction] = None,
    ) -> CostBreakdown:
        """
        Price a packed job.

        Args:
            sticker: Validated job (area and quantity drive ink and packaging)
            packing: Packing result (material length drives substrate and laminate)
            enabled_lines: Lines counted in total_cost
            packaging_cost_override: Caller-edited packaging cost; replaces the
                step-function value when given

        Returns:
            CostBreakdown with every raw line value populated

        Raises:
            InvalidInputError: quantity is not positive
        """
        if sticker.quantity <= 0:
            raise InvalidInputError("quantity", sticker.quantity)

        roll_length_ft = packing.rolls.roll_length_ft
        material_cost = self._per_foot_cost(
            self.costs.material_cost_per_roll, roll_length_ft, packing.total_length_ft
        )
        laminate_cost = self._per_foot_cost(
            self.costs.laminate_cost_per_roll, roll_length_ft, packing.total_length_ft
        )

        ink_volume_ml = self._ink_volume_ml(sticker)
        ink_cost = ink_volume_ml * self.ink.cost_per_ml * self.ink.overhead_multiplier

        if packaging_cost_override is not None:
            packaging_cost = packaging_cost_override
        else:
            packaging_cost = self.packaging.cost_for(sticker.quantity)

        raw = {
            CostLine.MATERIAL: material_cost,
            CostLine.LAMINATE: laminate_cost,
            CostLine.INK: ink_cost,
            CostLine.PACKAGING: packaging_cost,
            CostLine.PROMO: self.promo_cost_per_job,
        }
        total_cost = sum((value for line, value in raw.items() if line in enabled_lines), Fraction(0))

        self.logger.debug(
            "Cost lines: "
            + ", ".join(f"{line.value}={float(value):.4f}" for line, value in raw.items())
            + f"; enabled={sorted(line.value for line in enabled_lines)}, total={float(total_cost):.4f}"
        )

        return CostBreakdown(
            material_cost=material_cost,
            laminate_cost=laminate_cost,
            ink_cost=ink_cost,
            ink_volume_ml=ink_volume_ml,
            packaging_cost=packaging_cost,
            promo_cost=self.promo_cost_per_job,
            enabled_lines=frozenset(enabled_lines),
            total_cost=total_cost,
            cost_per_unit=total_cost / sticker.quantity,
        )

    def _ink_volume_ml(self, sticker: StickerSpec) -> Fraction:
        """Requested stickers only; overage from whole-row printing is not inked here."""
        return sticker.area_sq_in * sticker.quantity * self.ink.ml_per_sq_in

    @staticmethod
    def _per_foot_cost(cost_per_roll: Fraction, roll_length_ft: Fraction, length_ft: Fraction) -> Fraction:
        if roll_length_ft <= 0:
            raise ConfigurationError("roll_length_ft", roll_length_ft)
        return length_ft * (cost_per_roll / roll_length_ft)
