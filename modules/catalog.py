"""
Material catalog.

Provides read-only presets for:
- Sticker types, each mapped to the substrate roll it prints on
- Laminate rolls
- Roll widths, each with its vinyl cost per roll

Presets are catalog choices offered to the caller. The engine never picks
one by itself; it only receives the resulting cost per roll.
"""

from dataclasses import dataclass
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, Any, List, Mapping

from core.exceptions import CatalogLookupError
from logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RollPreset:
    """A substrate or laminate roll offered in the catalog."""
    key: str
    label: str
    cost_per_roll: Fraction

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON rendering."""
        return {
            'key': self.key,
            'label': self.label,
            'cost_per_roll': float(self.cost_per_roll),
        }


# Sticker types select the substrate roll (Substance 3750/2755/2750, EM3)
SUBSTRATES: Mapping[str, RollPreset] = MappingProxyType({
    'vinyl': RollPreset('vinyl', 'Vinyl (Matte/Gloss)', Fraction('189.95')),
    'holo': RollPreset('holo', 'Holographic', Fraction('719.95')),
    'clear': RollPreset('clear', 'Clear', Fraction('199.95')),
    'glitter': RollPreset('glitter', 'Glitter', Fraction('249.95')),
    'economy': RollPreset('economy', 'Economy', Fraction('149.95')),
    # Subscription stickers print on standard vinyl
    'pro': RollPreset('pro', 'Pro ($39/mo)', Fraction('189.95')),
})

LAMINATES: Mapping[str, RollPreset] = MappingProxyType({
    'gf402_matte': RollPreset('gf402_matte', 'General Formulations 402 Matte', Fraction('237.50')),
    'substance_3150': RollPreset('substance_3150', 'Substance 3150 Matte/Gloss', Fraction('199.95')),
})

# Vinyl cost per roll by nominal roll width (inches)
ROLL_WIDTH_COSTS: Mapping[int, Fraction] = MappingProxyType({
    20: Fraction('90.95'),
    30: Fraction('109.95'),
    54: Fraction('189.95'),
    60: Fraction('209.95'),
})


# Storefront base price per sticker by area (sq in). Replaced by
# base-price.csv when PRICING_BASE_PRICE_CSV is set.
STOREFRONT_BASE_PRICES: Mapping[int, Fraction] = MappingProxyType({
    1: Fraction('0.58'),
    4: Fraction('0.98'),
    9: Fraction('1.38'),
    16: Fraction('1.98'),
    25: Fraction('2.68'),
    36: Fraction('3.48'),
    64: Fraction('5.38'),
    100: Fraction('7.98'),
})

# Storefront quantity discount (0.43 = 43% off) by quantity tier, then by
# area column. Replaced by qty-sq.csv when PRICING_QUANTITY_DISCOUNT_CSV is set.
_DISCOUNT_COLUMNS = (4, 9, 16, 25, 36)
STOREFRONT_QUANTITY_DISCOUNTS: Mapping[int, Mapping[int, Fraction]] = MappingProxyType({
    quantity: MappingProxyType(dict(zip(_DISCOUNT_COLUMNS, map(Fraction, row))))
    for quantity, row in (
        (100, ('0.43', '0.40', '0.36', '0.32', '0.28')),
        (200, ('0.55', '0.52', '0.48', '0.44', '0.40')),
        (300, ('0.62', '0.59', '0.55', '0.51', '0.47')),
        (500, ('0.68', '0.65', '0.61', '0.57', '0.53')),
        (1000, ('0.75', '0.72', '0.68', '0.64', '0.60')),
        (2500, ('0.80', '0.77', '0.73', '0.69', '0.65')),
    )
})


def get_substrate(key: str) -> RollPreset:
    try:
        return SUBSTRATES[key.strip().lower()]
    except (KeyError, AttributeError):
        raise CatalogLookupError('sticker type', key, sorted(SUBSTRATES))


def get_laminate(key: str) -> RollPreset:
    try:
        return LAMINATES[key.strip().lower()]
    except (KeyError, AttributeError):
        raise CatalogLookupError('laminate', key, sorted(LAMINATES))


def material_cost_for_roll_width(roll_width_in: Fraction) -> Fraction:
    """
    Vinyl cost per roll for a roll width.

    Widths are matched to the nearest whole inch, so 53.9" and 54" both
    select the 54" roll.

    Raises:
        CatalogLookupError: no roll of that width is stocked
    """
    nominal = round(roll_width_in)
    if nominal not in ROLL_WIDTH_COSTS:
        raise CatalogLookupError('roll width', float(roll_width_in), sorted(ROLL_WIDTH_COSTS))
    logger.debug(f"Roll width {float(roll_width_in)}in -> {nominal}in preset")
    return ROLL_WIDTH_COSTS[nominal]


def catalog_to_dict() -> Dict[str, List[Dict[str, Any]]]:
    """Full catalog for the API."""
    return {
        'sticker_types': [preset.to_dict() for preset in SUBSTRATES.values()],
        'laminates': [preset.to_dict() for preset in LAMINATES.values()],
        'roll_widths': [
            {'width_in': width, 'cost_per_roll': float(cost)}
            for width, cost in ROLL_WIDTH_COSTS.items()
        ],
    }
