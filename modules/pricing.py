"""
Storefront price of a sticker job.

This is what the customer would pay in the shop, used as the sale price for
the profit panel when the caller does not quote one. Two rules:

    tiered:  base price for the sticker's area
             x (1 - quantity discount)
             x 1.15 for holographic, glitter and clear
    pro:     $39 per 100 stickers of 3"x3", scaled by area

Base prices are per sticker by square inches, interpolated linearly between
tiers and clamped at both ends. Quantity discounts are looked up by the
highest quantity tier at or below the job quantity, then the highest area
column at or below the sticker area. Below the lowest quantity tier there is
no discount.

The tables come from modules/catalog.py, or from the shop's two CSV exports
(base-price.csv, qty-sq.csv) when configured.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.exceptions import ConfigurationError
from logging_config import get_logger
from models.specs import StickerSpec, as_float
from modules.validator import to_count, to_exact

logger = get_logger(__name__)

PREMIUM_STICKER_TYPES = frozenset({"holo", "glitter", "clear"})
PREMIUM_MULTIPLIER = Fraction("1.15")

# Pro subscription: $39/month for 100 stickers at 3"x3"
PRO_STICKER_TYPE = "pro"
PRO_PRICE = Fraction(39)
PRO_QUANTITY = 100
PRO_REFERENCE_SQ_IN = Fraction(9)

TIERED_RULE = "tiered"
PRO_RULE = "pro"

Tier = Tuple[Fraction, Fraction]


@dataclass(frozen=True)
class PriceTables:
    """Base price and quantity discount tables, sorted ascending."""

    base_prices: Tuple[Tier, ...]
    """(square inches, base price per sticker)"""

    quantity_discounts: Tuple[Tuple[int, Tuple[Tier, ...]], ...]
    """(quantity tier, ((square inches, discount fraction), ...)); 0.43 means 43% off"""

    @classmethod
    def from_mappings(
        cls,
        base_prices: Mapping[Any, Any],
        quantity_discounts: Mapping[Any, Mapping[Any, Any]],
    ) -> "PriceTables":
        """
        Build validated tables from {sq_in: price} and {qty: {sq_in: discount}}.

        Raises:
            ConfigurationError: a table is empty, or a value is out of range
        """
        if not base_prices:
            raise ConfigurationError("storefront_base_prices", {}, "must have at least one tier")
        if not quantity_discounts:
            raise ConfigurationError("storefront_quantity_discounts", {}, "must have at least one tier")

        base = sorted(
            (to_exact(sq_in, "storefront_base_prices", ConfigurationError),
             to_exact(price, "storefront_base_prices", ConfigurationError))
            for sq_in, price in base_prices.items()
        )

        tiers = []
        for quantity, columns in quantity_discounts.items():
            if not columns:
                raise ConfigurationError(
                    "storefront_quantity_discounts", quantity, "has no square-inch columns"
                )
            parsed = []
            for sq_in, discount in columns.items():
                discount = to_exact(discount, "storefront_quantity_discounts", ConfigurationError, allow_zero=True)
                if discount >= 1:
                    raise ConfigurationError(
                        "storefront_quantity_discounts", float(discount), "must be below 1 (100% off)"
                    )
                parsed.append((to_exact(sq_in, "storefront_quantity_discounts", ConfigurationError), discount))
            tiers.append((to_count(quantity, "storefront_quantity_discounts", ConfigurationError), tuple(sorted(parsed))))

        return cls(base_prices=tuple(base), quantity_discounts=tuple(sorted(tiers)))


@dataclass(frozen=True)
class StorefrontPrice:
    """Shop price for one job, with the figures it was built from."""

    sticker_type: str
    rule: str
    sq_in: Fraction
    base_price: Fraction
    discount: Fraction
    type_multiplier: Fraction
    price_per_sticker: Fraction
    total_price: Fraction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sticker_type": self.sticker_type,
            "rule": self.rule,
            "sq_in": as_float(self.sq_in),
            "base_price": as_float(self.base_price),
            "discount": as_float(self.discount),
            "type_multiplier": as_float(self.type_multiplier),
            "price_per_sticker": as_float(self.price_per_sticker),
            "total_price": as_float(self.total_price),
        }


# =============================================================================
# Table lookups
# =============================================================================

def base_price_for_area(tables: PriceTables, sq_in: Fraction) -> Fraction:
    rows = tables.base_prices
    if sq_in <= rows[0][0]:
        return rows[0][1]
    if sq_in >= rows[-1][0]:
        return rows[-1][1]

    for (low_sq, low_price), (high_sq, high_price) in zip(rows, rows[1:]):
        if low_sq <= sq_in <= high_sq:
            ratio = (sq_in - low_sq) / (high_sq - low_sq)
            return low_price + ratio * (high_price - low_price)
    return rows[-1][1]


def discount_for(tables: PriceTables, quantity: int, sq_in: Fraction) -> Fraction:
    """Discount fraction for a quantity and area; lower tiers apply between rows."""
    columns = None
    for tier_quantity, tier_columns in tables.quantity_discounts:
        if quantity < tier_quantity:
            break
        columns = tier_columns
    if columns is None:
        return Fraction(0)

    discount = columns[0][1]
    for column_sq_in, column_discount in columns:
        if sq_in < column_sq_in:
            break
        discount = column_discount
    return discount


def type_multiplier(sticker_type: str) -> Fraction:
    if sticker_type in PREMIUM_STICKER_TYPES:
        return PREMIUM_MULTIPLIER
    return Fraction(1)


# =============================================================================
# Storefront price
# =============================================================================

def storefront_price(tables: PriceTables, sticker: StickerSpec, sticker_type: str) -> StorefrontPrice:
    """
    Price a job the way the shop would sell it.

    Args:
        tables: Base price and quantity discount tables
        sticker: Validated job
        sticker_type: Catalog sticker type ("vinyl", "holo", ..., or "pro")

    Returns:
        StorefrontPrice with per-sticker and total price
    """
    sticker_type = str(sticker_type or "").strip().lower()
    sq_in = sticker.area_sq_in

    if sticker_type == PRO_STICKER_TYPE:
        per_sticker = PRO_PRICE / PRO_QUANTITY * (sq_in / PRO_REFERENCE_SQ_IN)
        return StorefrontPrice(
            sticker_type=sticker_type,
            rule=PRO_RULE,
            sq_in=sq_in,
            base_price=per_sticker,
            discount=Fraction(0),
            type_multiplier=Fraction(1),
            price_per_sticker=per_sticker,
            total_price=per_sticker * sticker.quantity,
        )

    base_price = base_price_for_area(tables, sq_in)
    discount = discount_for(tables, sticker.quantity, sq_in)
    multiplier = type_multiplier(sticker_type)
    per_sticker = base_price * (1 - discount) * multiplier

    logger.debug(
        f"Storefront {sticker_type}: {float(sq_in)} sq in x {sticker.quantity}, "
        f"base {float(base_price):.4f}, discount {float(discount):.2f}, x{float(multiplier)}"
    )
    return StorefrontPrice(
        sticker_type=sticker_type,
        rule=TIERED_RULE,
        sq_in=sq_in,
        base_price=base_price,
        discount=discount,
        type_multiplier=multiplier,
        price_per_sticker=per_sticker,
        total_price=per_sticker * sticker.quantity,
    )


# =============================================================================
# CSV exports
# =============================================================================

def _read_rows(path: Path) -> List[List[str]]:
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return [row for row in csv.reader(f) if row]
    except OSError as e:
        raise ConfigurationError("pricing_csv", str(path), f"cannot be read ({e.strerror})") from e


def _is_number(text: str) -> bool:
    try:
        Fraction(text)
    except (ValueError, ZeroDivisionError):
        return False
    return True


def parse_base_prices(rows: List[List[str]]) -> Dict[str, str]:
    """
    Parse base-price.csv: a "Sq. Inches,Base Price" header, then rows like
    "9,$1.38". Rows that are not numeric are skipped.
    """
    prices = {}
    for row in rows[1:]:
        if len(row) < 2:
            continue
        sq_in, price = row[0].strip(), row[1].replace("$", "").strip()
        if _is_number(sq_in) and _is_number(price):
            prices[sq_in] = price
    return prices


def parse_quantity_discounts(rows: List[List[str]]) -> Dict[str, Dict[str, str]]:
    """
    Parse qty-sq.csv.

    Row 1 is a "Quantity,Square Inches,..." header, row 2 lists the
    square-inch columns (first cell empty), and each following row is a
    quantity ("1,000" allowed) and its discount per column. Note rows
    starting with "*" are skipped.
    """
    if len(rows) < 2:
        return {}
    columns = [cell.strip() for cell in rows[1][1:]]

    discounts = {}
    for row in rows[2:]:
        label = row[0].strip()
        if label.startswith("*"):
            continue
        quantity = label.replace(",", "").replace(" ", "")
        if not quantity.isdigit() or int(quantity) <= 0:
            continue
        tier = {
            sq_in: value.strip()
            for sq_in, value in zip(columns, row[1:])
            if _is_number(sq_in) and _is_number(value.strip())
        }
        if tier:
            discounts[quantity] = tier
    return discounts


def load_price_tables(base_price_csv: Path, quantity_discount_csv: Path) -> PriceTables:
    """
    Load tables from the shop's CSV exports.

    Raises:
        ConfigurationError: a file is unreadable or yields no usable rows
    """
    tables = PriceTables.from_mappings(
        parse_base_prices(_read_rows(Path(base_price_csv))),
        parse_quantity_discounts(_read_rows(Path(quantity_discount_csv))),
    )
    logger.info(
        f"Loaded storefront pricing: {len(tables.base_prices)} base tiers, "
        f"{len(tables.quantity_discounts)} quantity tiers"
    )
    return tables


def price_tables_from_config(
    base_price_csv: Optional[str],
    quantity_discount_csv: Optional[str],
    default_base_prices: Mapping[Any, Any],
    default_quantity_discounts: Mapping[Any, Mapping[Any, Any]],
) -> PriceTables:
    """CSV tables when both paths are configured, otherwise the defaults."""
    if base_price_csv and quantity_discount_csv:
        return load_price_tables(Path(base_price_csv), Path(quantity_discount_csv))
    if base_price_csv or quantity_discount_csv:
        missing = "PRICING_QUANTITY_DISCOUNT_CSV" if base_price_csv else "PRICING_BASE_PRICE_CSV"
        raise ConfigurationError(missing, "", "must be set together with the other pricing CSV")
    return PriceTables.from_mappings(default_base_prices, default_quantity_discounts)
