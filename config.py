"""
Configuration for the roll layout estimator.

Press geometry, ink calibration and packaging/promo costs are read from the
environment (or a .env file) so they can change without a code change when
the press, the carrier or the packaging supplier changes. The values here are
only defaults; every one of them can be overridden per request.

A malformed value fails fast with ConfigurationError at import time.
"""

import os
from fractions import Fraction
from pathlib import Path

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


def _env_fraction(name: str, default: str) -> Fraction:
    """Read a decimal setting exactly (no binary float rounding)."""
    raw = os.environ.get(name, default)
    try:
        return Fraction(raw.strip())
    except (ValueError, ZeroDivisionError) as e:
        raise ConfigurationError(name, raw, "is not a decimal number") from e


def _env_int(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigurationError(name, raw, "is not a whole number") from e


def _env_list(name: str, default: str) -> tuple:
    raw = os.environ.get(name, default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


class Config:
    """Default configuration for the Flask application and the estimator."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 64 * 1024  # JSON bodies only
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Press / Roll Geometry
    # ==========================================================================
    # Roll is 54" wide; 1" side margins less the press's own edge allowance
    # leave 53.25" printable. Spacing applies both across and along the roll.
    # A single pass prints at most 42" before the next section starts.
    # ==========================================================================
    PRESS_ROLL_WIDTH_IN = _env_fraction("PRESS_ROLL_WIDTH_IN", "54")
    PRESS_USABLE_WIDTH_IN = _env_fraction("PRESS_USABLE_WIDTH_IN", "53.25")
    PRESS_SPACING_IN = _env_fraction("PRESS_SPACING_IN", "0.15")
    PRESS_MAX_SECTION_LENGTH_IN = _env_fraction("PRESS_MAX_SECTION_LENGTH_IN", "42")
    PRESS_ROLL_LENGTH_FT = _env_fraction("PRESS_ROLL_LENGTH_FT", "150")

    # Barcode gap between sections and the leader reserved once per job
    PRESS_GAP_ALLOWANCE_IN = _env_fraction("PRESS_GAP_ALLOWANCE_IN", "4")
    PRESS_LEADER_ALLOWANCE_IN = _env_fraction("PRESS_LEADER_ALLOWANCE_IN", "4")

    # 3 min 20 sec per 42" section
    PRESS_SECONDS_PER_SECTION = _env_fraction("PRESS_SECONDS_PER_SECTION", "200")

    # ==========================================================================
    # Ink Calibration
    # ==========================================================================
    # Reference job: 250 stickers at 2"x2" (1000 sq in) consumed 4.03 mL.
    # Cost per mL comes from the cartridge price and size.
    #
    # Formula: ink_cost = area × (ref_ml / ref_area) × (cartridge_cost / cartridge_ml) × overhead
    # ==========================================================================
    INK_REFERENCE_AREA_SQ_IN = _env_fraction("INK_REFERENCE_AREA_SQ_IN", "1000")
    INK_REFERENCE_VOLUME_ML = _env_fraction("INK_REFERENCE_VOLUME_ML", "4.03")
    INK_CARTRIDGE_COST = _env_fraction("INK_CARTRIDGE_COST", "286")
    INK_CARTRIDGE_SIZE_ML = _env_fraction("INK_CARTRIDGE_SIZE_ML", "1497")
    INK_OVERHEAD_MULTIPLIER = _env_fraction("INK_OVERHEAD_MULTIPLIER", "1.2")

    # ==========================================================================
    # Packaging & Promo
    # ==========================================================================
    # Up to 300 stickers ship in a bubble mailer ($1.18); 301 and up in a box ($0.50).
    PACKAGING_BREAKPOINT_QTY = _env_int("PACKAGING_BREAKPOINT_QTY", "301")
    PACKAGING_COST_BELOW = _env_fraction("PACKAGING_COST_BELOW", "1.18")
    PACKAGING_COST_AT_OR_ABOVE = _env_fraction("PACKAGING_COST_AT_OR_ABOVE", "0.50")
    PROMO_COST_PER_JOB = _env_fraction("PROMO_COST_PER_JOB", "0.20")

    # Cost lines counted in the total unless the request says otherwise
    DEFAULT_COST_LINES = _env_list("DEFAULT_COST_LINES", "material,laminate,ink")

    # Default substrate and laminate presets (see modules/catalog.py)
    DEFAULT_STICKER_TYPE = os.environ.get("DEFAULT_STICKER_TYPE", "vinyl")
    DEFAULT_LAMINATE = os.environ.get("DEFAULT_LAMINATE", "gf402_matte")

    # ==========================================================================
    # Storefront Pricing
    # ==========================================================================
    # Sale price for the profit panel when a request quotes none. Point both
    # at the shop's CSV exports (base-price.csv, qty-sq.csv) to replace the
    # catalog tables; leave both empty to use the catalog.
    # ==========================================================================
    PRICING_BASE_PRICE_CSV = os.environ.get("PRICING_BASE_PRICE_CSV", "")
    PRICING_QUANTITY_DISCOUNT_CSV = os.environ.get("PRICING_QUANTITY_DISCOUNT_CSV", "")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
