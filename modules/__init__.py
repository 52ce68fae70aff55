"""Layout, material and cost computation modules for the roll layout estimator."""

__all__ = [
    "catalog",
    "cost_estimator",
    "formatting",
    "layout_engine",
    "material_length",
    "packer",
    "print_time",
    "roll_accounting",
    "validator",
]
