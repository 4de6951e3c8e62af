"""Tunable thresholds and shared constants for the analyses."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# Percentages are reported with 2 decimal places (e.g. 33.33 %)
PERCENTAGE_PRECISION = Decimal("0.01")
PERCENTAGE_SUFFIX = " %"


@dataclass(frozen=True)
class SegmentationConfig:
    """Thresholds for customer lifetime segmentation.

    Attributes
    ----------
    vip_min_lifespan_months:
        A customer must have been active for strictly more than this many
        calendar months to be "vip" or "regular". Shorter histories are "new".
    vip_min_total_sales:
        Long-lived customers spending strictly more than this are "vip";
        the rest are "regular".
    """

    vip_min_lifespan_months: int = 12
    vip_min_total_sales: Decimal = Decimal("5000")

    def __post_init__(self) -> None:
        if self.vip_min_lifespan_months < 0:
            raise ValueError(
                f"vip_min_lifespan_months cannot be negative: {self.vip_min_lifespan_months}"
            )
        if not isinstance(self.vip_min_total_sales, Decimal):
            raise TypeError(
                f"vip_min_total_sales must be a Decimal, got {type(self.vip_min_total_sales)}"
            )


DEFAULT_SEGMENTATION_CONFIG = SegmentationConfig()
