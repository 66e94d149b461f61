"""Fare calculation from a route's distance and interchange count."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .exceptions import PolicyMissing

METRES_PER_KM = 1000
MINOR_UNITS_PER_MAJOR = 100


@dataclass(frozen=True)
class FarePolicy:
    """Fare rules in integer minor currency units (paise)."""
    base_fare: int
    per_km_rate: int
    interchange_fee: int


class FareCalculator:
    """Prices routes under a single fare policy."""

    def __init__(self, policy: Optional[FarePolicy]):
        self.policy = policy

    def calculate_fare_minor(self, distance_m: int, interchanges: int) -> int:
        """Fare in minor units. Distance is billed per started kilometre."""
        if self.policy is None:
            raise PolicyMissing()
        if distance_m < 0 or interchanges < 0:
            raise ValueError("Distance and interchanges must be non-negative")

        billed_km = -(-distance_m // METRES_PER_KM)
        return (
            self.policy.base_fare
            + billed_km * self.policy.per_km_rate
            + interchanges * self.policy.interchange_fee
        )

    def calculate_fare(self, distance_m: int, interchanges: int) -> Decimal:
        """Fare in major units (rupees), two decimal places."""
        minor = self.calculate_fare_minor(distance_m, interchanges)
        return (Decimal(minor) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


def calculate_fare(policy: Optional[FarePolicy], distance_m: int, interchanges: int) -> Decimal:
    """Fare for a route under ``policy``."""
    return FareCalculator(policy).calculate_fare(distance_m, interchanges)
