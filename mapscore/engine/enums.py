"""Enumerations for tutoring offers."""

from __future__ import annotations

from enum import Enum

__all__ = ["TutoringPackage"]


class TutoringPackage(str, Enum):
    """Tutoring packages offered to families.

    The value is the label shown on charts; ``hours`` is the number of
    tutoring hours the package buys.

    Usage:
        >>> TutoringPackage.TWENTY_HOUR.value
        '20-hour'
        >>> TutoringPackage.TWENTY_HOUR.hours
        20
    """

    TEN_HOUR = "10-hour"
    TWENTY_HOUR = "20-hour"
    FORTY_HOUR = "40-hour"

    @property
    def hours(self) -> int:
        return _PACKAGE_HOURS[self]

    def __str__(self) -> str:
        return self.value


_PACKAGE_HOURS = {
    TutoringPackage.TEN_HOUR: 10,
    TutoringPackage.TWENTY_HOUR: 20,
    TutoringPackage.FORTY_HOUR: 40,
}
