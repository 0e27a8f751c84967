"""Certification value object and its expiry status."""

from __future__ import annotations

from datetime import date, timedelta

from ....core.config import settings
from ...shared.base import ValueObject
from .enums import CertificationStatus


class Certification(ValueObject):
    """A named certification held by a resource, with optional validity dates."""

    name: str
    issued_date: date | None = None
    expiry_date: date | None = None
    issuing_body: str | None = None

    def status_on(
        self, today: date | None = None, warning_days: int | None = None
    ) -> CertificationStatus:
        """
        Expiry status on a given day.

        No expiry date means always valid. Otherwise the certification is
        expired once the expiry date is in the past and expiring soon while
        the expiry date falls within the warning horizon (inclusive).
        """
        if self.expiry_date is None:
            return CertificationStatus.VALID

        today = today or date.today()
        horizon = (
            settings.CERTIFICATION_EXPIRY_WARNING_DAYS
            if warning_days is None
            else warning_days
        )

        if self.expiry_date < today:
            return CertificationStatus.EXPIRED
        if self.expiry_date <= today + timedelta(days=horizon):
            return CertificationStatus.EXPIRING_SOON
        return CertificationStatus.VALID

    def days_until_expiry(self, today: date | None = None) -> int | None:
        """Days from today to the expiry date (negative once expired)."""
        if self.expiry_date is None:
            return None
        return (self.expiry_date - (today or date.today())).days
