"""Value objects embedded in the ``users`` table."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Address:
    """Postal address stored in the ``address_*`` columns."""

    street: str | None = None
    suite: str | None = None
    city: str | None = None
    zipcode: str | None = None


@dataclass
class Company:
    """Employer details stored in the ``company_*`` columns."""

    name: str | None = None
    catch_phrase: str | None = None
    bs: str | None = None
