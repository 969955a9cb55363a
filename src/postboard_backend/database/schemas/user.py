"""User database schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from postboard_backend.database.base import BaseSchema
from postboard_backend.database.schemas.embedded import Address, Company

if TYPE_CHECKING:
    from postboard_backend.database.schemas.post import PostSchema


class UserSchema(BaseSchema):
    """SQLAlchemy model for users.

    Embedded sub-records are mapped as composites over ``<name>_<field>``
    columns; the filter builder relies on that naming.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255))
    username: Mapped[str | None] = mapped_column(String(255), index=True)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(64))
    website: Mapped[str | None] = mapped_column(String(255))

    address_street: Mapped[str | None] = mapped_column(String(255))
    address_suite: Mapped[str | None] = mapped_column(String(255))
    address_city: Mapped[str | None] = mapped_column(String(255))
    address_zipcode: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[Address] = composite(
        Address, "address_street", "address_suite", "address_city", "address_zipcode"
    )

    company_name: Mapped[str | None] = mapped_column(String(255))
    company_catch_phrase: Mapped[str | None] = mapped_column(String(255))
    company_bs: Mapped[str | None] = mapped_column(String(255))
    company: Mapped[Company] = composite(
        Company, "company_name", "company_catch_phrase", "company_bs"
    )

    posts: Mapped[list[PostSchema]] = relationship(
        "PostSchema",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="PostSchema.id",
        lazy="selectin",
    )
