"""Pydantic models for user endpoints."""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from postboard_backend.api.models.post import PostResponse
from postboard_backend.database.schemas import Address, Company, UserSchema


class AddressModel(BaseModel):
    """Embedded postal address."""

    model_config = ConfigDict(from_attributes=True)

    street: str | None = None
    suite: str | None = None
    city: str | None = None
    zipcode: str | None = None

    def to_record(self) -> Address:
        return Address(**self.model_dump())


class CompanyModel(BaseModel):
    """Embedded employer details; the catch phrase travels as ``catchPhrase``."""

    model_config = ConfigDict(from_attributes=True)

    name: str | None = None
    catch_phrase: str | None = Field(
        default=None,
        validation_alias=AliasChoices("catchPhrase", "catch_phrase"),
        serialization_alias="catchPhrase",
    )
    bs: str | None = None

    def to_record(self) -> Company:
        return Company(name=self.name, catch_phrase=self.catch_phrase, bs=self.bs)


class UserPayload(BaseModel):
    """Body of create and full-update requests; ``id`` and ``posts`` are ignored."""

    name: str | None = None
    username: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    address: AddressModel | None = None
    company: CompanyModel | None = None

    def to_schema(self) -> UserSchema:
        return UserSchema(
            name=self.name,
            username=self.username,
            email=self.email,
            phone=self.phone,
            website=self.website,
            address=self.address.to_record() if self.address else None,
            company=self.company.to_record() if self.company else None,
        )


class UserResponse(BaseModel):
    """Public representation of a user and the posts it owns."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None = None
    username: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    address: AddressModel | None = None
    company: CompanyModel | None = None
    posts: list[PostResponse] = Field(default_factory=list)

    @field_validator("address", "company", mode="before")
    @classmethod
    def empty_record_as_null(cls, value: Any) -> Any:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            fields = dataclasses.asdict(value)
            if all(item is None for item in fields.values()):
                return None
            return fields
        return value
