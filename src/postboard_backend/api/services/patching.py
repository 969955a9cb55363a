"""Partial-update helpers that merge a payload into a persisted record."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from postboard_backend.api.services.errors import (
    ImmutableFieldError,
    InvalidFieldReferenceError,
    InvalidFieldValueError,
)
from postboard_backend.database.schemas import Address, Company, UserSchema

RecordT = TypeVar("RecordT")


def merge_non_null(
    existing: RecordT, partial: object, fields: tuple[str, ...]
) -> RecordT:
    """Copy each of *fields* from *partial* onto *existing* when it is not ``None``.

    Only the listed fields are considered; anything else on *partial* is ignored.
    """
    for name in fields:
        value = getattr(partial, name, None)
        if value is not None:
            setattr(existing, name, value)
    return existing


def _keep(_field: str, value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class PatchableField:
    """Target attribute of a patch key and the conversion applied to its value."""

    attribute: str
    convert: Callable[[str, Any], Any] = _keep

    def bind(self, key: str, value: Any) -> Callable[[Any], None]:
        converted = self.convert(key, value)

        def setter(record: Any) -> None:
            setattr(record, self.attribute, converted)

        return setter


def embedded(
    record_class: type, aliases: Mapping[str, str] | None = None
) -> Callable[[str, Any], Any]:
    """Build a converter turning a mapping (or ``None``) into *record_class*."""
    names = {field.name for field in dataclasses.fields(record_class)}
    lookup = {name: name for name in names} | dict(aliases or {})

    def convert(key: str, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            msg = f"Field {key!r} expects an object or null"
            raise InvalidFieldValueError(key, msg)
        kwargs = {}
        for sub_key, sub_value in value.items():
            if sub_key not in lookup:
                raise InvalidFieldReferenceError(f"{key}.{sub_key}")
            kwargs[lookup[sub_key]] = sub_value
        return record_class(**kwargs)

    return convert


class FieldPatcher(Generic[RecordT]):
    """Apply ``{field name: value}`` updates through an explicit field table.

    Every key is checked and converted before the record is touched, so an
    unknown key leaves the record unchanged.
    """

    def __init__(
        self,
        fields: Mapping[str, PatchableField],
        *,
        immutable: frozenset[str] = frozenset(),
    ) -> None:
        self._fields = dict(fields)
        self._immutable = immutable

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def plan(self, updates: Mapping[str, Any]) -> list[Callable[[RecordT], None]]:
        setters = []
        for key, value in updates.items():
            if key in self._immutable:
                raise ImmutableFieldError(key)
            field = self._fields.get(key)
            if field is None:
                raise InvalidFieldReferenceError(key)
            setters.append(field.bind(key, value))
        return setters

    def apply(self, record: RecordT, updates: Mapping[str, Any]) -> RecordT:
        for setter in self.plan(updates):
            setter(record)
        return record


POST_PATCHABLE_FIELDS = ("title", "content")

USER_PATCHER: FieldPatcher[UserSchema] = FieldPatcher(
    {
        "name": PatchableField("name"),
        "username": PatchableField("username"),
        "email": PatchableField("email"),
        "phone": PatchableField("phone"),
        "website": PatchableField("website"),
        "address": PatchableField("address", embedded(Address)),
        "company": PatchableField(
            "company", embedded(Company, {"catchPhrase": "catch_phrase"})
        ),
    },
    immutable=frozenset({"id", "posts"}),
)


__all__ = [
    "POST_PATCHABLE_FIELDS",
    "USER_PATCHER",
    "FieldPatcher",
    "PatchableField",
    "embedded",
    "merge_non_null",
]
