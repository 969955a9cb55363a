"""Translate request query parameters into conjunctive substring predicates.

Each recognized parameter key is bound, when the module is imported, to the
column it filters on. Plain keys (``name``) target a column of the schema,
dotted keys (``address.city``) target a field of an embedded composite one
level down. Building the table resolves every path, so a misspelled path fails
at import rather than on a request.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect

from postboard_backend.api.services.errors import FilterConfigurationError
from postboard_backend.database.schemas import PostSchema, UserSchema

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import InstrumentedAttribute

    from postboard_backend.database.base import BaseSchema

MAX_PATH_DEPTH = 2


@dataclass(frozen=True, slots=True)
class FieldPath:
    """A one- or two-segment attribute path such as ``company.catch_phrase``."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, path: str) -> FieldPath:
        segments = tuple(path.split("."))
        if len(segments) > MAX_PATH_DEPTH or not all(segments):
            msg = f"Unsupported field path: {path!r}"
            raise FilterConfigurationError(msg)
        return cls(segments)

    @property
    def is_nested(self) -> bool:
        return len(self.segments) == MAX_PATH_DEPTH

    def __str__(self) -> str:
        return ".".join(self.segments)


def resolve_column(
    schema: type[BaseSchema], path: FieldPath
) -> InstrumentedAttribute[Any]:
    """Return the mapped column attribute that *path* names on *schema*."""
    mapper = inspect(schema)
    head = path.segments[0]
    if not path.is_nested:
        if head not in mapper.column_attrs:
            msg = f"{schema.__name__} has no column {head!r}"
            raise FilterConfigurationError(msg)
        return getattr(schema, head)

    tail = path.segments[1]
    if head not in mapper.composites:
        msg = f"{schema.__name__} has no embedded record {head!r}"
        raise FilterConfigurationError(msg)
    composite_class = mapper.composites[head].composite_class
    field_names = {field.name for field in dataclasses.fields(composite_class)}
    column_name = f"{head}_{tail}"
    if tail not in field_names or column_name not in mapper.column_attrs:
        msg = f"{schema.__name__}.{head} has no field {tail!r}"
        raise FilterConfigurationError(msg)
    return getattr(schema, column_name)


@dataclass(frozen=True, slots=True)
class SubstringFilter:
    """Case-sensitive containment test on one column."""

    key: str
    path: FieldPath
    column: InstrumentedAttribute[Any]

    def condition(self, value: str) -> ColumnElement[bool]:
        return self.column.contains(value, autoescape=True)


class FilterSet:
    """Recognized filter keys of one schema and the columns they target."""

    def __init__(self, schema: type[BaseSchema], fields: Mapping[str, str]) -> None:
        self.schema = schema
        self._filters: dict[str, SubstringFilter] = {}
        for key, raw_path in fields.items():
            path = FieldPath.parse(raw_path)
            self._filters[key] = SubstringFilter(
                key=key, path=path, column=resolve_column(schema, path)
            )

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._filters)

    def active_values(self, params: Mapping[str, str | None]) -> dict[str, str]:
        """Keep recognized keys that carry a non-empty value; ignore the rest."""
        return {
            key: value
            for key, value in params.items()
            if key in self._filters and value
        }

    def conditions(
        self, params: Mapping[str, str | None]
    ) -> list[ColumnElement[bool]]:
        """Return one predicate per active key, to be combined with AND."""
        return [
            self._filters[key].condition(value)
            for key, value in self.active_values(params).items()
        ]


USER_FILTERS = FilterSet(
    UserSchema,
    {
        "name": "name",
        "username": "username",
        "email": "email",
        "phone": "phone",
        "website": "website",
        "address.street": "address.street",
        "address.suite": "address.suite",
        "address.city": "address.city",
        "address.zipcode": "address.zipcode",
        "company.name": "company.name",
        "company.catchPhrase": "company.catch_phrase",
        "company.bs": "company.bs",
    },
)

POST_FILTERS = FilterSet(PostSchema, {"title": "title", "content": "content"})


__all__ = [
    "POST_FILTERS",
    "USER_FILTERS",
    "FieldPath",
    "FilterSet",
    "SubstringFilter",
    "resolve_column",
]
