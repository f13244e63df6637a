"""Input records for metadata modification and metadata queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from batonkit.records import (
    Acl,
    AclLevel,
    Avu,
    Collection,
    DataObject,
    ErrorRecord,
    Target,
    _dumps,
    _expect_object,
    _loads_object,
    _optional_error,
    _optional_str,
    _parse_level,
    _put,
    _require_str,
)

_T = TypeVar("_T")


class Operator(str, Enum):
    """Comparison operator used in metadata queries.

    The ``n``-prefixed operators force a numeric comparison of values
    that the catalogue stores as strings.
    """

    EQUALS = "="
    LIKE = "like"
    NOT_LIKE = "not like"
    IN = "in"
    GREATER_THAN = ">"
    NUMERIC_GREATER_THAN = "n>"
    LESS_THAN = "<"
    NUMERIC_LESS_THAN = "n<"
    GREATER_THAN_OR_EQUAL = ">="
    NUMERIC_GREATER_THAN_OR_EQUAL = "n>="
    LESS_THAN_OR_EQUAL = "<="
    NUMERIC_LESS_THAN_OR_EQUAL = "n<="


class MetamodOperation(str, Enum):
    """What a metadata-modification record does with its AVUs."""

    ADD = "add"
    RM = "rm"


def _enum_field(data: dict, key: str, kind: type, default: Any = None) -> Any:
    if key not in data:
        if default is None:
            raise ValueError(f"missing field `{key}`")
        return default
    raw = data[key]
    if not isinstance(raw, str):
        raise ValueError(f"field `{key}` must be a string")
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"unknown {key} {raw!r}") from None


def _operator(data: dict) -> Operator:
    return _enum_field(data, "operator", Operator, Operator.EQUALS)


def _list_field(data: dict, key: str, parse: Callable[[Any], _T]) -> list[_T]:
    """A list field that defaults to empty when absent."""
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return [parse(item) for item in value]


@dataclass
class MetamodInput:
    """One record asking to add or remove AVUs on a data object or collection."""

    collection: str
    operation: MetamodOperation
    data_object: Optional[str] = None
    avus: list[Avu] = field(default_factory=list)
    error: Optional[ErrorRecord] = None

    def target(self) -> Target:
        """The data object or collection this record addresses, identity only."""
        if self.data_object is not None:
            return DataObject(collection=self.collection, data_object=self.data_object)
        return Collection(collection=self.collection)

    def to_dict(self) -> dict:
        out: dict = {"collection": self.collection}
        _put(out, "data_object", self.data_object)
        out["operation"] = self.operation.value
        out["avus"] = [avu.to_dict() for avu in self.avus]
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any) -> MetamodInput:
        data = _expect_object(data)
        return cls(
            collection=_require_str(data, "collection"),
            data_object=_optional_str(data, "data_object"),
            operation=_enum_field(data, "operation", MetamodOperation),
            avus=_list_field(data, "avus", Avu.from_dict),
            error=_optional_error(data),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> MetamodInput:
        return cls.from_dict(_loads_object(text))


@dataclass
class AvuQuery:
    """One AVU criterion of a metadata query."""

    attribute: str
    value: str
    units: Optional[str] = None
    operator: Operator = Operator.EQUALS

    def to_dict(self) -> dict:
        out: dict = {"attribute": self.attribute, "value": self.value}
        _put(out, "units", self.units)
        out["operator"] = self.operator.value
        return out

    @classmethod
    def from_dict(cls, data: Any) -> AvuQuery:
        data = _expect_object(data)
        return cls(
            attribute=_require_str(data, "attribute"),
            value=_require_str(data, "value"),
            units=_optional_str(data, "units"),
            operator=_operator(data),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> AvuQuery:
        return cls.from_dict(_loads_object(text))


@dataclass
class TimestampQuery:
    """One creation- or modification-time criterion of a metadata query."""

    created: Optional[str] = None
    modified: Optional[str] = None
    operator: Operator = Operator.EQUALS

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "created", self.created)
        _put(out, "modified", self.modified)
        out["operator"] = self.operator.value
        return out

    @classmethod
    def from_dict(cls, data: Any) -> TimestampQuery:
        data = _expect_object(data)
        return cls(
            created=_optional_str(data, "created"),
            modified=_optional_str(data, "modified"),
            operator=_operator(data),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> TimestampQuery:
        return cls.from_dict(_loads_object(text))


@dataclass
class AccessQuery:
    """One access criterion: objects where ``owner`` holds ``level``."""

    owner: str
    level: AclLevel
    zone: Optional[str] = None

    def to_dict(self) -> dict:
        return Acl(self.owner, self.level, self.zone).to_dict()

    @classmethod
    def from_dict(cls, data: Any) -> AccessQuery:
        data = _expect_object(data)
        return cls(
            owner=_require_str(data, "owner"),
            level=_parse_level(data),
            zone=_optional_str(data, "zone"),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> AccessQuery:
        return cls.from_dict(_loads_object(text))


@dataclass
class MetaqueryInput:
    """A metadata query; criteria of each kind are combined with AND."""

    avus: list[AvuQuery] = field(default_factory=list)
    timestamps: list[TimestampQuery] = field(default_factory=list)
    access: list[AccessQuery] = field(default_factory=list)
    collection: Optional[str] = None
    zone: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {}
        if self.avus:
            out["avus"] = [q.to_dict() for q in self.avus]
        if self.timestamps:
            out["timestamps"] = [q.to_dict() for q in self.timestamps]
        if self.access:
            out["access"] = [q.to_dict() for q in self.access]
        _put(out, "collection", self.collection)
        _put(out, "zone", self.zone)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> MetaqueryInput:
        data = _expect_object(data)
        return cls(
            avus=_list_field(data, "avus", AvuQuery.from_dict),
            timestamps=_list_field(data, "timestamps", TimestampQuery.from_dict),
            access=_list_field(data, "access", AccessQuery.from_dict),
            collection=_optional_str(data, "collection"),
            zone=_optional_str(data, "zone"),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> MetaqueryInput:
        return cls.from_dict(_loads_object(text))