"""JSON records exchanged with baton: paths, metadata, ACLs, replicas and targets."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TypeVar, Union

_T = TypeVar("_T")
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_MISSING = object()


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _loads_object(text: str) -> dict:
    return _expect_object(json.loads(text))


def _expect_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _check_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _required(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _require_str(data: dict, key: str) -> str:
    return _check_str(key, _required(data, key))


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else _check_str(key, value)


def _check_uint(key: str, value: Any, limit: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise ValueError(f"field `{key}` must be an integer between 0 and {limit}")
    return value


def _optional_uint(data: dict, key: str, limit: int) -> Optional[int]:
    value = data.get(key)
    return None if value is None else _check_uint(key, value, limit)


def _optional_list(
    data: dict, key: str, parse: Callable[[Any], _T]
) -> Optional[list[_T]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be a list")
    return [parse(item) for item in value]


def _aliased(data: dict, name: str, alias: str) -> Any:
    """Fetch a field that may be spelt in long or short form, but not both."""
    if name in data and alias in data:
        raise ValueError(f"duplicate field `{name}`")
    if name in data:
        return data[name]
    return data.get(alias, _MISSING)


def _put(out: dict, key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


def _put_records(out: dict, key: str, items: Optional[Iterable[Any]]) -> None:
    if items is not None:
        out[key] = [item.to_dict() for item in items]


class IrodsPath(str):
    """An absolute iRODS path, serialised as a plain JSON string."""

    __slots__ = ()

    def to_json(self) -> str:
        return _dumps(str(self))

    @classmethod
    def from_json(cls, text: str) -> IrodsPath:
        value = json.loads(text)
        if not isinstance(value, str):
            raise ValueError("an iRODS path must be a JSON string")
        return cls(value)


@dataclass(frozen=True)
class ErrorRecord:
    """An error attached in band to the record whose operation failed."""

    code: int
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}

    @classmethod
    def from_dict(cls, data: Any) -> ErrorRecord:
        data = _expect_object(data)
        code = _required(data, "code")
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError("field `code` must be an integer")
        return cls(code=code, message=_require_str(data, "message"))


def _optional_error(data: dict) -> Optional[ErrorRecord]:
    value = data.get("error")
    return None if value is None else ErrorRecord.from_dict(value)


@dataclass
class Avu:
    """An attribute-value-unit metadata triple."""

    attribute: str
    value: str
    units: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"attribute": self.attribute, "value": self.value}
        _put(out, "units", self.units)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Avu:
        data = _expect_object(data)
        fields = {}
        for name, alias in (("attribute", "a"), ("value", "v")):
            raw = _aliased(data, name, alias)
            if raw is _MISSING:
                raise ValueError(f"missing field `{name}`")
            fields[name] = _check_str(name, raw)
        units = _aliased(data, "units", "u")
        if units is _MISSING or units is None:
            fields["units"] = None
        else:
            fields["units"] = _check_str("units", units)
        return cls(**fields)

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Avu:
        return cls.from_dict(_loads_object(text))


class AclLevel(str, Enum):
    """An iRODS access level."""

    NULL = "null"
    READ = "read"
    WRITE = "write"
    OWN = "own"

    def as_irods_str(self) -> str:
        """The bare lowercase string the iRODS access-control call accepts."""
        return self.value


def _parse_level(data: dict) -> AclLevel:
    raw_level = _require_str(data, "level")
    try:
        return AclLevel(raw_level)
    except ValueError:
        raise ValueError(f"unknown access level {raw_level!r}") from None


@dataclass
class Acl:
    """A single access control entry."""

    owner: str
    level: AclLevel
    zone: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict = {"owner": self.owner, "level": self.level.value}
        _put(out, "zone", self.zone)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Acl:
        data = _expect_object(data)
        level = _parse_level(data)
        return cls(
            owner=_require_str(data, "owner"),
            level=level,
            zone=_optional_str(data, "zone"),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Acl:
        return cls.from_dict(_loads_object(text))


@dataclass
class Replicate:
    """One replica of a data object."""

    checksum: str
    location: str
    resource: str
    number: int
    valid: bool

    def to_dict(self) -> dict:
        return {
            "checksum": self.checksum,
            "location": self.location,
            "resource": self.resource,
            "number": self.number,
            "valid": self.valid,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Replicate:
        data = _expect_object(data)
        valid = _required(data, "valid")
        if not isinstance(valid, bool):
            raise ValueError("field `valid` must be a boolean")
        texts = {key: _require_str(data, key) for key in ("checksum", "location", "resource")}
        number = _check_uint("number", _required(data, "number"), _U32_MAX)
        return cls(number=number, valid=valid, **texts)

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Replicate:
        return cls.from_dict(_loads_object(text))


@dataclass
class Timestamp:
    """A creation or modification time, optionally tied to one replica."""

    created: Optional[str] = None
    modified: Optional[str] = None
    replicate: Optional[int] = None

    def to_dict(self) -> dict:
        out: dict = {}
        _put(out, "created", self.created)
        _put(out, "modified", self.modified)
        _put(out, "replicate", self.replicate)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Timestamp:
        data = _expect_object(data)
        return cls(
            created=_optional_str(data, "created"),
            modified=_optional_str(data, "modified"),
            replicate=_optional_uint(data, "replicate", _U32_MAX),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Timestamp:
        return cls.from_dict(_loads_object(text))


@dataclass
class DataObject:
    """A data object (file) in iRODS, with whatever details were requested."""

    collection: str
    data_object: str
    size: Optional[int] = None
    checksum: Optional[str] = None
    data: Optional[str] = None
    directory: Optional[str] = None
    avus: Optional[list[Avu]] = None
    access: Optional[list[Acl]] = None
    replicates: Optional[list[Replicate]] = None
    timestamps: Optional[list[Timestamp]] = None
    error: Optional[ErrorRecord] = None

    def path(self) -> str:
        """The absolute iRODS path of the object."""
        if self.collection.endswith("/"):
            return f"{self.collection}{self.data_object}"
        return f"{self.collection}/{self.data_object}"

    def set_error(self, error: ErrorRecord) -> None:
        self.error = error

    def to_dict(self) -> dict:
        out: dict = {"collection": self.collection, "data_object": self.data_object}
        for key in ("size", "checksum", "data", "directory"):
            _put(out, key, getattr(self, key))
        for key in ("avus", "access", "replicates", "timestamps"):
            _put_records(out, key, getattr(self, key))
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any) -> DataObject:
        data = _expect_object(data)
        return cls(
            collection=_require_str(data, "collection"),
            data_object=_require_str(data, "data_object"),
            size=_optional_uint(data, "size", _U64_MAX),
            checksum=_optional_str(data, "checksum"),
            data=_optional_str(data, "data"),
            directory=_optional_str(data, "directory"),
            avus=_optional_list(data, "avus", Avu.from_dict),
            access=_optional_list(data, "access", Acl.from_dict),
            replicates=_optional_list(data, "replicates", Replicate.from_dict),
            timestamps=_optional_list(data, "timestamps", Timestamp.from_dict),
            error=_optional_error(data),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> DataObject:
        return cls.from_dict(_loads_object(text))


@dataclass
class Collection:
    """A collection (directory) in iRODS, optionally with its direct contents."""

    collection: str
    avus: Optional[list[Avu]] = None
    access: Optional[list[Acl]] = None
    timestamps: Optional[list[Timestamp]] = None
    contents: Optional[list[Union[DataObject, Collection]]] = None
    error: Optional[ErrorRecord] = None

    def path(self) -> str:
        """The absolute iRODS path of the collection."""
        return self.collection

    def set_error(self, error: ErrorRecord) -> None:
        self.error = error

    def to_dict(self) -> dict:
        out: dict = {"collection": self.collection}
        for key in ("avus", "access", "timestamps", "contents"):
            _put_records(out, key, getattr(self, key))
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Collection:
        data = _expect_object(data)
        return cls(
            collection=_require_str(data, "collection"),
            avus=_optional_list(data, "avus", Avu.from_dict),
            access=_optional_list(data, "access", Acl.from_dict),
            timestamps=_optional_list(data, "timestamps", Timestamp.from_dict),
            contents=_optional_list(data, "contents", target_from_dict),
            error=_optional_error(data),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> Collection:
        return cls.from_dict(_loads_object(text))


Target = Union[DataObject, Collection]


def target_from_dict(data: Any) -> Target:
    """Read a data object if the record parses as one, otherwise a collection."""
    data = _expect_object(data)
    try:
        return DataObject.from_dict(data)
    except ValueError:
        return Collection.from_dict(data)


def target_from_json(text: str) -> Target:
    return target_from_dict(_loads_object(text))