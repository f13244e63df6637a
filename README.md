# batonkit

Typed Python records for the JSON documents exchanged by baton-style
iRODS client tools: data objects, collections, metadata (AVUs), access
control entries, replicates, timestamps, and the input records used for
metadata modification and metadata queries.

Every record reads and writes the same compact JSON that the baton
tools use. Optional fields are left out of the output when unset. AVUs
accept the short keys `a` / `v` / `u` on input and always write the long
keys `attribute` / `value` / `units`.

Each record class has `to_dict()` / `from_dict(data)` and `to_json()` /
`from_json(text)`. Malformed input (a missing required field, a value of
the wrong type, an unknown enum string, a negative or out-of-range
integer) raises `ValueError`.

## Installation

```
pip install batonkit
```

The package has no runtime dependencies. To run the tests:

```
pip install "batonkit[test]"
pytest
```

## Records

The `batonkit.records` module holds these:

- `IrodsPath`: a `str` subclass for a path, written as a plain JSON string.
- `Avu`: one attribute, value and optional unit.
- `AclLevel`: the access levels `null`, `read`, `write` and `own`.
  `as_irods_str()` gives the bare string the server accepts.
- `Acl`: an owner, a level and an optional zone.
- `Replicate`: one replica of a data object.
- `Timestamp`: a `created` or `modified` time, optionally tied to a replicate.
- `ErrorRecord`: a per-record error, with a `code` and a `message`.
- `DataObject` and `Collection`.

`DataObject.path()` joins the collection and the object name, and allows
for a trailing slash on the collection. `Collection.path()` returns the
collection itself. `set_error(error)` attaches an `ErrorRecord`, so that
one failed input can be reported in the output stream without stopping
the stream.

```python
from batonkit.records import target_from_json

item = target_from_json('{"collection":"/testZone/home/irods","data_object":"foo.txt"}')
print(item.path())      # /testZone/home/irods/foo.txt
print(item.to_json())   # {"collection":"/testZone/home/irods","data_object":"foo.txt"}
```

`target_from_dict` and `target_from_json` return a `DataObject` when the
document parses as one (it needs a `data_object` key), and otherwise read
it as a `Collection`. A collection's `contents` is a mixed list of both
kinds, read the same way.

## Query and modification inputs

The `batonkit.queries` module holds these:

- `Operator`: the comparison operators `=`, `like`, `not like`, `in`,
  `>`, `<`, `>=`, `<=`, and the numeric forms `n>`, `n<`, `n>=`, `n<=`.
  When a query criterion leaves it out, it is `=`; it is always written
  on output.
- `MetamodOperation`: `add` or `rm`.
- `MetamodInput`: one metadata-modification record. `target()` gives the
  `DataObject` or `Collection` it refers to, carrying only its path.
- `AvuQuery`, `TimestampQuery` and `AccessQuery`: search criteria.
- `MetaqueryInput`: a whole metadata query. Empty lists and unset
  scoping fields are left out, so an empty query is written as `{}`.

```python
from batonkit.queries import MetaqueryInput

query = MetaqueryInput.from_json('{"avus":[{"attribute":"sample","value":"12*","operator":"like"}]}')
print(query.avus[0].operator.value)   # like
```

## What this package does not do

batonkit only reads and writes the JSON records. It does not connect to
an iRODS server, log in, list, fetch, upload, change permissions or run
metadata queries, and it provides no command-line tools. Those are left
to whatever program uses these records.