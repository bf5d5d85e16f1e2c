"""Core model types: statuses, keywords, data type mapping, fields and SQL buffers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Mapping

DEFAULT_MODEL_PKG = "model"


class Status(enum.IntEnum):
    """Kind of a piece of a templated SQL statement."""

    UNKNOWN = 0
    SQL = enum.auto()
    DATA = enum.auto()
    VARIABLE = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    WHERE = enum.auto()
    SET = enum.auto()
    FOR = enum.auto()
    END = enum.auto()
    TRIM = enum.auto()


class SourceCode(enum.IntEnum):
    """Where a model definition came from."""

    STRUCT = 0
    TABLE = 1
    OBJECT = 2


@dataclass(frozen=True)
class KeyWord:
    """A set of reserved words."""

    words: tuple[str, ...]

    def full_match(self, word: str) -> bool:
        """Return True if ``word`` equals one of the reserved words."""
        return word in self.words

    def contain(self, text: str) -> bool:
        """Return True if any reserved word occurs inside ``text``."""
        return any(item in text for item in self.words)


GORM_KEYWORDS = KeyWord(
    (
        "UnderlyingDB", "UseDB", "UseModel", "UseTable", "Quote", "Debug", "TableName", "WithContext",
        "As", "Not", "Or", "Build", "Columns", "Hints",
        "Distinct", "Omit",
        "Select", "Where", "Order", "Group", "Having", "Limit", "Offset",
        "Join", "LeftJoin", "RightJoin",
        "Save", "Create", "CreateInBatches",
        "Update", "Updates", "UpdateColumn", "UpdateColumns",
        "Find", "FindInBatches", "First", "Take", "Last", "Pluck", "Count",
        "Scan", "ScanRows", "Row", "Rows",
        "Delete", "Unscoped",
        "Scopes",
    )
)

DO_KEYWORDS = KeyWord(("Alias", "TableName", "WithContext"))

GEN_KEYWORDS = KeyWord(("generateSQL", "whereClause", "setClause"))


DataTypeMapping = Callable[[str], str]


class DataTypeMap:
    """Maps database column type names to generated field types."""

    def __init__(self, mappings: Mapping[str, DataTypeMapping], default: str = "string") -> None:
        self._mappings = dict(mappings)
        self.default = default

    def get(self, data_type: str, detail_type: str) -> str:
        """Return the field type for ``data_type``, or the default when unknown."""
        convert = self._mappings.get(data_type.lower())
        if convert is None:
            return self.default
        return convert(detail_type)


def _always(result: str) -> DataTypeMapping:
    return lambda _detail: result


def _tinyint(detail_type: str) -> str:
    if detail_type.strip().startswith("tinyint(1)"):
        return "bool"
    return "int32"


DATA_TYPE = DataTypeMap(
    {
        "numeric": _always("int32"),
        "integer": _always("int32"),
        "int": _always("int32"),
        "smallint": _always("int32"),
        "mediumint": _always("int32"),
        "bigint": _always("int64"),
        "float": _always("float32"),
        "real": _always("float64"),
        "double": _always("float64"),
        "decimal": _always("float64"),
        "char": _always("string"),
        "varchar": _always("string"),
        "tinytext": _always("string"),
        "mediumtext": _always("string"),
        "longtext": _always("string"),
        "binary": _always("[]byte"),
        "varbinary": _always("[]byte"),
        "tinyblob": _always("[]byte"),
        "blob": _always("[]byte"),
        "mediumblob": _always("[]byte"),
        "longblob": _always("[]byte"),
        "text": _always("string"),
        "json": _always("string"),
        "enum": _always("string"),
        "time": _always("time.Time"),
        "date": _always("time.Time"),
        "datetime": _always("time.Time"),
        "timestamp": _always("time.Time"),
        "year": _always("int32"),
        "bit": _always("[]uint8"),
        "boolean": _always("bool"),
        "tinyint": _tinyint,
    }
)

_TITLED_TYPES = frozenset(
    {
        "string", "bytes",
        "int", "int8", "int16", "int32", "int64",
        "uint", "uint8", "uint16", "uint32", "uint64",
        "float64", "float32",
        "bool",
    }
)

_SPECIAL_GEN_TYPES = {
    "time.Time": "Time",
    "json.RawMessage": "Bytes",
    "[]byte": "Bytes",
    "serializer": "Serializer",
}


@dataclass
class Field:
    """A field of a generated model."""

    name: str = ""
    type: str = ""
    column_name: str = ""
    column_comment: str = ""
    multiline_comment: bool = False
    tag: dict[str, str] = dc_field(default_factory=dict)
    gorm_tag: dict[str, list[str]] = dc_field(default_factory=dict)
    custom_gen_type: str = ""
    relation: Any = None

    def is_relation(self) -> bool:
        return self.relation is not None

    def gen_type(self) -> str:
        """Return the name of the query field type used for this field."""
        if self.is_relation():
            return self.type
        if self.custom_gen_type:
            return self.custom_gen_type
        typ = self.type.lstrip("*")
        if typ in _TITLED_TYPES:
            return typ[:1].upper() + typ[1:]
        return _SPECIAL_GEN_TYPES.get(typ, "Field")

    def escape_keyword(self) -> Field:
        return self.escape_keyword_for(GORM_KEYWORDS)

    def escape_keyword_for(self, keywords: KeyWord) -> Field:
        """Append an underscore to the name if it is a reserved word."""
        if keywords.full_match(self.name):
            self.name += "_"
        return self


_WHITESPACE = frozenset("\n\t ")


class SQLBuffer:
    """Accumulates SQL text, collapsing runs of whitespace into one space."""

    def __init__(self) -> None:
        self._chars: list[str] = []

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(self._chars)

    def write(self, ch: str) -> None:
        """Append ``ch`` verbatim."""
        self._chars.append(ch)

    def write_sql(self, ch: str) -> None:
        """Append a single character, turning whitespace into at most one space."""
        if ch in _WHITESPACE:
            if not self._chars or self._chars[-1] != " ":
                self._chars.append(" ")
        else:
            self._chars.append(ch)

    def dump(self) -> str:
        """Return the buffered text and empty the buffer."""
        text = "".join(self._chars)
        self._chars.clear()
        return text