"""Parameters and interfaces read from user-declared query interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import TYPE_CHECKING, Iterable, Mapping

if TYPE_CHECKING:
    from querygen.parser.method import Method

_BASE_TYPES = frozenset(
    {
        "string", "byte",
        "int", "int8", "int16", "int32", "int64",
        "uint", "uint8", "uint16", "uint32", "uint64",
        "float64", "float32",
        "bool",
        "time.Time",
    }
)


@dataclass
class Param:
    """A parameter or result of a method, e.g. ``user model.User``."""

    pkg_path: str = ""
    package: str = ""
    name: str = ""
    type: str = ""
    is_array: bool = False
    is_pointer: bool = False

    def eq(self, other: Param) -> bool:
        """Return True if both parameters name the same package and type."""
        return self.package == other.package and self.type == other.type

    def is_error(self) -> bool:
        return self.type == "error"

    def is_gen_m(self) -> bool:
        return self.package == "gen" and self.type == "M"

    def is_gen_rows_affected(self) -> bool:
        return self.package == "gen" and self.type == "RowsAffected"

    def is_map(self) -> bool:
        return self.type.startswith("map[")

    def is_gen_t(self) -> bool:
        return self.package == "gen" and self.type == "T"

    def is_interface(self) -> bool:
        return self.type == "interface{}"

    def is_null(self) -> bool:
        return self.package == "" and self.type == "" and self.name == ""

    def in_main_pkg(self) -> bool:
        return self.package == "main"

    def is_time(self) -> bool:
        return self.package == "time" and self.type == "Time"

    def is_sql_result(self) -> bool:
        return (self.package, self.type) in (("sql", "Result"), ("gen", "SQLResult"))

    def is_sql_row(self) -> bool:
        return (self.package, self.type) in (("sql", "Row"), ("gen", "SQLRow"))

    def is_sql_rows(self) -> bool:
        return (self.package, self.type) in (("sql", "Rows"), ("gen", "SQLRows"))

    def type_name(self) -> str:
        return "[]" + self.type if self.is_array else self.type

    def tmpl_string(self) -> str:
        """Render the parameter as it appears in a generated signature."""
        parts = []
        if self.name:
            parts.append(self.name + " ")
        if self.is_array:
            parts.append("[]")
        if self.is_pointer:
            parts.append("*")
        if self.package:
            parts.append(self.package + ".")
        parts.append(self.type)
        return "".join(parts)

    def is_base_type(self) -> bool:
        return self.type in _BASE_TYPES


@dataclass
class InterfaceInfo:
    """An interface whose methods are turned into query methods."""

    name: str = ""
    doc: str = ""
    methods: list[Method] = dc_field(default_factory=list)
    package: str = ""
    apply_struct: list[str] = dc_field(default_factory=list)

    def match_struct(self, name: str) -> bool:
        """Return True if the interface applies to the struct ``name``."""
        return name in self.apply_struct


@dataclass
class InterfaceSet:
    """The interfaces collected for generation and the imports they refer to."""

    interfaces: list[InterfaceInfo] = dc_field(default_factory=list)
    imports: dict[str, str] = dc_field(default_factory=dict)


def fix_param_package_path(imports: Mapping[str, str], params: Iterable[Param]) -> None:
    """Set each parameter's package path from the import of its package."""
    for param in params:
        path = imports.get(param.package)
        if path is not None:
            param.pkg_path = path