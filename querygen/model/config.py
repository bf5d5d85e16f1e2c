"""Per-model generation configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Optional

from querygen.model.base import DEFAULT_MODEL_PKG
from querygen.model.options import (
    AddMethodOpt,
    CreateFieldOpt,
    FilterFieldOpt,
    ModifyFieldOpt,
    Option,
    sort_options,
)

NameStrategy = Callable[[str], str]
SchemaNameOpt = Callable[[Any], str]


def _base_name(path: str) -> str:
    """Return the last element of ``path``, ignoring trailing separators."""
    if not path:
        return "."
    separators = "/" + os.sep
    stripped = path.rstrip(separators)
    if not stripped:
        return os.sep
    cut = max(stripped.rfind(sep) for sep in separators)
    return stripped[cut + 1:]


@dataclass
class ModelConfig:
    """Configuration for generating one model."""

    model_pkg: str = ""
    table_prefix: str = ""
    table_name: str = ""
    model_name: str = ""

    import_pkg_paths: list[str] = dc_field(default_factory=list)
    model_opts: list[Option] = dc_field(default_factory=list)

    schema_name_opts: list[SchemaNameOpt] = dc_field(default_factory=list)
    table_name_ns: Optional[NameStrategy] = None
    model_name_ns: Optional[NameStrategy] = None
    file_name_ns: Optional[NameStrategy] = None

    data_type_map: dict[str, Callable[[Any], str]] = dc_field(default_factory=dict)
    field_nullable: bool = False
    field_coverable: bool = False
    field_signable: bool = False
    field_with_index_tag: bool = False
    field_with_type_tag: bool = False
    field_json_tag_ns: Optional[NameStrategy] = None

    modify_opts: list[ModifyFieldOpt] = dc_field(default_factory=list)
    filter_opts: list[FilterFieldOpt] = dc_field(default_factory=list)
    create_opts: list[CreateFieldOpt] = dc_field(default_factory=list)
    method_opts: list[AddMethodOpt] = dc_field(default_factory=list)

    def preprocess(self) -> ModelConfig:
        """Fill defaults and sort the model options by kind."""
        if not self.model_pkg:
            self.model_pkg = DEFAULT_MODEL_PKG
        self.model_pkg = _base_name(self.model_pkg)
        self.modify_opts, self.filter_opts, self.create_opts, self.method_opts = sort_options(
            self.model_opts
        )
        return self

    def get_names(self) -> tuple[str, str, str]:
        """Return the table name, struct name and file name."""
        table_name, struct_name = self.table_name, self.model_name
        if self.model_name_ns is not None:
            struct_name = self.model_name_ns(table_name)
        if self.table_name_ns is not None:
            table_name = self.table_name_ns(table_name)
        if not table_name.startswith(self.table_prefix):
            table_name = self.table_prefix + table_name

        file_name = table_name.lower()
        if self.file_name_ns is not None:
            file_name = self.file_name_ns(self.table_name)
        return table_name, struct_name, file_name

    def get_model_methods(self) -> list[Any]:
        """Collect the custom methods from every method option."""
        return [method for opt in self.method_opts for method in opt.methods()]

    def get_schema_name(self, db: Any) -> str:
        """Return the first non-empty schema name produced by the schema options."""
        for opt in self.schema_name_opts:
            name = opt(db)
            if name:
                return name
        return ""