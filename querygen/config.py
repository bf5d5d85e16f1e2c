"""The generator's global configuration."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Optional

from querygen.model.base import DEFAULT_MODEL_PKG
from querygen.model.config import NameStrategy, SchemaNameOpt
from querygen.model.options import Option


class GenerateMode(enum.IntFlag):
    """Switches that change what code is generated."""

    WITH_DEFAULT_QUERY = 1
    WITHOUT_CONTEXT = 2
    WITH_QUERY_INTERFACE = 4


@dataclass
class Config:
    """Where the generated code goes and how models are generated."""

    out_path: str = ""
    out_file: str = ""
    model_pkg_path: str = ""
    with_unit_test: bool = False

    field_nullable: bool = False
    field_coverable: bool = False
    field_signable: bool = False
    field_with_index_tag: bool = False
    field_with_type_tag: bool = False

    mode: GenerateMode = GenerateMode(0)

    db: Any = None
    query_pkg_name: str = ""
    db_name_opts: list[SchemaNameOpt] = dc_field(default_factory=list)
    import_pkg_paths: list[str] = dc_field(default_factory=list)

    table_name_ns: Optional[NameStrategy] = None
    model_name_ns: Optional[NameStrategy] = None
    file_name_ns: Optional[NameStrategy] = None

    data_type_map: dict[str, Callable[[Any], str]] = dc_field(default_factory=dict)
    field_json_tag_ns: Optional[NameStrategy] = None

    model_opts: list[Option] = dc_field(default_factory=list)

    def with_opts(self, *args: Option) -> None:
        """Add model options applied to every model."""
        self.model_opts.extend(args)

    def with_db_name_opts(self, *args: SchemaNameOpt) -> None:
        """Add functions that name the database schema."""
        self.db_name_opts.extend(args)

    def with_table_name_strategy(self, ns: Optional[NameStrategy]) -> None:
        self.table_name_ns = ns

    def with_model_name_strategy(self, ns: Optional[NameStrategy]) -> None:
        self.model_name_ns = ns

    def with_file_name_strategy(self, ns: Optional[NameStrategy]) -> None:
        self.file_name_ns = ns

    def with_data_type_map(self, mapping: dict[str, Callable[[Any], str]]) -> None:
        self.data_type_map = mapping

    def with_json_tag_name_strategy(self, ns: Optional[NameStrategy]) -> None:
        self.field_json_tag_ns = ns

    def with_import_pkg_path(self, *args: str) -> None:
        """Add import paths, quoting those given without quotes."""
        for path in args:
            path = path.strip()
            if path and path[0] != '"' and path[-1] != '"':
                path = f'"{path}"'
            self.import_pkg_paths.append(path)

    def revise(self) -> None:
        """Fill in defaults and make the output paths absolute."""
        if not self.model_pkg_path.strip():
            self.model_pkg_path = DEFAULT_MODEL_PKG

        try:
            self.out_path = os.path.abspath(self.out_path)
        except (ValueError, OSError) as exc:
            raise ValueError(f"outpath is invalid: {exc}") from exc
        if not self.out_path:
            self.out_path = f".{os.sep}query{os.sep}"

        if not self.out_file:
            self.out_file = os.path.join(self.out_path, "gen.go")
        elif os.sep not in self.out_file:
            self.out_file = os.path.join(self.out_path, self.out_file)
        self.query_pkg_name = os.path.basename(self.out_path.rstrip(os.sep)) or os.sep

    def judge_mode(self, mode: GenerateMode) -> bool:
        """Return True if any of the switches in ``mode`` is on."""
        return bool(self.mode & mode)