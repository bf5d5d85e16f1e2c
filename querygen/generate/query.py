"""Description of a model struct and the query struct generated for it."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field, replace
from typing import Any

from querygen.generate.utils import GenerateError, is_capitalize
from querygen.model.base import GORM_KEYWORDS, Field, KeyWord, SourceCode
from querygen.parser.method import Method, default_method_table_name
from querygen.parser.param import Param


@dataclass
class QueryStructMeta:
    """Everything the templates need to render one model and its query struct."""

    db: Any = None
    generated: bool = False
    file_name: str = ""
    s: str = ""
    query_struct_name: str = ""
    model_struct_name: str = ""
    table_name: str = ""
    table_comment: str = ""
    struct_info: Param = dc_field(default_factory=Param)
    fields: list[Field] = dc_field(default_factory=list)
    source: SourceCode = SourceCode.STRUCT
    import_pkg_paths: list[str] = dc_field(default_factory=list)
    model_methods: list[Method] = dc_field(default_factory=list)
    interface_mode: bool = False

    def revise_field_name(self) -> None:
        """Escape field names that clash with the query methods."""
        self.revise_field_name_for(GORM_KEYWORDS)

    def revise_field_name_for(self, keywords: KeyWord) -> None:
        """Escape field names that are among ``keywords``."""
        for fld in self.fields:
            fld.escape_keyword_for(keywords)

    def append_or_update_field(self, field: Field) -> None:
        """Replace the field of the same name, or append the field."""
        if field.is_relation():
            self.fields.append(field)
        if not field.column_name:
            return
        for index, existing in enumerate(self.fields):
            if existing.name == field.name:
                self.fields[index] = field
                return
        self.fields.append(field)

    def has_field(self) -> bool:
        return bool(self.fields)

    def check(self) -> None:
        """Raise if no query struct can be generated for this model."""
        if self.struct_info.in_main_pkg():
            raise GenerateError(
                "can't generated data object for struct in main package, "
                f"ignore:{self.model_struct_name}"
            )
        if not is_capitalize(self.model_struct_name):
            raise GenerateError(
                "can't generated data object for non-exportable struct, "
                f"ignore:{self.query_struct_name}"
            )

    def relations(self) -> list[Any]:
        """Return the relations of the relation fields, in order."""
        return [fld.relation for fld in self.fields if fld.is_relation()]

    def struct_comment(self) -> str:
        if self.table_comment:
            return self.table_comment
        if self.table_name:
            return f"mapped from table <{self.table_name}>"
        return "mapped from object"

    def query_struct_comment(self) -> str:
        if self.table_comment:
            return f"// {self.query_struct_name} {self.table_comment}"
        return ""

    def revise_diy_method(self) -> None:
        """Bind custom methods to the model, dropping duplicates and adding TableName.

        The surviving methods are kept even when duplicates are reported.
        """
        duplicates: list[str] = []
        table_name_method = None
        methods: list[Method] = []
        seen: set[str] = set()
        for method in self.model_methods:
            if method.method_name in seen:
                duplicates.append(method.method_name)
                continue
            if method.method_name == "TableName":
                table_name_method = method
            method.receiver.package = ""
            method.receiver.type = self.model_struct_name
            methods.append(method)
            seen.add(method.method_name)

        if table_name_method is None:
            methods.append(default_method_table_name(self.model_struct_name))
        else:
            body = table_name_method.body.replace('"@@table"', "TableName" + self.model_struct_name)
            table_name_method.body = body.replace("@@table", self.table_name)
        self.model_methods = methods

        if duplicates:
            raise GenerateError(
                "can't generate struct with duplicated method, please check method name: "
                + ",".join(duplicates)
            )

    def iface_mode(self, on: bool) -> QueryStructMeta:
        """Return a copy that renders the query object as an interface or not."""
        return replace(self, interface_mode=on)

    def return_object(self) -> str:
        """Return the type that chainable query methods return."""
        if self.interface_mode:
            return f"I{self.model_struct_name}Do"
        return f"*{self.query_struct_name}Do"