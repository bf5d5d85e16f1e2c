"""Query methods declared on user interfaces and the checking of their SQL templates."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field, replace
from typing import Any, Iterable, Optional

from querygen.generate.section import Part, Section
from querygen.generate.utils import GenerateError, _go_quote, is_end
from querygen.model.base import GORM_KEYWORDS, SQLBuffer, Status
from querygen.parser.method import param_to_string
from querygen.parser.param import Param

_UNDEFINED = "UNDEFINED"


@dataclass
class InterfaceMethod:
    """A method of a user interface turned into a generated query method."""

    doc: str = ""
    s: str = ""
    origin_struct: Param = dc_field(default_factory=Param)
    target_struct: str = ""
    method_name: str = ""
    params: list[Param] = dc_field(default_factory=list)
    result: list[Param] = dc_field(default_factory=list)
    result_data: Param = dc_field(default_factory=Param)
    section: Optional[Section] = None
    sql_params: list[Param] = dc_field(default_factory=list)
    sql_string: str = ""
    gorm_option: str = ""
    table: str = ""
    interface_name: str = ""
    package: str = ""
    has_for_params: bool = False

    def func_sign(self) -> str:
        return f"{self.method_name}({self.param_in_tmpl()}) ({self.result_param_in_tmpl()})"

    def has_sql_data(self) -> bool:
        """Return True if the generated method needs a parameter list."""
        return bool(self.sql_params) or self.has_for_params

    def has_got_point(self) -> bool:
        return not self.has_need_new_result()

    def has_need_new_result(self) -> bool:
        data = self.result_data
        return not data.is_array and ((data.is_null() and data.is_time()) or data.is_map())

    def gorm_run_method_name(self) -> str:
        return "Find" if self.result_data.is_array else "Take"

    def return_sql_result(self) -> bool:
        return any(res.is_sql_result() for res in self.result)

    def return_sql_row(self) -> bool:
        return any(res.is_sql_row() for res in self.result)

    def return_sql_rows(self) -> bool:
        return any(res.is_sql_rows() for res in self.result)

    def return_nothing(self) -> bool:
        return not any(res.is_error() or res.name == "rowsAffected" for res in self.result)

    def return_rows_affected(self) -> bool:
        return any(res.name == "rowsAffected" for res in self.result)

    def return_error(self) -> bool:
        return any(res.is_error() for res in self.result)

    def is_repeat_from_different_interface(self, other: InterfaceMethod) -> bool:
        return (
            self.method_name == other.method_name
            and self.interface_name != other.interface_name
            and self.target_struct == other.target_struct
        )

    def is_repeat_from_same_interface(self, other: InterfaceMethod) -> bool:
        return (
            self.method_name == other.method_name
            and self.interface_name == other.interface_name
            and self.target_struct == other.target_struct
        )

    def param_in_tmpl(self) -> str:
        return param_to_string(self.params)

    def result_param_in_tmpl(self) -> str:
        return param_to_string(self.result)

    def sql_param_name(self, param: str) -> str:
        """Return ``param`` with dots removed, usable as a parameter key."""
        return param.replace(".", "")

    def doc_comment(self) -> str:
        """Return the documentation with a comment marker after every line break."""
        return self.doc.strip().replace("\n", "\n// ").replace("//  ", "// ")

    def check_method(self, methods: Iterable[InterfaceMethod], meta: Any) -> None:
        """Reject reserved names and names clashing with other methods or struct fields."""
        if GORM_KEYWORDS.full_match(self.method_name):
            raise GenerateError(f"can not use keyword as method name:{self.method_name}")
        for method in methods:
            if self.is_repeat_from_different_interface(method):
                raise GenerateError(
                    "can not generate method with the same name from different interface:"
                    f"[{self.interface_name}.{self.method_name}] and "
                    f"[{method.interface_name}.{method.method_name}]"
                )
        for fld in meta.fields:
            if fld.name == self.method_name:
                raise GenerateError(
                    "can not generate method same name with struct field:"
                    f"[{self.interface_name}.{self.method_name}] and "
                    f"[{meta.model_struct_name}.{fld.name}]"
                )

    def check_params(self, params: Iterable[Param]) -> None:
        """Validate the input parameters and resolve placeholder types."""
        checked: list[Param] = []
        for original in params:
            param = replace(original)
            if param.package == _UNDEFINED:
                param.package = self.package
            elif param.is_error() or param.is_null():
                raise GenerateError(
                    f"type error on interface [{self.interface_name}] param: [{param.name}]"
                )
            elif param.is_gen_m():
                param.type = "map[string]interface{}"
                param.package = ""
            elif param.is_gen_t():
                param.type = self.origin_struct.type
                param.package = self.origin_struct.package
            checked.append(param)
        self.params = checked

    def check_result(self, result: Iterable[Param]) -> None:
        """Validate the results, naming them and choosing how the query is run."""
        where = f"[{self.interface_name}.{self.method_name}]"
        checked: list[Param] = []
        has_error = False
        for original in result:
            param = replace(original)
            if param.package == _UNDEFINED:
                param.package = self.package
            if param.is_gen_m():
                param.type = "map[string]interface{}"
                param.package = ""

            if param.in_main_pkg():
                raise GenerateError(f"query method cannot return struct of main package in {where}")
            if param.is_error():
                if has_error:
                    raise GenerateError(f"query method cannot return more than 1 error value in {where}")
                param.name = "err"
                has_error = True
            elif param.eq(self.origin_struct) or param.is_gen_t():
                if not self.result_data.is_null():
                    raise GenerateError(f"query method cannot return more than 1 data value in {where}")
                param.name = "result"
                param.type = self.origin_struct.type
                param.package = self.origin_struct.package
                self.result_data = param
            elif param.is_interface():
                raise GenerateError(f"query method can not return interface in {where}")
            elif param.is_gen_rows_affected():
                param.type = "int64"
                param.package = ""
                param.name = "rowsAffected"
                self.gorm_option = "Exec"
            elif param.is_sql_result():
                param.type = "Result"
                param.package = "sql"
                param.name = "result"
                self.gorm_option = "Statement.ConnPool.ExecContext"
            elif param.is_sql_row():
                param.type = "Row"
                param.package = "sql"
                param.name = "row"
                self.gorm_option = "Raw"
                param.is_pointer = True
            elif param.is_sql_rows():
                param.type = "Rows"
                param.package = "sql"
                param.name = "rows"
                self.gorm_option = "Raw"
                param.is_pointer = True
            else:
                if not self.result_data.is_null():
                    raise GenerateError(f"query method cannot return more than 1 data value in {where}")
                if not param.package and not (param.is_base_type() or param.is_map() or param.is_time()):
                    param.package = self.package
                param.name = "result"
                self.result_data = param
            checked.append(param)
        self.result = checked

    def check_sql(self) -> None:
        """Read the SQL from the documentation and split it into sections."""
        self.sql_string = self._parse_doc_string()
        try:
            self.split_sql()
        except GenerateError as exc:
            raise GenerateError(
                f"interface {self.interface_name} member method {self.method_name} check sql err:{exc}"
            ) from exc

    def _parse_doc_string(self) -> str:
        doc = self._sql_doc_string().strip()
        lowered = doc.lower()
        if lowered.startswith("where("):
            doc = doc[6:-1]
            self.gorm_option = "Where"
        else:
            if lowered.startswith("sql("):
                doc = doc[4:-1]
            self.gorm_option = "Exec" if self.result_data.is_null() else "Raw"

        if doc.startswith('"') and doc.endswith('"'):
            doc = doc[1:-1]
        return doc

    def _sql_doc_string(self) -> str:
        doc = self.doc.strip()
        index = doc.find("\n\n")
        if index != -1:
            if self.method_name in doc[index + 2:]:
                doc = doc[:index]
            else:
                doc = doc[index + 2:]
        if doc.startswith(self.method_name):
            doc = doc[len(self.method_name):]
        return doc

    def split_sql(self) -> None:
        """Split ``sql_string`` into text, variables and templates in a new section."""
        sql = self.sql_string
        n = len(sql)
        section = Section()
        self.section = section
        buf = SQLBuffer()

        def incomplete() -> GenerateError:
            return GenerateError(f"incomplete SQL:{sql}")

        def flush_text() -> None:
            text = buf.dump()
            if text.strip():
                section.members.append(Part(type=Status.SQL, value=_go_quote(text)))

        def copy_quoted(i: int, quote: str) -> int:
            """Copy a quoted run starting after its opening quote; return the closing index."""
            while True:
                if i >= n:
                    raise incomplete()
                buf.write(sql[i])
                if sql[i] == quote and sql[i - 1] != "\\":
                    return i
                i += 1

        i = 0
        while i < n:
            ch = sql[i]
            if ch in "\"'":
                buf.write(ch)
                i = copy_quoted(i + 1, ch)
            elif ch == "\\":
                if i + 1 < n and sql[i + 1] == "@":
                    i += 1
                    buf.write_sql(sql[i])
                else:
                    buf.write_sql(ch)
            elif ch in "{@":
                flush_text()
                if i + 1 >= n:
                    raise incomplete()
                if ch == "{" and sql[i + 1] == "{":
                    i += 2
                    while True:
                        if i >= n:
                            raise incomplete()
                        if sql[i] == '"':
                            buf.write(sql[i])
                            i = copy_quoted(i + 1, '"') + 1
                        if i + 1 >= n:
                            raise incomplete()
                        if sql[i] == "}" and sql[i + 1] == "}":
                            i += 1
                            template = buf.dump()
                            try:
                                part = section.check_template(template)
                            except GenerateError as exc:
                                raise GenerateError(
                                    f"sql [{sql}] dynamic template {template} err:{exc}"
                                ) from exc
                            section.members.append(part)
                            break
                        buf.write_sql(sql[i])
                        i += 1
                elif ch == "@":
                    i += 1
                    status = Status.DATA
                    if sql[i] == "@":
                        i += 1
                        status = Status.VARIABLE
                    while i < n and not is_end(sql[i]):
                        buf.write_sql(sql[i])
                        i += 1
                    section.members.append(section.check_sql_var(buf.dump(), status, self))
                    i -= 1
            else:
                buf.write_sql(ch)
            i += 1
        flush_text()

    def _check_sql_var_by_params(self, param: str, status: Status) -> Part:
        """Resolve a SQL variable against the method's parameters or the table name."""
        struct_name = param.split(".")[0]
        for p in self.params:
            if p.name != struct_name:
                continue
            if p.name != param:
                p = Param(name=param, type="string")
            if status is Status.DATA:
                if not self._is_param_exist(param):
                    self.sql_params.append(p)
            elif status is Status.VARIABLE:
                if p.type != "string" or p.is_array:
                    raise GenerateError(
                        f"variable name must be string :{param} type is {p.type_name()}"
                    )
                param = f"{self.s}.Quote({param})"
            return Part(type=status, value=param)
        if param == "table":
            return Part(type=Status.SQL, value=_go_quote(self.table))
        raise GenerateError(f"unknow variable param:{param}")

    def _is_param_exist(self, name: str) -> bool:
        return any(param.name == name for param in self.sql_params)

    def test_param_in_tmpl(self) -> str:
        """Return the argument list used in a generated unit test."""
        items = []
        for index, param in enumerate(self.params):
            typ = param.type
            if param.package:
                typ = f"{param.package}.{typ}"
            if param.is_array:
                typ = "[]" + typ
            if param.is_pointer:
                typ = "*" + typ
            items.append(f"tt.Input.Args[{index}].({typ})")
        return ",".join(items)

    def test_result_param_in_tmpl(self) -> str:
        """Return the result variable names used in a generated unit test."""
        return ",".join(f"res{index}" for index in range(1, len(self.result) + 1))

    def assert_in_tmpl(self) -> str:
        """Return the assertions used in a generated unit test."""
        name = _go_quote(self.method_name)
        return "\n".join(
            f"assert(t, {name}, res{index + 1}, tt.Expectation.Ret[{index}])"
            for index in range(len(self.result))
        )