"""Splitting of templated SQL into sections and building of the generated statements."""

from __future__ import annotations

import re
from dataclasses import dataclass, field as dc_field
from typing import Any, Optional, Union

from querygen.generate.utils import GenerateError, _go_quote
from querygen.model.base import GEN_KEYWORDS, Status

_SQL_KINDS = frozenset({Status.SQL, Status.DATA, Status.VARIABLE})

_TOP_LEVEL = _SQL_KINDS | {Status.IF, Status.WHERE, Status.SET, Status.TRIM, Status.FOR}
_IF_BODY = _SQL_KINDS | {Status.IF, Status.WHERE, Status.SET, Status.ELSE, Status.FOR, Status.TRIM}
_ELSE_BODY = _IF_BODY
_WHERE_BODY = _SQL_KINDS | {Status.IF, Status.FOR, Status.WHERE, Status.TRIM}
_SET_BODY = _WHERE_BODY
_TRIM_BODY = _SQL_KINDS | {Status.IF, Status.FOR, Status.WHERE}
_FOR_BODY = _SQL_KINDS | {Status.IF, Status.FOR, Status.TRIM}

_KEYWORDS = {
    "if": Status.IF,
    "else": Status.ELSE,
    "for": Status.FOR,
    "where": Status.WHERE,
    "set": Status.SET,
    "end": Status.END,
    "trim": Status.TRIM,
}

_TEMPLATE_SEPARATORS = re.compile(r"[: =,]+")


@dataclass
class ForRange:
    """The loop variables and range expression of a ``for`` template."""

    index: str = ""
    value: str = ""
    suffix: str = ""
    range_list: str = ""

    def __str__(self) -> str:
        return f"for {self.index}, {self.value} := range {self.range_list}"


@dataclass
class Part:
    """One piece of a split SQL statement."""

    type: Status = Status.UNKNOWN
    value: str = ""
    for_range: ForRange = dc_field(default_factory=ForRange)
    sql_slice: Optional["Section"] = dc_field(default=None, repr=False, compare=False)
    split_list: list[str] = dc_field(default_factory=list)

    def __str__(self) -> str:
        if self.type is Status.FOR:
            return str(self.for_range)
        return self.value

    def is_end(self) -> bool:
        return self.type is Status.END

    def sql_param_name(self) -> str:
        """Return the value with dots removed, usable as a parameter key."""
        return self.value.replace(".", "")

    def _split_template(self) -> None:
        self.split_list = [
            item for item in _TEMPLATE_SEPARATORS.split(self.value.strip()) if item
        ]

    def _check_template(self) -> None:
        if not self.split_list:
            raise GenerateError("template is null")
        if GEN_KEYWORDS.contain(self.value):
            raise GenerateError("template can not use gen keywords")

        keyword = self.split_list[0]
        try:
            self.type = _KEYWORDS[keyword]
        except KeyError:
            raise GenerateError(f"unknown syntax: {keyword}") from None

        if self.type is Status.FOR:
            if len(self.split_list) != 5:
                raise GenerateError(f"for range syntax error: {self.value}")
            if self.sql_slice is not None and self.sql_slice._has_same_name(self.split_list[2]):
                raise GenerateError("cannot use the same value name in different for loops")
            self.for_range.index = self.split_list[1]
            self.for_range.value = self.split_list[2]
            self.for_range.range_list = self.split_list[4]


@dataclass
class _Clause:
    var_name: str = ""
    type: Status = Status.UNKNOWN


@dataclass
class SQLClause(_Clause):
    """Plain SQL text, possibly joined with variables and placeholders."""

    value: list[str] = dc_field(default_factory=list)

    def __str__(self) -> str:
        sql = "+".join(self.value)
        if sql.startswith('"'):
            sql = '"' + sql.lstrip('" ')
        if not sql.endswith(' "'):
            sql += '+" "'
        return sql.replace('"+"', "")

    def create(self) -> str:
        return f"{self.var_name}.WriteString({self})"

    def finish(self) -> str:
        return f"{self.var_name}.WriteString({self})"


@dataclass
class IfClause(_Clause):
    """An ``if`` block."""

    value: list[Any] = dc_field(default_factory=list)
    part: Part = dc_field(default_factory=Part)

    def __str__(self) -> str:
        return self.part.value

    def create(self) -> str:
        return f"{self} {{"

    def finish(self) -> str:
        return "}"


@dataclass
class ElseClause(IfClause):
    """An ``else`` branch of an ``if`` block."""

    def create(self) -> str:
        return f"}} {self} {{"

    def finish(self) -> str:
        return ""


@dataclass
class WhereClause(_Clause):
    """A ``where`` block, trimmed of dangling connectives when built."""

    value: list[Any] = dc_field(default_factory=list)

    def __str__(self) -> str:
        return f"helper.WhereTrim({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinWhereBuilder(&{name},{self.var_name})"


@dataclass
class SetClause(_Clause):
    """A ``set`` block, trimmed of dangling commas when built."""

    value: list[Any] = dc_field(default_factory=list)

    def __str__(self) -> str:
        return f"helper.SetTrim({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinSetBuilder(&{name},{self.var_name})"


@dataclass
class TrimClause(_Clause):
    """A ``trim`` block."""

    value: list[Any] = dc_field(default_factory=list)

    def __str__(self) -> str:
        return f"helper.TrimALL({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinTrimAllBuilder(&{name},{self.var_name})"


@dataclass
class ForClause(_Clause):
    """A ``for`` loop block."""

    value: list[Any] = dc_field(default_factory=list)
    for_range: ForRange = dc_field(default_factory=ForRange)
    for_part: Part = dc_field(default_factory=Part)

    def __str__(self) -> str:
        return self.for_part.value + "{"

    def create(self) -> str:
        return str(self)

    def finish(self) -> str:
        return "}"


Clause = Union[SQLClause, IfClause, ElseClause, WhereClause, SetClause, TrimClause, ForClause]


class Section:
    """A split SQL statement and the code lines generated from it."""

    def __init__(self) -> None:
        self.members: list[Part] = []
        self.tmpls: list[str] = []
        self.current_index = 0
        self.clause_total: dict[Status, int] = {Status.WHERE: 0, Status.SET: 0}
        self.for_value: list[ForRange] = []

    def _next(self) -> Part:
        if self.current_index < len(self.members) - 1:
            self.current_index += 1
            return self.members[self.current_index]
        return Part(type=Status.END)

    def _current(self) -> Part:
        return self.members[self.current_index]

    def sub_index(self) -> None:
        """Step the cursor one member back."""
        self.current_index -= 1

    def has_more(self) -> bool:
        return self.current_index < len(self.members) - 1

    def is_null(self) -> bool:
        return not self.members

    def _append_tmpl(self, line: str) -> None:
        self.tmpls.append(line)

    def _has_same_name(self, value: str) -> bool:
        return any(p.type is Status.FOR and p.for_range.value == value for p in self.members)

    def build_sql(self) -> list[Clause]:
        """Turn the members into clauses, recording generated lines in ``tmpls``."""
        if self.is_null():
            raise GenerateError("sql is null")
        name = "generateSQL"
        clauses: list[Clause] = []
        while True:
            part = self._current()
            if part.type in _TOP_LEVEL:
                clauses.append(self._parse_child(part.type, name))
            elif part.type is not Status.END:
                raise GenerateError(f"unknow clause:{part.value}")
            if not self.has_more():
                break
            self.current_index += 1
        return clauses

    def _parse_child(self, kind: Status, name: str) -> Clause:
        """Parse the member at the cursor and record its closing line."""
        if kind in _SQL_KINDS:
            sql = self._parse_sql(name)
            self._append_tmpl(sql.finish())
            return sql
        if kind is Status.IF:
            clause = self._parse_if(name)
            self._append_tmpl(clause.finish())
            return clause
        if kind is Status.FOR:
            loop = self._parse_for(name)
            self._append_tmpl(loop.finish())
            return loop
        if kind is Status.ELSE:
            return self._parse_else(name)
        if kind is Status.WHERE:
            block: Union[WhereClause, SetClause, TrimClause] = self._parse_where()
        elif kind is Status.SET:
            block = self._parse_set()
        else:
            block = self._parse_trim()
        self._append_tmpl(block.finish(name))
        return block

    def _parse_block(
        self, name: str, allowed: frozenset, *, stop_on_other: bool = False
    ) -> tuple[list[Clause], bool]:
        """Parse the members after the cursor; return the clauses and whether an end was met."""
        values: list[Clause] = []
        part = self._next()
        while True:
            if part.type in allowed:
                values.append(self._parse_child(part.type, name))
            elif stop_on_other:
                self.sub_index()
                return values, True
            elif part.type is Status.END:
                return values, True
            else:
                raise GenerateError(f"unknow clause : {part.value}")
            if not self.has_more():
                return values, False
            part = self._next()

    def _parse_if(self, name: str) -> IfClause:
        clause = IfClause(part=self._current())
        self._append_tmpl(clause.create())
        if self.has_more():
            clause.value, _ = self._parse_block(name, _IF_BODY)
        return clause

    def _parse_else(self, name: str) -> ElseClause:
        clause = ElseClause(part=self._current())
        self._append_tmpl(clause.create())
        if self.has_more():
            clause.value, _ = self._parse_block(name, _ELSE_BODY, stop_on_other=True)
        return clause

    def _parse_where(self) -> WhereClause:
        part = self._current()
        clause = WhereClause(var_name=self.get_name(part.type), type=part.type)
        self._append_tmpl(clause.create())
        if not self.has_more():
            return clause
        clause.value, ended = self._parse_block(clause.var_name, _WHERE_BODY)
        if not ended:
            raise GenerateError("incomplete SQL,where not end")
        return clause

    def _parse_set(self) -> SetClause:
        clause = SetClause(var_name=self.get_name(self._current().type))
        self._append_tmpl(clause.create())
        if self.has_more():
            clause.type = self.members[self.current_index + 1].type
            clause.value, _ = self._parse_block(clause.var_name, _SET_BODY)
        return clause

    def _parse_trim(self) -> TrimClause:
        clause = TrimClause(var_name=self.get_name(self._current().type))
        self._append_tmpl(clause.create())
        if self.has_more():
            clause.type = self.members[self.current_index + 1].type
            clause.value, _ = self._parse_block(clause.var_name, _TRIM_BODY)
        return clause

    def _parse_for(self, name: str) -> ForClause:
        part = self._current()
        clause = ForClause(for_part=part)
        self._append_tmpl(clause.create())
        self.for_value.append(part.for_range)
        if self.has_more():
            clause.value, ended = self._parse_block(name, _FOR_BODY)
            if ended:
                self.for_value.pop()
        return clause

    def _parse_sql(self, name: str) -> SQLClause:
        clause = SQLClause(var_name=name, type=Status.SQL)
        while True:
            part = self._current()
            if part.type in (Status.SQL, Status.VARIABLE):
                clause.value.append(part.value)
            elif part.type is Status.DATA:
                self._append_tmpl(f"params = append(params,{part.value})")
                clause.value.append('"?"')
            else:
                self.sub_index()
                return clause
            if not self.has_more():
                return clause
            self.current_index += 1

    def check_sql_var(self, param: str, status: Status, method: Any) -> Part:
        """Return the part for a SQL variable, noting on ``method`` that it takes data."""
        if status is Status.VARIABLE and param == "table":
            return Part(type=Status.SQL, value=_go_quote(method.table))
        if status is Status.DATA:
            method.has_for_params = True
        if status is Status.VARIABLE:
            param = f"{method.s}.Quote({param})"
        return Part(type=status, value=param)

    def get_name(self, status: Status) -> str:
        """Return a fresh builder variable name for a where, set or trim block."""
        prefixes = {Status.WHERE: "whereSQL", Status.SET: "setSQL", Status.TRIM: "trimSQL"}
        prefix = prefixes.get(status)
        if prefix is None:
            return "generateSQL"
        count = self.clause_total.get(status, 0)
        self.clause_total[status] = count + 1
        return f"{prefix}{count}"

    def check_template(self, tmpl: str) -> Part:
        """Parse a ``{{ ... }}`` template into a part, checking its syntax."""
        part = Part(value=tmpl, sql_slice=self)
        part._split_template()
        part._check_template()
        return part