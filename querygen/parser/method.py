"""Custom methods attached to generated models."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import Iterable

from querygen.parser.param import Param


def param_to_string(params: Iterable[Param]) -> str:
    """Join parameters as they appear in a generated signature."""
    return ",".join(param.tmpl_string() for param in params)


@dataclass
class Method:
    """A method with its receiver, signature, documentation and body."""

    receiver: Param = dc_field(default_factory=Param)
    method_name: str = ""
    doc: str = ""
    params: list[Param] = dc_field(default_factory=list)
    result: list[Param] = dc_field(default_factory=list)
    body: str = ""

    def func_sign(self) -> str:
        return f"{self.method_name}({self.param_in_tmpl()}) ({self.result_param_in_tmpl()})"

    def base_struct_tmpl(self) -> str:
        return self.receiver.tmpl_string()

    def param_in_tmpl(self) -> str:
        return param_to_string(self.params)

    def result_param_in_tmpl(self) -> str:
        return param_to_string(self.result)

    def doc_comment(self) -> str:
        """Return the documentation with a comment marker after every line break."""
        return self.doc.strip().replace("\n", "\n//")


def default_method_table_name(struct_name: str) -> Method:
    """Return the default ``TableName`` method for a model struct."""
    return Method(
        receiver=Param(is_pointer=True, type=struct_name),
        method_name="TableName",
        doc=f"TableName {struct_name}'s table name ",
        result=[Param(type="string")],
        body=f"{{\n\treturn TableName{struct_name}\n}} ",
    )