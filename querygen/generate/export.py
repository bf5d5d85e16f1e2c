"""Entry points that turn interfaces and model descriptions into generation input."""

from __future__ import annotations

from typing import Iterable

from querygen.generate.interface import InterfaceMethod
from querygen.generate.query import QueryStructMeta
from querygen.generate.utils import GenerateError, get_package_name
from querygen.parser.param import InterfaceSet


def build_diy_method(
    interface_set: InterfaceSet,
    meta: QueryStructMeta,
    data: list[InterfaceMethod],
) -> list[InterfaceMethod]:
    """Check every interface method that applies to ``meta`` and build its SQL."""
    results: list[InterfaceMethod] = []
    for info in interface_set.interfaces:
        if not info.match_struct(meta.model_struct_name):
            continue
        for method in info.methods:
            target = InterfaceMethod(
                s=meta.s,
                target_struct=meta.query_struct_name,
                origin_struct=meta.struct_info,
                method_name=method.method_name,
                params=list(method.params),
                doc=method.doc,
                table=meta.table_name,
                interface_name=info.name,
                package=get_package_name(info.package),
            )
            target.check_method(data, meta)
            target.check_params(method.params)
            target.check_result(method.result)
            target.check_sql()
            try:
                target.section.build_sql()
            except GenerateError as exc:
                raise GenerateError(f"sql [{target.sql_string}] build err:{exc}") from exc
            results.append(target)
    return results


def get_struct_names(metas: Iterable[QueryStructMeta]) -> list[str]:
    """Return the model struct names of ``metas``."""
    return [meta.model_struct_name for meta in metas]