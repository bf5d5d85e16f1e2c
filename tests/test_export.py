import pytest

from querygen.generate.export import build_diy_method, get_struct_names
from querygen.generate.query import QueryStructMeta
from querygen.generate.utils import GenerateError
from querygen.parser.method import Method
from querygen.parser.param import InterfaceInfo, InterfaceSet, Param


def make_meta():
    return QueryStructMeta(
        model_struct_name="User",
        query_struct_name="user",
        s="u",
        table_name="users",
        struct_info=Param(type="User", package="model"),
    )


def make_set(method, apply=("User",)):
    info = InterfaceInfo(
        name="Querier",
        methods=[method],
        package="example.Querier",
        apply_struct=list(apply),
    )
    return InterfaceSet(interfaces=[info])


def find_method(doc="select * from @@table where id=@id", name="FindByID"):
    return Method(
        method_name=name,
        doc=doc,
        params=[Param(name="id", type="int")],
        result=[Param(package="gen", type="T"), Param(type="error")],
    )


def test_build_diy_method_builds_sql():
    results = build_diy_method(make_set(find_method()), make_meta(), [])
    assert len(results) == 1
    method = results[0]
    assert method.section.tmpls == [
        "params = append(params,id)",
        'generateSQL.WriteString("select * from users where id=? ")',
    ]
    assert [r.name for r in method.result] == ["result", "err"]
    assert method.result_data.type == "User"
    assert method.gorm_option == "Raw"
    assert method.package == "example"


def test_build_diy_method_skips_unmatched_struct():
    assert build_diy_method(make_set(find_method(), apply=("Other",)), make_meta(), []) == []


def test_build_diy_method_rejects_keyword_name():
    with pytest.raises(GenerateError, match="keyword"):
        build_diy_method(make_set(find_method(name="Find")), make_meta(), [])


def test_build_diy_method_reports_empty_sql():
    with pytest.raises(GenerateError, match="build err"):
        build_diy_method(make_set(find_method(doc="")), make_meta(), [])


def test_get_struct_names():
    metas = [make_meta(), QueryStructMeta(model_struct_name="Order")]
    assert get_struct_names(metas) == ["User", "Order"]
    assert get_struct_names([]) == []