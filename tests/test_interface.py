from types import SimpleNamespace

import pytest

from querygen.generate.interface import InterfaceMethod
from querygen.generate.utils import GenerateError
from querygen.model.base import Field, Status
from querygen.parser.param import Param


def make_method():
    method = InterfaceMethod()
    method.table = "users"
    method.params = [
        Param(type="int", name="id"),
        Param(type="string", name="name"),
        Param(type="string", name="names", is_array=True),
    ]
    return method


CLAUSE_CASES = [
    (
        "select * from @@table",
        ['"select * from "', '"users"'],
        ['generateSQL.WriteString("select * from users ")'],
    ),
    (
        "select * from @@table {{where}} id>@id{{end}}",
        ['"select * from "', '"users"', "where", '" id>"', "id", "end"],
        [
            'generateSQL.WriteString("select * from users ")',
            "var whereSQL0 strings.Builder",
            "params = append(params,id)",
            'whereSQL0.WriteString("id>? ")',
            "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
        ],
    ),
    (
        "select * from @@table {{where}}{{if id > 0}} id>@id{{end}}{{end}}",
        ['"select * from "', '"users"', "where", "if id > 0", '" id>"', "id", "end", "end"],
        [
            'generateSQL.WriteString("select * from users ")',
            "var whereSQL0 strings.Builder",
            "if id > 0 {",
            "params = append(params,id)",
            'whereSQL0.WriteString("id>? ")',
            "}",
            "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
        ],
    ),
    (
        'update @@table {{set}}{{if name != ""}}name=@name{{end}},{{if id>0}}id=@id{{end}}{{end}} where id=@id',
        [
            '"update "',
            '"users"',
            "set",
            'if name != ""',
            '"name="',
            "name",
            "end",
            '","',
            "if id>0",
            '"id="',
            "id",
            "end",
            "end",
            '" where id="',
            "id",
        ],
        [
            'generateSQL.WriteString("update users ")',
            "var setSQL0 strings.Builder",
            'if name != "" {',
            "params = append(params,name)",
            'setSQL0.WriteString("name=? ")',
            "}",
            'setSQL0.WriteString(", ")',
            "if id>0 {",
            "params = append(params,id)",
            'setSQL0.WriteString("id=? ")',
            "}",
            "helper.JoinSetBuilder(&generateSQL,setSQL0)",
            "params = append(params,id)",
            'generateSQL.WriteString("where id=? ")',
        ],
    ),
    (
        "select * from @@table {{where}} {{for _, name := range names}}name=@name{{end}}{{end}}",
        [
            '"select * from "',
            '"users"',
            "where",
            "for _, name := range names",
            '"name="',
            "name",
            "end",
            "end",
        ],
        [
            'generateSQL.WriteString("select * from users ")',
            "var whereSQL0 strings.Builder",
            "for _, name := range names{",
            "params = append(params,name)",
            'whereSQL0.WriteString("name=? ")',
            "}",
            "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
        ],
    ),
]


@pytest.mark.parametrize("sql, split_result, generate_result", CLAUSE_CASES)
def test_clause_split_and_build(sql, split_result, generate_result):
    method = make_method()
    method.sql_string = sql
    method.split_sql()
    assert [part.value for part in method.section.members] == split_result
    method.section.build_sql()
    assert method.section.tmpls == generate_result


def test_data_variable_marks_for_params():
    method = make_method()
    method.sql_string = "select * from t where id=@id"
    method.split_sql()
    assert method.has_for_params is True
    assert method.has_sql_data() is True
    assert method.section.members[-1].type is Status.DATA


def test_quoted_variable_uses_receiver():
    method = make_method()
    method.s = "u"
    method.sql_string = "select @@name from t"
    method.split_sql()
    assert method.section.members[1].value == "u.Quote(name)"
    assert method.section.members[1].type is Status.VARIABLE


def test_escaped_at_is_literal():
    method = make_method()
    method.sql_string = "select 'a' from x where a=\\@b"
    method.split_sql()
    assert [p.value for p in method.section.members] == ['"select \'a\' from x where a=@b"']


@pytest.mark.parametrize("sql", ['select "abc', "select 'abc", "select {{where}", "select @"])
def test_incomplete_sql(sql):
    method = make_method()
    method.sql_string = sql
    with pytest.raises(GenerateError, match="incomplete SQL"):
        method.split_sql()


def test_unknown_template_raises():
    method = make_method()
    method.sql_string = "select {{foo}} x"
    with pytest.raises(GenerateError, match="unknown syntax"):
        method.split_sql()


def test_check_sql_from_sql_doc():
    method = make_method()
    method.method_name = "FindByID"
    method.doc = "FindByID finds\n\nsql(select * from @@table where id=@id)"
    method.check_sql()
    assert method.sql_string == "select * from @@table where id=@id"
    assert method.gorm_option == "Exec"


def test_check_sql_raw_when_result_present():
    method = make_method()
    method.method_name = "Get"
    method.result_data = Param(name="result", type="User", package="model")
    method.doc = 'Get "select * from @@table"'
    method.check_sql()
    assert method.sql_string == "select * from @@table"
    assert method.gorm_option == "Raw"


def test_check_sql_where_doc():
    method = make_method()
    method.method_name = "ByID"
    method.doc = "ByID where(id=@id)"
    method.check_sql()
    assert method.sql_string == "id=@id"
    assert method.gorm_option == "Where"


def test_check_sql_wraps_error():
    method = make_method()
    method.method_name = "Bad"
    method.interface_name = "Querier"
    method.doc = 'select "abc'
    with pytest.raises(GenerateError, match="interface Querier member method Bad check sql err"):
        method.check_sql()


def test_check_params_resolves_types():
    method = InterfaceMethod(
        package="model",
        origin_struct=Param(package="model", type="User"),
    )
    method.check_params(
        [
            Param(name="a", type="Local", package="UNDEFINED"),
            Param(name="m", type="M", package="gen"),
            Param(name="t", type="T", package="gen"),
        ]
    )
    assert [p.tmpl_string() for p in method.params] == [
        "a model.Local",
        "m map[string]interface{}",
        "t model.User",
    ]


@pytest.mark.parametrize("param", [Param(name="e", type="error"), Param()])
def test_check_params_rejects_error_and_null(param):
    method = InterfaceMethod(interface_name="Querier")
    with pytest.raises(GenerateError, match="type error on interface"):
        method.check_params([param])


def test_check_result_data_and_error():
    method = InterfaceMethod(origin_struct=Param(package="model", type="User"))
    method.check_result([Param(package="gen", type="T"), Param(type="error")])
    assert method.result_data.tmpl_string() == "result model.User"
    assert [p.name for p in method.result] == ["result", "err"]
    assert method.return_error() is True
    assert method.return_nothing() is False


def test_check_result_rows_affected():
    method = InterfaceMethod()
    method.check_result([Param(package="gen", type="RowsAffected")])
    assert method.gorm_option == "Exec"
    assert method.result[0].tmpl_string() == "rowsAffected int64"
    assert method.return_rows_affected() is True


def test_check_result_sql_rows():
    method = InterfaceMethod()
    method.check_result([Param(package="sql", type="Rows"), Param(type="error")])
    assert method.result[0].tmpl_string() == "rows *sql.Rows"
    assert method.gorm_option == "Raw"
    assert method.return_sql_rows() is True
    assert method.return_sql_row() is False


@pytest.mark.parametrize(
    "results, message",
    [
        ([Param(type="error"), Param(type="error")], "more than 1 error"),
        ([Param(type="int"), Param(type="string")], "more than 1 data"),
        ([Param(type="interface{}")], "can not return interface"),
        ([Param(type="User", package="main")], "main package"),
    ],
)
def test_check_result_errors(results, message):
    method = InterfaceMethod()
    with pytest.raises(GenerateError, match=message):
        method.check_result(results)


def test_check_result_sets_package_for_custom_type():
    method = InterfaceMethod(package="model")
    method.check_result([Param(type="Other", is_array=True)])
    assert method.result_data.package == "model"
    assert method.gorm_run_method_name() == "Find"


def test_check_method_keyword():
    method = InterfaceMethod(method_name="Where")
    meta = SimpleNamespace(fields=[], model_struct_name="User")
    with pytest.raises(GenerateError, match="keyword"):
        method.check_method([], meta)


def test_check_method_field_clash():
    method = InterfaceMethod(method_name="Name", interface_name="Q")
    meta = SimpleNamespace(fields=[Field(name="Name")], model_struct_name="User")
    with pytest.raises(GenerateError, match=r"\[User.Name\]"):
        method.check_method([], meta)


def test_check_method_repeat_from_different_interface():
    method = InterfaceMethod(method_name="Get", interface_name="A", target_struct="user")
    other = InterfaceMethod(method_name="Get", interface_name="B", target_struct="user")
    meta = SimpleNamespace(fields=[], model_struct_name="User")
    assert method.is_repeat_from_different_interface(other) is True
    assert method.is_repeat_from_same_interface(other) is False
    with pytest.raises(GenerateError, match="different interface"):
        method.check_method([other], meta)


def test_func_sign():
    method = InterfaceMethod(
        method_name="FindByID",
        params=[Param(name="id", type="int")],
        result=[Param(name="result", type="User", package="model"), Param(name="err", type="error")],
    )
    assert method.func_sign() == "FindByID(id int) (result model.User,err error)"


def test_doc_comment():
    method = InterfaceMethod(doc="  first\nsecond\n third  ")
    assert method.doc_comment() == "first\n// second\n// third"


def test_sql_param_name():
    assert InterfaceMethod().sql_param_name("user.name") == "username"


def test_need_new_result_for_map():
    method = InterfaceMethod(result_data=Param(type="map[string]interface{}"))
    assert method.has_need_new_result() is True
    assert method.has_got_point() is False
    assert method.gorm_run_method_name() == "Take"


def test_test_tmpl_helpers():
    method = InterfaceMethod(
        method_name="Find",
        params=[Param(type="int"), Param(type="User", package="model", is_array=True, is_pointer=True)],
        result=[Param(type="int"), Param(type="error")],
    )
    assert method.test_param_in_tmpl() == "tt.Input.Args[0].(int),tt.Input.Args[1].(*[]model.User)"
    assert method.test_result_param_in_tmpl() == "res1,res2"
    assert method.assert_in_tmpl() == (
        'assert(t, "Find", res1, tt.Expectation.Ret[0])\n'
        'assert(t, "Find", res2, tt.Expectation.Ret[1])'
    )