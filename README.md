# querygen

`querygen` holds the core pieces of a query-code generator. It describes
model fields and their options, splits SQL templates written in method
documentation into sections, checks the parameters and results of interface
methods, and produces the lines of code that generated query methods are
built from. Invalid templates and method signatures raise
`querygen.generate.utils.GenerateError`.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `querygen.model.base`: `Status`, `SourceCode`, `KeyWord` (with the
  `GORM_KEYWORDS`, `DO_KEYWORDS` and `GEN_KEYWORDS` sets), `DataTypeMap` and
  the built-in `DATA_TYPE` mapping from column type names to field types,
  `Field` (with `gen_type` and keyword escaping) and `SQLBuffer`, which
  collapses runs of whitespace while SQL is collected.
- `querygen.model.options`: field and method options (`ModifyFieldOpt`,
  `FilterFieldOpt`, `CreateFieldOpt`, `AddMethodOpt`) and `sort_options`,
  which splits a list of options by kind.
- `querygen.model.config`: `ModelConfig`, which fills defaults, sorts its
  options and resolves table, struct and file names and the schema name.
- `querygen.parser.param`: `Param`, `InterfaceInfo`, `InterfaceSet` and
  `fix_param_package_path`.
- `querygen.parser.method`: `Method`, `param_to_string` and
  `default_method_table_name`.
- `querygen.generate.section`: `Section`, `Part`, `ForRange` and the clause
  types (`SQLClause`, `IfClause`, `ElseClause`, `WhereClause`, `SetClause`,
  `TrimClause`, `ForClause`). `Section.build_sql` turns the split template
  into clauses and records the generated lines in `Section.tmpls`.
- `querygen.generate.interface`: `InterfaceMethod`, which checks a method's
  name, parameters, results and SQL, splits the SQL with `split_sql`, and
  renders signatures and unit-test snippets.
- `querygen.generate.query`: `QueryStructMeta`, the description of a model
  struct and its query struct (field updates, comments, custom methods,
  interface mode).
- `querygen.generate.fields`: `check_struct_name`, `filter_field` and
  `modify_field`.
- `querygen.generate.export`: `build_diy_method`, which checks and builds
  every interface method that applies to a model, and `get_struct_names`.
- `querygen.generate.utils`: `GenerateError` and small name helpers.
- `querygen.config`: the generator `Config` (options, naming strategies,
  import paths, `revise` for default and absolute output paths) and the
  `GenerateMode` flags.
- `querygen.pools`: `Pool` and `new_pool`, a bounded token pool.

## Example

```python
from querygen.generate.interface import InterfaceMethod
from querygen.parser.param import Param

method = InterfaceMethod(
    table="users",
    params=[Param(name="id", type="int")],
)
method.sql_string = "select * from @@table {{where}} id>@id{{end}}"
method.split_sql()
method.section.build_sql()
for line in method.section.tmpls:
    print(line)
```

which prints

```
generateSQL.WriteString("select * from users ")
var whereSQL0 strings.Builder
params = append(params,id)
whereSQL0.WriteString("id>? ")
helper.JoinWhereBuilder(&generateSQL,whereSQL0)
```

A pool limits how many jobs run at once:

```python
from querygen.pools import new_pool

pool = new_pool(4)
pool.wait()   # take a token
pool.done()   # give it back
pool.wait_all()
```

## What it does not do

`querygen` has no command and writes no files. It does not connect to a
database or read table columns from one, does not read interface
declarations from source files (an `InterfaceSet` is filled in by the
caller), and does not render the final code files: it provides the checked
descriptions and generated lines that such a step would use.