"""Tests for the Entity Framework generator."""
import pytest

from entity_baker.codegen import compile_file, normalize_entity
from entity_baker.codegen.core.errors import UnsupportedType
from entity_baker.codegen.languages.ef import EntityFrameworkGenerator, create_ef_generator
from entity_baker.codegen.languages.ef.generator import cs_literal
from entity_baker.utils import load_document


def read(path):
    return path.read_text(encoding="utf-8")


def test_user_entity_files(user_entities, out_dir):
    result = compile_file(user_entities, "ef", out_dir)

    assert result.success
    assert result.target == "Entity Framework"
    assert (out_dir / "App" / "Db" / "User.cs").is_file()
    assert (out_dir / "App" / "Db" / "User.Extensions.cs").is_file()


def test_user_entity_class(user_entities, out_dir):
    compile_file(user_entities, "ef", out_dir)
    code = read(out_dir / "App" / "Db" / "User.cs")

    assert code.startswith("// <auto-generated>\n")
    assert "namespace App.Db\n{\n" in code
    assert "    [global::System.Runtime.Serialization.DataContract]" in code
    assert '    [global::System.Data.Linq.Mapping.Table(Name = "users")]' in code
    assert "    [global::System.Serializable]" in code
    assert (
        "    public partial class User : global::System.MarshalByRefObject, "
        "global::System.ComponentModel.INotifyPropertyChanged, "
        "global::System.ComponentModel.INotifyPropertyChanging\n"
    ) in code
    assert "protected int _id;" in code
    assert "protected string _name;" in code
    assert '[global::System.Runtime.Serialization.DataMember(EmitDefaultValue = true, Name = "id")]' in code
    assert "public int Id\n" in code
    assert "public string Name\n" in code
    assert "this.Name = _Helpers.ConvertTo<string>(value)" in code
    # auto columns have no setter
    assert "this.Id = " not in code
    assert code.endswith("}\n")


def test_hook_protocol(user_entities, out_dir):
    compile_file(user_entities, "ef", out_dir)
    code = read(out_dir / "App" / "Db" / "User.cs")

    assert 'this._OnBeforeGet("name", ref valueToReturn);' in code
    assert 'this._OnBeforeSet("name", ref valueToSet, oldValue, ref beforeSetResult);' in code
    assert "!object.Equals(beforeSetResult, false)" in code
    assert code.index("this.PropertyChanging?.Invoke") < code.index("this._name = newValue;")
    assert code.index("this._name = newValue;") < code.index("this.PropertyChanged?.Invoke")
    assert 'this._OnSetComplete("name", hasBeenSet' in code


def test_bulk_members(user_entities, out_dir):
    compile_file(user_entities, "ef", out_dir)
    code = read(out_dir / "App" / "Db" / "User.cs")

    assert "public object this[string columnName]" in code
    assert code.count("public User Copy_Columns_To(") == 3
    assert "RegexOptions.IgnoreCase" in code
    assert 'public global::System.Collections.Generic.IDictionary<string, object> Get_Columns()' in code
    assert '{ "id", () => this.Id },' in code
    assert '{ "name", (value) =>' in code
    assert '{ "id", (value) =>' not in code
    assert "public User Set_Columns(" in code


def test_extension_file(user_entities, out_dir):
    compile_file(user_entities, "ef", out_dir)
    code = read(out_dir / "App" / "Db" / "User.Extensions.cs")

    assert "namespace App.Db\n{\n" in code
    assert "    partial class User\n" in code
    assert "public User()\n" in code
    assert ": this(null)" in code
    assert "this.Set_Columns(initialValues);" in code
    assert "partial void _OnBeforeSet(" in code


def test_no_namespace(out_dir):
    compile_file({"entities": {"Log": {"columns": {"text": "str"}}}}, "ef", out_dir)
    code = read(out_dir / "Log.cs")

    assert "namespace" not in code
    assert "\npublic partial class Log : " in code


@pytest.mark.parametrize(
    "entry, expected",
    [
        ({"type": "int", "null": True}, "int?"),
        ({"type": "bigint", "null": True}, "long?"),
        ({"type": "string", "null": True}, "string"),
        ({"type": "json"}, "dynamic"),
    ],
)
def test_field_types(out_dir, entry, expected):
    compile_file({"entities": {"Row": {"columns": {"value": entry}}}}, "ef", out_dir)

    assert f"protected {expected} _value;" in read(out_dir / "Row.cs")


def test_decimal_is_unsupported(tmp_path):
    context = normalize_entity("Price", {"columns": {"amount": "decimal"}}, (), tmp_path)

    with pytest.raises(UnsupportedType) as exc_info:
        EntityFrameworkGenerator().emit(context)

    assert "Entity Framework" in str(exc_info.value)


def test_property_named_like_class_warns(tmp_path):
    context = normalize_entity("Name", {"columns": {"name": "string"}}, (), tmp_path)

    warnings = EntityFrameworkGenerator().validate_context(context)

    assert any("has the name of its class" in w for w in warnings)


def test_extension_file_is_kept(user_entities, out_dir):
    compile_file(user_entities, "ef", out_dir)
    extension = out_dir / "App" / "Db" / "User.Extensions.cs"
    extension.write_text("// custom\n", encoding="utf-8")

    compile_file(user_entities, "ef", out_dir)

    assert read(extension) == "// custom\n"


def test_cs_literal():
    assert cs_literal('a"b\\c') == '"a\\"b\\\\c"'


def test_factory():
    generator = create_ef_generator(add_header=False)

    assert generator.config.add_header is False
    assert generator.language_name == "csharp"


def test_yaml_nullable_column(tmp_path, out_dir):
    path = tmp_path / "entities.yaml"
    path.write_text(
        "entities:\n  Row:\n    columns:\n      amount: {type: int, null: true}\n      on: int\n",
        encoding="utf-8",
    )

    compile_file(load_document(path), "ef", out_dir)
    code = read(out_dir / "Row.cs")

    assert "protected int? _amount;" in code
    assert "protected int _on;" in code
    assert "public int On\n" in code
