import pytest

from rpc_openapi.errors import FormatError
from rpc_openapi.parser.base import Node, Parameter, ParamType, WarningKind
from rpc_openapi.parser.params import merge_series, parse_arguments, parse_default


def _item(name: str, definition: str) -> Node:
    paragraph = Node(type="paragraph", children=(Node(type="inlineCode", value=name), Node(type="text", value=definition)))
    return Node(type="listItem", children=(paragraph,))


def _list(*items: Node) -> Node:
    return Node(type="list", children=items)


def _param(name: str, **kwargs) -> Parameter:
    return Parameter(name=name, description=kwargs.pop("description", name), type=kwargs.pop("type", ParamType.STRING), **kwargs)


class TestParseArguments:
    def test_no_nodes(self):
        assert parse_arguments([]) == []

    def test_no_arguments_sentinel(self):
        paragraph = Node(type="paragraph", children=(Node(type="text", value="This endpoint takes no arguments."),))
        assert parse_arguments([paragraph]) == []

    def test_other_paragraph_fails(self):
        paragraph = Node(type="paragraph", children=(Node(type="text", value="Some prose."),))
        with pytest.raises(FormatError):
            parse_arguments([paragraph])

    def test_bool_argument(self):
        params = parse_arguments([_list(_item("quiet", " [bool]: Write minimal output. Default: false. Required: no."))])
        assert params == [
            Parameter(name="quiet", description="Write minimal output", type=ParamType.BOOL, default=False, required=False)
        ]

    def test_required_argument(self):
        (param,) = parse_arguments([_list(_item("arg", " [string]: The path. Required: yes."))])
        assert param.required is True
        assert param.default is None

    def test_experimental_marker(self):
        (param,) = parse_arguments([_list(_item("nocopy", " [bool]: Use filestore. (experimental). Required: no."))])
        assert param.warning is WarningKind.EXPERIMENTAL

    def test_deprecated_marker(self):
        (param,) = parse_arguments([_list(_item("old", " [string]: DEPRECATED: use new. Required: no."))])
        assert param.warning is WarningKind.DEPRECATED

    def test_plain_word_is_not_a_marker(self):
        (param,) = parse_arguments([_list(_item("x", " [bool]: Enable experimental features. Required: no."))])
        assert param.warning is WarningKind.NONE

    def test_unknown_type_fails(self):
        with pytest.raises(FormatError, match="Unknown type 'float'"):
            parse_arguments([_list(_item("ratio", " [float]: A ratio. Required: no."))])

    def test_synthetic_type_is_not_accepted(self):
        with pytest.raises(FormatError, match="Unknown type"):
            parse_arguments([_list(_item("arg", " [merged-series]: Args. Required: no."))])

    def test_repeated_default_clause_fails(self):
        with pytest.raises(FormatError, match="More than one Default"):
            parse_arguments([_list(_item("n", " [int]: Count. Default: 1. Default: 2. Required: no."))])

    def test_unmatched_definition_fails(self):
        with pytest.raises(FormatError, match="pattern"):
            parse_arguments([_list(_item("quiet", " bool - minimal output"))])

    def test_more_than_one_node_fails(self):
        with pytest.raises(FormatError, match="at most one node"):
            parse_arguments([_list(_item("a", " [bool]: A.")), _list(_item("b", " [bool]: B."))])

    def test_code_block_fails(self):
        with pytest.raises(FormatError, match="Expected list"):
            parse_arguments([Node(type="code", value="quiet")])

    def test_repeated_names_are_merged(self):
        params = parse_arguments([
            _list(
                _item("arg", " [string]: The key. Required: yes."),
                _item("verbose", " [bool]: Verbose. Default: false. Required: no."),
                _item("arg", " [string]: The value. Required: yes."),
            )
        ])
        assert [p.name for p in params] == ["arg", "verbose"]
        assert params[0].type is ParamType.MERGED_SERIES
        assert params[0].description == "1. The key\n2. The value"


class TestParseDefault:
    def test_bool(self):
        assert parse_default(ParamType.BOOL, "true") is True
        assert parse_default(ParamType.BOOL, "false") is False
        assert parse_default(ParamType.BOOL, "yes") is False

    @pytest.mark.parametrize("param_type", [ParamType.INT, ParamType.UINT, ParamType.INT64])
    def test_integers(self, param_type):
        assert parse_default(param_type, "262144") == 262144

    def test_bad_integer_fails(self):
        with pytest.raises(FormatError, match="base-10"):
            parse_default(ParamType.INT, "0x10")

    def test_array(self):
        assert parse_default(ParamType.ARRAY, "[]") == []
        assert parse_default(ParamType.ARRAY, "[tcp, quic]") == ["tcp", "quic"]
        assert parse_default(ParamType.ARRAY, "[a b,c]") == ["a", "b", "c"]

    def test_array_without_brackets_fails(self):
        with pytest.raises(FormatError, match="bracketed"):
            parse_default(ParamType.ARRAY, "tcp")

    def test_string(self):
        assert parse_default(ParamType.STRING, "size-262144") == "size-262144"


class TestMergeSeries:
    def test_no_duplicates_is_identity(self):
        params = [_param("a"), _param("b", required=True), _param("c")]
        assert merge_series(params) == params

    def test_merged_entry_takes_first_position(self):
        params = [_param("x"), _param("arg"), _param("y"), _param("arg"), _param("z")]
        merged = merge_series(params)
        assert [p.name for p in merged] == ["x", "arg", "y", "z"]
        assert merged[1].type is ParamType.MERGED_SERIES

    def test_required_is_any(self):
        merged = merge_series([_param("arg"), _param("arg", required=True)])
        assert merged[0].required is True
        merged = merge_series([_param("arg"), _param("arg")])
        assert merged[0].required is False

    def test_warning_from_first_member(self):
        merged = merge_series([_param("arg", warning=WarningKind.DEPRECATED), _param("arg")])
        assert merged[0].warning is WarningKind.DEPRECATED

    def test_defaults_collected_when_any_present(self):
        merged = merge_series([_param("arg", default="a"), _param("arg")])
        assert merged[0].default == ["a", None]
        merged = merge_series([_param("arg"), _param("arg")])
        assert merged[0].default is None

    def test_input_is_not_modified(self):
        params = [_param("arg"), _param("arg")]
        merge_series(params)
        assert [p.type for p in params] == [ParamType.STRING, ParamType.STRING]
