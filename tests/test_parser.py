"""Tests for the parser module: name decomposition and dump lines."""

import pytest
from symtree_mcp.parser import (
    MalformedLineError,
    decompose_name,
    make_index_id,
    make_symbol,
    parse_line,
    parse_nm_output,
    split_dump_lines,
)


def test_decompose_path_style():
    """Test path-style names split on the dot after the last separator."""
    segments, leaf = decompose_name("example.com/org/repo/pkgname.FuncName")
    assert segments == ["example.com", "org", "repo", "pkgname"]
    assert leaf == "FuncName"


def test_decompose_path_style_method():
    """Test that only the first dot after the last separator splits."""
    segments, leaf = decompose_name("net/http.(*Client).Do")
    assert segments == ["net", "http"]
    assert leaf == "(*Client).Do"


def test_decompose_versioned_module_path():
    """Test that dots in earlier path segments are kept in the package."""
    segments, leaf = decompose_name("gopkg.in/yaml.v3.(*parser).parse")
    assert segments == ["gopkg.in", "yaml"]
    assert leaf == "v3.(*parser).parse"


def test_decompose_path_without_dot():
    """Test that a path-style name with no dot after the last separator fails."""
    segments, leaf = decompose_name("vendor/golang.org/x/net/dns")
    assert segments == []
    assert leaf == "vendor/golang.org/x/net/dns"


def test_decompose_simple_style():
    """Test simple package.Func names."""
    segments, leaf = decompose_name("fmt.Println")
    assert segments == ["fmt"]
    assert leaf == "Println"


def test_decompose_simple_style_nested_dots():
    """Test simple names split on the first dot."""
    segments, leaf = decompose_name("runtime.(*mheap).alloc")
    assert segments == ["runtime"]
    assert leaf == "(*mheap).alloc"


def test_decompose_bare_name():
    """Test names without separator or dot have no package."""
    assert decompose_name("_cgo_init") == ([], "_cgo_init")


def test_decompose_idempotent():
    """Test decomposing the same name twice gives identical results."""
    name = "github.com/spf13/pflag.(*FlagSet).Parse"
    assert decompose_name(name) == decompose_name(name)


def test_make_symbol_package():
    """Test symbol package and describe helpers."""
    sym = make_symbol(size=42, kind="T", qualified_name="example.com/org/repo/pkgname.FuncName")
    assert sym.package == "example.com/org/repo/pkgname"
    assert sym.describe() == "example.com/org/repo/pkgname.FuncName"

    bare = make_symbol(size=1, kind="T", qualified_name="_cgo_init")
    assert bare.package == ""
    assert bare.describe() == "_cgo_init"


def test_parse_line_with_address():
    """Test a full dump line."""
    sym = parse_line("  4a1b20        128 T main.main")
    assert sym is not None
    assert sym.address == 0x4a1b20
    assert sym.size == 128
    assert sym.kind == "T"
    assert sym.qualified_name == "main.main"
    assert sym.path_segments == ["main"]
    assert sym.leaf_name == "main"


def test_parse_line_without_address():
    """Test undefined symbols have no address."""
    sym = parse_line("          0 U _cgo_init")
    assert sym is not None
    assert sym.address is None
    assert sym.size == 0
    assert sym.kind == "U"
    assert sym.path_segments == []


def test_parse_line_unknown_kind():
    """Test '?' and '-' kind codes are accepted."""
    assert parse_line(" 1000 16 ? strings.Index").kind == "?"
    assert parse_line(" 1000 16 - strings.Index").kind == "-"


def test_parse_line_filters_internal_names():
    """Test go: and type: entries never produce a symbol."""
    assert parse_line("  4d5e00         64 R go:string.*") is None
    assert parse_line("  4d5f00         32 R type:*main.T") is None


def test_parse_line_malformed():
    """Test lines without the expected shape raise MalformedLineError."""
    with pytest.raises(MalformedLineError) as exc_info:
        parse_line("   ")
    assert exc_info.value.line == "   "

    with pytest.raises(MalformedLineError):
        parse_line("not a symbol line")


def test_parse_nm_output_skips_malformed():
    """Test one good line and one whitespace line give one symbol and one diagnostic."""
    result = parse_nm_output(["  4a1b20  128 T main.main", "    "])
    assert len(result.symbols) == 1
    assert result.skipped == ["    "]
    assert result.filtered == 0


def test_parse_nm_output_counts_filtered():
    """Test internal entries are counted separately from malformed lines."""
    lines = [
        "  4a1b20  128 T main.main",
        "  4d5e00   64 R go:buildinfo",
        "  4d5f00   32 R type:*main.T",
        "  4a2000   10 T fmt.Println",
    ]
    result = parse_nm_output(lines)
    assert [s.qualified_name for s in result.symbols] == ["main.main", "fmt.Println"]
    assert result.filtered == 2
    assert result.skipped == []


def test_split_dump_lines_on_newline_only():
    """Test \\x85 and \\u2028 inside a name do not start a new line."""
    text = "  4a7000   8 T cgo.weird\x85name\n  4a7100   4 T cgo.odd\u2028name\n"
    lines = split_dump_lines(text)
    assert lines == [
        "  4a7000   8 T cgo.weird\x85name",
        "  4a7100   4 T cgo.odd\u2028name",
        "",
    ]

    result = parse_nm_output(lines)
    assert [s.leaf_name for s in result.symbols] == ["weird\x85name", "odd\u2028name"]
    assert result.skipped == [""]


def test_index_id_format():
    """Test index ID generation."""
    assert make_index_id("/usr/local/bin/app").startswith("usr-local-bin-app-")
    assert make_index_id("./bin/my.server").startswith("bin-my-server-")
    assert len(make_index_id("app")) == len("app-") + 8
    assert make_index_id(" app ") == make_index_id("app")


def test_index_id_distinct_for_same_slug():
    """Test paths that slug alike get different IDs."""
    ids = {make_index_id(p) for p in ["bin/app", "bin-app", "bin.app"]}
    assert len(ids) == 3
