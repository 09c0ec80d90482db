import ast
import textwrap

import pytest

from errcodegen.parse import (
    ErrorCodePackage,
    ParseError,
    Value,
    collect_comments,
    collect_const_fields,
    parse_module,
    parse_package,
)


@pytest.mark.parametrize(
    "comment, expected",
    [
        (
            "ErrBind - 400: Error occurred while binding the request body to the struct.",
            ("400", "Error occurred while binding the request body to the struct"),
        ),
        ("Success - 200: OK.", ("200", "OK")),
        (
            "ErrLockWithFailed - 429: The resource that is being accessed is "
            "locked.Please wait for a moment and try again.",
            (
                "429",
                "The resource that is being accessed is locked.Please wait for "
                "a moment and try again",
            ),
        ),
    ],
)
def test_parse_comment_matches(comment, expected):
    assert Value(name="X", value="1", comment=comment).parse_comment() == expected


@pytest.mark.parametrize(
    "comment",
    ["", "just some words", "ErrBind - 400: lowercase start.", "ErrBind - 40: Short."],
)
def test_parse_comment_defaults(comment):
    value = Value(name="X", value="1", comment=comment)
    assert value.parse_comment() == ("500", "Internal server error")


def test_collect_comments_doc_and_trailing():
    source = textwrap.dedent(
        """\
        # ErrBind - 400: Bad body.
        ErrBind = 1
        ErrOther = 2  # ErrOther - 404: Missing.

        # detached

        Plain = 3
        """
    )
    comments = collect_comments(source)
    assert comments["ErrBind"] == "ErrBind - 400: Bad body."
    assert comments["ErrOther"] == "ErrOther - 404: Missing."
    assert comments["Plain"] == ""


def test_collect_comments_doc_wins_and_joins_lines():
    source = textwrap.dedent(
        """\
        # first line
        # second line
        Name = 1  # trailing
        """
    )
    assert collect_comments(source) == {"Name": "first line\nsecond line"}


def test_collect_comments_invalid_source():
    with pytest.raises(ParseError):
        collect_comments("X = (\n")


def test_collect_const_fields_evaluates_expressions():
    tree = ast.parse(
        textwrap.dedent(
            """\
            Base = 5
            Alias = Base
            Doubled: int = Base * 2
            Label = "hi"
            Computed = make()
            Dependent = Computed + 1
            """
        )
    )
    fields = collect_const_fields(tree)
    assert fields["Base"] == "5"
    assert fields["Alias"] == fields["Base"]
    assert fields["Doubled"] == "10"
    assert fields["Label"] == '"hi"'
    assert "Computed" not in fields
    assert "Dependent" not in fields


def test_collect_const_fields_rebinding_to_non_constant_drops_name():
    tree = ast.parse("A = 1\nA = compute()\n")
    assert collect_const_fields(tree) == {}


def _write_package(root):
    package = root / "mypkg"
    package.mkdir()
    (package / "__init__.py").write_text("")
    (package / "codes.py").write_text(
        textwrap.dedent(
            """\
            Base = 100

            # ErrBind - 400: Bad body.
            ErrBind = Base + 2

            # ErrUnknown - 500: Something broke.
            ErrUnknown = Base + 1

            # Success - 200: OK.
            Success = 0
            """
        )
    )
    (package / "test_codes.py").write_text("ErrIgnored = 1\n")
    return package


def test_parse_module_sorts_and_attaches_comments(tmp_path):
    package = _write_package(tmp_path)
    parsed = parse_module(package / "codes.py")
    assert isinstance(parsed, ErrorCodePackage)
    assert parsed.package_name == "codes"
    assert parsed.package_path == "mypkg.codes"
    values = [v.value for v in parsed.codes]
    assert values == sorted(values)
    by_name = {v.name: v for v in parsed.codes}
    assert by_name["ErrBind"].parse_comment() == ("400", "Bad body")
    assert by_name["Success"].parse_comment() == ("200", "OK")
    assert by_name["Base"].comment == ""


def test_parse_package_walks_directory_and_skips_tests(tmp_path):
    _write_package(tmp_path)
    packages = parse_package(tmp_path)
    paths = [p.package_path for p in packages]
    assert paths == ["mypkg", "mypkg.codes"]
    init_package = packages[0]
    assert init_package.package_name == "mypkg"
    assert init_package.codes == []
    names = {v.name for v in packages[1].codes}
    assert "ErrIgnored" not in names
    assert {"ErrBind", "ErrUnknown", "Success"} <= names


def test_parse_package_rejects_missing_directory(tmp_path):
    with pytest.raises(ParseError):
        parse_package(tmp_path / "absent")


def test_parse_package_reports_syntax_errors(tmp_path):
    (tmp_path / "broken.py").write_text("def broken(:\n")
    with pytest.raises(ParseError):
        parse_package(tmp_path)