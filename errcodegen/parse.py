"""Discovery of error-code constants and their comments in Python sources."""

from __future__ import annotations

import ast
import io
import json
import operator
import re
import tokenize
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HTTP_STATUS = "500"
DEFAULT_DESCRIPTION = "Internal server error"

_COMMENT_PATTERN = re.compile(r"\w\s*-\s*(\d{3})\s*:\s*([A-Z].*)\s*\.\n*", re.ASCII)

_INT_BINOPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
    ast.LShift: operator.lshift,
    ast.RShift: operator.rshift,
    ast.BitOr: operator.or_,
    ast.BitAnd: operator.and_,
    ast.BitXor: operator.xor,
}

_INT_UNARYOPS = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Invert: operator.invert,
}

_SKIPPED_DIRS = {"__pycache__"}


class ParseError(Exception):
    """Raised when sources cannot be read or parsed."""


@dataclass
class Value:
    """A declared constant with its name, rendered value and comment."""

    name: str
    value: str
    comment: str = ""

    def parse_comment(self) -> tuple[str, str]:
        """Return the HTTP status and description named in the comment.

        A comment of the form ``Name - 400: Description.`` yields
        ``("400", "Description")``; anything else yields the 500 default.
        """
        match = _COMMENT_PATTERN.search(self.comment)
        if match is None:
            return DEFAULT_HTTP_STATUS, DEFAULT_DESCRIPTION
        return match.group(1), match.group(2)


@dataclass
class ErrorCodePackage:
    """The constants found in one module."""

    package_name: str
    package_path: str
    codes: list[Value] = field(default_factory=list)


def _assignment_targets(node: ast.stmt) -> list[str]:
    if isinstance(node, ast.Assign):
        return [t.id for t in node.targets if isinstance(t, ast.Name)]
    if isinstance(node, ast.AnnAssign) and node.value is not None:
        if isinstance(node.target, ast.Name):
            return [node.target.id]
    return []


def _comment_lines(source: str) -> tuple[dict[int, str], set[int]]:
    """Map line numbers to comment text, and report which lines hold only a comment."""
    comments: dict[int, str] = {}
    whole_line: set[int] = set()
    lines = source.splitlines()
    try:
        tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))
    except (tokenize.TokenError, SyntaxError) as exc:
        raise ParseError(f"cannot tokenize source: {exc}") from exc
    for tok in tokens:
        if tok.type != tokenize.COMMENT:
            continue
        lineno, col = tok.start
        text = tok.string[1:]
        if text.startswith(" "):
            text = text[1:]
        comments[lineno] = text.rstrip()
        if not lines[lineno - 1][:col].strip():
            whole_line.add(lineno)
    return comments, whole_line


def collect_comments(source: str) -> dict[str, str]:
    """Map each module-level assigned name to its comment.

    The comment block directly above an assignment wins; otherwise a
    comment trailing the assignment's last line is used.
    """
    try:
        tree = ast.parse(source)
    except SyntaxError as exc:
        raise ParseError(f"invalid source: {exc}") from exc
    comments, whole_line = _comment_lines(source)

    result: dict[str, str] = {}
    for node in tree.body:
        names = _assignment_targets(node)
        if not names:
            continue
        doc_lines = []
        lineno = node.lineno - 1
        while lineno in whole_line:
            doc_lines.append(comments[lineno])
            lineno -= 1
        comment = "\n".join(reversed(doc_lines)).strip()
        if not comment:
            end = node.end_lineno or node.lineno
            if end in comments and end not in whole_line:
                comment = comments[end].strip()
        for name in names:
            result[name] = comment
    return result


def _evaluate(node: ast.expr, known: dict[str, int | str]) -> int | str | None:
    if isinstance(node, ast.Constant):
        value = node.value
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, str)):
            return value
        return None
    if isinstance(node, ast.Name):
        return known.get(node.id)
    if isinstance(node, ast.UnaryOp):
        operand = _evaluate(node.operand, known)
        unary = _INT_UNARYOPS.get(type(node.op))
        if unary is None or not isinstance(operand, int):
            return None
        return unary(operand)
    if isinstance(node, ast.BinOp):
        left = _evaluate(node.left, known)
        right = _evaluate(node.right, known)
        if left is None or right is None:
            return None
        if isinstance(left, str) or isinstance(right, str):
            if isinstance(node.op, ast.Add) and isinstance(left, str) and isinstance(right, str):
                return left + right
            return None
        binary = _INT_BINOPS.get(type(node.op))
        if binary is None:
            return None
        try:
            return binary(left, right)
        except (ZeroDivisionError, ValueError, OverflowError):
            return None
    return None


def _render(value: int | str) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def collect_const_fields(tree: ast.Module) -> dict[str, str]:
    """Map module-level names bound to constant expressions to their rendered values.

    Integer and string literals count, as do arithmetic on them and on
    names already bound to constants earlier in the module.
    """
    known: dict[str, int | str] = {}
    for node in tree.body:
        names = _assignment_targets(node)
        if not names:
            continue
        value = _evaluate(node.value, known)
        for name in names:
            if value is None:
                known.pop(name, None)
            else:
                known[name] = value
    return {name: _render(value) for name, value in known.items()}


def _module_path(path: Path) -> str:
    parts = [] if path.name == "__init__.py" else [path.stem]
    directory = path.parent
    while (directory / "__init__.py").is_file():
        parts.append(directory.name)
        if directory.parent == directory:
            break
        directory = directory.parent
    return ".".join(reversed(parts)) or path.stem


def parse_module(path: str | Path) -> ErrorCodePackage:
    """Collect the constants of one source file, sorted by value."""
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"cannot read {path}: {exc}") from exc
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        raise ParseError(f"invalid source in {path}: {exc}") from exc

    comments = collect_comments(source)
    fields = collect_const_fields(tree)
    codes = [
        Value(name=name, value=value, comment=comments.get(name, ""))
        for name, value in fields.items()
    ]
    codes.sort(key=lambda v: (v.value, v.name))

    name = path.parent.name if path.name == "__init__.py" else path.stem
    return ErrorCodePackage(package_name=name, package_path=_module_path(path), codes=codes)


def _is_test_file(path: Path) -> bool:
    return path.stem.startswith("test_") or path.stem.endswith("_test")


def _source_files(directory: Path):
    for path in sorted(directory.rglob("*.py")):
        relative = path.relative_to(directory).parts[:-1]
        if any(part in _SKIPPED_DIRS or part.startswith(".") for part in relative):
            continue
        if _is_test_file(path):
            continue
        yield path


def parse_package(directory: str | Path) -> list[ErrorCodePackage]:
    """Parse every non-test source file under ``directory``, recursively."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ParseError(f"not a directory: {directory}")
    return [parse_module(path) for path in _source_files(directory)]