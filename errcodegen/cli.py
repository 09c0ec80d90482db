"""Command line: discover error codes and write the registration module and docs."""

from __future__ import annotations

import argparse
import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from .codefile import generate_code_file
from .markdown import generate_docs
from .parse import ErrorCodePackage, ParseError, parse_package

log = logging.getLogger(__name__)


@dataclass
class Arg:
    """Options of one generator run."""

    code_output: str = "."
    doc_output: str = "."
    trim_prefix: str = ""
    doc_template: str = ""
    directories: list[str] = field(default_factory=lambda: ["."])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="errcodegen",
        usage="%(prog)s [flags] directories...",
        description="Generate error code registrations and their documentation.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-output", "--output", dest="code_output", default="",
        help="output file or directory; default ./code_gen.py",
    )
    parser.add_argument(
        "-docOutput", "--doc-output", dest="doc_output", default="",
        help="output Markdown file",
    )
    parser.add_argument(
        "-trim-prefix", "--trim-prefix", dest="trim_prefix", default="",
        help="trim the prefix from the generated constant names",
    )
    parser.add_argument(
        "-doc-template", "--doc-template", dest="doc_template", default="",
        help="the template file of the document",
    )
    parser.add_argument("directories", nargs="*", metavar="directory")
    return parser


def parse_args(argv: list[str] | None = None) -> Arg:
    """Parse the command line into an :class:`Arg`."""
    ns = _build_parser().parse_args(argv)
    return Arg(
        code_output=ns.code_output.strip() or ".",
        doc_output=ns.doc_output.strip() or ".",
        trim_prefix=ns.trim_prefix,
        doc_template=ns.doc_template,
        directories=ns.directories or ["."],
    )


def _collect(directories: list[str]) -> list[ErrorCodePackage]:
    packages: list[ErrorCodePackage] = []
    for directory in directories:
        if not stat.S_ISDIR(os.stat(directory).st_mode):
            raise NotADirectoryError(f"not a directory: {directory}")
        try:
            packages.extend(parse_package(directory))
        except ParseError as exc:
            raise ParseError(f"parse package error: {exc}") from exc
    return packages


def run(argv: list[str] | None = None) -> tuple[Path, Path]:
    """Run the generator; return the paths of the code file and the document."""
    arg = parse_args(argv)
    packages = _collect(arg.directories)
    try:
        code_path = generate_code_file(arg, packages)
    except OSError as exc:
        raise OSError(f"generate code file error: {exc}") from exc
    try:
        doc_path = generate_docs(arg, packages)
    except OSError as exc:
        raise OSError(f"generate doc file error: {exc}") from exc
    log.info("Generate files success")
    return code_path, doc_path


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``errcodegen`` command."""
    logging.basicConfig(format="errcodegen: %(message)s", level=logging.INFO)
    try:
        run(argv)
    except (ParseError, OSError) as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())