"""Generation of the module that registers discovered error codes."""

from __future__ import annotations

import json
import logging
import os
import random
import stat
from collections.abc import Iterable
from pathlib import Path

from .parse import ErrorCodePackage

REGISTRY_MODULE = "errcodegen.registry"
REGISTRY_ALIAS = "code"
DEFAULT_CODE_FILE = "code_gen.py"

log = logging.getLogger(__name__)


def _is_directory(path: str | Path) -> bool:
    """Report whether ``path`` is a directory; raise if it does not exist."""
    return stat.S_ISDIR(os.stat(path).st_mode)


def get_package_path(directory: str | Path) -> str:
    """Return the dotted import path of ``directory``, or "" if it is no package."""
    current = Path(directory).resolve()
    parts: list[str] = []
    while (current / "__init__.py").is_file():
        parts.append(current.name)
        if current.parent == current:
            break
        current = current.parent
    return ".".join(reversed(parts))


def _is_registrable(name: str) -> bool:
    lowered = name.lower()
    return lowered.startswith("err") or lowered == "success"


def _unique_alias(base: str, taken: Iterable[str]) -> str:
    taken = set(taken)
    alias = base
    while alias in taken or alias == REGISTRY_ALIAS:
        alias = f"{base}_{random.randrange(255)}"
    return alias


def _from_import(module: str, names: list[str]) -> str:
    body = "".join(f"    {name},\n" for name in names)
    return f"from {module} import (\n{body})"


def render_code(
    output_package: str,
    output_package_path: str,
    packages: Iterable[ErrorCodePackage],
) -> str:
    """Return the source of a module that registers every error code found."""
    groups: dict[str, ErrorCodePackage] = {}
    for package in packages:
        if not package.codes:
            continue
        if package.package_path == output_package_path:
            alias = ""
        else:
            alias = _unique_alias(package.package_name.lower(), groups)
        groups[alias] = package

    import_lines = [f"import {REGISTRY_MODULE} as {REGISTRY_ALIAS}"]
    register_lines: list[str] = []
    for alias, package in groups.items():
        names: list[str] = []
        for value in package.codes:
            if not _is_registrable(value.name):
                log.warning(
                    "Field %s does not follow the naming convention, "
                    "please use `Err` as the prefix. Skipping it.",
                    value.name,
                )
                continue
            status, description = value.parse_comment()
            reference = f"{alias}.{value.name}" if alias else value.name
            names.append(value.name)
            register_lines.append(
                f"{REGISTRY_ALIAS}.register({reference}, {int(status)}, "
                f"{json.dumps(description, ensure_ascii=False)})"
            )
        if alias:
            import_lines.append(f"import {package.package_path} as {alias}")
        elif names:
            import_lines.append(_from_import(package.package_path, names))

    header = (
        '# Code generated by "errcodegen"; DO NOT EDIT.\n'
        f'"""Register the error codes used by the ``{output_package}`` package."""\n'
    )
    body = "\n".join(import_lines)
    registrations = "".join(f"{line}\n" for line in register_lines)
    return (
        f"{header}\n{body}\n\n"
        "# Register the error codes defined in the modules imported above.\n"
        f"{registrations}"
    )


def generate_code_file(arg, packages: Iterable[ErrorCodePackage]) -> Path:
    """Write the registration module to ``arg.code_output`` and return its path.

    When the output names a directory, the file ``code_gen.py`` inside it is written.
    """
    target = Path(arg.code_output)
    if _is_directory(target):
        target = target / DEFAULT_CODE_FILE
    directory = target.parent
    output_package = directory.resolve().name
    output_package_path = get_package_path(directory)
    write_to_file(render_code(output_package, output_package_path, packages), target)
    return target


def write_to_file(content: str | bytes, path: str | Path) -> None:
    """Write ``content`` to ``path``, creating it readable by the owner only."""
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
    fd = os.open(path, flags, 0o600)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)