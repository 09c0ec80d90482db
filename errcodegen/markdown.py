"""Generation of the Markdown table that documents the error codes."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .codefile import write_to_file
from .parse import ErrorCodePackage

DEFAULT_DOC_PREFIX = """
# Error Codes

⚠️⚠️System error code list, generated by the `errcodegen` command, do not make any changes to this file.⚠️⚠️

## Feature Description

If there is a `code` field in the response, and the value of `code` != 0, it indicates that the API interface call failed. For example:

```json
{
  "code": 10001000,
  "message": "Database error",
  "errors": [],
  "request_id": "67575010234d4f9f9adaca7c26e7e709"
}
```

In the above return, `code` represents the error code, `message` represents the specific information of the error. `errors` represents the debug information of the error. `request_id` represents the id of this request, which can be provided to service developers for troubleshooting and tracking.
Each error also corresponds to an HTTP status code, such as the above error code corresponds to HTTP status code 500 (Internal Server Error).

## Rules for Code
| First three digits (100) | Middle two digits (01) | Last three digits (000) |
| ---------- | ---- | --------- |
| System code | Module code | Specific error code |


## Error Code List

The list of error codes supported by this system is as follows:

| Identifier | Code | HTTP Code | Message |
| ---------- | ---- | --------- | ----------- |
"""

_TEMPLATE_ACTION = re.compile(r"\{\{-?\s*\.\s*-?\}\}")


def doc_prefix(template_path: str | Path | None = None) -> str:
    """Return the text placed above the table.

    A template file may use ``{{.}}`` wherever a backtick belongs.
    """
    if not template_path:
        return DEFAULT_DOC_PREFIX
    content = Path(template_path).read_text(encoding="utf-8")
    return _TEMPLATE_ACTION.sub("`", content)


def render_docs(
    packages: Iterable[ErrorCodePackage], template_path: str | Path | None = None
) -> str:
    """Return the Markdown document listing every error code."""
    parts = [doc_prefix(template_path)]
    for package in packages:
        for value in package.codes:
            if not value.name.lower().startswith("err") and value.name != "Success":
                continue
            status, description = value.parse_comment()
            parts.append(f"| {value.name} | {value.value} | {status} | {description} |\n")
    parts.append("\n")
    return "".join(parts)


def generate_docs(arg, packages: Iterable[ErrorCodePackage]) -> Path:
    """Write the document to ``arg.doc_output`` and return its path."""
    target = Path(arg.doc_output.strip())
    write_to_file(render_docs(packages, arg.doc_template or None), target)
    return target