# errcodegen

`errcodegen` scans Python modules that define error code constants. From them it writes two files:

* a generated Python module that registers every error code with its HTTP status and message, using `errcodegen.registry`;
* a Markdown document with a table of all the error codes.

## Defining error codes

Error codes are module-level constants. Put a comment on each one in this form: `Name - <HTTP status>: <Message>.`

```python
# Success - 200: OK.
Success = 0

SYSTEM_CODE = 100

# ErrUnknown - 500: Internal server error.
ErrUnknown = SYSTEM_CODE * 100 * 1000 + 1

ErrBind = 10000002  # ErrBind - 400: Error occurred while binding the request body.
```

How constants and comments are found:

* A value counts as constant if it is an integer or string literal. Arithmetic on such values counts too, and so does arithmetic on names bound earlier in the same module.
* A comment block directly above the assignment is used. If there is none, a comment at the end of the assignment's last line is used.
* Only names that start with `Err` (case is ignored) or are named `Success` are registered and documented. The code generator logs a warning for every other constant it skips.
* If a constant has no well-formed comment, it gets HTTP status `500` and the message `Internal server error`.

The scan runs through each given directory recursively and reads every `*.py` file. It skips `__pycache__`, hidden directories and test files (`test_*.py`, `*_test.py`). Each file becomes one group of codes, sorted by value.

## Command line

```
errcodegen -output path/to/pkg -docOutput docs/error_codes.md path/to/codes
```

You can also run it as `python -m errcodegen.cli`.

Flags (each also has a long form in brackets):

* `-output` (`--output`): an existing directory or file for the registration module. If it is a directory, `code_gen.py` is written inside it. The default is the current directory.
* `-docOutput` (`--doc-output`): the Markdown file to write. Its default is `.`, which is a directory and cannot be written to, so give a file path.
* `-doc-template` (`--doc-template`): a file whose text replaces the built-in document header. In that file, every `{{.}}` becomes a backtick.
* `-trim-prefix` (`--trim-prefix`): accepted but it does nothing at present.

If you give no directories, the current directory is scanned. Files are written with mode `0600`. On a parse or file error, the command logs the error and exits with status 1.

The generated module imports `errcodegen.registry as code` and each scanned module under a lower-case alias. A clashing alias gets a random numeric suffix. Modules in the output's own package are imported by name instead. So the generated module needs `errcodegen` to be installed when it runs.

## Library use

```python
from errcodegen.parse import parse_package
from errcodegen.codefile import render_code
from errcodegen.markdown import render_docs

packages = parse_package("path/to/codes")
print(render_docs(packages))
print(render_code("pkg", "pkg", packages))
```

`errcodegen.cli.run(argv)` does the same work as the command and returns the paths of the two files it wrote.

## Runtime registry

```python
from errcodegen.registry import Registry, register, get_coder

register(10000001, 500, "Internal server error")
entry = get_coder(10000001)   # ErrorCode(code=..., http_status=500, message=..., reference="")
missing = get_coder(42)       # None
```

How the registry behaves:

* `register` and `get_coder` use one registry shared by the whole process.
* `Registry()` gives you a separate registry. It has `register`, `get` and `len()`, and supports `in`.
* Registering the same code twice raises `CodeAlreadyRegisteredError`.
* A code outside the unsigned 32-bit range raises `ValueError`.

## Limits

The package only writes the generated module and the document. It does not build error objects or HTTP responses from the registered codes.