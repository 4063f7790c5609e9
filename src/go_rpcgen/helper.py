"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import os.path
from collections.abc import Sequence
from typing import TYPE_CHECKING

from go_rpcgen.go_types import DEFAULT_EXTENSION, TARGET_SUFFIX

if TYPE_CHECKING:
    from go_rpcgen.writer_dto import Field


def public_name(name: str) -> str:
    """Converts an identifier to its exported Go spelling.

    Only the first character is upper-cased, the remainder is kept as declared.
    E.g. `sum` becomes `Sum`, `userID` becomes `UserID` and `Add` stays `Add`.

    Args:
        name (str): The identifier as declared in source.

    Returns:
        str: The public name.
    """
    return name[:1].upper() + name[1:]


def field_list(
    fields: Sequence[Field],
    prefix: str = "",
    delimiter: str = ", ",
    with_types: bool = False,
    use_public_names: bool = False,
) -> str:
    """Formats a list of fields as Go source text.

    The names of one field are prefixed and joined with `", "`, optionally followed by the field type.
    The fields themselves are joined with the delimiter. An empty list renders as an empty string.

    Args:
        fields (Sequence[Field]): The fields to format, in declaration order.
        prefix (str): Prepended to every single name, e.g. `"request."`.
        delimiter (str): Joins the per-field groups.
        with_types (bool): Whether to append `" " + type` to every group.
        use_public_names (bool): Whether to use the capitalized names instead of the declared ones.

    Returns:
        str: The formatted field list.

    Examples:
        >>> field_list([Field(["A", "B"], ["a", "b"], "int")], with_types=True)
        'a, b int'
        >>> field_list([Field(["A", "B"], ["a", "b"], "int")], prefix="request.", use_public_names=True)
        'request.A, request.B'
    """
    out: list[str] = []
    for field in fields:
        names = field.names if use_public_names else field.lower_names
        group = ", ".join(prefix + name for name in names)
        if with_types:
            group += " " + field.type
        out.append(group)
    return delimiter.join(out)


def public_fields(fields: Sequence[Field]) -> str:
    """Struct field declarations, one group per line, e.g. `A, B int`."""
    return field_list(fields, delimiter="\n\t", with_types=True, use_public_names=True)


def refs_with_prefix(prefix: str, fields: Sequence[Field]) -> str:
    """References to the declared names, e.g. `a, b`."""
    return field_list(fields, prefix=prefix)


def public_refs_with_prefix(prefix: str, fields: Sequence[Field]) -> str:
    """References to the public names, e.g. `request.A, request.B`."""
    return field_list(fields, prefix=prefix, use_public_names=True)


def function_args(fields: Sequence[Field]) -> str:
    """A function parameter or result list, e.g. `a, b int, name string`."""
    return field_list(fields, with_types=True)


def derive_target_path(source: str) -> str:
    """Derives the stub file path from the source file path.

    The final extension is replaced with `rpc` followed by the same extension.
    For example, `arith/arith.go` becomes `arith/arithrpc.go`.
    A source without extension gets `rpc.go` appended.

    Args:
        source (str): The path of the source file.

    Returns:
        str: The path of the stub file.
    """
    root, extension = os.path.splitext(source)
    return root + TARGET_SUFFIX + (extension or DEFAULT_EXTENSION)


def split_imports(imports: str) -> list[str]:
    """Splits a comma separated list of import paths, ignoring empty entries."""
    return [path.strip() for path in imports.split(",") if path.strip()]
