"""Names and node kinds that are common in Go sources and generated stubs."""

from __future__ import annotations

ERROR_TYPE = "error"
RPC_IMPORT = "net/rpc"
DEFAULT_RPC_CLIENT_TYPE = "*rpc.Client"
TARGET_SUFFIX = "rpc"
DEFAULT_EXTENSION = ".go"
GENERATED_HEADER = "// Generated by go-rpcgen. Do not modify."


class GoNodeType:
    """Kinds of tree-sitter-go nodes visited by the declaration walker."""

    SOURCE_FILE = "source_file"
    PACKAGE_CLAUSE = "package_clause"
    PACKAGE_IDENTIFIER = "package_identifier"
    TYPE_DECLARATION = "type_declaration"
    TYPE_SPEC = "type_spec"
    TYPE_ALIAS = "type_alias"
    INTERFACE_TYPE = "interface_type"
    PARAMETER_LIST = "parameter_list"
    PARAMETER_DECLARATION = "parameter_declaration"
    VARIADIC_PARAMETER_DECLARATION = "variadic_parameter_declaration"
    COMMENT = "comment"
    ERROR = "ERROR"

    # Older grammar releases call interface methods "method_spec".
    METHOD_ELEMS = ("method_elem", "method_spec")
    PARAMETERS = (PARAMETER_DECLARATION, VARIADIC_PARAMETER_DECLARATION)
    TYPE_SPECS = (TYPE_SPEC, TYPE_ALIAS)
