"""Extraction of the RPC method model from a Go interface declaration.

Parsing itself is delegated to tree-sitter and its Go grammar. The walk happens in two phases: all top-level type
specs are indexed by name, then the requested interface is destructured into `Method` records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from go_rpcgen.errors import (
    InterfaceNotFoundError,
    NotAnInterfaceError,
    Position,
    SourceParseError,
    ValidationError,
)
from go_rpcgen.go_types import ERROR_TYPE, GoNodeType
from go_rpcgen.writer_dto import Field, Method

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())


@dataclass
class SourceFile:
    """A parsed Go source file."""

    filename: str
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def position(self, node: Node) -> Position:
        """The 1-based position of a node in this file."""
        row, column = node.start_point
        return Position(self.filename, row + 1, column + 1)

    @property
    def package_name(self) -> str:
        """The name in the package clause, or an empty string if the file has none."""
        for child in self.root.named_children:
            if child.type == GoNodeType.PACKAGE_CLAUSE:
                for name in child.named_children:
                    if name.type == GoNodeType.PACKAGE_IDENTIFIER:
                        return node_text(name)
        return ""


def node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _first_error_node(node: Node) -> Node | None:
    """Finds the first syntax error below a node, in source order."""
    if node.type == GoNodeType.ERROR or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error_node(child)
            if found is not None:
                return found
    return None


def parse_source(filename: str, source: bytes) -> SourceFile:
    """Parses Go source text.

    Args:
        filename (str): Name used in diagnostics.
        source (bytes): The source text.

    Raises:
        SourceParseError: If the source is not valid UTF-8 or contains syntax errors.

    Returns:
        SourceFile: The parsed file.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = source.rfind(b"\n", 0, e.start) + 1
        position = Position(filename, source.count(b"\n", 0, e.start) + 1, e.start - line_start + 1)
        raise SourceParseError("illegal UTF-8 encoding", position) from e

    tree = Parser(GO_LANGUAGE).parse(source)
    source_file = SourceFile(filename, tree)

    if tree.root_node.has_error:
        error_node = _first_error_node(tree.root_node)
        position = source_file.position(error_node) if error_node is not None else None
        raise SourceParseError("syntax error", position)

    return source_file


def parse_file(path: str) -> SourceFile:
    """Reads and parses a Go source file.

    Raises:
        SourceParseError: If the file cannot be read or contains syntax errors.
    """
    try:
        with open(path, "rb") as source:
            content = source.read()
    except OSError as e:
        raise SourceParseError(f"failed to read {path}: {e.strerror or e}") from e

    return parse_source(path, content)


def index_type_specs(source_file: SourceFile) -> dict[str, Node]:
    """Indexes the top-level type specs of a file by name.

    Both `type X ...` and grouped `type ( ... )` declarations are covered, aliases (`type X = ...`) included. If a name occurs twice, the first
    declaration in source order wins.
    """
    specs: dict[str, Node] = {}
    for declaration in source_file.root.named_children:
        if declaration.type != GoNodeType.TYPE_DECLARATION:
            continue
        for spec in declaration.named_children:
            if spec.type not in GoNodeType.TYPE_SPECS:
                continue
            name = spec.child_by_field_name("name")
            if name is not None:
                specs.setdefault(node_text(name), spec)
    return specs


def find_interface(source_file: SourceFile, type_name: str) -> Node:
    """Locates the interface type of a named top-level type declaration.

    Raises:
        InterfaceNotFoundError: If no type of that name is declared.
        NotAnInterfaceError: If the type is declared, but not as an interface.
        ValidationError: If the interface has type parameters.

    Returns:
        Node: The `interface_type` node.
    """
    spec = index_type_specs(source_file).get(type_name)
    if spec is None:
        raise InterfaceNotFoundError(
            f"type {type_name} is not declared in {source_file.filename}", source_file.position(source_file.root)
        )

    type_node = spec.child_by_field_name("type")
    if type_node is None or type_node.type != GoNodeType.INTERFACE_TYPE:
        raise NotAnInterfaceError(f"type {type_name} is not an interface", source_file.position(spec))

    if spec.child_by_field_name("type_parameters") is not None:
        raise ValidationError(f"generic interface {type_name} is not supported", source_file.position(spec))

    return type_node


def build_field(source_file: SourceFile, node: Node) -> Field:
    """Builds a field from a parameter declaration.

    Raises:
        ValidationError: If the declaration has no names.
    """
    if node.type not in GoNodeType.PARAMETERS:
        raise ValidationError("RPC interface parameters and results must all be named", source_file.position(node))

    names = [node_text(name) for name in node.children_by_field_name("name")]
    type_node = node.child_by_field_name("type")
    if not names or type_node is None:
        raise ValidationError("RPC interface parameters and results must all be named", source_file.position(node))

    type_text = node_text(type_node)
    if node.type == GoNodeType.VARIADIC_PARAMETER_DECLARATION:
        type_text = "..." + type_text

    return Field.create(names, type_text)


def _parameter_nodes(node: Node | None) -> list[Node]:
    """The parameter groups of a parameter list, or the bare result type itself."""
    if node is None:
        return []
    if node.type != GoNodeType.PARAMETER_LIST:
        return [node]
    return [child for child in node.named_children if child.type != GoNodeType.COMMENT]


def build_method(source_file: SourceFile, node: Node) -> Method:
    """Builds the model of one interface method.

    Raises:
        ValidationError: If a parameter or result is unnamed, or no result is of type `error`.
    """
    name = node_text(node.child_by_field_name("name"))

    parameters = [build_field(source_file, child) for child in _parameter_nodes(node.child_by_field_name("parameters"))]

    results: list[Field] = []
    has_error = False
    for child in _parameter_nodes(node.child_by_field_name("result")):
        result = build_field(source_file, child)
        if result.type == ERROR_TYPE:
            has_error = True
        else:
            results.append(result)

    if not has_error:
        raise ValidationError(f"method {name} must have error as last return value", source_file.position(node))

    return Method(name=name, parameters=parameters, results=results)


def build_methods(source_file: SourceFile, interface: Node) -> list[Method]:
    """Builds the models of all methods of an interface, in declaration order.

    Embedded interfaces and type constraints are skipped.
    """
    methods: list[Method] = []
    for element in interface.named_children:
        if element.type in GoNodeType.METHOD_ELEMS:
            methods.append(build_method(source_file, element))
        elif element.type != GoNodeType.COMMENT:
            logger.warning(
                "%s: skipping embedded element '%s', only methods are exported.",
                source_file.position(element),
                node_text(element),
            )
    return methods


def extract_methods(source_file: SourceFile, type_name: str) -> list[Method]:
    """Entry-point for building the method model of a named interface."""
    methods = build_methods(source_file, find_interface(source_file, type_name))
    logger.debug("Found %d method(s) in interface %s.", len(methods), type_name)
    return methods
