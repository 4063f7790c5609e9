"""Top-level module for stub generation."""

from __future__ import annotations

import argparse
import logging
import shlex
import subprocess
from dataclasses import dataclass, field

from go_rpcgen import helper, parser
from go_rpcgen.errors import FormatterError, OutputError, SourceParseError
from go_rpcgen.go_types import DEFAULT_RPC_CLIENT_TYPE, RPC_IMPORT
from go_rpcgen.writer import Writer
from go_rpcgen.writer_dto import GenerationContext

logger = logging.getLogger(__name__)

DEFAULT_FORMATTER = "gofmt -w"


@dataclass(frozen=True)
class GeneratorConfig:
    """The options of one generation run.

    Attributes:
        source: Path of the Go file declaring the interface
        type_name: Name of the interface to generate stubs for
        target: Path of the stub file to write
        imports: Import paths to add to the stub file
        package: Package of the stub file, the source package if empty
        rpc_client_type: Type of the client's transport handle
        formatter: Command formatting the written file, the path is appended; no formatting if empty
    """

    source: str
    type_name: str
    target: str = ""
    imports: list[str] = field(default_factory=lambda: [RPC_IMPORT])
    package: str = ""
    rpc_client_type: str = DEFAULT_RPC_CLIENT_TYPE
    formatter: list[str] = field(default_factory=lambda: shlex.split(DEFAULT_FORMATTER))

    def __post_init__(self):
        if not self.target:
            object.__setattr__(self, "target", helper.derive_target_path(self.source))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> GeneratorConfig:
        """Factory method to create the configuration from parsed command-line arguments."""
        return cls(
            source=args.source,
            type_name=args.type,
            target=args.target,
            imports=helper.split_imports(args.imports),
            package=args.package,
            rpc_client_type=args.rpc_client_type,
            formatter=[] if args.skip_format else shlex.split(args.formatter),
        )


def build_context(config: GeneratorConfig) -> GenerationContext:
    """Parses the source and builds the validated model of the interface.

    Raises:
        SourceParseError: If the source cannot be read or parsed, or declares no package.
        ValidationError: If the interface is missing or does not follow the RPC conventions.
    """
    source_file = parser.parse_file(config.source)
    methods = parser.extract_methods(source_file, config.type_name)

    package_name = config.package or source_file.package_name
    if not package_name:
        raise SourceParseError("missing package clause", source_file.position(source_file.root))

    return GenerationContext(
        interface_type_name=config.type_name,
        package_name=package_name,
        methods=methods,
        imports=list(config.imports),
        transport_type_name=config.rpc_client_type,
    )


def render(context: GenerationContext) -> str:
    """Renders the stub document of a generation context."""
    writer = Writer(context)
    writer.generate_all()
    return writer.dumps()


def write_output(target: str, content: str):
    """Writes the stub document to the target file.

    Raises:
        OutputError: If the file cannot be created or written.
    """
    try:
        with open(target, "w", encoding="utf8") as output_file:
            output_file.write(content)
    except OSError as e:
        raise OutputError(f"failed to create output file {target}: {e.strerror or e}") from e


def format_output(target: str, formatter: list[str]):
    """Formats the written stub file in place with an external formatter.

    Args:
        target (str): Path of the written stub file.
        formatter (list[str]): The formatter command, the target path is appended.

    Raises:
        FormatterError: If the formatter is not installed or fails.
    """
    command = [*formatter, target]
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise FormatterError(f"failed to run {formatter[0]} on {target}: command not found") from e
    except subprocess.SubprocessError as e:
        raise FormatterError(f"failed to run {formatter[0]} on {target}: {e}") from e

    if result.returncode != 0:
        output = (result.stdout or "") + (result.stderr or "")
        raise FormatterError(
            f"failed to run {shlex.join(formatter)} on {target}: exit status {result.returncode}: {output.strip()}"
        )


def generate_stubs(config: GeneratorConfig) -> str:
    """Entry-point for generating the RPC stubs of one interface.

    The model is validated and rendered completely before the target file is opened, so a failing validation never
    leaves a stub file behind. The formatter runs after the file is written.

    Args:
        config (GeneratorConfig): The options of the run.

    Returns:
        str: The path of the written stub file.
    """
    context = build_context(config)
    content = render(context)

    write_output(config.target, content)
    logger.info("Wrote RPC stubs for %s to '%s'.", config.type_name, config.target)

    if config.formatter:
        format_output(config.target, config.formatter)
        logger.info("Formatted '%s' with %s.", config.target, config.formatter[0])
    else:
        logger.info("Skipping formatting of '%s'.", config.target)

    return config.target


def run(args: argparse.Namespace) -> str:
    """Run the stub generator with the arguments passed on the command line.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the stub generator.

    Returns:
        str: The path of the written stub file.
    """
    return generate_stubs(GeneratorConfig.from_args(args))
