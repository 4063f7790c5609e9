"""Command-line interface for generating Go RPC stubs from an interface declaration.

Notes:
    - The generated stubs target the `net/rpc` package of the Go standard library.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from go_rpcgen.errors import GenerationError
from go_rpcgen.go_types import DEFAULT_RPC_CLIENT_TYPE, RPC_IMPORT
from go_rpcgen.run import DEFAULT_FORMATTER, run

logger = logging.getLogger(__name__)

EPILOG = """\
If you had a file "arith.go" containing this interface:

  package arith

  type Arith interface {
  	Add(a, b int) (sum int, err error)
  }

the following command generates "arithrpc.go" with two types, ArithService and
ArithClient, to serve the interface over net/rpc and to call it, respectively:

  %(prog)s --source=arith.go --type=Arith
"""


def _add_format_arguments(parser: argparse.ArgumentParser):
    """Add the arguments controlling the formatting of generated stubs.

    Args:
        parser (argparse.ArgumentParser): The parser to add the arguments to.
    """
    parser.add_argument(
        "--formatter",
        type=str,
        default=DEFAULT_FORMATTER,
        help="command used to format the written stubs; the target path is appended.",
    )

    parser.add_argument(
        "--no-format",
        dest="skip_format",
        default=False,
        action="store_true",
        help="skip formatting of the generated stubs.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(
        description="Generate server and client RPC stubs from a Go interface.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-s",
        "--source",
        type=str,
        required=True,
        help="source file to parse the RPC interface from.",
    )

    parser.add_argument(
        "-t",
        "--type",
        type=str,
        required=True,
        help="interface type to generate RPC stubs for.",
    )

    parser.add_argument(
        "-o",
        "--target",
        type=str,
        default="",
        help="target file to write stubs to; defaults to the source path with 'rpc' before its extension.",
    )

    parser.add_argument(
        "--imports",
        type=str,
        default=RPC_IMPORT,
        help="comma separated list of imports to add.",
    )

    parser.add_argument(
        "--package",
        type=str,
        default="",
        help="package to export under; defaults to the package of the source file.",
    )

    parser.add_argument(
        "--rpc_client_type",
        "--rpc-client-type",
        dest="rpc_client_type",
        type=str,
        default=DEFAULT_RPC_CLIENT_TYPE,
        help="type to use for the RPC client of generated clients.",
    )

    _add_format_arguments(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the stub generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    logging.basicConfig(level=logging.INFO)

    parser = setup_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except GenerationError as e:
        logger.error("%s: error: %s", parser.prog, e)
        return 1

    return 0
