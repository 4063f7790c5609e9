"""Render Go RPC server and client stubs from a method model."""

from __future__ import annotations

import logging

from go_rpcgen.errors import RenderError
from go_rpcgen.go_types import GENERATED_HEADER, RPC_IMPORT
from go_rpcgen.writer_dto import GenerationContext, MethodFragments

logger = logging.getLogger(__name__)


class Writer:
    """A class that handles writing the stub file, based on a generation context.

    All field lists are rendered into `MethodFragments` up front, the generation methods only place them.
    """

    def __init__(self, context: GenerationContext):
        """Initialize the stub writer with a generation context.

        Args:
            context (GenerationContext): The interface model to write stubs for.

        Raises:
            RenderError: If the context lacks the names the stubs are built from.
        """
        if not context.interface_type_name:
            raise RenderError("no interface type name to generate stubs for")
        if not context.package_name:
            raise RenderError("no package name to export the stubs under")

        self._context = context
        self._type = context.interface_type_name
        self._fragments = [MethodFragments.create(self._type, method) for method in context.methods]
        self._lines: list[str] = []

    @property
    def imports(self) -> list[str]:
        """The import paths of the stub file, `net/rpc` first and without duplicates."""
        imports = [RPC_IMPORT]
        for path in self._context.imports:
            if path not in imports:
                imports.append(path)
        return imports

    def _add(self, *lines: str):
        self._lines.extend(lines)

    def gen_header(self):
        self._add(GENERATED_HEADER, "", f"package {self._context.package_name}", "", "import (")
        self._add(*(f'\t"{path}"' for path in self.imports))
        self._add(")", "")

    def gen_service(self):
        """Generate the server wrapper, its constructor and the registration function."""
        t = self._type
        self._add(
            f"type {t}Service struct {{",
            f"\timpl {t}",
            "}",
            "",
            f"func New{t}Service(impl {t}) *{t}Service {{",
            f"\treturn &{t}Service{{impl}}",
            "}",
            "",
            f"func Register{t}Service(impl {t}) error {{",
            f'\treturn rpc.RegisterName("{t}", New{t}Service(impl))',
            "}",
            "",
        )

    def _gen_struct(self, name: str, body: str):
        self._add(f"type {name} struct {{")
        if body:
            self._add(f"\t{body}")
        self._add("}", "")

    def gen_service_method(self, method: MethodFragments):
        """Generate the request and response payloads of a method and its dispatch method."""
        self._gen_struct(method.request_type, method.request_fields)
        self._gen_struct(method.response_type, method.response_fields)

        targets = f"{method.response_refs}, err" if method.response_refs else "err"
        self._add(
            f"func (s *{self._type}Service) {method.name}(request *{method.request_type}, "
            f"response *{method.response_type}) (err error) {{",
            f"\t{targets} = s.impl.{method.name}({method.call_args})",
            "\treturn",
            "}",
            "",
        )

    def gen_client(self):
        """Generate the client wrapper, its constructor and the close method."""
        t = self._type
        transport = self._context.transport_type_name
        self._add(
            f"type {t}Client struct {{",
            f"\tclient {transport}",
            "\tservice string",
            "}",
            "",
            f"func New{t}Client(client {transport}) *{t}Client {{",
            f'\treturn &{t}Client{{client, "{t}"}}',
            "}",
            "",
            f"func (_c *{t}Client) Close() error {{",
            "\treturn _c.client.Close()",
            "}",
            "",
        )

    def gen_client_method(self, method: MethodFragments):
        """Generate the client call of a method."""
        results = f"{method.client_results}, err error" if method.client_results else "err error"
        returns = f"{method.client_returns}, err" if method.client_returns else "err"
        self._add(
            f"func (_c *{self._type}Client) {method.name}({method.client_params}) ({results}) {{",
            f"\t_request := &{method.request_type}{{{method.request_literal}}}",
            f"\t_response := &{method.response_type}{{}}",
            f'\terr = _c.client.Call(_c.service+".{method.name}", _request, _response)',
            f"\treturn {returns}",
            "}",
            "",
        )

    def generate_all(self):
        """Generate the whole stub document, in declaration order of the methods."""
        self._lines = []
        self.gen_header()
        self.gen_service()
        for method in self._fragments:
            self.gen_service_method(method)
        self.gen_client()
        for method in self._fragments:
            self.gen_client_method(method)
        logger.debug("Rendered %d method(s) for %s.", len(self._fragments), self._type)

    def dumps(self) -> str:
        """The generated document. `generate_all` must have been called before."""
        if not self._lines:
            raise RenderError("the stubs have not been generated")
        return "\n".join(self._lines).rstrip("\n") + "\n"
