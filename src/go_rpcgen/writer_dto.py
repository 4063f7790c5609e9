from __future__ import annotations

from dataclasses import dataclass, field

from go_rpcgen import helper


@dataclass(frozen=True)
class Field:
    """One named parameter or result group of an interface method.

    Attributes:
        names: The capitalized names, used for generated struct fields (e.g. ["A", "B"])
        lower_names: The names as declared, used for local references (e.g. ["a", "b"])
        type: The type expression copied verbatim from source (e.g. "int")
    """

    names: list[str]
    lower_names: list[str]
    type: str

    @classmethod
    def create(cls, declared_names: list[str], type_text: str) -> Field:
        """Factory method deriving the public names from the declared ones.

        Args:
            declared_names: The identifiers sharing one type, in declaration order
            type_text: The source text of the type

        Returns:
            A Field whose names and lower_names correspond one-to-one
        """
        if not declared_names:
            raise ValueError("A field needs at least one name.")
        return cls(
            names=[helper.public_name(name) for name in declared_names],
            lower_names=list(declared_names),
            type=type_text,
        )


@dataclass(frozen=True)
class Method:
    """One interface method.

    The trailing `error` result is validated while the model is built and is not part of `results`.
    """

    name: str
    parameters: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationContext:
    """The root model handed to the writer.

    Attributes:
        interface_type_name: The declared name of the interface (e.g. "Arith")
        package_name: The package clause of the generated file
        methods: The interface methods, in declaration order
        imports: Additional import paths to emit after "net/rpc"
        transport_type_name: The type of the client's transport handle (e.g. "*rpc.Client")
    """

    interface_type_name: str
    package_name: str
    methods: list[Method]
    imports: list[str]
    transport_type_name: str


@dataclass(frozen=True)
class MethodFragments:
    """All field-list fragments the stub layout needs for one method, computed before rendering.

    Attributes:
        name: The method name
        request_type: Name of the request payload struct (e.g. "ArithAddRequest")
        response_type: Name of the response payload struct (e.g. "ArithAddResponse")
        request_fields: Request struct body (e.g. "A, B int")
        response_fields: Response struct body (e.g. "Sum int")
        call_args: Arguments of the server-side call (e.g. "request.A, request.B")
        response_refs: Assignment targets of the server-side call (e.g. "response.Sum")
        client_params: Client method parameters (e.g. "a, b int")
        client_results: Client method results, without err (e.g. "sum int")
        request_literal: Request struct literal values (e.g. "a, b")
        client_returns: Client return values, without err (e.g. "_response.Sum")
    """

    name: str
    request_type: str
    response_type: str
    request_fields: str
    response_fields: str
    call_args: str
    response_refs: str
    client_params: str
    client_results: str
    request_literal: str
    client_returns: str

    @classmethod
    def create(cls, interface_type_name: str, method: Method) -> MethodFragments:
        """Factory method rendering every fragment of a method with the field list helpers.

        Args:
            interface_type_name: The interface name, used to prefix the payload type names
            method: The method model

        Returns:
            The fragments of the method
        """
        return cls(
            name=method.name,
            request_type=f"{interface_type_name}{method.name}Request",
            response_type=f"{interface_type_name}{method.name}Response",
            request_fields=helper.public_fields(method.parameters),
            response_fields=helper.public_fields(method.results),
            call_args=helper.public_refs_with_prefix("request.", method.parameters),
            response_refs=helper.public_refs_with_prefix("response.", method.results),
            client_params=helper.function_args(method.parameters),
            client_results=helper.function_args(method.results),
            request_literal=helper.refs_with_prefix("", method.parameters),
            client_returns=helper.public_refs_with_prefix("_response.", method.results),
        )
