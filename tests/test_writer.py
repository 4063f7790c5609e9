"""Tests for rendering the stub document."""

from __future__ import annotations

import re

import pytest
from conftest import ARITH_SOURCE, STORE_SOURCE, parse

from go_rpcgen.errors import RenderError
from go_rpcgen.parser import extract_methods
from go_rpcgen.run import render
from go_rpcgen.writer import Writer
from go_rpcgen.writer_dto import Field, GenerationContext, Method, MethodFragments

ARITH_STUBS = """\
// Generated by go-rpcgen. Do not modify.

package arith

import (
    "net/rpc"
)

type ArithService struct {
    impl Arith
}

func NewArithService(impl Arith) *ArithService {
    return &ArithService{impl}
}

func RegisterArithService(impl Arith) error {
    return rpc.RegisterName("Arith", NewArithService(impl))
}

type ArithAddRequest struct {
    A, B int
}

type ArithAddResponse struct {
    Sum int
}

func (s *ArithService) Add(request *ArithAddRequest, response *ArithAddResponse) (err error) {
    response.Sum, err = s.impl.Add(request.A, request.B)
    return
}

type ArithClient struct {
    client *rpc.Client
    service string
}

func NewArithClient(client *rpc.Client) *ArithClient {
    return &ArithClient{client, "Arith"}
}

func (_c *ArithClient) Close() error {
    return _c.client.Close()
}

func (_c *ArithClient) Add(a, b int) (sum int, err error) {
    _request := &ArithAddRequest{a, b}
    _response := &ArithAddResponse{}
    err = _c.client.Call(_c.service+".Add", _request, _response)
    return _response.Sum, err
}
""".replace("    ", "\t")


def make_context(source: str, type_name: str, **kwargs) -> GenerationContext:
    """Build a generation context from Go source text."""
    source_file = parse(source)
    options = {
        "package_name": source_file.package_name,
        "imports": ["net/rpc"],
        "transport_type_name": "*rpc.Client",
    }
    options.update(kwargs)
    return GenerationContext(
        interface_type_name=type_name,
        methods=extract_methods(source_file, type_name),
        **options,
    )


class TestMethodFragments:
    """Test the precomputed fragments of a method."""

    def test_arith_fragments(self):
        method = Method(
            name="Add",
            parameters=[Field.create(["a", "b"], "int")],
            results=[Field.create(["sum"], "int")],
        )
        fragments = MethodFragments.create("Arith", method)

        assert fragments.request_type == "ArithAddRequest"
        assert fragments.response_type == "ArithAddResponse"
        assert fragments.request_fields == "A, B int"
        assert fragments.response_fields == "Sum int"
        assert fragments.call_args == "request.A, request.B"
        assert fragments.response_refs == "response.Sum"
        assert fragments.client_params == "a, b int"
        assert fragments.client_results == "sum int"
        assert fragments.request_literal == "a, b"
        assert fragments.client_returns == "_response.Sum"

    def test_empty_method(self):
        fragments = MethodFragments.create("Arith", Method(name="Ping"))

        assert fragments.request_fields == ""
        assert fragments.call_args == ""
        assert fragments.client_results == ""


class TestWriter:
    """Test the generated stub document."""

    def test_arith_stubs(self):
        assert render(make_context(ARITH_SOURCE, "Arith")) == ARITH_STUBS

    def test_one_dispatch_and_client_method_per_method(self):
        output = render(make_context(STORE_SOURCE, "Store"))

        service_methods = re.findall(r"^func \(s \*StoreService\) (\w+)\(", output, re.MULTILINE)
        client_methods = re.findall(r"^func \(_c \*StoreClient\) (\w+)\(", output, re.MULTILINE)

        assert service_methods == ["Get", "Put", "Keys"]
        assert client_methods == ["Close", "Get", "Put", "Keys"]

    def test_error_only_method(self):
        output = render(make_context(STORE_SOURCE, "Store"))

        assert "type StorePutResponse struct {\n}\n" in output
        assert "\terr = s.impl.Put(request.Item, request.Ttl)\n" in output
        assert "func (_c *StoreClient) Put(item *Item, ttl time.Duration) (err error) {\n" in output
        assert "\treturn err\n" in output

    def test_multiple_field_groups(self):
        output = render(make_context(STORE_SOURCE, "Store"))

        assert "type StoreGetResponse struct {\n\tItem *Item\n\tFound bool\n}\n" in output
        assert "\tresponse.Item, response.Found, err = s.impl.Get(request.Key)\n" in output
        assert "\treturn _response.Item, _response.Found, err\n" in output

    def test_method_without_parameters(self):
        context = GenerationContext(
            interface_type_name="Clock",
            package_name="clock",
            methods=[Method(name="Now", results=[Field.create(["unix"], "int64")])],
            imports=[],
            transport_type_name="*rpc.Client",
        )
        output = render(context)

        assert "type ClockNowRequest struct {\n}\n" in output
        assert "\tresponse.Unix, err = s.impl.Now()\n" in output
        assert "\t_request := &ClockNowRequest{}\n" in output

    def test_zero_methods(self):
        context = GenerationContext(
            interface_type_name="Empty",
            package_name="empty",
            methods=[],
            imports=[],
            transport_type_name="*rpc.Client",
        )
        output = render(context)

        assert "type EmptyService struct {" in output
        assert "type EmptyClient struct {" in output
        assert "Request" not in output

    def test_imports_without_duplicates(self):
        output = render(make_context(STORE_SOURCE, "Store", imports=["net/rpc", "time", "time"]))
        assert 'import (\n\t"net/rpc"\n\t"time"\n)\n' in output

    def test_custom_package_and_transport(self):
        output = render(
            make_context(ARITH_SOURCE, "Arith", package_name="arithrpc", transport_type_name="Transport")
        )

        assert "\npackage arithrpc\n" in output
        assert "\tclient Transport\n" in output
        assert "func NewArithClient(client Transport) *ArithClient {" in output

    def test_missing_package(self):
        with pytest.raises(RenderError, match="package"):
            Writer(make_context(ARITH_SOURCE, "Arith", package_name=""))

    def test_dumps_before_generate(self):
        with pytest.raises(RenderError):
            Writer(make_context(ARITH_SOURCE, "Arith")).dumps()
