"""Pytest configuration and fixtures for go-rpcgen tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from go_rpcgen.parser import SourceFile, parse_source

ARITH_SOURCE = """\
package arith

type Arith interface {
	Add(a, b int) (sum int, err error)
}
"""

STORE_SOURCE = """\
package store

import "time"

// Item is stored by Store.
type Item struct {
	Key   string
	Value []byte
}

type (
	Store interface {
		// Get returns the item stored under a key.
		Get(key string) (item *Item, found bool, err error)
		Put(item *Item, ttl time.Duration) (err error)
		Keys(prefix string, limit int) (keys []string, err error)
	}

	Other interface {
		Ping() (err error)
	}
)
"""


def parse(source: str, filename: str = "test.go") -> SourceFile:
    """Parse Go source text for a test."""
    return parse_source(filename, source.encode("utf-8"))


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write Go source text to a file in a temporary directory."""

    def _write(content: str, name: str = "arith.go") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def arith_source(write_source) -> Path:
    """The arith example interface, written to `arith.go`."""
    return write_source(ARITH_SOURCE)
