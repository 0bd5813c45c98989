"""Tests for the C heap allocation helpers."""

from ctypes import POINTER, Structure, c_double, c_int

import pytest

from smartptr import libc
from smartptr.libc import AllocationError, delete, delete_array, new, new_array


class Point(Structure):
    _fields_ = [("x", c_int), ("y", c_int)]


class TestNew:
    def test_constructs_simple_value(self):
        p = new(c_int, 5)
        try:
            assert p[0] == 5
        finally:
            delete(p)

    def test_constructs_structure(self):
        p = new(Point, 3, y=4)
        try:
            assert (p.contents.x, p.contents.y) == (3, 4)
        finally:
            delete(p)

    def test_returns_typed_pointer(self):
        p = new(c_double, 1.5)
        try:
            assert isinstance(p, POINTER(c_double))
            assert p[0] == 1.5
        finally:
            delete(p)

    def test_allocation_failure(self, monkeypatch):
        monkeypatch.setattr(libc, "malloc", lambda size: None)
        with pytest.raises(AllocationError, match="malloc"):
            new(c_int, 1)

    def test_allocation_error_is_memory_error(self):
        assert issubclass(AllocationError, MemoryError)


class TestNewArray:
    def test_zero_initialized(self):
        p = new_array(c_int, 8)
        try:
            assert [p[i] for i in range(8)] == [0] * 8
        finally:
            delete_array(p)

    def test_write_and_read_back(self):
        p = new_array(c_int, 5)
        try:
            for i in range(5):
                p[i] = i * i
            assert [p[i] for i in range(5)] == [0, 1, 4, 9, 16]
        finally:
            delete_array(p)

    @pytest.mark.parametrize("length", [0, -1, 2.5])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError):
            new_array(c_int, length)

    def test_allocation_failure(self, monkeypatch):
        monkeypatch.setattr(libc, "calloc", lambda n, size: None)
        with pytest.raises(AllocationError, match="calloc"):
            new_array(c_int, 4)


class TestDelete:
    def test_null_is_ignored(self):
        delete(None)
        delete(POINTER(c_int)())
        delete_array(None)
