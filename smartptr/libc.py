from ctypes import *
from ctypes import _Pointer, _SimpleCData
import ctypes.util
import os
import sys


def _find_library() -> str | None:
    if name := os.getenv("SMARTPTR_LIBC"):
        return name
    name = ctypes.util.find_library("c")
    if name is None and sys.platform == "win32":
        name = "msvcrt"
    # None falls back to the symbols already linked into the interpreter
    return name


libc = CDLL(_find_library(), use_errno=True)

def _import(symbol: str, restype: type | None, *argtypes: type):
    f = libc[symbol]
    f.argtypes = argtypes
    f.restype = restype
    return f

# Allocation

malloc = _import("malloc", c_void_p, c_size_t)
calloc = _import("calloc", c_void_p, c_size_t, c_size_t)
free = _import("free", None, c_void_p)

def new[T: _SimpleCData | Structure | Union](ctype: type[T], *args, **kwargs) -> "_Pointer[T]":
    """Allocate a single `ctype` on the C heap and construct it from args.

    The returned pointer must eventually be passed to `delete` (or to the
    cleanup routine of whatever handle takes ownership of it).
    """
    obj = ctype(*args, **kwargs)
    addr = malloc(sizeof(ctype))
    if not addr:
        raise AllocationError(f"malloc({sizeof(ctype)})")
    memmove(addr, addressof(obj), sizeof(ctype))
    return cast(addr, POINTER(ctype))

def new_array[T: _SimpleCData | Structure | Union](ctype: type[T], length: int) -> "_Pointer[T]":
    """Allocate a zero-initialized block of `length` `ctype` elements."""
    if not isinstance(length, int) or length <= 0:
        raise ValueError(f"array length must be a positive integer, got {length!r}")
    addr = calloc(length, sizeof(ctype))
    if not addr:
        raise AllocationError(f"calloc({length}, {sizeof(ctype)})")
    return cast(addr, POINTER(ctype))

def delete(ptr) -> None:
    """Destroy a single object allocated with `new`."""
    if ptr:
        free(ptr)

def delete_array(ptr) -> None:
    """Destroy a block allocated with `new_array`."""
    if ptr:
        free(ptr)

# Error handling

class AllocationError(MemoryError):
    def __init__(self, msg: str):
        errno = get_errno()
        if errno:
            msg = f"{msg}: {os.strerror(errno)}"
        super().__init__(msg)
