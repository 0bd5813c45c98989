import logging
from collections.abc import Callable
from ctypes import _Pointer, c_void_p, cast

from ._refcount import RefCount
from .libc import AllocationError, delete, new


__all__ = [
    "shared_ptr",
    "make_shared",
    "swap",
]

logger = logging.getLogger("smartptr.shared")


class shared_ptr[T: _Pointer | c_void_p]:
    """
    Reference-counted owner of a native resource.

    Every copy joins the same ownership group and shares one counter cell.
    Whichever member drops the count to zero runs the group's cleanup routine,
    so the routine chosen at bind time travels with every copy.

    Binding the same raw pointer into two handles creates two independent
    groups and a double cleanup at teardown. Use `copy()`, or `make_shared`
    to allocate and bind in one step.

    Only the counter cell is safe to touch from several threads at once. A
    single handle object must not be mutated concurrently (e.g. two threads
    calling `assign` on it) without external locking.
    """

    def __init__(self, value: T | None = None, deleter: Callable[[T], None] | None = None):
        deleter = deleter or delete
        self.__value: T | None = None
        self.__count: RefCount | None = None
        self.__deleter = deleter
        if value:
            self.__bind(value, deleter)

    def __del__(self):
        self.__release()

    def __bool__(self):
        return self.__value is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.reset()
        return False

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __repr__(self):
        if self.__value is None:
            return "shared_ptr(None)"
        return f"shared_ptr({self.__address(self.__value):#x}, use_count={self.use_count()})"

    @property
    def value(self) -> T:
        if self.__value is None:
            raise RuntimeError("null ptr dereference")
        return self.__value

    @property
    def contents(self):
        return self.value.contents

    def get(self) -> T | None:
        return self.__value

    def deref(self):
        """`*p`. Needs a typed pointer, an opaque `c_void_p` has no pointee to read."""
        return self.value[0]

    def use_count(self) -> int:
        return self.__count.count if self.__count is not None else 0

    def copy(self) -> "shared_ptr[T]":
        other = shared_ptr()
        other.__acquire(self)
        return other

    def assign(self, other: "shared_ptr[T]") -> "shared_ptr[T]":
        # a handle of the same group keeps the count above zero between release and acquire
        if other is not self:
            self.__release()
            self.__acquire(other)
        return self

    def move(self) -> "shared_ptr[T]":
        other = shared_ptr()
        self.swap(other)
        return other

    def move_assign(self, other: "shared_ptr[T]") -> "shared_ptr[T]":
        if other is not self:
            self.__release()
            self.swap(other)
        return self

    def reset(self, value: T | None = None, deleter: Callable[[T], None] | None = None) -> None:
        deleter = deleter or delete
        self.__release()
        self.__deleter = deleter
        if value:
            self.__bind(value, deleter)

    def swap(self, other: "shared_ptr[T]") -> None:
        self.__value, other.__value = other.__value, self.__value
        self.__count, other.__count = other.__count, self.__count
        self.__deleter, other.__deleter = other.__deleter, self.__deleter

    def __bind(self, value: T, deleter: Callable[[T], None]) -> None:
        try:
            count = RefCount()
        except AllocationError:
            deleter(value)
            raise
        self.__value = value
        self.__count = count
        self.__deleter = deleter

    def __acquire(self, other: "shared_ptr[T]") -> None:
        self.__value = other.__value
        self.__count = other.__count
        self.__deleter = other.__deleter
        if self.__count is not None:
            self.__count.incref()

    def __release(self) -> None:
        value, count, deleter = self.__value, self.__count, self.__deleter
        self.__value = None
        self.__count = None
        if count is None or count.decref() != 1:
            return
        logger.debug("last owner of %#x released, running cleanup", self.__address(value))
        try:
            deleter(value)
        except Exception:
            logger.exception("cleanup routine %r failed for %#x", deleter, self.__address(value))
        finally:
            count.free()

    @staticmethod
    def __address(value) -> int:
        return cast(value, c_void_p).value or 0


def swap[T: _Pointer | c_void_p](a: shared_ptr[T], b: shared_ptr[T]) -> None:
    a.swap(b)


def make_shared(ctype, *args, **kwargs) -> shared_ptr:
    """Allocate a `ctype` constructed from args and bind it with refcount 1."""
    return shared_ptr(new(ctype, *args, **kwargs))
