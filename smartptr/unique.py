import logging
from collections.abc import Callable
from ctypes import _Pointer, c_void_p

from .libc import delete, delete_array, new, new_array


__all__ = [
    "unique_ptr",
    "unique_array",
    "make_unique",
    "make_unique_array",
    "swap",
]

logger = logging.getLogger("smartptr.unique")


class unique_ptr[T: _Pointer | c_void_p]:
    """Sole owner of a native resource. Move-only: use `move()` to hand it over."""

    _default_deleter: Callable = staticmethod(delete)

    def __init__(self, value: T | None = None, deleter: Callable[[T], None] | None = None):
        self.__value = value if value else None
        self.__deleter = deleter or self._default_deleter

    def __bool__(self):
        return self.__value is not None

    def __del__(self):
        self.__destroy(self.release())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.reset()
        return False

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} is move-only")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} is move-only")

    def __repr__(self):
        return f"{type(self).__name__}({self.__value!r})"

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

    def reset(self, value: T | None = None) -> None:
        old, self.__value = self.__value, value if value else None
        self.__destroy(old)

    def release(self) -> T | None:
        value, self.__value = self.__value, None
        return value

    def swap(self, other: "unique_ptr[T]") -> None:
        if type(other) is not type(self):
            raise TypeError(f"cannot swap {type(self).__name__} with {type(other).__name__}")
        self.__value, other.__value = other.__value, self.__value
        self.__deleter, other.__deleter = other.__deleter, self.__deleter

    def move(self) -> "unique_ptr[T]":
        other = type(self)()
        self.swap(other)
        return other

    def move_assign(self, other: "unique_ptr[T]") -> "unique_ptr[T]":
        if other is not self:
            if type(other) is not type(self):
                raise TypeError(f"cannot move {type(other).__name__} into {type(self).__name__}")
            self.reset(other.release())
            self.__deleter = other.__deleter
        return self

    def __destroy(self, value: T | None) -> None:
        if value is None:
            return
        try:
            self.__deleter(value)
        except Exception:
            logger.exception("cleanup routine %r failed", self.__deleter)


class unique_array[T: _Pointer](unique_ptr[T]):
    """`unique_ptr` over a block of elements, with indexed access.

    When `length` is known indexes are bounds-checked, otherwise indexing past
    the end of the block is the caller's problem, as it would be in C.
    """

    _default_deleter = staticmethod(delete_array)

    def __init__(self, value: T | None = None, deleter: Callable[[T], None] | None = None, *, length: int | None = None):
        super().__init__(value, deleter)
        self.__length = None
        try:
            self.__check_length(length)
        except (TypeError, ValueError):
            # ownership stays with the caller
            self.release()
            raise
        self.__length = length if self else None

    def __len__(self):
        if self.__length is None:
            raise TypeError("unique_array of unknown length")
        return self.__length

    def __getitem__(self, index: int):
        return self.value[self.__index(index)]

    def __setitem__(self, index: int, item) -> None:
        self.value[self.__index(index)] = item

    def reset(self, value: T | None = None, *, length: int | None = None) -> None:
        self.__check_length(length)
        super().reset(value)
        self.__length = length if self else None

    def release(self) -> T | None:
        self.__length = None
        return super().release()

    def swap(self, other: "unique_array[T]") -> None:
        super().swap(other)
        self.__length, other.__length = other.__length, self.__length

    def move_assign(self, other: "unique_array[T]") -> "unique_array[T]":
        if other is not self:
            if not isinstance(other, unique_array):
                raise TypeError(f"cannot move {type(other).__name__} into unique_array")
            length = other.__length
            super().move_assign(other)
            self.__length = length
        return self

    @staticmethod
    def __check_length(length: int | None) -> None:
        if length is None:
            return
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError(f"array length must be an int, got {type(length).__name__}")
        if length < 0:
            raise ValueError(f"array length must be non-negative, got {length}")

    def __index(self, index: int) -> int:
        if self.__length is None:
            return index
        if index < 0:
            index += self.__length
        if not 0 <= index < self.__length:
            raise IndexError("unique_array index out of range")
        return index


def make_unique(ctype, *args, **kwargs) -> unique_ptr:
    """Allocate a `ctype` constructed from args and hand it to a new `unique_ptr`."""
    return unique_ptr(new(ctype, *args, **kwargs))


def make_unique_array(ctype, length: int) -> unique_array:
    return unique_array(new_array(ctype, length), length=length)


def swap[T: _Pointer | c_void_p](a: unique_ptr[T], b: unique_ptr[T]) -> None:
    a.swap(b)
