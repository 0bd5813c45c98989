import sys

if sys.version_info < (3, 12):
    print("smartptr requires python 3.12+", file=sys.stderr)
    exit(1)


try:
    from . import libc
except OSError as e:
    print(f"smartptr: cannot load C runtime ({e})", file=sys.stderr)
    exit(1)

from .libc import AllocationError, delete, delete_array, new, new_array
from .shared import make_shared, shared_ptr, swap
from .unique import make_unique, make_unique_array, unique_array, unique_ptr


__all__ = [
    "libc",
    "AllocationError",
    "new",
    "new_array",
    "delete",
    "delete_array",

    "shared_ptr",
    "make_shared",
    "swap",

    "unique_ptr",
    "unique_array",
    "make_unique",
    "make_unique_array",
]
