import argparse
from ctypes import c_int

from ..libc import new
from ..shared import make_shared, shared_ptr, swap
from .utils import check


help = "run the shared_ptr self-check"


def parser(parser: argparse.ArgumentParser):
    pass


def run(args: argparse.Namespace):
    # bound construction
    ptr1 = shared_ptr(new(c_int, 5))
    check(ptr1.deref() == 5, "*ptr1 == 5")
    check(ptr1.use_count() == 1, "ptr1.use_count() == 1")

    # copy
    ptr2 = ptr1.copy()
    check(ptr2.use_count() == 2, "ptr2.use_count() == 2")
    check(ptr1.use_count() == 2, "ptr1.use_count() == 2")

    # copy assignment
    ptr3 = shared_ptr()
    ptr3.assign(ptr1)
    check(ptr3.use_count() == 3, "ptr3.use_count() == 3")
    check(ptr1.use_count() == 3, "ptr1.use_count() == 3")
    check(ptr2.use_count() == 3, "ptr2.use_count() == 3")

    # self assignment
    ptr3.assign(ptr3)
    check(ptr3.use_count() == 3 and ptr3.deref() == 5, "self assignment is a no-op")

    # construct-and-wrap
    ptr4 = make_shared(c_int, 42)
    check(ptr4.deref() == 42, "*ptr4 == 42")
    check(ptr4.use_count() == 1, "ptr4.use_count() == 1")

    # reset, ptr2 and ptr3 still share the original resource
    ptr1.reset(new(c_int, 10))
    check(ptr1.deref() == 10, "*ptr1 == 10")
    check(ptr1.use_count() == 1, "ptr1.use_count() == 1")
    check(ptr2.use_count() == 2, "ptr2.use_count() == 2")
    check(ptr2.deref() == 5, "*ptr2 == 5")

    # swap
    swap(ptr1, ptr4)
    check(ptr1.deref() == 42, "*ptr1 == 42")
    check(ptr4.deref() == 10, "*ptr4 == 10")

    # move
    ptr5 = ptr2.move()
    check(not ptr2 and ptr2.use_count() == 0, "moved-from ptr2 is empty")
    check(ptr5.use_count() == 2, "ptr5.use_count() == 2")

    print("All tests passed!")
