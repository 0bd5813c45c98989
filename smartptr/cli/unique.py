import argparse
from ctypes import c_int

from ..unique import make_unique, make_unique_array, swap, unique_array, unique_ptr
from .utils import LiveObjects, check, positive_int


help = "run the unique_ptr and unique_array self-checks"


def parser(parser: argparse.ArgumentParser):
    parser.add_argument("--length",
                        type=positive_int,
                        default=5,
                        help="number of elements in the array check")


def run(args: argparse.Namespace):
    objects = LiveObjects()

    # move semantics
    p1 = unique_ptr(objects.new(), objects.delete)
    check(objects.count == 1, "one live object")
    p2 = p1.move()
    check(objects.count == 1, "one live object after move")
    check(not p1, "moved-from p1 is empty")
    p3 = unique_ptr()
    p3.move_assign(p2)
    check(objects.count == 1, "one live object after move assignment")
    check(not p2, "moved-from p2 is empty")
    p3.reset()
    check(objects.count == 0, "no live object after reset")

    # array variant
    a1 = make_unique_array(c_int, args.length)
    for i in range(args.length):
        a1[i] = i
    check(all(a1[i] == i for i in range(args.length)), "array elements read back")
    a2 = unique_array(make_unique_array(c_int, args.length).release(), length=args.length)
    swap(a2, a1)
    check(all(a2[i] == i for i in range(args.length)), "array elements survive swap")
    a2.reset()
    a1.reset()

    # construct-and-wrap
    p = make_unique(c_int, 7)
    check(p.deref() == 7, "*p == 7")
    p.reset()
    t = objects.make_unique()
    check(objects.count == 1, "one live object from make_unique")
    t.reset()
    check(objects.count == 0, "no live object after reset")

    # custom deleter
    deleted = []
    def deleter(ptr):
        objects.delete(ptr)
        deleted.append(True)
    with unique_ptr(objects.new(), deleter):
        pass
    check(deleted == [True] and objects.count == 0, "custom deleter ran")

    print("All test cases passed!")
