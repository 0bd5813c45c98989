import argparse
import threading
from ctypes import Structure, c_int

from ..libc import delete, new
from ..unique import make_unique, unique_ptr


class MergingSubparsersAction(argparse._SubParsersAction):
    '''Patched `argparse` subparsers action so options shared with the main parser survive the subcommand'''
    def __call__(self, parser, namespace, values, option_string=None):
        subnamespace = argparse.Namespace()
        super().__call__(parser, subnamespace, values, option_string=option_string)
        for key, value in vars(subnamespace).items():
            if hasattr(namespace, key) and value == next(a for a in parser._actions if a.dest == key).default:
                continue
            setattr(namespace, key, value)


class CheckFailed(RuntimeError):
    pass


def check(cond: bool, msg: str) -> None:
    '''Scenario assertion that still fires under `python -O`'''
    if not cond:
        raise CheckFailed(f"check failed: {msg}")


def positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


class Tracked(Structure):
    _fields_ = [
        ("id", c_int),
    ]


class LiveObjects:
    '''Allocates `Tracked` objects and counts how many are alive, like a C++ class with a static instance counter'''
    def __init__(self):
        self.__lock = threading.Lock()
        self.__next_id = 0
        self.count = 0
        self.deleted: list[int] = []

    def new(self):
        return new(Tracked, self.__take_id())

    def make_unique(self) -> unique_ptr:
        '''`make_unique(Tracked)` handed to a `unique_ptr` that keeps the live count'''
        p = make_unique(Tracked, self.__take_id())
        return unique_ptr(p.release(), self.delete)

    def __take_id(self) -> int:
        with self.__lock:
            self.__next_id += 1
            self.count += 1
            return self.__next_id

    def delete(self, ptr) -> None:
        with self.__lock:
            self.count -= 1
            self.deleted.append(ptr.contents.id)
        delete(ptr)
