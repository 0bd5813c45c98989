import threading
from ctypes import c_long

from .libc import new, delete


class RefCount:
    """Counter cell shared by every member of an ownership group.

    The count itself lives on the C heap and is freed once the group is torn
    down. All reads and writes go through the lock, so `decref` observing 1
    happens-after every `incref` made by any other thread.
    """
    __slots__ = ("__lock", "__cell")

    def __init__(self) -> None:
        self.__lock = threading.Lock()
        self.__cell = new(c_long, 1)

    @property
    def count(self) -> int:
        with self.__lock:
            return self.__cell[0] if self.__cell else 0

    def incref(self) -> int:
        with self.__lock:
            self.__cell[0] += 1
            return self.__cell[0]

    def decref(self) -> int:
        """Decrement and return the value held before decrementing."""
        with self.__lock:
            prev = self.__cell[0]
            self.__cell[0] = prev - 1
            return prev

    def free(self) -> None:
        with self.__lock:
            cell, self.__cell = self.__cell, None
        delete(cell)
