import pytest

from smartptr.libc import delete, delete_array


class Recorder:
    """Cleanup routine that remembers what it destroyed, then frees it."""

    def __init__(self, free=delete):
        self.calls = []
        self._free = free

    def __call__(self, ptr):
        self.calls.append(ptr[0])
        self._free(ptr)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def array_recorder():
    return Recorder(free=delete_array)
