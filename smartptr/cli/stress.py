import argparse
import logging
import threading

from ..shared import shared_ptr
from .utils import LiveObjects, check, positive_int


help = "copy and drop one shared_ptr from many threads"

logger = logging.getLogger("smartptr.cli.stress")


def parser(parser: argparse.ArgumentParser):
    parser.add_argument("--threads",
                        type=positive_int,
                        default=8,
                        help="number of worker threads")
    parser.add_argument("--copies",
                        type=positive_int,
                        default=10000,
                        help="copies made and dropped by each thread")


def run(args: argparse.Namespace):
    objects = LiveObjects()
    root = shared_ptr(objects.new(), objects.delete)
    barrier = threading.Barrier(args.threads)
    errors: list[BaseException] = []

    def worker():
        try:
            barrier.wait()
            held = []
            for i in range(args.copies):
                held.append(root.copy())
                # drop in batches of 64
                if len(held) == 64 or i == args.copies - 1:
                    while held:
                        held.pop()
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, name=f"stress-{n}") for n in range(args.threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    if errors:
        raise errors[0]

    check(root.use_count() == 1, f"use_count back to 1 (got {root.use_count()})")
    check(objects.count == 1 and not objects.deleted, "cleanup did not run while root was alive")
    root.reset()
    check(objects.count == 0 and len(objects.deleted) == 1, "cleanup ran exactly once")

    logger.debug("%d copies dropped across %d threads", args.threads * args.copies, args.threads)
    print(f"{args.threads * args.copies} copies across {args.threads} threads, cleanup ran once")
