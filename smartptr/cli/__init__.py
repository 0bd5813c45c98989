import argparse
import logging
import sys

from .utils import MergingSubparsersAction


cmds = {name: __import__(name, globals(), locals(), level=1) for name in ["shared", "unique", "stress"]}

common_parser = argparse.ArgumentParser(add_help=False)
common_parser.add_argument("-v", "--verbose", action="store_true", help="log handle teardown and cleanup failures")

main_parser = argparse.ArgumentParser(
    prog="smartptr",
    description="self-checks for reference-counted and exclusive native handles",
    parents=[common_parser],
)
subparsers = main_parser.add_subparsers(title="commands", dest="cmd", required=True, action=MergingSubparsersAction)
for name, mod in cmds.items():
    mod.parser(subparsers.add_parser(name, parents=[common_parser], help=mod.help))


def main(argv: list[str] | None = None):
    # parse cli args
    args = main_parser.parse_args(argv)

    # configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    # run the command
    try:
        cmds[args.cmd].run(args)
    except Exception as e:
        print(f"{main_parser.prog}:", *e.args if len(e.args) else (e.__class__.__name__,), file=sys.stderr)
        exit(1)
