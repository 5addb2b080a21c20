import argparse
import logging
import sys

from twig.commands import (
    init, add, rm, commit, log, find, status, checkout,
    branch, reset, merge, config,
)
from twig.utils import config as config_utils, repository
from twig.utils.errors import (
    CorruptionError, MissingCommandError, TwigError, UnknownCommandError, UsageError,
)

logger = logging.getLogger(__name__)


class TwigArgumentParser(argparse.ArgumentParser):
    # Bad operands are reported like every other failure instead of exiting with status 2
    def error(self, message):
        if 'invalid choice' in message:
            raise UnknownCommandError()
        raise UsageError()


def build_parser():
    # The main parser
    parser = TwigArgumentParser(prog="twig", description="Twig: a small local version control system.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine activity to stderr.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: init
    init_parser = subparsers.add_parser("init", help="Create an empty repository in the current directory.")
    init_parser.set_defaults(func=init.run)

    # Command: add
    add_parser = subparsers.add_parser("add", help="Stage file contents for the next commit.")
    add_parser.add_argument("files", nargs="+", help="Files to add ('.' for every working file).")
    add_parser.set_defaults(func=add.run)

    # Command: rm
    rm_parser = subparsers.add_parser("rm", help="Unstage a file, or stage a tracked file for removal.")
    rm_parser.add_argument("file", help="File to remove.")
    rm_parser.set_defaults(func=rm.run)

    # Command: commit
    commit_parser = subparsers.add_parser("commit", help="Record the staged changes.")
    commit_parser.add_argument("message", nargs="?", default="", help="Commit message.")
    commit_parser.set_defaults(func=commit.run)

    # Command: log
    log_parser = subparsers.add_parser("log", help="Show the history of the current branch.")
    log_parser.set_defaults(func=log.run)

    # Command: global-log
    global_log_parser = subparsers.add_parser("global-log", help="Show every commit ever made.")
    global_log_parser.set_defaults(func=log.run_global)

    # Command: find
    find_parser = subparsers.add_parser("find", help="Print the ids of commits with the given message.")
    find_parser.add_argument("message", help="Exact commit message.")
    find_parser.set_defaults(func=find.run)

    # Command: status
    status_parser = subparsers.add_parser("status", help="Show branches, staged files and working tree changes.")
    status_parser.set_defaults(func=status.run)

    # Command: checkout
    checkout_parser = subparsers.add_parser(
        "checkout", help="Restore a file (-- <file>, <commit> -- <file>) or switch branches (<branch>).")
    checkout_parser.add_argument("targets", nargs="+", help="Branch name, or [commit] -- file.")
    checkout_parser.set_defaults(func=checkout.run)

    # Command: branch
    branch_parser = subparsers.add_parser("branch", help="Create a branch at the current commit.")
    branch_parser.add_argument("name", help="The name of the branch to create.")
    branch_parser.set_defaults(func=branch.run)

    # Command: rm-branch
    rm_branch_parser = subparsers.add_parser("rm-branch", help="Delete a branch pointer.")
    rm_branch_parser.add_argument("name", help="The name of the branch to delete.")
    rm_branch_parser.set_defaults(func=branch.run_delete)

    # Command: reset
    reset_parser = subparsers.add_parser("reset", help="Check out a commit and move the current branch to it.")
    reset_parser.add_argument("commit_id", help="Full or abbreviated commit id.")
    reset_parser.set_defaults(func=reset.run)

    # Command: merge
    merge_parser = subparsers.add_parser("merge", help="Merge a branch into the current branch.")
    merge_parser.add_argument("branch", help="The branch to merge.")
    merge_parser.set_defaults(func=merge.run)

    # Command: config
    config_parser = subparsers.add_parser("config", help="Set a repository configuration value.")
    config_parser.add_argument("key", help="The configuration key (e.g., core.abbrev).")
    config_parser.add_argument("value", help="The configuration value.")
    config_parser.set_defaults(func=config.run)

    return parser


def setup_logging(verbose):
    if verbose:
        level = logging.DEBUG
    else:
        repo_root = repository.find_repo_root()
        level_name = config_utils.get_config_value(repo_root, 'core.loglevel') if repo_root else 'WARNING'
        level = getattr(logging, str(level_name).upper(), logging.WARNING)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


# The main entry point for the Twig version control system
def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        if not argv:
            raise MissingCommandError()
        args = build_parser().parse_args(argv)
        # argparse may drop the '--' separator, so remember whether it was given
        args.has_separator = '--' in argv
        setup_logging(args.verbose)
        args.func(args)
    except CorruptionError as e:
        print(f"fatal: {e}")
        logger.debug("repository corruption", exc_info=True)
        return 1
    except TwigError as e:
        # Failures are reported on stdout; the exit status stays neutral
        print(e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
