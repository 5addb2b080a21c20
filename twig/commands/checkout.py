# The command: twig checkout -- <file> | twig checkout <commit-id> -- <file> | twig checkout <branch-name>
# What it does: Restores a single file from a commit, OR switches branches and rewrites the working directory to the branch's head commit
# How it does:
#   - With a file: finds the file's blob hash in the commit (head by default) and overwrites the working file with it. The index is not touched.
#   - With a branch: checks that no untracked file would be overwritten, rewrites the working directory, points `HEAD` at the branch and clears the index.
# What data structure it uses: Dictionary (the commit's {path: hash} files), Hash Table (object store lookup)

import logging

from twig.utils import repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph
from twig.utils.errors import (
    AlreadyCurrentBranchError, FileNotInCommitError, NoSuchBranchError, UsageError,
)

logger = logging.getLogger(__name__)


def run(args):
    repo_root = repository.require_repo_root()
    targets = [target for target in args.targets if target != '--']

    if args.has_separator and len(targets) == 1:
        checkout_file(repo_root, None, targets[0])
    elif args.has_separator and len(targets) == 2:
        checkout_file(repo_root, targets[0], targets[1])
    elif not args.has_separator and len(targets) == 1:
        checkout_branch(repo_root, targets[0])
    else:
        raise UsageError()


def checkout_file(repo_root, commit_id, filename):
    """
    Overwrites one working file with its version in `commit_id`
    (abbreviations allowed, None means the head commit).
    """
    graph = CommitGraph(repo_root)
    if commit_id is None:
        commit = graph.load(repository.get_head_commit(repo_root))
    else:
        commit = graph.resolve(commit_id)

    blob_hash = commit.files.get(filename)
    if blob_hash is None:
        raise FileNotInCommitError()

    worktree.restore_blob(repo_root, filename, blob_hash)
    logger.debug("restored %s from %s", filename, commit.commit_id)


def checkout_branch(repo_root, branch_name):
    if branch_name == repository.get_current_branch(repo_root):
        raise AlreadyCurrentBranchError()
    commit_hash = repository.get_branch_commit(repo_root, branch_name)
    if commit_hash is None:
        raise NoSuchBranchError()

    graph = CommitGraph(repo_root)
    worktree.checkout_commit(repo_root, graph.load(commit_hash), graph)

    repository.set_head(repo_root, branch_name)
    index_utils.clear_index(repo_root)
