# The command: twig merge <branch-name>
# What it does: Performs a three-way merge between the current branch, the given branch, and their split point (common ancestor)
# How it does: After the preconditions pass it handles the two fast paths (given already contained, or a fast-forward). Otherwise it finds the split commit and classifies every file by comparing its hash at the split point, in the current commit and in the given commit. Files changed only on the given side are taken, files deleted only on the given side are removed, and files changed differently on both sides get conflict markers. A merge commit with two parents is always created, conflicts included
# What data structure it uses: DAG (for finding the split commit), Dictionaries (the three {path: hash} snapshots), Set (the union of all paths)

import logging

from twig.commands import commit
from twig.utils import objects, repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph
from twig.utils.errors import (
    BranchNotFoundError, SelfMergeError, UncommittedChangesError,
)

logger = logging.getLogger(__name__)

UP_TO_DATE = 'up-to-date'
FAST_FORWARD = 'fast-forward'
MERGED = 'merged'

KEEP = 'keep'
TAKE_GIVEN = 'take-given'
REMOVE = 'remove'
CONFLICT = 'conflict'


class MergeResult:
    """Outcome of a merge that passed its preconditions."""

    def __init__(self, status, commit_id, conflicts=()):
        self.status = status
        self.commit_id = commit_id
        self.conflicts = list(conflicts)

    def __repr__(self):
        return f"MergeResult({self.status!r}, {self.commit_id[:7]}, conflicts={self.conflicts!r})"


def run(args):
    repo_root = repository.require_repo_root()
    result = merge_branch(repo_root, args.branch)

    if result.status == UP_TO_DATE:
        print("Given branch is an ancestor of the current branch.")
    elif result.status == FAST_FORWARD:
        print("Current branch fast-forwarded.")
    elif result.conflicts:
        print("Encountered a merge conflict.")


def merge_branch(repo_root, branch_name):
    graph = CommitGraph(repo_root)
    index = index_utils.read_index(repo_root)

    # Preconditions; nothing is modified until all of them pass
    if not index.is_empty():
        raise UncommittedChangesError()
    given_commit_hash = repository.get_branch_commit(repo_root, branch_name)
    if given_commit_hash is None:
        raise BranchNotFoundError()
    current_branch = repository.get_current_branch(repo_root)
    if branch_name == current_branch:
        raise SelfMergeError()

    current = graph.load(repository.get_head_commit(repo_root))
    given = graph.load(given_commit_hash)
    worktree.check_untracked_overwrite(repo_root, given.files, current.files, index)

    if graph.is_ancestor(given.commit_id, current.commit_id):
        return MergeResult(UP_TO_DATE, current.commit_id)

    if graph.is_ancestor(current.commit_id, given.commit_id):
        worktree.checkout_commit(repo_root, given, graph)
        repository.update_branch(repo_root, current_branch, given.commit_id)
        index_utils.clear_index(repo_root)
        logger.debug("fast-forwarded %s to %s", current_branch, given.commit_id)
        return MergeResult(FAST_FORWARD, given.commit_id)

    split = graph.split_commit(given.commit_id, current.commit_id)
    logger.debug("merging %s into %s, split point %s", branch_name, current_branch, split.commit_id)

    conflicts = []
    all_files = set(split.files) | set(current.files) | set(given.files)
    for path in sorted(all_files):
        split_hash = split.files.get(path)
        current_hash = current.files.get(path)
        given_hash = given.files.get(path)

        action = classify(split_hash, current_hash, given_hash)
        logger.debug("%s: %s", path, action)

        if action == TAKE_GIVEN:
            worktree.restore_blob(repo_root, path, given_hash)
            index.stage_existing(path, given_hash)
        elif action == REMOVE:
            index.stage_removal(path, current.files)
            worktree.delete_working_file(repo_root, path)
        elif action == CONFLICT:
            content = conflict_content(repo_root, current_hash, given_hash)
            blob_hash = objects.hash_object(repo_root, content, 'blob')
            worktree.write_working_file(repo_root, path, content)
            index.stage_existing(path, blob_hash)
            conflicts.append(path)

    index_utils.write_index(repo_root, index)

    message = f"Merged {branch_name} into {current_branch}."
    commit_hash = commit.create_commit(repo_root, message, extra_parents=[given.commit_id], graph=graph)
    return MergeResult(MERGED, commit_hash, conflicts)


def classify(split_hash, current_hash, given_hash):
    """Three-way decision for one path; None means the file is absent."""
    if current_hash == given_hash:
        return KEEP

    # Only the given side changed
    if split_hash is not None and current_hash == split_hash:
        return TAKE_GIVEN if given_hash is not None else REMOVE
    if split_hash is None and current_hash is None:
        return TAKE_GIVEN

    # Only the current side changed
    if given_hash == split_hash:
        return KEEP

    return CONFLICT


def conflict_content(repo_root, current_hash, given_hash): # Both versions between conflict markers; an absent side is empty
    current = objects.read_blob(repo_root, current_hash) if current_hash else b''
    given = objects.read_blob(repo_root, given_hash) if given_hash else b''
    return b'<<<<<<< HEAD\n' + current + b'=======\n' + given + b'>>>>>>>\n'
