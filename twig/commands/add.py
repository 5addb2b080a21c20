# The command: twig add <file>...
# What it does: Takes a snapshot of files from the working directory and stages them for the next commit by updating the index
# How it does: It reads the current index, and for each file compares the hash of its working content with the version in the head commit and the version already staged. Only new content is written as a blob and recorded in the index
# What data structure it uses: Hash Table / Dictionary (to manage the index in memory), List (to hold the list of files to add)

import logging
import os

from twig.utils import ignore, objects, repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph
from twig.utils.errors import FileMissingError

logger = logging.getLogger(__name__)


def run(args):
    repo_root = repository.require_repo_root()
    add_files(repo_root, args.files)


def add_files(repo_root, file_args):
    """
    Stages every named file. All names are checked before anything is
    staged, so a missing file leaves the index untouched.
    Returns {filename: "staged" | "reverted" | "unchanged"}.
    """
    head = CommitGraph(repo_root).load(repository.get_head_commit(repo_root))
    index = index_utils.read_index(repo_root)

    filenames = _expand_files(file_args, repo_root, set(head.files) | set(index.additions))
    for filename in filenames:
        # Only plain files in the repository root are tracked
        if os.path.dirname(filename) or not os.path.isfile(os.path.join(repo_root, filename)):
            raise FileMissingError()
        if filename in ignore.ALWAYS_IGNORED:
            raise FileMissingError()

    results = {}
    for filename in filenames:
        content = worktree.read_working_file(repo_root, filename)
        blob_hash = objects.hash_object(repo_root, content, 'blob', write=False)
        result = index.stage_addition(filename, head.files.get(filename), blob_hash)
        if result == 'staged':
            objects.hash_object(repo_root, content, 'blob')
        logger.debug("add %s: %s", filename, result)
        results[filename] = result

    index_utils.write_index(repo_root, index)
    return results


def _expand_files(file_args, repo_root, tracked):
    """
    Expands '.' into every working file; other names are taken as given,
    so an ignored file can still be added by name.
    """
    if '.' in file_args or './' in file_args:
        return worktree.list_working_files(repo_root, tracked)
    return list(dict.fromkeys(file_args))
