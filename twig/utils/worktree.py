# What it does: Reads and rewrites the working directory: lists working files, finds untracked files, and materializes a commit's snapshot
# How it does: The working files are the plain files in the repository root (minus ignored ones). Before a checkout rewrites them, every untracked file is hashed and compared with the version the target commit would write, so user data is never silently destroyed
# What data structure it uses: Dictionary ({path: hash} snapshots), Set (tracked/staged membership), List (sorted file names)

import logging
import os

from . import ignore, index as index_utils, objects, repository
from .commits import CommitGraph
from .errors import UntrackedOverwriteError

logger = logging.getLogger(__name__)


def list_working_files(repo_root, tracked=()):
    """
    Sorted names of the plain files directly in the repository root.
    Ignore patterns only hide files that are not in `tracked`.
    """
    ignore_patterns = ignore.get_ignored_patterns(repo_root)
    names = []
    for name in os.listdir(repo_root):
        if not os.path.isfile(os.path.join(repo_root, name)):
            continue
        if name in ignore.ALWAYS_IGNORED:
            continue
        if name not in tracked and ignore.is_ignored(name, ignore_patterns):
            continue
        names.append(name)
    return sorted(names)


def read_working_file(repo_root, filename):
    with open(os.path.join(repo_root, filename), 'rb') as f:
        return f.read()


def working_file_hash(repo_root, filename): # Blob hash of a working file, or None if it is absent
    path = os.path.join(repo_root, filename)
    if not os.path.isfile(path):
        return None
    return objects.hash_object(repo_root, read_working_file(repo_root, filename), 'blob', write=False)


def working_hashes(repo_root, tracked=()): # {path: hash} for every working file
    return {name: working_file_hash(repo_root, name) for name in list_working_files(repo_root, tracked)}


def write_working_file(repo_root, filename, content):
    with open(os.path.join(repo_root, filename), 'wb') as f:
        f.write(content)


def restore_blob(repo_root, filename, blob_hash): # Overwrites a working file with a stored blob
    write_working_file(repo_root, filename, objects.read_blob(repo_root, blob_hash))


def delete_working_file(repo_root, filename):
    path = os.path.join(repo_root, filename)
    if os.path.isfile(path):
        os.remove(path)


def untracked_files(repo_root, head_files, index, working_files=None):
    """
    Working files that are neither tracked by head nor staged for addition,
    plus files staged for removal that exist in the working directory again.
    """
    if working_files is None:
        working_files = list_working_files(repo_root, set(head_files) | set(index.additions))
    untracked = set()
    for name in working_files:
        if name in index.removals:
            untracked.add(name)
        elif name not in head_files and name not in index.additions:
            untracked.add(name)
    return sorted(untracked)


def check_untracked_overwrite(repo_root, target_files, head_files, index):
    """
    Refuses to continue if an untracked working file would be replaced by a
    different version from `target_files`.
    """
    # An ignored file is still checked when the target would write over it
    tracked = set(head_files) | set(index.additions) | set(target_files)
    working_files = list_working_files(repo_root, tracked)
    for name in untracked_files(repo_root, head_files, index, working_files):
        target_hash = target_files.get(name)
        if target_hash is None:
            continue
        if working_file_hash(repo_root, name) != target_hash:
            logger.debug("untracked %s would be overwritten", name)
            raise UntrackedOverwriteError()


def checkout_commit(repo_root, commit, graph=None):
    """
    Makes the working directory identical to the snapshot of `commit`:
    every working file is deleted, then every tracked file is written from
    its blob. Staging and refs are left to the caller.
    """
    graph = graph or CommitGraph(repo_root)
    head = graph.load(repository.get_head_commit(repo_root))
    index = index_utils.read_index(repo_root)
    check_untracked_overwrite(repo_root, commit.files, head.files, index)

    for name in list_working_files(repo_root, set(head.files) | set(commit.files)):
        delete_working_file(repo_root, name)

    for name, blob_hash in sorted(commit.files.items()):
        restore_blob(repo_root, name, blob_hash)

    logger.debug("checked out %s (%d files)", commit.commit_id, len(commit.files))
