# What it does: Provides the staging area and centralized read/write operations for the .twig/index file
# How it does: Keeps pending additions (path -> blob hash) and pending removals (paths) in memory and writes them back as sorted text lines (`add <hash> <path>` / `rm <path>`)
# What data structure it uses: Dictionary (staged additions) and Set (staged removals)

import logging
import os

from .errors import CorruptRepositoryError, NothingToRemoveError

logger = logging.getLogger(__name__)


class StagingIndex:
    """Pending changes for the next commit.

    A filename is never in both `additions` and `removals`: staging one
    side always drops the other.
    """

    def __init__(self, additions=None, removals=None):
        self.additions = dict(additions or {})
        self.removals = set(removals or ())

    def __eq__(self, other):
        if not isinstance(other, StagingIndex):
            return NotImplemented
        return self.additions == other.additions and self.removals == other.removals

    def __repr__(self):
        return f"StagingIndex(additions={self.additions!r}, removals={sorted(self.removals)!r})"

    def is_empty(self):
        return not self.additions and not self.removals

    def stage_addition(self, filename, parent_hash, blob_hash):
        """Stages the working version of a file.

        Returns "unchanged" when the same content is already staged,
        "reverted" when the content is back to the head version (any pending
        addition is dropped) and "staged" when a new hash was recorded. In
        the last case the caller still has to store the blob.
        """
        # Re-adding a file cancels its staged deletion
        self.removals.discard(filename)

        if self.additions.get(filename) == blob_hash:
            return 'unchanged'
        if parent_hash == blob_hash:
            self.additions.pop(filename, None)
            return 'reverted'
        self.additions[filename] = blob_hash
        return 'staged'

    def stage_existing(self, filename, blob_hash): # Stages a blob that is already in the object store
        self.removals.discard(filename)
        self.additions[filename] = blob_hash

    def stage_removal(self, filename, head_files):
        """Stages a file for removal.

        Returns True when the file is tracked by head and the working copy
        should be deleted, False when only a pending addition was dropped.
        """
        was_staged = self.additions.pop(filename, None) is not None
        if filename in head_files:
            self.removals.add(filename)
            return True
        if not was_staged:
            raise NothingToRemoveError()
        return False


def get_index_path(repo_root):
    return os.path.join(repo_root, '.twig', 'index')


def read_index(repo_root):
    """
    Reads the index file and returns a StagingIndex.
    A missing or empty file is an empty index.
    """
    index_path = get_index_path(repo_root)
    index = StagingIndex()
    if not os.path.exists(index_path):
        return index

    with open(index_path, 'r') as f:
        for line in f:
            line = line.rstrip('\n')
            if not line:
                continue
            parts = line.split(' ', 2)
            if parts[0] == 'add' and len(parts) == 3:
                index.additions[parts[2]] = parts[1]
            elif parts[0] == 'rm' and len(parts) >= 2:
                index.removals.add(line[len('rm '):])
            else:
                raise CorruptRepositoryError(f"Malformed index line: {line!r}")
    return index


def write_index(repo_root, index):
    index_path = get_index_path(repo_root)
    os.makedirs(os.path.dirname(index_path), exist_ok=True)

    with open(index_path, 'w') as f:
        for path in sorted(index.additions):
            f.write(f"add {index.additions[path]} {path}\n")
        for path in sorted(index.removals):
            f.write(f"rm {path}\n")
    logger.debug("index written: %d added, %d removed", len(index.additions), len(index.removals))


def clear_index(repo_root): # Replaces the index with a fresh empty one
    write_index(repo_root, StagingIndex())
