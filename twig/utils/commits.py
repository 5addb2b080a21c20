# What it does: Builds, stores and walks the commit history
# How it does: A commit is serialized to a canonical text form and stored as a 'commit' object, so its id is the hash of its message, time, parents and tracked files. `CommitGraph` loads commits on demand into a dictionary keyed by id and walks parent ids with explicit queues
# What data structure it uses: Directed Acyclic Graph (DAG) stored as an arena (Dictionary of id -> Commit, parent ids as edges), Queue for breadth-first traversal, Set for ancestor membership

import logging
import time
from collections import deque
from datetime import datetime, timezone

from . import objects
from .errors import (
    CommitNotFoundError, CorruptObjectError, EmptyMessageError, NoChangesError,
    ObjectNotFoundError,
)

logger = logging.getLogger(__name__)

INITIAL_MESSAGE = 'initial commit'


class Commit:
    """An immutable snapshot: message, time, parent ids and tracked files."""

    def __init__(self, message, timestamp, parents, files, commit_id=None):
        self.message = message
        self.timestamp = timestamp
        self.parents = tuple(parents)
        self.files = dict(files)
        self.commit_id = commit_id or objects.compute_hash(serialize_commit(self), 'commit')

    def __eq__(self, other):
        if not isinstance(other, Commit):
            return NotImplemented
        return self.commit_id == other.commit_id

    def __hash__(self):
        return hash(self.commit_id)

    def __repr__(self):
        return f"Commit({self.commit_id[:7]}, {self.message!r})"

    def is_merge(self):
        return len(self.parents) == 2


def serialize_commit(commit): # Canonical form: headers, a blank line, then the message
    lines = [f'time {commit.timestamp}']
    for parent in commit.parents:
        lines.append(f'parent {parent}')
    for name in sorted(commit.files):
        lines.append(f'file {commit.files[name]} {name}')
    lines.append('')
    lines.append(commit.message)
    return '\n'.join(lines).encode()


def parse_commit(commit_id, content): # Inverse of serialize_commit
    try:
        header, message = content.decode().split('\n\n', 1)
    except (UnicodeDecodeError, ValueError):
        raise CorruptObjectError(f"Commit {commit_id} is malformed")

    timestamp = None
    parents = []
    files = {}
    for line in header.split('\n'):
        key, _, value = line.partition(' ')
        if key == 'time':
            timestamp = int(value)
        elif key == 'parent':
            parents.append(value)
        elif key == 'file':
            blob_hash, _, name = value.partition(' ')
            files[name] = blob_hash
        else:
            raise CorruptObjectError(f"Commit {commit_id} has an unknown header {key!r}")

    if timestamp is None:
        raise CorruptObjectError(f"Commit {commit_id} has no time")
    return Commit(message, timestamp, parents, files, commit_id=commit_id)


def initial_commit(): # The shared root of every repository: fixed time, no files
    return Commit(INITIAL_MESSAGE, 0, [], {})


def build_commit(message, parents, index, parent_files, timestamp=None):
    """Creates the next commit from the first parent's files and the index.

    `parents` are commit ids, first parent first. Fails when the message is
    blank or nothing is staged; neither check applies to a root commit.
    """
    if parents and not message.strip():
        raise EmptyMessageError()
    if parents and index.is_empty():
        raise NoChangesError()

    files = dict(parent_files)
    files.update(index.additions)
    for name in index.removals:
        files.pop(name, None)

    if timestamp is None:
        timestamp = int(time.time())
    return Commit(message, timestamp, parents, files)


def format_date(timestamp): # e.g. "Thu Jan 1 00:00:00 1970 +0000", in local time
    dt = datetime.fromtimestamp(timestamp, timezone.utc).astimezone()
    return f"{dt:%a %b} {dt.day} {dt:%H:%M:%S %Y %z}"


def format_log_entry(commit, abbrev=7): # One `log` block, ending with an empty line
    lines = ['===', f'commit {commit.commit_id}']
    if commit.is_merge():
        first, second = commit.parents
        lines.append(f'Merge: {first[:abbrev]} {second[:abbrev]}')
    lines.append(f'Date: {format_date(commit.timestamp)}')
    lines.append(commit.message)
    lines.append('')
    return '\n'.join(lines)


class CommitGraph:
    """All commits of one repository, loaded lazily by id."""

    def __init__(self, repo_root):
        self.repo_root = repo_root
        self._commits = {}
        self._all_ids = None

    def save(self, commit): # Persists a commit once, by id
        content = serialize_commit(commit)
        commit_id = objects.hash_object(self.repo_root, content, 'commit')
        if commit_id != commit.commit_id:
            raise CorruptObjectError(f"Commit {commit.commit_id} does not hash to its id")
        self._commits[commit_id] = commit
        if self._all_ids is not None:
            self._all_ids.add(commit_id)
        logger.debug("saved commit %s (%d parents, %d files)",
                     commit_id, len(commit.parents), len(commit.files))
        return commit_id

    def get(self, commit_id): # Exact lookup of a commit the user asked for
        if commit_id in self._commits:
            return self._commits[commit_id]
        if not objects.object_exists(self.repo_root, commit_id):
            raise CommitNotFoundError()
        obj_type, content = objects.read_object(self.repo_root, commit_id)
        if obj_type != 'commit':
            raise CommitNotFoundError()
        commit = parse_commit(commit_id, content)
        self._commits[commit_id] = commit
        return commit

    def load(self, commit_id): # Lookup of a commit another commit links to; a miss is corruption
        try:
            return self.get(commit_id)
        except CommitNotFoundError:
            raise ObjectNotFoundError(f"Commit {commit_id} is referenced but missing")

    def commit_ids(self): # Every commit id in the object store
        if self._all_ids is None:
            self._all_ids = {
                sha1 for sha1 in objects.iter_object_ids(self.repo_root)
                if objects.read_object_type(self.repo_root, sha1) == 'commit'
            }
        return set(self._all_ids)

    def resolve(self, commit_id):
        """Looks up a full id, or an abbreviated one.

        An abbreviation must match exactly one commit; no match and an
        ambiguous match are both reported as a missing commit.
        """
        if len(commit_id) == objects.HASH_LENGTH:
            return self.get(commit_id)
        if not commit_id:
            raise CommitNotFoundError()
        matches = [cid for cid in self.commit_ids() if cid.startswith(commit_id)]
        if len(matches) != 1:
            logger.debug("prefix %s matched %d commits", commit_id, len(matches))
            raise CommitNotFoundError()
        return self.get(matches[0])

    def all_commits(self): # Newest first, ties broken by id
        commits = [self.get(cid) for cid in self.commit_ids()]
        return sorted(commits, key=lambda c: (-c.timestamp, c.commit_id))

    def first_parent_history(self, commit_id): # Lazily follows parents[0] down to the initial commit
        commit = self.load(commit_id)
        while True:
            yield commit
            if not commit.parents:
                return
            commit = self.load(commit.parents[0])

    def ancestors(self, commit_id): # Every commit reachable from commit_id, itself included
        seen = {commit_id}
        queue = deque([commit_id])
        while queue:
            current = queue.popleft()
            for parent in self.load(current).parents:
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)
        return seen

    def is_ancestor(self, ancestor_id, commit_id):
        if ancestor_id == commit_id:
            return True
        return ancestor_id in self.ancestors(commit_id)

    def split_commit(self, a, b):
        """Finds the merge base of commits `a` and `b`.

        Walks `a`'s ancestry one BFS level at a time and stops at the first
        level that contains an ancestor of `b`. When several commits of that
        level qualify (criss-cross histories) the lowest id is chosen.
        """
        b_ancestors = self.ancestors(b)
        visited = {a}
        level = [a]
        while level:
            common = [cid for cid in level if cid in b_ancestors]
            if common:
                return self.load(min(common))

            next_level = []
            for cid in level:
                for parent in self.load(cid).parents:
                    if parent not in visited:
                        visited.add(parent)
                        next_level.append(parent)
            level = next_level

        # Unrelated histories still share the initial commit
        logger.warning("no common ancestor for %s and %s, using the initial commit", a, b)
        return self.load(initial_commit().commit_id)
