# The command: twig commit <message>
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes
# How it does: It starts from the head commit's files, applies the staged additions and removals, and hashes the message, time, parents and files into a new "commit" object. Finally, it moves the current branch to the new commit and clears the index
# What data structure it uses: Directed Acyclic Graph (DAG) (as each commit links to its parents, forming the history graph), Hash Table / Dictionary (the underlying object store and the tracked files)

import logging

from twig.utils import repository, index as index_utils
from twig.utils.commits import CommitGraph, build_commit

logger = logging.getLogger(__name__)


def run(args):
    repo_root = repository.require_repo_root()
    create_commit(repo_root, args.message)


def create_commit(repo_root, message, extra_parents=(), graph=None, timestamp=None): # Creates a commit object and updates the current branch
    graph = graph or CommitGraph(repo_root)
    head_commit = graph.load(repository.get_head_commit(repo_root))
    parents = [head_commit.commit_id, *extra_parents]

    index = index_utils.read_index(repo_root)
    commit = build_commit(message, parents, index, head_commit.files, timestamp=timestamp)

    commit_hash = graph.save(commit)
    current_branch = repository.get_current_branch(repo_root)
    repository.update_branch(repo_root, current_branch, commit_hash)
    index_utils.clear_index(repo_root)

    logger.debug("[%s %s] %s", current_branch, commit_hash[:7], message.splitlines()[0] if message else '')
    return commit_hash
