# The command: twig log / twig global-log
# What it does: `log` displays the history of the current branch, starting at the head commit and following first parents back to the initial commit. `global-log` displays every commit ever made
# How it does: `log` walks the first-parent chain lazily through the commit graph; second parents of merge commits are shown on the `Merge:` line but not followed. `global-log` lists every commit object in the store
# What data structure it uses: It performs a Graph Traversal (a linear walk up the first-parent chain) on the Directed Acyclic Graph (DAG) formed by the commits

from twig.utils import config, repository
from twig.utils.commits import CommitGraph, format_log_entry


def run(args):
    repo_root = repository.require_repo_root()
    abbrev = config.get_abbrev(repo_root)
    for commit in history(repo_root):
        print(format_log_entry(commit, abbrev))


def run_global(args):
    repo_root = repository.require_repo_root()
    abbrev = config.get_abbrev(repo_root)
    for commit in global_history(repo_root):
        print(format_log_entry(commit, abbrev))


def history(repo_root): # Commits of the current branch, most recent first
    graph = CommitGraph(repo_root)
    return graph.first_parent_history(repository.get_head_commit(repo_root))


def global_history(repo_root): # Every commit in the repository
    return CommitGraph(repo_root).all_commits()
