# The command: twig reset <commit-id>
# What it does: Checks out every file of an arbitrary commit and moves the current branch to that commit
# How it does: It resolves the (possibly abbreviated) id, rewrites the working directory exactly like a branch checkout, then points the current branch file at the commit and clears the index
# What data structure it uses: Dictionary (the commit's {path: hash} files)

from twig.utils import repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph


def run(args): # Executes the reset command
    repo_root = repository.require_repo_root()
    reset(repo_root, args.commit_id)


def reset(repo_root, commit_id): # Returns the full id the branch now points to
    graph = CommitGraph(repo_root)
    commit = graph.resolve(commit_id)

    worktree.checkout_commit(repo_root, commit, graph)

    repository.update_branch(repo_root, repository.get_current_branch(repo_root), commit.commit_id)
    index_utils.clear_index(repo_root)
    return commit.commit_id
