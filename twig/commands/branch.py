# The command: twig branch <branch-name> / twig rm-branch <branch-name>
# What it does: Creates a new branch pointer to the current commit, or deletes a branch pointer
# How it does: To create a branch, it gets the current HEAD commit hash and writes it to a new file named `<branch-name>` inside `.twig/refs/heads`. Deleting removes that file; the commits it pointed to are kept
# What data structure it uses: Map / Dictionary (conceptually, the `refs/heads` directory maps branch names to commit hashes)

from twig.utils import repository


def run(args):
    repo_root = repository.require_repo_root()
    create(repo_root, args.name)


def run_delete(args):
    repo_root = repository.require_repo_root()
    delete(repo_root, args.name)


def create(repo_root, name): # The new branch is not checked out
    head_commit_hash = repository.get_head_commit(repo_root)
    repository.create_branch(repo_root, name, head_commit_hash)
    return head_commit_hash


def delete(repo_root, name):
    repository.delete_branch(repo_root, name)
