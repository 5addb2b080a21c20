# What it does: Provides high-level functions for interacting with the repository structure, like finding the repo root and managing branch pointers
# How it does: It reads/writes to files like `HEAD` and those in `refs/heads` to manage the repository's current state and branch locations. `find_repo_root` walks up the directory tree to locate the `.twig` directory
# What data structure it uses: Uses recursion (specifically, linear recursion) to find the repo root. Conceptually, it manages pointers (the `HEAD` file and branch files), which are fundamental components of data structures like Graphs and Linked Lists

import logging
import os

from .errors import (
    BranchExistsError, BranchNotFoundError, CorruptRepositoryError,
    CurrentBranchError, InvalidBranchNameError, NotInitializedError,
)

logger = logging.getLogger(__name__)

TWIG_DIR = '.twig'
DEFAULT_BRANCH = 'master'
HEAD_PREFIX = 'ref: refs/heads/'


def get_twig_dir(repo_root):
    return os.path.join(repo_root, TWIG_DIR)


def get_heads_dir(repo_root):
    return os.path.join(repo_root, TWIG_DIR, 'refs', 'heads')


def get_head_path(repo_root):
    return os.path.join(repo_root, TWIG_DIR, 'HEAD')


def find_repo_root(path='.'): # Recursively searches for the .twig directory to find the repository root
    path = os.path.abspath(path)
    twig_dir = os.path.join(path, TWIG_DIR)
    if os.path.isdir(twig_dir):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path)


def require_repo_root(path='.'): # Like find_repo_root, but a missing repository is an error
    repo_root = find_repo_root(path)
    if not repo_root:
        raise NotInitializedError()
    return repo_root


def is_valid_branch_name(name): # A valid name is a single plain file name inside refs/heads
    return bool(name) and '/' not in name and '\\' not in name \
        and not name.startswith('.') and name.strip() == name


def validate_branch_name(name):
    if not is_valid_branch_name(name):
        raise InvalidBranchNameError(f"Invalid branch name '{name}'.")


def get_current_branch(repo_root): # Retrieves the name of the branch HEAD points to
    head_path = get_head_path(repo_root)
    if not os.path.exists(head_path):
        raise CorruptRepositoryError("HEAD is missing.")
    with open(head_path, 'r') as f:
        head_content = f.read().strip()
    if not head_content.startswith(HEAD_PREFIX):
        raise CorruptRepositoryError(f"HEAD does not name a branch: {head_content!r}")
    branch_name = head_content[len(HEAD_PREFIX):]
    if not is_valid_branch_name(branch_name):
        raise CorruptRepositoryError(f"HEAD names an invalid branch: {branch_name!r}")
    return branch_name


def set_head(repo_root, branch_name): # Points HEAD at the given branch
    with open(get_head_path(repo_root), 'w') as f:
        f.write(f"{HEAD_PREFIX}{branch_name}\n")
    logger.debug("HEAD -> %s", branch_name)


def get_all_branches(repo_root): # Lists all branch names by reading the refs/heads directory
    branches_dir = get_heads_dir(repo_root)
    if not os.path.isdir(branches_dir):
        return []
    return sorted(name for name in os.listdir(branches_dir)
                  if os.path.isfile(os.path.join(branches_dir, name)))


def get_branch_path(repo_root, branch_name): # None for names that could point outside refs/heads
    if not is_valid_branch_name(branch_name):
        return None
    return os.path.join(get_heads_dir(repo_root), branch_name)


def branch_exists(repo_root, branch_name):
    branch_path = get_branch_path(repo_root, branch_name)
    return branch_path is not None and os.path.isfile(branch_path)


def get_branch_commit(repo_root, branch_name): # Retrieves the commit hash that a given branch points to, or None if the branch doesn't exist
    if not branch_exists(repo_root, branch_name):
        return None
    branch_path = get_branch_path(repo_root, branch_name)
    with open(branch_path, 'r') as f:
        return f.read().strip()


def update_branch(repo_root, branch_name, commit_hash): # Moves a branch to the given commit, creating the ref file if needed
    validate_branch_name(branch_name)
    branch_path = get_branch_path(repo_root, branch_name)
    with open(branch_path, 'w') as f:
        f.write(f"{commit_hash}\n")
    logger.debug("refs/heads/%s -> %s", branch_name, commit_hash)


def create_branch(repo_root, branch_name, commit_hash): # Creates a new branch pointing to the given commit hash
    validate_branch_name(branch_name)
    if branch_exists(repo_root, branch_name):
        raise BranchExistsError()
    update_branch(repo_root, branch_name, commit_hash)


def delete_branch(repo_root, branch_name): # Deletes only the pointer, never the commits it reached
    if branch_name == get_current_branch(repo_root):
        raise CurrentBranchError()
    if not branch_exists(repo_root, branch_name):
        raise BranchNotFoundError()
    os.remove(get_branch_path(repo_root, branch_name))
    logger.debug("deleted refs/heads/%s", branch_name)


def get_head_commit(repo_root): # Retrieves the commit hash that HEAD resolves to through its branch
    current_branch = get_current_branch(repo_root)
    commit_hash = get_branch_commit(repo_root, current_branch)
    if not commit_hash:
        raise CorruptRepositoryError(f"Branch '{current_branch}' does not point to a commit.")
    return commit_hash
