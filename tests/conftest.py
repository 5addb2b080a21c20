# Shared pytest fixtures for Twig tests

import pytest
import os
import shutil
import tempfile

from twig.commands import init, add, commit, branch
from twig.utils import repository


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = tempfile.mkdtemp()
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized Twig repository in a temporary directory
    original_dir = os.getcwd()
    os.chdir(temp_dir)

    init.init_repository(temp_dir)

    yield temp_dir

    os.chdir(original_dir)


@pytest.fixture
def repo_with_file(temp_repo):
    # Creates a repo with a single file (not committed)
    write_file(temp_repo, 'test.txt', 'Hello, World!')
    return temp_repo


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file
    write_file(temp_repo, 'README.md', '# Test Project\n')
    add.add_files(temp_repo, ['README.md'])
    commit_hash = commit.create_commit(temp_repo, 'Add readme', timestamp=1000)
    return temp_repo, commit_hash


@pytest.fixture
def repo_with_branches(repo_with_commit):
    # Creates a repo with master and a feature branch at the same commit
    repo_root, commit_hash = repo_with_commit
    branch.create(repo_root, 'feature')
    return repo_root, commit_hash


# File helpers

def write_file(repo_root, name, content):
    with open(os.path.join(repo_root, name), 'w') as f:
        f.write(content)


def read_file(repo_root, name):
    with open(os.path.join(repo_root, name), 'r') as f:
        return f.read()


def file_exists(repo_root, name):
    return os.path.isfile(os.path.join(repo_root, name))


def commit_file(repo_root, name, content, message, timestamp=None):
    # Writes, stages and commits a single file; returns the commit id
    write_file(repo_root, name, content)
    add.add_files(repo_root, [name])
    return commit.create_commit(repo_root, message, timestamp=timestamp)


def head_commit(repo_root):
    return repository.get_head_commit(repo_root)


# Mock args object for command functions
class MockArgs:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)
