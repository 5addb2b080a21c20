# The command: twig init
# What it does: Initializes a new repository by creating the hidden `.twig` directory and its internal structure, with one initial commit
# How it does: It creates the `objects` and `refs/heads` subdirectories, an empty index and the default config. It then stores the initial commit (empty, time zero, so every repository shares it), points the 'master' branch at it and points `HEAD` at 'master'
# What data structure it uses: Tree (the file system directory structure is a tree). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

import logging
import os

from twig.utils import config, repository, index as index_utils
from twig.utils.commits import CommitGraph, initial_commit
from twig.utils.errors import AlreadyInitializedError

logger = logging.getLogger(__name__)


def run(args):
    init_repository(os.getcwd())


def init_repository(path): # Creates the repository in `path` and returns the initial commit id
    repo_path = os.path.join(path, repository.TWIG_DIR)

    # Never touch an existing repository
    if os.path.exists(repo_path):
        raise AlreadyInitializedError()

    os.makedirs(os.path.join(repo_path, 'objects'))
    os.makedirs(os.path.join(repo_path, 'refs', 'heads'))

    index_utils.clear_index(path)
    config.write_defaults(path)

    commit_id = CommitGraph(path).save(initial_commit())
    repository.update_branch(path, repository.DEFAULT_BRANCH, commit_id)
    repository.set_head(path, repository.DEFAULT_BRANCH)

    logger.debug("initialized repository in %s", repo_path)
    return commit_id
