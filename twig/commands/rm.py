# The command: twig rm <file>
# What it does: Unstages a file that is staged for addition, and if the head commit tracks it, stages it for removal and deletes it from the working directory
# How it does: It loads the index and the head commit's files, lets the index decide what the removal means, and deletes the working copy only when the file was tracked
# What data structure it uses: Dictionary (staged additions, head files) and Set (staged removals)

from twig.utils import repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph


def run(args):
    repo_root = repository.require_repo_root()
    remove_file(repo_root, args.file)


def remove_file(repo_root, filename): # Returns True when the file is now staged for removal
    head = CommitGraph(repo_root).load(repository.get_head_commit(repo_root))
    index = index_utils.read_index(repo_root)

    staged_for_removal = index.stage_removal(filename, head.files)
    index_utils.write_index(repo_root, index)

    if staged_for_removal:
        worktree.delete_working_file(repo_root, filename)
    return staged_for_removal
