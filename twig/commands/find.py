# The command: twig find <message>
# What it does: Prints the ids of all commits whose message is exactly the given message, one per line
# How it does: It scans every commit in the object store and compares messages
# What data structure it uses: List (matching ids)

from twig.utils import repository
from twig.utils.commits import CommitGraph
from twig.utils.errors import NoMatchingCommitError


def run(args):
    repo_root = repository.require_repo_root()
    for commit_id in find_commits(repo_root, args.message):
        print(commit_id)


def find_commits(repo_root, message):
    matches = [commit.commit_id for commit in CommitGraph(repo_root).all_commits()
               if commit.message == message]
    if not matches:
        raise NoMatchingCommitError()
    return matches
