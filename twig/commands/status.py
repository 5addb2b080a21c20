# The command: twig status
# What it does: Provides a summary of the repository state by comparing the HEAD commit, the index (staging area), and the working directory
# How it does: It generates {path: hash} dictionaries for the head commit and the working directory and reads the staged additions/removals. It then compares them to find staged files, removed files, unstaged modifications and untracked files
# What data structure it uses: Hash Table / Dictionary (to represent the states for efficient O(1) average time complexity lookups), Sets (for efficient comparison of file lists)

from twig.utils import repository, worktree, index as index_utils
from twig.utils.commits import CommitGraph


def run(args): # Compares the HEAD, index, and working directory states and prints the status
    repo_root = repository.require_repo_root()
    print(format_status(collect_status(repo_root)))


def collect_status(repo_root):
    current_branch = repository.get_current_branch(repo_root)
    head = CommitGraph(repo_root).load(repository.get_head_commit(repo_root))
    index = index_utils.read_index(repo_root)
    working_files = worktree.working_hashes(repo_root, set(head.files) | set(index.additions))

    return {
        'branches': repository.get_all_branches(repo_root),
        'current_branch': current_branch,
        'staged': sorted(index.additions),
        'removed': sorted(index.removals),
        'modified': _unstaged_changes(head.files, index, working_files),
        'untracked': worktree.untracked_files(repo_root, head.files, index, working_files),
    }


def _unstaged_changes(head_files, index, working_files): # Returns [(path, 'modified' | 'deleted')]
    changes = []
    for path in sorted(set(working_files) | set(head_files)):
        working_hash = working_files.get(path)
        tracked_hash = head_files.get(path)
        staged_hash = index.additions.get(path)

        if working_hash is not None:
            if staged_hash is not None and staged_hash != working_hash:
                changes.append((path, 'modified'))
            elif staged_hash is None and tracked_hash is not None and tracked_hash != working_hash \
                    and path not in index.removals:
                changes.append((path, 'modified'))
        elif tracked_hash is not None and path not in index.removals:
            changes.append((path, 'deleted'))

    # Staged for addition but gone from the working directory
    for path in sorted(index.additions):
        if path not in working_files and path not in head_files:
            changes.append((path, 'deleted'))
    return sorted(changes)


def format_status(status):
    lines = ['=== Branches ===']
    for branch in status['branches']:
        prefix = '*' if branch == status['current_branch'] else ''
        lines.append(f"{prefix}{branch}")

    lines += ['', '=== Staged Files ===', *status['staged']]
    lines += ['', '=== Removed Files ===', *status['removed']]
    lines += ['', '=== Modifications Not Staged For Commit ===']
    lines += [f"{path} ({change})" for path, change in status['modified']]
    lines += ['', '=== Untracked Files ===', *status['untracked']]
    lines.append('')
    return '\n'.join(lines)
