# What it does: Implements the `.twigignore` functionality
# How it does: Each non-blank, non-comment line of `.twigignore` is a glob matched against working file names with `fnmatch`. The metadata directory and the ignore file itself are never working files
# What data structure it uses: Set (to store the ignore patterns for efficient, near O(1) average time complexity lookups)

import os
from fnmatch import fnmatch

IGNORE_FILE = '.twigignore'
ALWAYS_IGNORED = frozenset({'.twig', IGNORE_FILE})


def get_ignored_patterns(repo_root):
    """
    Returns the glob patterns of `.twigignore` plus the names that are
    always ignored.
    """
    patterns = set(ALWAYS_IGNORED)
    ignore_path = os.path.join(repo_root, IGNORE_FILE)
    if not os.path.isfile(ignore_path):
        return patterns

    with open(ignore_path, 'r') as f:
        patterns.update(
            entry for entry in (raw.strip() for raw in f)
            if entry and not entry.startswith('#')
        )
    return patterns


def is_ignored(name, ignore_patterns): # Working files are flat, so only the bare name is matched
    return any(fnmatch(name, pattern) for pattern in ignore_patterns)
