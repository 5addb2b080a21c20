# The command: twig config <key> <value>
# What it does: A user-facing command to set a configuration key-value pair (e.g., core.abbrev)
# How it does: It acts as a simple dispatcher, passing the key and value to the `write_config` function in the `utils/config.py` module, which handles the file I/O and parsing logic
# What data structure it uses: None directly, but it provides the interface to the underlying Map / Dictionary structure managed by `utils/config.py`

from twig.utils import config as config_utils, repository


def run(args):
    repo_root = repository.require_repo_root()
    config_utils.write_config(repo_root, args.key, args.value)
