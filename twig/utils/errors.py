# What it does: Defines the typed errors raised by the Twig engine
# How it does: Every error carries the single line shown to the user. `main.py` is the only place that catches them and prints that line
# What data structure it uses: A class hierarchy (UsageError / PreconditionError / CorruptionError under TwigError)


class TwigError(Exception):
    """Base class for every error raised by the engine."""

    message = "Unknown error."

    def __init__(self, message=None):
        super().__init__(message or self.message)


class UsageError(TwigError):
    message = "Incorrect operands."


class PreconditionError(TwigError):
    pass


class CorruptionError(TwigError):
    # Internal corruption: never recovered from silently
    message = "Repository is corrupted."


# Usage errors

class UnknownCommandError(UsageError):
    message = "No command with that name exists."


class MissingCommandError(UsageError):
    message = "Please enter a command."


class InvalidBranchNameError(UsageError):
    message = "Invalid branch name."


class InvalidConfigKeyError(UsageError):
    message = "Invalid key format. Should be 'section.key'."


# Preconditions

class NotInitializedError(PreconditionError):
    message = "Not in an initialized Twig directory."


class AlreadyInitializedError(PreconditionError):
    message = "A Twig version-control system already exists in the current directory."


class FileMissingError(PreconditionError):
    message = "File does not exist."


class EmptyMessageError(PreconditionError):
    message = "Please enter a commit message."


class NoChangesError(PreconditionError):
    message = "No changes added to the commit."


class NothingToRemoveError(PreconditionError):
    message = "No reason to remove the file."


class BranchExistsError(PreconditionError):
    message = "A branch with that name already exists."


class BranchNotFoundError(PreconditionError):
    message = "A branch with that name does not exist."


class CurrentBranchError(PreconditionError):
    message = "Cannot remove the current branch."


class NoSuchBranchError(PreconditionError):
    message = "No such branch exists."


class AlreadyCurrentBranchError(PreconditionError):
    message = "No need to checkout the current branch."


class NoSuchCommitError(PreconditionError):
    message = "No commit with that id exists."


# Raised by the commit graph lookups; same meaning as NoSuchCommitError
CommitNotFoundError = NoSuchCommitError


class FileNotInCommitError(PreconditionError):
    message = "File does not exist in that commit."


class UntrackedOverwriteError(PreconditionError):
    message = "There is an untracked file in the way; delete it, or add and commit it first."


class UncommittedChangesError(PreconditionError):
    message = "You have uncommitted changes."


class SelfMergeError(PreconditionError):
    message = "Cannot merge a branch with itself."


class NoMatchingCommitError(PreconditionError):
    message = "Found no commit with that message."


# Corruption

class ObjectNotFoundError(CorruptionError):
    message = "Object not found."


class CorruptObjectError(CorruptionError):
    message = "Object is corrupted."


class CorruptRepositoryError(CorruptionError):
    pass
