# What it does: Manages the low-level object database, handling the storage and retrieval of blobs and commits
# How it does: It implements a content-addressed storage system. `hash_object` saves content and returns its hash. `read_object` retrieves content using its hash. Objects are never rewritten once stored
# What data structure it uses: Hash Table / Dictionary (the entire object store is a content-addressed dictionary where the SHA-1 hash is the key)

import hashlib
import logging
import os

from .errors import CorruptObjectError, ObjectNotFoundError

logger = logging.getLogger(__name__)

OBJECT_TYPES = ('blob', 'commit')
HASH_LENGTH = 40


def get_objects_dir(repo_root):
    return os.path.join(repo_root, '.twig', 'objects')


def get_object_path(repo_root, sha1):
    return os.path.join(get_objects_dir(repo_root), sha1[:2], sha1[2:])


def _frame(content, obj_type):
    if obj_type not in OBJECT_TYPES:
        raise ValueError(f"Unknown object type: {obj_type}")
    header = f'{obj_type} {len(content)}\0'.encode()
    return header + content


def compute_hash(content, obj_type): # The object id, without touching the store
    return hashlib.sha1(_frame(content, obj_type)).hexdigest()


def hash_object(repo_root, content, obj_type, write=True): # Hashes content and optionally writes it as an object of the given type ('blob', 'commit')
    data = _frame(content, obj_type)
    sha1 = hashlib.sha1(data).hexdigest()

    if write:
        object_path = get_object_path(repo_root, sha1)
        # Same hash means same bytes, so an existing file is left alone
        if not os.path.exists(object_path):
            os.makedirs(os.path.dirname(object_path), exist_ok=True)
            with open(object_path, 'wb') as f:
                f.write(data)
            logger.debug("stored %s %s (%d bytes)", obj_type, sha1, len(content))

    return sha1


def object_exists(repo_root, sha1):
    if len(sha1) != HASH_LENGTH:
        return False
    return os.path.isfile(get_object_path(repo_root, sha1))


def read_object(repo_root, sha1): # Reads an object by its SHA-1 hash and returns its type and content
    object_path = get_object_path(repo_root, sha1)

    if len(sha1) != HASH_LENGTH or not os.path.isfile(object_path):
        raise ObjectNotFoundError(f"Object not found: {sha1}")

    with open(object_path, 'rb') as f:
        data = f.read()

    null_byte_index = data.find(b'\0')
    if null_byte_index == -1:
        raise CorruptObjectError(f"Object {sha1} has no header")

    try:
        obj_type, size = data[:null_byte_index].decode().split(' ')
        size = int(size)
    except ValueError:
        raise CorruptObjectError(f"Object {sha1} has a malformed header")

    content = data[null_byte_index + 1:]
    if obj_type not in OBJECT_TYPES or size != len(content):
        raise CorruptObjectError(f"Object {sha1} does not match its header")

    return obj_type, content


def read_blob(repo_root, sha1): # Returns the raw bytes of a blob
    obj_type, content = read_object(repo_root, sha1)
    if obj_type != 'blob':
        raise CorruptObjectError(f"Object {sha1} is not a blob")
    return content


def iter_object_ids(repo_root): # Yields every object id in the store
    objects_dir = get_objects_dir(repo_root)
    if not os.path.isdir(objects_dir):
        return
    for prefix in sorted(os.listdir(objects_dir)):
        prefix_dir = os.path.join(objects_dir, prefix)
        if len(prefix) != 2 or not os.path.isdir(prefix_dir):
            continue
        for rest in sorted(os.listdir(prefix_dir)):
            yield prefix + rest


def read_object_type(repo_root, sha1): # Reads only the header of an object
    object_path = get_object_path(repo_root, sha1)
    with open(object_path, 'rb') as f:
        head = f.read(32)
    return head.split(b' ', 1)[0].decode(errors='replace')
