# Unit tests for utils/commits.py

import pytest
import logging

from twig.utils import objects, repository
from twig.utils.commits import (
    Commit, CommitGraph, build_commit, format_log_entry, initial_commit,
    parse_commit, serialize_commit,
)
from twig.utils.errors import (
    CommitNotFoundError, CorruptObjectError, EmptyMessageError, NoChangesError,
    ObjectNotFoundError,
)
from twig.utils.index import StagingIndex


def save(graph, message, timestamp, parents, files=None):
    # Stores a hand-built commit and returns its id
    return graph.save(Commit(message, timestamp, parents, files or {}))


class TestCommitIdentity:
    """Tests for Commit ids and serialization"""

    def test_id_is_hash_of_serialization(self):
        commit = Commit('msg', 10, [], {'a.txt': 'h1'})
        assert commit.commit_id == objects.compute_hash(serialize_commit(commit), 'commit')

    def test_same_fields_same_id(self):
        first = Commit('msg', 10, ['p' * 40], {'a.txt': 'h1', 'b.txt': 'h2'})
        second = Commit('msg', 10, ['p' * 40], {'b.txt': 'h2', 'a.txt': 'h1'})
        assert first.commit_id == second.commit_id
        assert first == second

    def test_any_field_changes_id(self):
        base = Commit('msg', 10, [], {'a.txt': 'h1'})
        assert Commit('other', 10, [], {'a.txt': 'h1'}).commit_id != base.commit_id
        assert Commit('msg', 11, [], {'a.txt': 'h1'}).commit_id != base.commit_id
        assert Commit('msg', 10, ['p' * 40], {'a.txt': 'h1'}).commit_id != base.commit_id
        assert Commit('msg', 10, [], {'a.txt': 'h2'}).commit_id != base.commit_id

    def test_parent_order_is_significant(self):
        a, b = 'a' * 40, 'b' * 40
        assert Commit('m', 1, [a, b], {}).commit_id != Commit('m', 1, [b, a], {}).commit_id

    def test_serialization_format(self):
        commit = Commit('hello', 5, ['p' * 40], {'b.txt': 'h2', 'a.txt': 'h1'})
        assert serialize_commit(commit) == (
            b'time 5\n'
            b'parent ' + b'p' * 40 + b'\n'
            b'file h1 a.txt\n'
            b'file h2 b.txt\n'
            b'\n'
            b'hello'
        )

    def test_parse_restores_fields(self):
        commit = Commit('multi\n\nline message', 7, ['a' * 40, 'b' * 40], {'x y.txt': 'h1'})
        parsed = parse_commit(commit.commit_id, serialize_commit(commit))
        assert parsed.message == commit.message
        assert parsed.timestamp == 7
        assert parsed.parents == commit.parents
        assert parsed.files == {'x y.txt': 'h1'}
        assert parsed.is_merge()

    def test_parse_rejects_garbage(self):
        with pytest.raises(CorruptObjectError):
            parse_commit('c' * 40, b'no blank line here')
        with pytest.raises(CorruptObjectError):
            parse_commit('c' * 40, b'author me\n\nmsg')

    def test_initial_commit_is_fixed(self):
        """Every repository starts from the same initial commit."""
        first, second = initial_commit(), initial_commit()
        assert first.commit_id == second.commit_id
        assert first.message == 'initial commit'
        assert first.timestamp == 0
        assert first.parents == ()
        assert first.files == {}


class TestBuildCommit:
    """Tests for build_commit()"""

    def test_applies_index_to_parent_files(self):
        index = StagingIndex({'new.txt': 'h3', 'a.txt': 'h9'}, {'b.txt'})
        commit = build_commit('msg', ['p' * 40], index, {'a.txt': 'h1', 'b.txt': 'h2'}, timestamp=1)
        assert commit.files == {'a.txt': 'h9', 'new.txt': 'h3'}
        assert commit.parents == ('p' * 40,)

    def test_deterministic(self):
        index = StagingIndex({'a.txt': 'h1'})
        first = build_commit('msg', ['p' * 40], index, {}, timestamp=100)
        second = build_commit('msg', ['p' * 40], index, {}, timestamp=100)
        assert first.commit_id == second.commit_id

    def test_empty_message(self):
        with pytest.raises(EmptyMessageError):
            build_commit('   ', ['p' * 40], StagingIndex({'a.txt': 'h1'}), {})

    def test_no_changes(self):
        with pytest.raises(NoChangesError):
            build_commit('msg', ['p' * 40], StagingIndex(), {'a.txt': 'h1'})

    def test_uses_current_time(self):
        commit = build_commit('msg', ['p' * 40], StagingIndex({'a.txt': 'h1'}), {})
        assert commit.timestamp > 0


class TestFormatLogEntry:
    """Tests for format_log_entry()"""

    def test_regular_commit(self):
        commit = Commit('hello', 0, [], {})
        lines = format_log_entry(commit).split('\n')
        assert lines[0] == '==='
        assert lines[1] == f'commit {commit.commit_id}'
        assert lines[2].startswith('Date: ')
        assert lines[3] == 'hello'
        assert lines[4] == ''

    def test_merge_line_uses_abbrev(self):
        a, b = 'a' * 40, 'b' * 40
        lines = format_log_entry(Commit('merged', 0, [a, b], {}), abbrev=9).split('\n')
        assert lines[2] == f'Merge: {a[:9]} {b[:9]}'


class TestCommitGraphLookup:
    """Tests for CommitGraph.save(), get(), load() and resolve()"""

    def test_save_and_get(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        commit_id = save(graph, 'one', 1, [root], {'a.txt': 'h1'})

        fresh = CommitGraph(temp_repo)
        commit = fresh.get(commit_id)
        assert commit.message == 'one'
        assert commit.parents == (root,)

    def test_get_unknown(self, temp_repo):
        with pytest.raises(CommitNotFoundError):
            CommitGraph(temp_repo).get('f' * 40)

    def test_get_blob_is_not_a_commit(self, temp_repo):
        blob = objects.hash_object(temp_repo, b'data', 'blob')
        with pytest.raises(CommitNotFoundError):
            CommitGraph(temp_repo).get(blob)

    def test_load_missing_is_corruption(self, temp_repo):
        with pytest.raises(ObjectNotFoundError):
            CommitGraph(temp_repo).load('f' * 40)

    def test_resolve_full_and_short(self, temp_repo):
        graph = CommitGraph(temp_repo)
        commit_id = save(graph, 'one', 1, [initial_commit().commit_id])
        assert graph.resolve(commit_id).commit_id == commit_id
        assert CommitGraph(temp_repo).resolve(commit_id[:8]).commit_id == commit_id

    def test_resolve_unknown_prefix(self, temp_repo):
        graph = CommitGraph(temp_repo)
        commit_ids = graph.commit_ids()
        prefix = next(p for p in ('0000000', 'fffffff', '1234567')
                      if not any(cid.startswith(p) for cid in commit_ids))
        with pytest.raises(CommitNotFoundError):
            graph.resolve(prefix)

    def test_resolve_ambiguous_prefix(self, temp_repo):
        """An abbreviation matching more than one commit is refused."""
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        # 17 commits guarantee two share a first hex digit
        ids = [save(graph, f'commit {n}', n + 1, [root]) for n in range(17)]
        first_chars = [cid[0] for cid in ids]
        shared = next(c for c in first_chars if first_chars.count(c) > 1)
        with pytest.raises(CommitNotFoundError):
            CommitGraph(temp_repo).resolve(shared)

    def test_resolve_empty(self, temp_repo):
        with pytest.raises(CommitNotFoundError):
            CommitGraph(temp_repo).resolve('')


class TestCommitGraphWalks:
    """Tests for ancestry queries on CommitGraph"""

    def test_first_parent_history(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        c1 = save(graph, 'c1', 1, [root])
        side = save(graph, 'side', 2, [root])
        c2 = save(graph, 'c2', 3, [c1, side])

        history = [c.commit_id for c in graph.first_parent_history(c2)]
        assert history == [c2, c1, root]

    def test_ancestors_include_second_parents(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        c1 = save(graph, 'c1', 1, [root])
        side = save(graph, 'side', 2, [root])
        c2 = save(graph, 'c2', 3, [c1, side])

        assert graph.ancestors(c2) == {c2, c1, side, root}
        assert graph.is_ancestor(side, c2)
        assert graph.is_ancestor(c2, c2)
        assert not graph.is_ancestor(c2, side)

    def test_all_commits_newest_first(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        old = save(graph, 'old', 10, [root])
        new = save(graph, 'new', 20, [old])
        ids = [c.commit_id for c in CommitGraph(temp_repo).all_commits()]
        assert ids == [new, old, root]

    def test_commit_ids_excludes_blobs(self, temp_repo):
        blob = objects.hash_object(temp_repo, b'data', 'blob')
        ids = CommitGraph(temp_repo).commit_ids()
        assert blob not in ids
        assert repository.get_head_commit(temp_repo) in ids


class TestSplitCommit:
    """Tests for CommitGraph.split_commit()"""

    def test_linear_history(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        c1 = save(graph, 'c1', 1, [root])
        c2 = save(graph, 'c2', 2, [c1])
        assert graph.split_commit(c2, c1).commit_id == c1
        assert graph.split_commit(c1, c2).commit_id == c1

    def test_diverged_branches(self, temp_repo):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        base = save(graph, 'base', 1, [root])
        left = save(graph, 'left', 2, [base])
        right = save(graph, 'right', 3, [base])
        assert graph.split_commit(left, right).commit_id == base

    def test_nearest_via_second_parent(self, temp_repo):
        """A merge's second parent can offer a closer split point."""
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        base = save(graph, 'base', 1, [root])
        feature = save(graph, 'feature', 2, [base])
        master = save(graph, 'master', 3, [base])
        merged = save(graph, 'merge', 4, [master, feature])
        feature2 = save(graph, 'feature2', 5, [feature])
        assert graph.split_commit(feature2, merged).commit_id == feature

    def test_criss_cross_picks_lowest_id(self, temp_repo):
        """Two equally close candidates: the lexicographically lowest id wins."""
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        a = save(graph, 'a', 1, [root], {'f.txt': 'h1'})
        b = save(graph, 'b', 2, [root], {'g.txt': 'h2'})
        x = save(graph, 'x', 3, [a, b])
        y = save(graph, 'y', 4, [b, a])

        assert graph.split_commit(x, y).commit_id == min(a, b)
        assert graph.split_commit(y, x).commit_id == min(a, b)

    def test_unrelated_histories_fall_back_to_initial(self, temp_repo, caplog):
        graph = CommitGraph(temp_repo)
        root = initial_commit().commit_id
        ours = save(graph, 'ours', 1, [root])
        orphan = save(graph, 'orphan', 2, [])

        with caplog.at_level(logging.WARNING, logger='twig.utils.commits'):
            split = graph.split_commit(orphan, ours)

        assert split.commit_id == root
        assert 'no common ancestor' in caplog.text
