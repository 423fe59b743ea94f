"""Tests for thread reconstruction."""

import pytest

from prthreads.models import Comment
from prthreads.threads import find_root, organize_threads


def reply_ids(thread):
    return [c.id for c in thread.replies]


class TestFindRoot:
    """Tests for the find_root chain walk."""

    def test_walks_to_parentless_comment(self, make_comment):
        comments = [make_comment(1), make_comment(2, 1), make_comment(3, 2)]
        by_id = {c.id: c for c in comments}

        assert find_root(comments[2], by_id) == 1

    def test_broken_chain_stops_at_last_resolvable_comment(self, make_comment):
        comments = [make_comment(2, 99), make_comment(3, 2)]
        by_id = {c.id: c for c in comments}

        assert find_root(comments[1], by_id) == 2

    def test_cycle_terminates(self, make_comment):
        a = make_comment(10, 20)
        b = make_comment(20, 10)
        by_id = {10: a, 20: b}

        assert find_root(a, by_id) == 20
        assert find_root(b, by_id) == 10

    def test_self_reference_terminates(self, make_comment):
        a = make_comment(4, 4)

        assert find_root(a, {4: a}) == 4

    def test_records_every_visited_comment(self, make_comment):
        comments = [make_comment(1), make_comment(2, 1), make_comment(3, 2)]
        by_id = {c.id: c for c in comments}
        resolved = {}

        find_root(comments[2], by_id, resolved)

        assert resolved == {3: 1, 2: 1, 1: 1}

    def test_uses_resolved_cache(self, make_comment):
        comments = [make_comment(2, 1), make_comment(3, 2)]
        by_id = {c.id: c for c in comments}

        # Comment 1 is not indexed, the cache alone decides the root
        assert find_root(comments[1], by_id, {2: 1}) == 1


class TestOrganizeThreads:
    """Tests for organize_threads."""

    def test_empty_input(self):
        assert organize_threads([]) == {}

    def test_linear_chain_forms_one_thread(self, make_comment):
        comments = [make_comment(1), make_comment(2, 1), make_comment(3, 2)]

        threads = organize_threads(comments)

        assert list(threads) == [1]
        assert threads[1].root.id == 1
        assert reply_ids(threads[1]) == [2, 3]

    def test_orphan_reply_is_dropped(self, make_comment):
        assert organize_threads([make_comment(5, 99)]) == {}

    def test_dangling_reference_is_not_placed(self, make_comment):
        comments = [make_comment(1), make_comment(2, 1), make_comment(3, 42)]

        threads = organize_threads(comments)

        assert reply_ids(threads[1]) == [2]
        assert all(3 not in reply_ids(t) for t in threads.values())

    def test_every_root_gets_a_thread(self, make_comment):
        comments = [make_comment(1), make_comment(2), make_comment(3, 1), make_comment(4)]

        threads = organize_threads(comments)

        assert set(threads) == {1, 2, 4}
        for root_id, thread in threads.items():
            assert thread.root.id == root_id

    def test_replies_before_root_are_kept(self, make_comment):
        comments = [make_comment(3, 2), make_comment(2, 1), make_comment(1)]

        threads = organize_threads(comments)

        assert reply_ids(threads[1]) == [3, 2]

    def test_branching_replies_share_root(self, make_comment):
        comments = [
            make_comment(1),
            make_comment(2, 1),
            make_comment(3, 1),
            make_comment(4, 2),
            make_comment(5, 3),
            make_comment(6),
            make_comment(7, 6),
        ]

        threads = organize_threads(comments)

        assert sorted(reply_ids(threads[1])) == [2, 3, 4, 5]
        assert reply_ids(threads[6]) == [7]

    def test_each_reply_appears_exactly_once(self, make_comment):
        comments = [make_comment(1)] + [make_comment(i, i - 1) for i in range(2, 50)]

        threads = organize_threads(comments)

        ids = reply_ids(threads[1])
        assert len(ids) == len(set(ids)) == 48

    def test_cycle_produces_no_thread(self, make_comment):
        comments = [make_comment(1), make_comment(10, 20), make_comment(20, 10)]

        threads = organize_threads(comments)

        assert list(threads) == [1]
        assert threads[1].replies == []

    def test_reply_into_cycle_is_dropped(self, make_comment):
        comments = [make_comment(10, 20), make_comment(20, 10), make_comment(30, 10)]

        assert organize_threads(comments) == {}

    def test_duplicate_ids_keep_first_occurrence(self, make_comment):
        comments = [
            make_comment(1, body="first"),
            make_comment(2, 1),
            make_comment(1, body="second"),
            make_comment(2, 1),
        ]

        threads = organize_threads(comments)

        assert threads[1].root.body == "first"
        assert reply_ids(threads[1]) == [2]

    def test_zero_is_an_ordinary_id(self):
        comments = [Comment(id=0), Comment(id=1, parent_id=0)]

        threads = organize_threads(comments)

        assert list(threads) == [0]
        assert reply_ids(threads[0]) == [1]

    def test_idempotent(self, make_comment):
        comments = [
            make_comment(1),
            make_comment(2, 1),
            make_comment(3, 2),
            make_comment(4),
            make_comment(5, 77),
        ]

        first = organize_threads(comments)
        second = organize_threads(comments)

        assert set(first) == set(second)
        for root_id in first:
            assert set(reply_ids(first[root_id])) == set(reply_ids(second[root_id]))

    def test_results_are_independent_between_calls(self, make_comment):
        first = organize_threads([make_comment(1), make_comment(2, 1)])
        second = organize_threads([make_comment(1)])

        assert reply_ids(first[1]) == [2]
        assert second[1].replies == []

    @pytest.mark.parametrize("order", [[0, 1, 2, 3], [3, 2, 1, 0], [2, 0, 3, 1]])
    def test_input_order_does_not_change_membership(self, make_comment, order):
        comments = [make_comment(1), make_comment(2, 1), make_comment(3, 2), make_comment(4, 3)]

        threads = organize_threads([comments[i] for i in order])

        assert set(threads) == {1}
        assert sorted(reply_ids(threads[1])) == [2, 3, 4]
