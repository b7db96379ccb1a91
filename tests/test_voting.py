"""Tests for the vote session guard and dispute classification."""

from factfusion.voting import VoteSessionGuard, VoteState, is_disputed


class TestVoteSessionGuard:

    def test_fresh_session_allows_votes(self):
        guard = VoteSessionGuard()
        assert guard.can_vote(1)
        assert guard.state_of(1) is VoteState.UNVOTED

    def test_record_blocks_only_that_fact(self):
        guard = VoteSessionGuard()
        guard.record_vote(1)
        assert not guard.can_vote(1)
        assert guard.can_vote(2)

    def test_record_is_idempotent(self):
        guard = VoteSessionGuard()
        guard.record_vote(1)
        guard.record_vote(1)
        assert guard.state_of(1) is VoteState.VOTED

    def test_pending_then_success(self):
        guard = VoteSessionGuard()
        assert guard.begin_vote(1)
        assert guard.is_pending(1)
        assert not guard.begin_vote(1)
        guard.record_vote(1)
        assert guard.state_of(1) is VoteState.VOTED
        assert not guard.begin_vote(1)

    def test_pending_then_failure_allows_retry(self):
        guard = VoteSessionGuard()
        guard.begin_vote(1)
        guard.release_vote(1)
        assert guard.can_vote(1)
        assert guard.begin_vote(1)

    def test_release_does_not_undo_a_recorded_vote(self):
        guard = VoteSessionGuard()
        guard.record_vote(1)
        guard.release_vote(1)
        assert not guard.can_vote(1)


class TestIsDisputed:

    def test_false_votes_outnumber_positive(self, make_fact):
        assert is_disputed(make_fact(votes_interesting=1, votes_mindblowing=0, votes_false=5))

    def test_positive_votes_outnumber_false(self, make_fact):
        assert not is_disputed(make_fact(votes_interesting=10, votes_mindblowing=0, votes_false=5))

    def test_tie_is_not_disputed(self, make_fact):
        assert not is_disputed(make_fact(votes_interesting=2, votes_mindblowing=3, votes_false=5))

    def test_no_votes_is_not_disputed(self, make_fact):
        assert not is_disputed(make_fact())

    def test_mindblowing_counts_as_positive(self, make_fact):
        assert not is_disputed(make_fact(votes_interesting=0, votes_mindblowing=6, votes_false=5))
