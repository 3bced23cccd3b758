"""
Tests for the delete guard
"""
import pytest

from referral_tracker.guards import DeleteCheck, can_delete


class TestCanDelete:

    def test_unreferenced_entities_can_be_deleted(self, storage, make_position, make_candidate):
        position = make_position()
        candidate = make_candidate()

        assert can_delete(storage, "position", position.id)
        assert can_delete(storage, "candidate", candidate.id)

    def test_referenced_entities_cannot_be_deleted(self, storage, make_referral):
        referral = make_referral()

        assert not can_delete(storage, "position", referral.position_id)
        assert not can_delete(storage, "candidate", referral.candidate_id)

    def test_referrals_are_always_deletable(self, storage, make_referral):
        referral = make_referral()

        assert can_delete(storage, "referral", referral.id)
        assert storage.can_delete("referral", 12345)

    def test_unknown_kind(self, storage):
        with pytest.raises(ValueError):
            can_delete(storage, "user", 1)


class TestCheckDelete:

    def test_outcomes(self, storage, make_referral, make_position):
        referral = make_referral()
        free_position = make_position(title="Unreferenced")

        assert storage.check_delete("position", free_position.id) == DeleteCheck.OK
        assert storage.check_delete("position", referral.position_id) == DeleteCheck.HAS_REFERRALS
        assert storage.check_delete("candidate", referral.candidate_id) == DeleteCheck.HAS_REFERRALS
        assert storage.check_delete("candidate", 99) == DeleteCheck.NOT_FOUND
        assert storage.check_delete("referral", referral.id) == DeleteCheck.OK

    def test_unknown_kind(self, storage):
        with pytest.raises(ValueError):
            storage.check_delete("activity", 1)


class TestGuardedDeletes:
    """A blocked delete leaves the store untouched"""

    def test_position_with_referral_is_kept(self, storage, make_referral):
        referral = make_referral()
        activities_before = len(storage.get_all_activities())

        assert storage.delete_position(referral.position_id) is False

        assert storage.get_position(referral.position_id) is not None
        assert len(storage.get_all_activities()) == activities_before

    def test_candidate_with_referral_is_kept(self, storage, make_referral):
        referral = make_referral()

        assert storage.delete_candidate(referral.candidate_id) is False
        assert storage.get_candidate(referral.candidate_id) is not None

    def test_delete_allowed_once_referral_is_gone(self, storage, make_referral):
        referral = make_referral()
        storage.delete_referral(referral.id)

        assert storage.delete_candidate(referral.candidate_id) is True
        assert storage.delete_position(referral.position_id) is True
