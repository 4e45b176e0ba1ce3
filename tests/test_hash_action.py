"""Tests for the streaming hash action."""

import hashlib

import pytest
from file_analysis.actions import HashAction, HashActionState, MD5Action, Notification, SHA1Action, SHA256Action
from file_analysis.exceptions import ConfigurationError
from file_analysis.models.actions import ActionArgs, ActionType
from file_analysis.results import ActionResults, ResultsRecord

SHA256_FIELD_IDX = ResultsRecord.field_offset_in(ActionResults, "sha256")


@pytest.fixture
def action(sha256_args, results_context, fake_hash_state):
    return HashAction(sha256_args, results_context, fake_hash_state, "sha256")


class TestConstruction:
    """Tests for binding a hash state to a results field."""

    def test_initializes_hash_state(self, action, fake_hash_state):
        assert fake_hash_state.calls == ["init"]
        assert action.state is HashActionState.ACTIVE
        assert action.fed is False
        assert action.result_field_idx == SHA256_FIELD_IDX

    def test_missing_field_fails_before_init(self, sha256_args, results_context, fake_hash_state):
        """Scenario: construct with a nonexistent field name."""
        with pytest.raises(ConfigurationError, match="Bogus"):
            HashAction(sha256_args, results_context, fake_hash_state, "Bogus")

        assert fake_hash_state.calls == []
        assert results_context.assignments == []


class TestDeliverStream:
    """Tests for feeding content into the hash state."""

    def test_single_chunk_publishes_digest(self, action, sha256_args, results_context):
        """Scenario: deliver "abc", then end of file."""
        assert action.deliver_stream(b"abc") is True
        assert action.end_of_file() is False

        record = results_context.get_results(sha256_args)
        assert record.get(SHA256_FIELD_IDX) == hashlib.sha256(b"abc").hexdigest()
        assert results_context.assignments == [(SHA256_FIELD_IDX, hashlib.sha256(b"abc").hexdigest())]

    def test_digest_covers_concatenation_in_order(self, action, sha256_args, results_context):
        chunks = [b"The quick ", b"brown fox ", b"jumps over ", b"the lazy dog"]
        for chunk in chunks:
            assert action.deliver_stream(chunk) is True
        action.end_of_file()

        record = results_context.get_results(sha256_args)
        assert record.get(SHA256_FIELD_IDX) == hashlib.sha256(b"".join(chunks)).hexdigest()

    def test_length_limits_fed_bytes(self, action, fake_hash_state, sha256_args, results_context):
        assert action.deliver_stream(b"abcdef", 3) is True
        action.end_of_file()

        assert fake_hash_state.fed == [b"abc"]
        assert results_context.get_results(sha256_args).get(SHA256_FIELD_IDX) == hashlib.sha256(b"abc").hexdigest()

    def test_zero_length_chunk_does_not_mark_fed(self, action):
        assert action.deliver_stream(b"abc", 0) is True
        assert action.fed is False

    def test_empty_chunks_publish_nothing(self, action, results_context):
        """Scenario: deliver "" three times, then end of file."""
        for _ in range(3):
            assert action.deliver_stream(b"") is True
        assert action.fed is False

        assert action.end_of_file() is False
        assert results_context.assignments == []

    def test_empty_then_non_empty_marks_fed(self, action):
        action.deliver_stream(b"")
        action.deliver_stream(b"x")
        action.deliver_stream(b"")
        assert action.fed is True

    def test_does_not_touch_results(self, action, results_context):
        action.deliver_stream(b"abc")
        assert results_context.records == {}


class TestInvalidation:
    """Tests for a hash state that becomes invalid mid-stream."""

    def test_invalid_hash_declines_and_publishes_nothing(self, action, fake_hash_state, results_context):
        """Scenario: deliver "x", hash becomes invalid, deliver "y", end of file."""
        assert action.deliver_stream(b"x") is True
        fake_hash_state.invalidate()

        assert action.deliver_stream(b"y") is False
        assert action.state is HashActionState.INVALIDATED
        assert fake_hash_state.fed == [b"x"]

        assert action.end_of_file() is False
        assert action.state is HashActionState.FINALIZED
        assert "get" not in fake_hash_state.calls
        assert results_context.assignments == []

    def test_invalidation_before_end_of_file_without_further_chunks(self, action, fake_hash_state, results_context):
        action.deliver_stream(b"lots of valid content")
        fake_hash_state.invalidate()

        action.end_of_file()
        assert results_context.assignments == []

    def test_invalidated_action_stays_invalidated(self, action, fake_hash_state):
        fake_hash_state.invalidate()
        assert action.deliver_stream(b"a") is False

        # even a recovered state is not fed again
        fake_hash_state.valid = True
        assert action.deliver_stream(b"b") is False
        assert fake_hash_state.fed == []


class TestUndelivered:
    """Tests for content gaps."""

    def test_always_declines(self, action):
        assert action.undelivered(0, 10) is False
        assert action.undelivered(100, 0) is False

    def test_gap_changes_nothing(self, action, fake_hash_state, sha256_args, results_context):
        action.deliver_stream(b"ab")
        calls = list(fake_hash_state.calls)

        assert action.undelivered(2, 5) is False
        assert fake_hash_state.calls == calls
        assert action.fed is True
        assert action.state is HashActionState.ACTIVE

        # the digest covers only delivered bytes
        action.deliver_stream(b"cd")
        action.end_of_file()
        assert results_context.get_results(sha256_args).get(SHA256_FIELD_IDX) == hashlib.sha256(b"abcd").hexdigest()

    def test_gap_before_any_content_keeps_fed_false(self, action):
        action.undelivered(0, 1024)
        assert action.fed is False


class TestEndOfFile:
    """Tests for finalizing the action."""

    def test_without_deliveries_publishes_nothing(self, action, results_context):
        """Scenario: end of file with no prior deliveries."""
        assert action.end_of_file() is False
        assert results_context.assignments == []
        assert results_context.records == {}

    def test_publishes_at_most_once(self, action, results_context):
        action.deliver_stream(b"abc")
        assert action.end_of_file() is False
        assert action.end_of_file() is False
        assert len(results_context.assignments) == 1

    def test_no_content_accepted_after_end_of_file(self, action, fake_hash_state):
        action.deliver_stream(b"abc")
        action.end_of_file()
        calls = list(fake_hash_state.calls)

        assert action.deliver_stream(b"more") is False
        assert fake_hash_state.calls == calls


class TestInterest:
    """Tests for the notification kinds wanted in each state."""

    def test_active(self, action):
        assert action.wants(Notification.STREAM)
        assert action.wants(Notification.END_OF_FILE)
        assert not action.wants(Notification.GAP)

    def test_invalidated(self, action, fake_hash_state):
        fake_hash_state.invalidate()
        action.deliver_stream(b"a")
        assert not action.wants(Notification.STREAM)
        assert action.wants(Notification.END_OF_FILE)

    def test_finalized(self, action):
        action.end_of_file()
        assert not any(action.wants(n) for n in Notification)


class TestRelease:
    """Tests for releasing the owned hash state."""

    def test_close_releases_hash_state(self, action, fake_hash_state):
        action.close()
        assert fake_hash_state.released is True

    def test_close_is_idempotent(self, action, fake_hash_state):
        action.close()
        action.close()
        assert fake_hash_state.released is True

    def test_context_manager_releases_without_finalize(self, sha256_args, results_context, fake_hash_state):
        with HashAction(sha256_args, results_context, fake_hash_state, "sha256") as action:
            action.deliver_stream(b"abc")
        assert fake_hash_state.released is True
        assert results_context.assignments == []

    def test_closed_action_declines_content(self, action):
        action.close()
        assert action.deliver_stream(b"abc") is False
        assert action.end_of_file() is False


@pytest.mark.parametrize(
    ("action_cls", "action_type", "field"),
    [
        (MD5Action, ActionType.MD5, "md5"),
        (SHA1Action, ActionType.SHA1, "sha1"),
        (SHA256Action, ActionType.SHA256, "sha256"),
    ],
)
def test_concrete_actions_publish_into_their_field(action_cls, action_type, field, results_context):
    args = ActionArgs(type=action_type)
    action = action_cls.instantiate(args, results_context)
    action.deliver_stream(b"hello ")
    action.deliver_stream(b"world")
    action.end_of_file()

    model = results_context.get_results(args).to_model()
    assert getattr(model, field) == hashlib.new(field, b"hello world").hexdigest()
    assert model.model_dump(exclude_none=True).keys() == {field}
