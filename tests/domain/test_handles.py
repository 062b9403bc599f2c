"""Tests for listener and middleware registration handles."""

import pytest
from herald.domain.errors import ReplayNotEnabledError


class TestListenerHandle:
    def test_remove_detaches_listener(self, make_channel, recorder):
        channel = make_channel()
        handle = channel.subscribe(recorder)

        handle.remove()
        channel.publish(1)

        assert recorder.calls == []
        assert handle.removed

    def test_remove_twice_is_noop(self, make_channel, make_recorder):
        channel = make_channel()
        first = make_recorder()
        handle = channel.subscribe(first)
        handle.remove()

        channel.subscribe(first)
        handle.remove()

        assert channel.has_listener(first)

    def test_replay_chains(self, make_channel, make_recorder):
        channel = make_channel(replay=True, replay_buffer_size=3)
        channel.subscribe(make_recorder())
        for value in (1, 2, 3):
            channel.publish(value)

        late = make_recorder()
        handle = channel.subscribe(late)
        assert handle.replay(1) is handle
        assert late.values == [3]

    def test_replay_without_buffer_fails(self, make_channel, recorder):
        handle = make_channel().subscribe(recorder)
        with pytest.raises(ReplayNotEnabledError):
            handle.replay(1)


class TestMiddlewareHandle:
    def test_remove_detaches_middleware(self, make_channel, recorder):
        channel = make_channel()
        handle = channel.add_middleware(lambda args, proceed: None)
        channel.subscribe(recorder)

        handle.remove()
        handle.remove()
        channel.publish(1)

        assert recorder.values == [1]
        assert channel.count_middlewares() == 0
        assert handle.removed

    def test_has_no_replay(self, make_channel):
        handle = make_channel().add_middleware(lambda args, proceed: proceed(*args))
        assert not hasattr(handle, "replay")


class TestDuplicateSubscription:
    def test_duplicate_subscribe_returns_same_handle(self, make_channel, recorder):
        channel = make_channel()
        assert channel.subscribe(recorder) is channel.subscribe(recorder)

    def test_stale_handle_cannot_remove_new_registration(self, make_channel, recorder):
        channel = make_channel()
        first = channel.subscribe(recorder)
        channel.unsubscribe(recorder)

        second = channel.subscribe(recorder)
        assert second is not first

        first.remove()
        channel.publish(1)

        assert channel.has_listener(recorder)
        assert recorder.values == [1]
        assert not second.removed
