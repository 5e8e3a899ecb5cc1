"""Tests for Subject/Observer notification order, removal and failure policy."""

from unittest.mock import Mock

import pytest

from internhub import DispatchError, DispatchPolicy, FunctionObserver, Observer, Subject


class TestSubjectNotify:
    """notify() delivers in registration order to a snapshot of observers."""

    def test_notify_follows_registration_order(self, make_recorder, calls):
        subject = Subject("s")
        a, b, c = make_recorder("A"), make_recorder("B"), make_recorder("C")
        for obs in (a, b, c):
            subject.add_observer(obs)

        delivered = subject.notify("x")

        assert calls == [("A", "x"), ("B", "x"), ("C", "x")]
        assert delivered == 3

    def test_removing_middle_observer(self, make_recorder, calls):
        subject = Subject("s")
        a, b, c = make_recorder("A"), make_recorder("B"), make_recorder("C")
        for obs in (a, b, c):
            subject.add_observer(obs)

        subject.remove_observer(b)
        subject.notify(1)

        assert calls == [("A", 1), ("C", 1)]

    def test_removing_unregistered_observer_is_noop(self, make_recorder):
        subject = Subject("s")
        subject.add_observer(make_recorder("A"))
        subject.remove_observer(make_recorder("stranger"))
        assert subject.count() == 1

    def test_notify_without_observers(self):
        assert Subject("empty").notify("anything") == 0

    def test_duplicates_allowed_and_removed_one_at_a_time(self, make_recorder, calls):
        subject = Subject("s")
        a = make_recorder("A")
        subject.add_observer(a)
        subject.add_observer(a)

        subject.notify("first")
        subject.remove_observer(a)
        subject.notify("second")

        assert calls == [("A", "first"), ("A", "first"), ("A", "second")]

    def test_removal_uses_identity_not_equality(self):
        class AlwaysEqual:
            def __init__(self):
                self.seen = []

            def update(self, context):
                self.seen.append(context)

            def __eq__(self, other):
                return True

            __hash__ = object.__hash__

        first, second = AlwaysEqual(), AlwaysEqual()
        subject = Subject("s")
        subject.add_observer(first)
        subject.add_observer(second)

        subject.remove_observer(second)
        subject.notify("ping")

        assert first.seen == ["ping"]
        assert second.seen == []

    def test_observer_added_during_notify_waits_for_next_pass(self, make_recorder, calls):
        subject = Subject("s")
        late = make_recorder("late")

        def add_late(context):
            calls.append(("adder", context))
            subject.add_observer(late)

        subject.add_observer(FunctionObserver(add_late))
        subject.notify(1)
        assert calls == [("adder", 1)]

        calls.clear()
        subject.notify(2)
        assert calls == [("adder", 2), ("late", 2)]

    def test_observer_removed_during_notify_still_gets_current_pass(self, make_recorder, calls):
        subject = Subject("s")
        victim = make_recorder("victim")
        subject.add_observer(FunctionObserver(lambda ctx: subject.remove_observer(victim)))
        subject.add_observer(victim)

        subject.notify("now")
        subject.notify("later")

        assert calls == [("victim", "now")]


class TestSubjectListHelpers:
    """count/get/index_of/remove_at mirror a plain ordered list."""

    def test_get_and_index_of(self, make_recorder):
        subject = Subject("s")
        a, b = make_recorder("A"), make_recorder("B")
        subject.add_observer(a)
        subject.add_observer(b)
        subject.add_observer(a)

        assert subject.get(1) is b
        assert subject.get(3) is None
        assert subject.get(-1) is None
        assert subject.index_of(a) == 0
        assert subject.index_of(a, 1) == 2
        assert subject.index_of(make_recorder("C")) == -1

    def test_remove_at(self, make_recorder):
        subject = Subject("s")
        a, b = make_recorder("A"), make_recorder("B")
        subject.add_observer(a)
        subject.add_observer(b)

        subject.remove_at(0)
        assert subject.observers() == [b]
        with pytest.raises(IndexError):
            subject.remove_at(5)


class TestDispatchPolicy:
    """STOP propagates the first failure; CONTINUE finishes the pass then raises DispatchError."""

    def _subject_with_failure(self, policy, make_recorder):
        subject = Subject("s", policy=policy)
        failing = Mock()
        failing.update.side_effect = RuntimeError("observer broke")
        subject.add_observer(make_recorder("A"))
        subject.add_observer(failing)
        subject.add_observer(make_recorder("C"))
        return subject, failing

    def test_stop_is_default(self):
        assert Subject("s").policy is DispatchPolicy.STOP

    def test_policy_from_environment(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_POLICY", "continue")
        assert Subject("s").policy is DispatchPolicy.CONTINUE

    def test_stop_aborts_remaining_observers(self, make_recorder, calls):
        subject, _ = self._subject_with_failure(DispatchPolicy.STOP, make_recorder)

        with pytest.raises(RuntimeError, match="observer broke"):
            subject.notify("ctx")

        assert calls == [("A", "ctx")]

    def test_continue_notifies_everyone_then_raises(self, make_recorder, calls):
        subject, failing = self._subject_with_failure("continue", make_recorder)

        with pytest.raises(DispatchError) as excinfo:
            subject.notify("ctx")

        assert calls == [("A", "ctx"), ("C", "ctx")]
        assert len(excinfo.value.failures) == 1
        receiver, exc = excinfo.value.failures[0]
        assert receiver is failing
        assert isinstance(exc, RuntimeError)


class TestObserver:
    """Observer ABC and FunctionObserver."""

    def test_observer_requires_update(self):
        with pytest.raises(TypeError):
            Observer()

    def test_function_observer_forwards_context(self):
        seen = []
        obs = FunctionObserver(seen.append, observer_id="collector")
        subject = Subject("s")
        subject.add_observer(obs)
        subject.notify({"checked": True})

        assert seen == [{"checked": True}]
        assert obs.observer_id == "collector"
