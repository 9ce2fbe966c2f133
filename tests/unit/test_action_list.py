import pytest

from trackprop.errors import ConfigError, DuplicateResultError
from trackprop.propagator.lists import AbortList, ActionList


class Counter:
    def __init__(self):
        self.n = 0


class Trace:
    def __init__(self):
        self.items = []


class CountAction:
    result_type = Counter

    def __call__(self, cache, result):
        result.get(Counter).n += 1


class OtherCountAction:
    result_type = Counter

    def __call__(self, cache, result):
        result.get(Counter).n += 10


class PlainAction:
    def __init__(self):
        self.label = "default"
        self.calls = 0

    def __call__(self, cache, result):
        self.calls += 1


class _FakeResult:
    def __init__(self, *types):
        self._slots = {t: t() for t in types}

    def get(self, t):
        return self._slots[t]


def test_empty_action_list_is_noop():
    actions = ActionList()
    result = _FakeResult()
    actions(object(), result)
    assert len(actions) == 0
    assert actions.result_types == ()


def test_result_types_folded_in_declaration_order():
    class TraceAction:
        result_type = Trace

        def __call__(self, cache, result):
            result.get(Trace).items.append("x")

    actions = ActionList(PlainAction(), CountAction(), TraceAction())
    assert actions.result_types == (Counter, Trace)


def test_duplicate_result_types_rejected_at_construction():
    with pytest.raises(DuplicateResultError, match="Counter") as exc:
        ActionList(CountAction(), OtherCountAction())
    assert isinstance(exc.value, ConfigError)


def test_members_may_share_a_type():
    first, second = PlainAction(), PlainAction()
    actions = ActionList(first, second)
    actions(None, None)
    assert (first.calls, second.calls) == (1, 1)
    assert actions.get(PlainAction) is first
    assert actions.result_types == ()


def test_lambda_actions_run_in_order():
    log = []
    actions = ActionList(lambda cache, result: log.append("a"), lambda cache, result: log.append("b"))
    actions(None, None)
    actions(None, None)
    assert log == ["a", "b", "a", "b"]


def test_non_callable_member_rejected():
    with pytest.raises(TypeError, match="not callable"):
        ActionList(42)


def test_result_type_must_be_a_class():
    class Broken:
        result_type = "Counter"

        def __call__(self, cache, result):
            pass

    with pytest.raises(TypeError, match="result_type must be a class"):
        ActionList(Broken())


def test_all_members_invoked_in_order():
    order = []

    class First:
        def __call__(self, cache, result):
            order.append("first")

    class Second:
        def __call__(self, cache, result):
            order.append("second")

    actions = ActionList(First(), Second())
    actions(None, None)
    actions(None, None)
    assert order == ["first", "second", "first", "second"]


def test_get_returns_configurable_member():
    actions = ActionList(PlainAction(), CountAction())
    member = actions.get(PlainAction)
    member.label = "configured"
    assert actions.members[0].label == "configured"
    assert PlainAction in actions
    assert OtherCountAction not in actions
    with pytest.raises(KeyError, match="OtherCountAction"):
        actions.get(OtherCountAction)


def test_abort_list_accepts_conditions_of_the_same_type():
    class Stop:
        def __call__(self, result, cache):
            return True

    first, second = Stop(), Stop()
    aborters = AbortList(first, second)
    assert aborters.first_fired(None, None) is first
    assert aborters.get(Stop) is first
