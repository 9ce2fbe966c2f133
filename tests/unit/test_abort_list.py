from trackprop.propagator.lists import AbortList


class Never:
    def __init__(self):
        self.calls = 0

    def __call__(self, result, cache):
        self.calls += 1
        return False


class Always:
    def __call__(self, result, cache):
        return True


class CountingAlways:
    def __init__(self):
        self.calls = 0

    def __call__(self, result, cache):
        self.calls += 1
        return True


def test_empty_abort_list_never_fires():
    aborters = AbortList()
    assert aborters(None, None) is False
    assert aborters.first_fired(None, None) is None


def test_short_circuit_skips_later_members():
    second = CountingAlways()
    aborters = AbortList(Always(), second)
    assert aborters(None, None) is True
    assert second.calls == 0


def test_later_member_evaluated_when_earlier_does_not_fire():
    first = Never()
    second = CountingAlways()
    aborters = AbortList(first, second)
    assert aborters.first_fired(None, None) is second
    assert first.calls == 1
    assert second.calls == 1


def test_no_member_fires():
    first = Never()
    aborters = AbortList(first)
    assert aborters(None, None) is False
    assert first.calls == 1
