"""Property tests for DoubleBuffer switching.

Why these tests exist:
- Role bookkeeping must hold for any switch sequence, not just hand-picked ones
- Frame loops are the primary use case and must accumulate exactly
"""

from hypothesis import given
from hypothesis import strategies as st

from doublebuffer import BufferSettings, DoubleBuffer

SETTINGS = BufferSettings(track_origins=False)


@given(st.integers(), st.integers())
def test_construction_yields_initial_pair(a, b):
    buffer = DoubleBuffer(a, b, settings=SETTINGS)

    with buffer.current() as current, buffer.next() as nxt:
        assert (current.value, nxt.value) == (a, b)


@given(st.integers(), st.integers(), st.integers(min_value=0, max_value=50))
def test_switch_parity_selects_slot(a, b, switches):
    buffer = DoubleBuffer(a, b, settings=SETTINGS)

    for _ in range(switches):
        buffer.switch()

    expected = (a, b) if switches % 2 == 0 else (b, a)
    with buffer.current() as current, buffer.next() as nxt:
        assert (current.value, nxt.value) == expected
    assert buffer.generation == switches
    assert buffer.is_switched == (switches % 2 == 1)


@given(st.lists(st.integers()), st.lists(st.integers()))
def test_double_switch_is_identity(a, b):
    buffer = DoubleBuffer(list(a), list(b), settings=SETTINGS)

    buffer.switch()
    buffer.switch()

    with buffer.current() as current, buffer.next() as nxt:
        assert (current.value, nxt.value) == (a, b)


@given(st.lists(st.integers(), min_size=1, max_size=20))
def test_switch_publishes_last_write_to_next(writes):
    buffer = DoubleBuffer(None, None, settings=SETTINGS)

    for value in writes:
        with buffer.next_mut() as nxt:
            nxt.value = value
        buffer.switch()
        with buffer.current() as current:
            assert current.value == value


@given(st.integers(min_value=0, max_value=200))
def test_repeated_frames_count_up(frames):
    buffer = DoubleBuffer(0, 0, settings=SETTINGS)

    for _ in range(frames):
        with buffer.current() as current, buffer.next_mut() as nxt:
            nxt.value = current.value + 1
        buffer.switch()

    with buffer.current() as current:
        assert current.value == frames
