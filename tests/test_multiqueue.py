import pytest

from bigdatatools.multiqueue import MultiQueue, drain_count


def test_first_push_goes_to_queue_one():
    mq = MultiQueue(4)
    mq.push(0)
    assert list(mq.queues[1]) == [0]
    assert all(not q for i, q in enumerate(mq.queues) if i != 1)


def test_pushes_rotate_across_queues():
    mq = MultiQueue(4)
    for value in range(8):
        mq.push(value)
    assert [len(q) for q in mq.queues] == [2, 2, 2, 2]
    assert list(mq.queues[0]) == [3, 7]


def test_len_is_queue_count():
    assert len(MultiQueue(3)) == 3


def test_zero_queues_rejected():
    with pytest.raises(ValueError):
        MultiQueue(0)


def test_drain_count_counts_everything():
    mq = MultiQueue(4)
    for value in range(1000):
        mq.push(value)
    assert drain_count(mq, 4) == 1000
    assert len(mq) == 0
    assert sum(len(q) for q in mq.queues) == 1000


def test_drain_count_partial():
    mq = MultiQueue(4)
    for value in range(8):
        mq.push(value)
    assert drain_count(mq, 2) == 4
    assert len(mq) == 2


def test_drain_count_too_many_workers():
    with pytest.raises(ValueError):
        drain_count(MultiQueue(2), 3)