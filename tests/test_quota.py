from core.quota import Quota


def test_entry_cap_is_independent_of_file_cap():
    q = Quota(file_limit=1000, entry_limit=100)
    assert q.entry_too_large(101)
    assert not q.entry_too_large(100)
    assert q.admits(101)

def test_refusal_exhausts_quota():
    q = Quota(file_limit=100, entry_limit=100)
    assert q.admits(60)
    q.consume(60)
    assert not q.admits(50)
    assert q.exhausted
    # nothing fits once exhausted, not even a small entry
    assert not q.admits(1)

def test_reaching_cap_exactly_exhausts():
    q = Quota(file_limit=100, entry_limit=100)
    q.consume(100)
    assert q.exhausted
    assert q.remaining == 0

def test_quotas_are_independent():
    a, b = Quota(file_limit=10, entry_limit=10), Quota(file_limit=10, entry_limit=10)
    a.consume(10)
    assert a.exhausted and not b.exhausted
