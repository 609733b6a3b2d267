import re

from session_identity import SESSION_KEY, SessionIdentity, generate_session_id


def test_generated_id_has_timestamp_and_random_suffix():
    session_id = generate_session_id(now_ms=1700000000000)
    assert re.fullmatch(r"session_1700000000000_[0-9a-z]{13}", session_id)
    assert generate_session_id() != generate_session_id()


def test_get_or_create_persists_in_storage():
    storage: dict[str, str] = {}
    identity = SessionIdentity(storage)
    first = identity.get_or_create()
    assert storage[SESSION_KEY] == first
    assert identity.get_or_create() == first
    assert SessionIdentity(storage).get_or_create() == first


def test_clear_forces_new_id():
    ids = iter(["session_1_a", "session_2_b"])
    identity = SessionIdentity({}, generator=lambda: next(ids))
    assert identity.get_or_create() == "session_1_a"
    identity.clear()
    assert identity.get() is None
    assert identity.get_or_create() == "session_2_b"


def test_set_overrides_existing():
    identity = SessionIdentity()
    identity.get_or_create()
    identity.set("session_custom")
    assert identity.get() == "session_custom"
