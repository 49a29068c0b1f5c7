from diffreview.review import Stage, SyntheticAddress, SyntheticContentStore


def _address(stage=Stage.NEW, change_id="c1"):
    return SyntheticAddress("coder-diff", change_id, stage, "a.txt")


def test_unknown_address_is_empty():
    store = SyntheticContentStore()

    assert store.get_content(_address()) == ""


def test_set_overwrites_and_notifies():
    store = SyntheticContentStore()
    seen = []
    store.on_did_change(seen.append)

    store.set_content(_address(), "one")
    store.set_content(_address(), "two")

    assert store.get_content(_address()) == "two"
    assert seen == [_address(), _address()]


def test_remove_is_idempotent():
    store = SyntheticContentStore()
    store.set_content(_address(), "text")

    store.remove_content(_address())
    store.remove_content(_address())

    assert _address() not in store
    assert store.get_content(_address()) == ""


def test_dispose_all_clears_blobs_and_listeners():
    store = SyntheticContentStore()
    seen = []
    store.on_did_change(seen.append)
    store.set_content(_address(Stage.ORIGINAL), "a")
    store.set_content(_address(Stage.MODIFIED), "b")

    store.dispose_all()
    store.set_content(_address(), "c")

    assert len(store) == 1
    assert len(seen) == 2
