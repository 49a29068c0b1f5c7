import pytest

from diffreview.review import (
    DiffView,
    PendingChange,
    PresentationKind,
    Stage,
    SyntheticAddress,
    SyntheticContentStore,
    TextView,
    ViewLifecycleController,
)


def _change(change_id="c1", original="old", new="new", path="/proj/b.txt"):
    return PendingChange(
        id=change_id,
        file_path=path,
        original_content=original,
        new_content=new,
        tool_name="editor",
    )


@pytest.fixture
def store(host):
    store = SyntheticContentStore()
    host.register_content_provider("coder-diff", store)
    return store


@pytest.fixture
def controller(host, store):
    return ViewLifecycleController(host, store)


@pytest.mark.asyncio
async def test_present_modification_opens_diff(controller, host, store, console):
    kind = await controller.present(_change())

    assert kind is PresentationKind.DIFF
    original = SyntheticAddress("coder-diff", "c1", Stage.ORIGINAL, "b.txt")
    modified = SyntheticAddress("coder-diff", "c1", Stage.MODIFIED, "b.txt")
    assert controller.open_addresses("c1") == [original, modified]
    assert store.get_content(original) == "old"
    assert store.get_content(modified) == "new"

    views = host.enumerate_open_views()
    assert len(views) == 1
    assert isinstance(views[0], DiffView)
    assert views[0].title == "Coder: b.txt (editor)"
    assert "b.txt" in console.file.getvalue()


@pytest.mark.asyncio
async def test_present_new_file_opens_single_preview(controller, host, store):
    kind = await controller.present(_change(original="", new="hello"))

    assert kind is PresentationKind.NEW_FILE
    address = SyntheticAddress("coder-diff", "c1", Stage.NEW, "b.txt")
    assert controller.open_addresses("c1") == [address]
    assert store.get_content(address) == "hello"

    views = host.enumerate_open_views()
    assert len(views) == 1
    assert isinstance(views[0], TextView)
    assert views[0].preview is True


@pytest.mark.asyncio
async def test_teardown_closes_views_and_releases_content(controller, host, store):
    await controller.present(_change("c1"))
    await controller.present(_change("c2", original="", path="/proj/c.txt"))

    await controller.teardown("c1")

    assert not controller.is_open("c1")
    assert all(address.change_id != "c1" for address in store.addresses())
    assert all(not view.displays([
        SyntheticAddress("coder-diff", "c1", Stage.ORIGINAL, "b.txt"),
    ]) for view in host.enumerate_open_views())
    assert controller.open_ids() == ["c2"]


@pytest.mark.asyncio
async def test_teardown_without_views_is_noop(controller):
    await controller.teardown("missing")

    assert controller.open_ids() == []


@pytest.mark.asyncio
async def test_teardown_tolerates_views_closed_by_user(controller, host, store):
    await controller.present(_change())
    view = host.enumerate_open_views()[0]
    stale = host.enumerate_open_views()
    host.close_by_user(view)
    host.enumerate_open_views = lambda: stale

    await controller.teardown("c1")

    assert not controller.is_open("c1")
    assert len(store) == 0


@pytest.mark.asyncio
async def test_present_again_replaces_previous_view(controller, host):
    await controller.present(_change())
    await controller.present(_change())

    assert len(host.enumerate_open_views()) == 1
    assert len(controller.open_addresses("c1")) == 2


@pytest.mark.asyncio
async def test_focus_returns_to_terminal(controller, host):
    assert host.terminal_focused()

    await controller.present(_change())

    assert host.terminal_focused()


@pytest.mark.asyncio
async def test_focus_not_forced_when_terminal_was_not_focused(controller, host, tmp_path):
    target = tmp_path / "shown.txt"
    target.write_text("shown")
    await host.show_document(str(target))
    assert not host.terminal_focused()

    await controller.present(_change())

    assert not host.terminal_focused()


@pytest.mark.asyncio
async def test_host_rerenders_on_content_change(controller, host, store, console):
    await controller.present(_change(original="", new="first-version"))
    address = controller.open_addresses("c1")[0]

    store.set_content(address, "second-version")

    output = console.file.getvalue()
    assert "first-version" in output
    assert "second-version" in output
