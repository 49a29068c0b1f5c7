import pytest

from diffreview.review import Stage, SyntheticAddress, SyntheticContentStore


@pytest.mark.asyncio
async def test_document_views_do_not_accumulate(host, tmp_path):
    store = SyntheticContentStore()
    host.register_content_provider("coder-diff", store)
    review = await host.open_text(SyntheticAddress("coder-diff", "c1", Stage.NEW, "n.txt"))
    paths = []
    for name in ("one.txt", "two.txt", "three.txt"):
        path = tmp_path / name
        path.write_text(name)
        paths.append(str(path))
        await host.show_document(str(path))

    views = host.enumerate_open_views()

    assert review in views
    documents = [v for v in views if isinstance(v.target, str)]
    assert [v.target for v in documents] == [paths[-1]]
    assert len(views) == 2
