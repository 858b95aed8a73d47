from io import BytesIO

from metaclub.models import Team
from metaclub.services.storage import UploadStore, sweep_orphan_uploads


def test_save_and_delete(tmp_path):
    store = UploadStore(directory=tmp_path / "uploads")

    stored = store.save(BytesIO(b"png bytes"), "payment.PNG")

    assert stored.path.exists()
    assert stored.path.read_bytes() == b"png bytes"
    assert stored.path.suffix == ".PNG"
    assert stored.url == f"/uploads/{stored.path.name}"

    store.delete(stored)
    assert not stored.path.exists()

    # Deleting twice is harmless
    store.delete(stored)
    store.delete(None)


def test_names_are_unique(tmp_path):
    store = UploadStore(directory=tmp_path)
    names = {store.save(BytesIO(b"x"), "a.jpg").path.name for _ in range(20)}
    assert len(names) == 20


def test_sweep_removes_only_unreferenced_files(session, tmp_path):
    store = UploadStore(directory=tmp_path)
    kept = store.save(BytesIO(b"kept"), "kept.png")
    orphan = store.save(BytesIO(b"orphan"), "orphan.png")

    session.add(Team(name="T", type="Solo", total_amount=170, transaction_id="X", screenshot_path=kept.url))
    session.commit()

    dry = sweep_orphan_uploads(session, store, dry_run=True)
    assert dry == [orphan.path]
    assert orphan.path.exists()

    removed = sweep_orphan_uploads(session, store)
    assert removed == [orphan.path]
    assert kept.path.exists()
    assert not orphan.path.exists()


def test_sweep_on_missing_directory(session, tmp_path):
    store = UploadStore(directory=tmp_path / "never-created")
    assert sweep_orphan_uploads(session, store) == []
