import hashlib
import os

import pytest

from errors import DecodeError, DuplicateError, IconValidationError
from models import IconSize
from services.icon_store import ContentHashed, LegacyPath, content_identifier, migrate_legacy_dir


def test_upload_identifier_is_sha1_of_bytes(store, png_bytes):
    icon = store.upload(png_bytes)
    assert icon == hashlib.sha1(png_bytes).hexdigest() + ".png"


def test_upload_writes_every_size(store, png_bytes):
    icon = store.upload(png_bytes)
    for size in IconSize:
        assert (store.root / size.directory / icon).is_file()
    assert (store.root / "origin" / icon).read_bytes() == png_bytes
    assert oct(os.stat(store.root / "16x16" / icon).st_mode & 0o777) == oct(0o644)


def test_duplicate_upload_keeps_bytes(store, png_bytes):
    icon = store.upload(png_bytes)
    before = (store.root / "32x32" / icon).read_bytes()
    with pytest.raises(DuplicateError) as exc:
        store.upload(png_bytes)
    assert exc.value.identifier == icon
    assert (store.root / "32x32" / icon).read_bytes() == before


def test_undecodable_upload_writes_nothing(store):
    with pytest.raises(DecodeError):
        store.upload(b"garbage")
    assert store.list_identifiers() == []
    assert not store.root.exists()


def test_listing_sorted(store, make_png):
    ids = [store.upload(make_png(color=(c, 0, 0, 255))) for c in (10, 20, 30)]
    assert store.list_identifiers() == sorted(ids)


def test_listing_empty_without_directory(store):
    assert store.list_identifiers() == []


def test_list_rows(store, make_png):
    for c in range(5):
        store.upload(make_png(color=(c, 0, 0, 255)))
    rows = store.list_rows(2)
    assert [len(r) for r in rows] == [2, 2, 1]
    assert [i for r in rows for i in r] == store.list_identifiers()


def test_delete_removes_all_sizes_and_is_idempotent(store, png_bytes):
    icon = store.upload(png_bytes)
    store.delete(icon)
    assert icon not in store.list_identifiers()
    for size in IconSize:
        assert not (store.root / size.directory / icon).exists()
    store.delete(icon)


def test_delete_accepts_id_without_extension(store, png_bytes):
    icon = store.upload(png_bytes)
    store.delete(icon[:-len(".png")])
    assert store.list_identifiers() == []


def test_delete_rejects_traversal(store):
    with pytest.raises(IconValidationError):
        store.delete("../secret")


def test_legacy_upload(store, png_bytes):
    ident = store.upload_legacy("build", "icons/logo.png", png_bytes)
    assert ident == LegacyPath("build", "icons/logo.png")
    assert (store.jobs_root / "build" / "customIcon" / "icons" / "logo.png").read_bytes() == png_bytes
    assert not (store.root / "16x16").exists()


@pytest.mark.parametrize("job, path", [
    ("build", "../../etc/passwd"),
    ("build", "/etc/passwd"),
    ("../other", "icon.png"),
    ("a/b", "icon.png"),
])
def test_legacy_upload_rejects_unsafe_paths(store, png_bytes, job, path):
    with pytest.raises(IconValidationError):
        store.upload_legacy(job, path, png_bytes)
    assert not store.jobs_root.exists()


def test_migrate_legacy_icon(store, png_bytes):
    store.root.mkdir(parents=True)
    old = store.root / "old.png"
    old.write_bytes(png_bytes)
    icon = store.migrate_legacy_icon(old)
    assert not old.exists()
    assert icon == hashlib.sha1(png_bytes).hexdigest() + ".png"
    for size in IconSize:
        assert (store.root / size.directory / icon).is_file()


def test_migrate_legacy_icon_already_stored(store, png_bytes):
    icon = store.upload(png_bytes)
    old = store.root / "copy.png"
    old.write_bytes(png_bytes)
    assert store.migrate_legacy_icon(old) == icon
    assert not old.exists()


def test_migrate_dir_empty_is_noop(store, tmp_path):
    legacy = tmp_path / "legacy"
    legacy.mkdir()
    assert migrate_legacy_dir(store, legacy) == {}
    assert list(legacy.iterdir()) == []
    assert not store.root.exists()


def test_migrate_dir_missing_is_noop(store, tmp_path):
    assert migrate_legacy_dir(store, tmp_path / "nope") == {}


def test_migrate_dir_only_flat_png(store, make_png):
    store.root.mkdir(parents=True)
    (store.root / "a.png").write_bytes(make_png(color=(1, 2, 3, 255)))
    (store.root / "notes.txt").write_text("keep")
    (store.root / "broken.png").write_bytes(b"garbage")
    renames = migrate_legacy_dir(store, store.root)
    assert set(renames) == {"a.png"}
    assert (store.root / "notes.txt").exists()
    assert (store.root / "broken.png").exists()
    assert store.list_identifiers() == [renames["a.png"]]


def test_locate_either_identifier(store, png_bytes):
    icon = store.upload(png_bytes)
    hashed = content_identifier(png_bytes)
    assert hashed.filename == icon
    assert store.locate(hashed, IconSize.SIZE_24) == store.root / "24x24" / icon
    legacy = store.upload_legacy("build", "logo.png", png_bytes)
    assert store.locate(legacy).read_bytes() == png_bytes


def test_content_hashed_parse(png_bytes):
    hashed = content_identifier(png_bytes)
    assert ContentHashed.parse(hashed.filename) == hashed
    assert ContentHashed.parse(hashed.digest) == hashed
    with pytest.raises(IconValidationError):
        ContentHashed.parse("../" + hashed.filename)
