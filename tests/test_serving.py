import io

import pytest
from PIL import Image

from errors import IconValidationError, NotFoundError
from models import IconSize
from services.serving import JobIconActions, ResizeCache, SharedIconResolver


@pytest.fixture
def resolver(store):
    return SharedIconResolver(store, "http://ci.example.com/")


def test_size_tokens():
    assert IconSize.from_token("16x16") is IconSize.SIZE_16
    assert IconSize.from_token("32x32") is IconSize.SIZE_32
    assert IconSize.from_token("99x99") is IconSize.ORIGIN
    assert IconSize.from_token("origin") is IconSize.ORIGIN
    assert IconSize.from_token(None) is IconSize.ORIGIN
    assert not IconSize.is_valid("origin")


def test_resolve_precomputed_variant(store, resolver, png_bytes):
    icon = store.upload(png_bytes)
    assert resolver.resolve(icon, "24x24") == store.root / "24x24" / icon
    assert resolver.resolve(icon) == store.root / "origin" / icon


def test_read_variant_and_original(store, resolver, png_bytes):
    icon = store.upload(png_bytes)
    small = resolver.read(icon, "16x16")
    assert Image.open(io.BytesIO(small.data)).size == (16, 16)
    assert resolver.read(icon).data == png_bytes


def test_unknown_size_token_serves_original(store, resolver, png_bytes):
    icon = store.upload(png_bytes)
    assert resolver.read(icon, "99x99").data == png_bytes


def test_missing_icon_not_found(resolver):
    with pytest.raises(NotFoundError):
        resolver.resolve("0" * 40 + ".png", "16x16")


def test_read_after_delete_not_found(store, resolver, png_bytes):
    icon = store.upload(png_bytes)
    store.delete(icon)
    with pytest.raises(NotFoundError):
        resolver.read(icon, "16x16")


def test_url(resolver):
    assert resolver.url("abc.png", "32x32") == "http://ci.example.com/userContent/customIcon/32x32/abc.png"
    assert resolver.url("abc.png", "bogus") == "http://ci.example.com/userContent/customIcon/origin/abc.png"
    assert resolver.url("abc") == "http://ci.example.com/userContent/customIcon/origin/abc.png"


def test_resize_cache_bounded():
    cache = ResizeCache(max_entries=2)
    cache.put(16, b"a")
    cache.put(24, b"b")
    assert cache.get(16) == b"a"
    cache.put(32, b"c")
    assert 24 not in cache
    assert cache.get(16) == b"a"
    assert len(cache) == 2
    with pytest.raises(ValueError):
        ResizeCache(0)


def test_legacy_action_resizes_and_caches(store, make_png):
    original = make_png(64, 64)
    store.upload_legacy("build", "logo.png", original)
    action = JobIconActions(store).for_job("build", "logo.png")

    payload = action.serve("24x24")
    assert Image.open(io.BytesIO(payload.data)).size == (24, 24)
    assert 24 in action.cache

    # Cached bytes survive the file going away
    (store.legacy_dir("build") / "logo.png").unlink()
    assert action.serve("24x24").data == payload.data
    with pytest.raises(NotFoundError):
        action.serve()


def test_legacy_action_original(store, make_png):
    original = make_png(40, 40)
    store.upload_legacy("build", "logo.png", original)
    action = JobIconActions(store).for_job("build", "logo.png")
    for token in (None, "", "99x99"):
        payload = action.serve(token)
        assert payload.data == original
        assert payload.media_type == "image/png"
    assert len(action.cache) == 0


def test_legacy_action_missing_file(store):
    action = JobIconActions(store).for_job("build", "missing.png")
    with pytest.raises(NotFoundError):
        action.serve("16x16")


def test_actions_reused_per_iconfile(store):
    actions = JobIconActions(store)
    first = actions.for_job("build", "a.png")
    assert actions.for_job("build", "a.png") is first
    second = actions.for_job("build", "b.png")
    assert second is not first
    actions.discard("build")
    assert actions.for_job("build", "b.png") is not second


def test_resize_cache_miss_returns_none():
    cache = ResizeCache(max_entries=1)
    assert cache.get(16) is None
    cache.put(16, b"a")
    cache.put(24, b"b")
    assert cache.get(16) is None
    assert cache.get(24) == b"b"


def test_legacy_action_rejects_unsafe_iconfile(store):
    with pytest.raises(IconValidationError):
        JobIconActions(store).for_job("build", "../../etc/passwd")
