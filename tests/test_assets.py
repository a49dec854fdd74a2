import os

from h5p2pdf.content.assets import AssetResolver


def _touch(path):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"x")
    return path


def test_resolve_prefers_first_candidate(tmp_path):
    base = str(tmp_path)
    first = _touch(os.path.join(base, "images", "a.png"))
    second = _touch(os.path.join(base, "content", "images", "a.png"))
    resolver = AssetResolver(base)
    assert resolver.resolve("images/a.png") == first
    os.remove(first)
    assert resolver.resolve("images/a.png") == second


def test_resolve_falls_back_to_basename_locations(tmp_path):
    base = str(tmp_path)
    only = _touch(os.path.join(base, "images", "pic.png"))
    resolver = AssetResolver(base)
    assert resolver.resolve("some/other/dir/pic.png") == only


def test_resolve_content_dir_before_basename(tmp_path):
    base = str(tmp_path)
    in_content = _touch(os.path.join(base, "content", "media", "v.png"))
    _touch(os.path.join(base, "v.png"))
    resolver = AssetResolver(base)
    assert resolver.resolve("media/v.png") == in_content


def test_candidate_order(tmp_path):
    base = str(tmp_path)
    resolver = AssetResolver(base)
    assert resolver.candidates("images/a.png") == [
        os.path.join(base, "images/a.png"),
        os.path.join(base, "content", "images/a.png"),
        os.path.join(base, "a.png"),
        os.path.join(base, "content", "images", "a.png"),
        os.path.join(base, "images", "a.png"),
    ]


def test_leading_slash_stays_inside_package(tmp_path):
    base = str(tmp_path)
    first = _touch(os.path.join(base, "images", "pic.png"))
    _touch(os.path.join(base, "content", "images", "pic.png"))
    resolver = AssetResolver(base)
    assert resolver.candidates("/images/pic.png")[:2] == [
        os.path.join(base, "images/pic.png"),
        os.path.join(base, "content", "images/pic.png"),
    ]
    assert resolver.resolve("/images/pic.png") == first
    assert all(c.startswith(base) for c in resolver.candidates("/etc/passwd.png"))


def test_resolve_not_found_is_none(tmp_path):
    os.makedirs(os.path.join(str(tmp_path), "images", "dir.png"))
    resolver = AssetResolver(str(tmp_path))
    assert resolver.resolve("missing.png") is None
    assert resolver.resolve("images/dir.png") is None
    assert resolver.resolve("") is None
    assert resolver.resolve(None) is None
    assert resolver.resolve({"path": "x.png"}) is None
