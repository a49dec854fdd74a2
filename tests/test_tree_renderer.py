import os

from PIL import Image

from h5p2pdf.config import RenderSettings
from h5p2pdf.content.assets import AssetResolver
from h5p2pdf.docs.model import ImageItem, TextRun
from h5p2pdf.docs.writer import DocumentWriter
from h5p2pdf.render.tree import TreeRenderer, choice_label, is_present


def _renderer(base_dir):
    writer = DocumentWriter(RenderSettings())
    return TreeRenderer(writer, AssetResolver(str(base_dir))), writer


def _png(path, size=(200, 100)):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    Image.new("RGB", size, "green").save(path)
    return path


def test_mapping_title_then_lettered_choices(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({
        "title": "Hello <b>World</b>",
        "choices": ["Yes", "No"],
        "library": "H5P.TrueFalse",
        "metadata": {"foo": 1, "title": "Secret metadata"},
    })
    # each choice is lettered, walked as an item, then walked again with the remaining keys
    assert w.document.texts() == ["Hello World", "A) Yes", "Yes", "B) No", "No", "Yes", "No"]


def test_priority_keys_come_first_in_fixed_order(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({
        "extra": "Last of all",
        "description": "Third",
        "text": "Second",
        "title": "First",
    })
    assert w.document.texts() == ["First", "Second", "Third", "Last of all"]


def test_structural_keys_are_never_rendered(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({
        "params": {"text": "hidden params"},
        "subContent": [{"text": "hidden sub"}],
        "files": ["hidden files"],
        "type": "hidden type",
        "mime": "hidden mime",
        "library": "hidden library",
        "content": {"text": "shown"},
    })
    assert w.document.texts() == ["shown"]


def test_sequences_render_in_order(tmp_path):
    r, w = _renderer(tmp_path)
    r.render(["one", ["two", {"text": "three"}], "four"])
    assert w.document.texts() == ["one", "two", "three", "four"]


def test_metadata_like_strings_and_scalars_are_skipped(tmp_path):
    r, w = _renderer(tmp_path)
    r.render([
        "H5P.Image 1.1",
        "image/png",
        "0b6a9bd2-3e5c-4c55-9b0d-3e6f1d2a8c11",
        "TRUE",
        "   ",
        "<p></p>",
        3,
        True,
        None,
        {"count": 0, "flag": False, "x": None},
    ])
    assert w.document.texts() == []


def test_choice_objects_render_label_and_nested_content(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({
        "question": "<p>Capital of France?</p>",
        "answers": [
            {"text": "<div>Paris</div>", "correct": True, "tipsAndFeedback": {"tip": "Think Eiffel"}},
            {"text": "Rome", "correct": False},
        ],
    })
    assert w.document.texts() == [
        "Capital of France?",
        "A) Paris", "Paris", "Think Eiffel",
        "B) Rome", "Rome",
        "Paris", "Think Eiffel", "Rome",
    ]


def test_choice_label_lookup_order():
    assert choice_label("plain") == "plain"
    assert choice_label({"label": "L", "title": "T"}) == "T"
    assert choice_label({"text": "X", "title": "T"}) == "X"
    assert choice_label({"text": "", "label": "L"}) == "L"
    assert choice_label({"correct": True}) == ""
    assert choice_label(None) == ""


def test_first_present_choice_key_wins(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({"choices": "", "answers": ["Alpha"], "options": ["Beta"]})
    assert w.document.texts() == ["A) Alpha", "Alpha", "Alpha", "Beta"]


def test_more_than_26_choices_use_double_letters(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({"options": [f"Option {i}" for i in range(28)]})
    texts = [t for t in w.document.texts() if ") " in t]
    assert len(texts) == 28
    assert texts[25] == "Z) Option 25"
    assert texts[26] == "AA) Option 26"
    assert texts[27] == "AB) Option 27"


def test_inline_image_reference_is_embedded_not_printed(tmp_path):
    _png(os.path.join(str(tmp_path), "content", "images", "pic.png"))
    r, w = _renderer(tmp_path)
    r.render(["Before", "images/pic.png", "After"])
    items = w.document.iter_items()
    assert isinstance(items[0], TextRun) and items[0].text == "Before"
    assert isinstance(items[1], ImageItem)
    assert isinstance(items[2], TextRun) and items[2].text == "After"
    assert items[1].width <= w.content_width + 1e-6
    assert items[1].height <= 400 + 1e-6
    assert len(r.embedded) == 1


def test_path_field_image_is_embedded_after_recursion(tmp_path):
    _png(os.path.join(str(tmp_path), "content", "images", "pic.png"))
    r, w = _renderer(tmp_path)
    r.render({"image": {"path": "images/pic.png", "mime": "image/png", "alt": "A green box"}})
    items = w.document.iter_items()
    assert isinstance(items[0], TextRun) and items[0].text == "A green box"
    images = [it for it in items if isinstance(it, ImageItem)]
    # once while walking the "path" value, once for the image field itself
    assert len(images) == 2
    assert r.embedded == {os.path.abspath(os.path.join(str(tmp_path), "content", "images", "pic.png"))}


def test_missing_image_reference_falls_back_to_text(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({"file": "missing.png", "caption": "images/missing.png"})
    assert [it for it in w.document.iter_items() if isinstance(it, ImageItem)] == []
    assert w.document.texts() == ["missing.png", "images/missing.png"]


def test_corrupt_image_is_skipped_with_warning(tmp_path, capsys):
    bad = os.path.join(str(tmp_path), "images", "bad.png")
    os.makedirs(os.path.dirname(bad))
    with open(bad, "wb") as f:
        f.write(b"definitely not a png")
    r, w = _renderer(tmp_path)
    r.render(["images/bad.png", "Still here"])
    assert w.document.texts() == ["Still here"]
    assert "Couldn't embed image" in capsys.readouterr().out
    assert r.embedded == set()


def test_is_present_follows_json_truthiness():
    assert is_present([])
    assert is_present({})
    assert is_present("x")
    assert not is_present("")
    assert not is_present(None)
    assert not is_present(False)
    assert not is_present(0)


def test_single_answer_is_lettered_then_walked_twice(tmp_path):
    r, w = _renderer(tmp_path)
    r.render({"answers": [{"text": "Paris", "correct": True}]})
    assert w.document.texts() == ["A) Paris", "Paris", "Paris"]


def test_image_that_is_never_placed_is_not_counted(tmp_path):
    _png(os.path.join(str(tmp_path), "content", "images", "pic.png"))
    writer = DocumentWriter(RenderSettings(image_max_height=0))
    r = TreeRenderer(writer, AssetResolver(str(tmp_path)))
    r.render(["images/pic.png"])
    assert [it for it in writer.document.iter_items() if isinstance(it, ImageItem)] == []
    assert r.embedded == set()
