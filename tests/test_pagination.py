import copy

import pytest

from h5p2pdf.config import RenderSettings
from h5p2pdf.content.assets import AssetResolver
from h5p2pdf.docs.model import GRAY, TextRun
from h5p2pdf.docs.writer import DocumentWriter
from h5p2pdf.render import render_content, stamp_page_numbers


def _three_page_writer():
    w = DocumentWriter(RenderSettings())
    w.text("one")
    w.add_page()
    w.text("two")
    w.add_page()
    w.text("three")
    return w


def test_every_page_gets_one_label_at_the_same_offset():
    w = _three_page_writer()
    assert stamp_page_numbers(w) == 3
    offsets = set()
    for i, page in enumerate(w.document.pages):
        labels = [it for it in page.items if isinstance(it, TextRun) and it.role == "page_number"]
        assert [lb.text for lb in labels] == [f"Page {i + 1}"]
        label = labels[0]
        assert label.color == GRAY
        assert label.font_size == 10
        assert label.page_index == i
        offsets.add(label.y)
        line = label.lines[0]
        assert line.x + line.width / 2 == pytest.approx(page.width / 2)
    assert offsets == {w.document.pages[0].height - 35}
    assert w.page_count == 3


def test_stamping_leaves_other_content_untouched():
    w = _three_page_writer()
    before = [copy.deepcopy(p.items) for p in w.document.pages]
    stamp_page_numbers(w)
    for page, items in zip(w.document.pages, before):
        others = [it for it in page.items if not (isinstance(it, TextRun) and it.role == "page_number")]
        assert others == items
        assert page.margins.bottom == 70


def test_render_content_stamps_after_slides(tmp_path):
    w = DocumentWriter(RenderSettings())
    content = {"presentation": {"slides": [{"title": "A"}, {"title": "B"}]}}
    render_content(content, "H5P.CoursePresentation 1.25", w, AssetResolver(str(tmp_path)))
    assert w.page_count == 2
    assert w.document.texts(role="page_number") == ["Page 1", "Page 2"]
    assert w.document.texts(role="heading") == ["A", "B"]


def test_render_content_uses_tree_for_other_libraries(tmp_path):
    w = DocumentWriter(RenderSettings())
    content = {"presentation": {"slides": [{"title": "Intro"}, {"title": "Outro"}]}, "title": "Quiz"}
    render_content(content, "H5P.QuestionSet 1.20", w, AssetResolver(str(tmp_path)))
    assert w.document.texts(role="body") == ["Quiz", "Intro", "Outro"]
    assert w.page_count == 1
    assert w.document.texts(role="page_number") == ["Page 1"]


def test_render_content_without_main_library(tmp_path):
    w = DocumentWriter(RenderSettings())
    embedded = render_content({"text": "Hi"}, None, w, AssetResolver(str(tmp_path)))
    assert embedded == set()
    assert w.document.texts() == ["Hi", "Page 1"]
