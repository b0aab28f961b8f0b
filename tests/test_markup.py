"""
Tests for the markup builders.
"""

import asyncio

import pytest

from responsive_picture.errors import PlaceholderGenerationError
from responsive_picture.markup import AttributeTag, Img, Picture, Renderable, Source
from responsive_picture.models import ImgDecoding, ImgLoading

from conftest import FakeEngine


def test_attribute_tag_build():
    tag = AttributeTag("img").set_attribute("src", "a.jpg").set_attribute("alt", "A")
    assert tag.build() == '<img src="a.jpg" alt="A">'


def test_attribute_tag_last_write_wins_in_first_insertion_order():
    tag = AttributeTag("x")
    tag.set_attribute("a", "1").set_attribute("b", "2").set_attribute("a", "3")

    html = tag.build()
    assert html == '<x a="3" b="2">'
    assert html.count('a="') == 1
    assert tag.attributes == {"a": "3", "b": "2"}


def test_attribute_tag_does_not_escape():
    tag = AttributeTag("img").set_attribute("alt", "a & b")
    assert tag.build() == '<img alt="a & b">'


def test_attribute_tag_without_attributes():
    assert AttributeTag("picture").build() == "<picture>"


def test_source_exact_serialization():
    source = (
        Source("image/webp")
        .add_srcsets("a.webp 240w", "b.webp 640w")
        .set_max_width("640")
    )
    assert source.render() == (
        '<source type="image/webp" sizes="(max-width: 640px) 100vw, 640px" '
        'srcset="a.webp 240w, b.webp 640w">'
    )


def test_source_keeps_duplicates_and_order():
    source = Source("image/png").add_srcsets("b 2w").add_srcsets("a 1w", "b 2w")
    assert source.srcset == ["b 2w", "a 1w", "b 2w"]
    assert 'srcset="b 2w, a 1w, b 2w"' in source.render()


def test_source_render_reflects_later_additions():
    source = Source("image/png").set_max_width("100").add_srcsets("a 100w")
    first = source.render()
    source.add_srcsets("b 200w")
    assert first != source.render()
    assert source.render().endswith('srcset="a 100w, b 200w">')


def test_img_defaults():
    img = Img("out/hero.png", "A hero")
    assert img.render() == (
        '<img loading="eager" decoding="sync" src="out/hero.png" alt="A hero" style="">'
    )


def test_img_from_image_path(tmp_path):
    img = Img.from_image_path("photos/in/hero.jpg", tmp_path / "out", "Hero")
    assert img.src == str(tmp_path / "out" / "hero.jpg")


def test_img_loading_and_decoding_overwrite_in_place():
    img = Img("a.jpg", "A").set_loading(ImgLoading.LAZY).set_decoding(ImgDecoding.ASYNC)
    assert img.render().startswith('<img loading="lazy" decoding="async" src="a.jpg" alt="A"')

    img.set_decoding(ImgDecoding.AUTO)
    assert 'decoding="auto"' in img.render()


def test_img_style_flattening():
    img = Img("a.jpg", "A").set_style("color", "red").set_style("margin", "0")
    assert img.render().endswith('style="color: red; margin: 0;">')


def test_img_render_is_idempotent():
    img = Img("a.jpg", "A").set_style("color", "red")
    assert img.render() == img.render()


def test_img_generate_placeholder_sets_three_styles():
    img = Img("a.jpg", "A")
    asyncio.run(img.generate_placeholder(engine=FakeEngine(placeholder="QUJDRA==")))

    assert list(img.style) == ["background", "background-size", "background-repeat"]
    assert img.style["background"] == "url(data:image/jpeg;base64,QUJDRA==)"
    assert img.render().endswith(
        'style="background: url(data:image/jpeg;base64,QUJDRA==); '
        'background-size: cover; background-repeat: no-repeat;">'
    )


def test_img_generate_placeholder_failure_carries_path():
    img = Img("missing.jpg", "A")
    with pytest.raises(PlaceholderGenerationError) as exc_info:
        asyncio.run(img.generate_placeholder(engine=FakeEngine(placeholder=None)))

    assert exc_info.value.image_path.name == "missing.jpg"
    assert img.style == {}


def test_picture_orders_sources_before_img():
    img = Img("a.jpg", "A")
    avif = Source("image/avif").add_srcsets("a.avif 1w").set_max_width("1")
    webp = Source("image/webp").add_srcsets("a.webp 1w").set_max_width("1")

    html = Picture(img).add_sources(avif).add_sources(webp).render()

    assert html.startswith("<picture><source type=\"image/avif\"")
    assert html.index("image/avif") < html.index("image/webp") < html.index("<img")
    assert html.endswith("</picture>")


def test_picture_without_sources():
    assert Picture(Img("a.jpg", "A")).render() == f"<picture>{Img('a.jpg', 'A').render()}</picture>"


def test_builders_are_renderable():
    img = Img("a.jpg", "A")
    for builder in (img, Source("image/png"), Picture(img)):
        assert isinstance(builder, Renderable)
        assert str(builder) == builder.render()
