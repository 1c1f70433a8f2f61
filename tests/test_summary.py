from datetime import date

import pytest
from jinja2 import Environment
from markupsafe import Markup
from PIL import Image

from postcard.config import parse_config
from postcard.images import ImageVariant, SizedImage
from postcard.summary import PostSummary, SummaryRenderer, render_summary


def make_image():
    return SizedImage.from_variants(
        [ImageVariant("/img/cover-400.jpg", 400, 300), ImageVariant("/img/cover-800.jpg", 800, 600)]
    )


def test_render_without_image():
    html = render_summary("2018-01-01", "Hello World", "/hello-world")
    assert isinstance(html, Markup)
    assert '<h1 class="summary-title"><a href="/hello-world">Hello World</a></h1>' in html
    assert '<time class="summary-date">2018-01-01</time>' in html
    assert "<img" not in html
    assert "featured-image" not in html
    assert html.count("<a ") == 1


def test_render_with_image():
    html = render_summary("2018-01-01", "Hello World", "/hello-world", make_image())
    assert html.count('class="featured-image"') == 1
    assert html.count("<img") == 1
    assert html.count("<h1") == 1
    assert html.count("<time") == 1
    assert 'srcset="/img/cover-400.jpg 400w, /img/cover-800.jpg 800w"' in html
    assert 'src="/img/cover-800.jpg"' in html
    assert 'alt="Hello World"' in html
    assert "padding-bottom: 75.00%" in html


def test_render_order():
    html = render_summary("2018-01-01", "Hello World", "/hello-world", make_image())
    image_at = html.index("featured-image")
    title_at = html.index("summary-title")
    date_at = html.index("summary-date")
    assert image_at < title_at < date_at
    # the image link targets the post too
    assert html[:image_at].count('href="/hello-world"') == 1


def test_render_escapes_text():
    html = render_summary("<b>today</b>", "Tom & <Jerry>", "/tom?a=1&b=2")
    assert "Tom &amp; &lt;Jerry&gt;" in html
    assert "&lt;b&gt;today&lt;/b&gt;" in html
    assert 'href="/tom?a=1&amp;b=2"' in html


def test_image_alt_overrides_title():
    image = SizedImage.from_variants([ImageVariant("/a.jpg", 100)], alt="Sunset")
    html = render_summary("2018-01-01", "Post", "/post/", image)
    assert 'alt="Sunset"' in html
    assert "padding-bottom" not in html


def test_path_prefix_applies_to_links():
    html = render_summary("2018-01-01", "Post", "/post/", make_image(), path_prefix="/blog")
    assert html.count('href="/blog/post/"') == 2


def test_render_is_pure():
    first = render_summary("2018-01-01", "A", "/a/")
    render_summary("2019-01-01", "B", "/b/", make_image())
    assert render_summary("2018-01-01", "A", "/a/") == first


def test_renderer_uses_config_prefix():
    config = parse_config(
        {"title": "T", "author": "A", "primaryColor": "#000", "postsPerPage": 1, "pathPrefix": "/blog"}
    )
    renderer = SummaryRenderer(config)
    post = PostSummary("2018-01-01", "Post", "/post/")
    assert 'href="/blog/post/"' in renderer.render_post(post)
    assert renderer.path_prefix == "/blog"
    assert SummaryRenderer().path_prefix == "/"


def test_site_partial_overrides_bundled_template(tmp_path):
    partials = tmp_path / "_partials"
    partials.mkdir()
    (partials / "summary.html.jinja").write_text(
        '<li><a href="{{ href }}">{{ title }}</a> {{ date }}</li>', encoding="utf-8"
    )
    renderer = SummaryRenderer(site_dir=tmp_path)
    assert renderer.render("2018-01-01", "Post", "/post/") == (
        '<li><a href="/post/">Post</a> 2018-01-01</li>'
    )


def test_install_into_generator_environment():
    config = parse_config(
        {"title": "Dev Blog", "author": "A", "primaryColor": "#000", "postsPerPage": 1}
    )
    env = Environment(autoescape=True)
    SummaryRenderer(config).install(env)

    html = env.from_string("{{ summary('2018-01-01', 'Hi', '/hi/') }}").render()
    assert '<a href="/hi/">Hi</a>' in html

    post = PostSummary("2018-01-02", "There", "/there/")
    html = env.from_string("{{ post | summary }}").render(post=post)
    assert '<a href="/there/">There</a>' in html

    assert env.from_string("{{ site.title }}").render() == "Dev Blog"


def test_from_frontmatter_basic():
    post = PostSummary.from_frontmatter(
        {"title": "Hello World", "date": date(2018, 1, 1), "slug": "/hello-world"}
    )
    assert post == PostSummary("2018-01-01", "Hello World", "/hello-world")


def test_from_frontmatter_fallback_slug_and_path_key():
    assert PostSummary.from_frontmatter({"title": "T"}, slug="/t/").slug == "/t/"
    assert PostSummary.from_frontmatter({"title": "T", "path": "/p/"}, slug="/t/").slug == "/p/"
    with pytest.raises(ValueError):
        PostSummary.from_frontmatter({"title": "T"})
    with pytest.raises(ValueError):
        PostSummary.from_frontmatter({"slug": "/t/"})


def test_from_frontmatter_image_mapping():
    post = PostSummary.from_frontmatter(
        {"title": "T", "slug": "/t/", "image": {"srcSet": "/t-200.jpg 200w"}}
    )
    assert post.image is not None
    assert post.image.src == "/t-200.jpg"


def test_from_frontmatter_image_file(tmp_path):
    Image.new("RGB", (4, 2)).save(tmp_path / "cover.png")
    post = PostSummary.from_frontmatter(
        {"title": "T", "slug": "/t/", "image": "cover.png", "imageAlt": "Cover"},
        base_dir=tmp_path,
    )
    assert post.image.src == "/cover.png"
    assert post.image.aspect_ratio == 2.0
    assert post.image.alt == "Cover"

    post = PostSummary.from_frontmatter(
        {"title": "T", "slug": "/t/", "image": "cover.png"},
        base_dir=tmp_path,
        image_url="/static/cover.png",
    )
    assert post.image.src == "/static/cover.png"


def test_from_frontmatter_image_directory_is_a_value_error(tmp_path):
    (tmp_path / "img").mkdir()
    with pytest.raises(ValueError):
        PostSummary.from_frontmatter(
            {"title": "T", "slug": "/t/", "image": "img"}, base_dir=tmp_path
        )
