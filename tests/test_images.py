import pytest
from PIL import Image

from postcard.images import ImageVariant, SizedImage, parse_srcset


def test_parse_srcset():
    variants = parse_srcset("/img/a-400.jpg 400w, /img/a-800.jpg 800w,")
    assert variants == [
        ImageVariant("/img/a-400.jpg", 400),
        ImageVariant("/img/a-800.jpg", 800),
    ]
    with pytest.raises(ValueError):
        parse_srcset("/img/a.jpg 2x")


def test_variant_validation():
    with pytest.raises(ValueError):
        ImageVariant("", 100)
    with pytest.raises(ValueError):
        ImageVariant("/a.jpg", 0)


def test_sized_image_requires_a_variant():
    with pytest.raises(ValueError, match="at least one"):
        SizedImage.from_variants([])


def test_sized_image_attributes():
    image = SizedImage.from_variants(
        [ImageVariant("/b.jpg", 800, 600), ImageVariant("/a.jpg", 400, 300)]
    )
    assert [v.width for v in image.variants] == [400, 800]
    assert image.src == "/b.jpg"
    assert image.srcset == "/a.jpg 400w, /b.jpg 800w"
    assert image.sizes == "(max-width: 800px) 100vw, 800px"
    assert image.aspect_ratio == pytest.approx(800 / 600)


def test_explicit_sizes_and_ratio_win():
    image = SizedImage.from_variants(
        [ImageVariant("/a.jpg", 400)], sizes="50vw", aspect_ratio=2.0
    )
    assert image.sizes == "50vw"
    assert image.aspect_ratio == 2.0
    assert SizedImage.from_variants([ImageVariant("/a.jpg", 400)]).aspect_ratio is None


def test_from_mapping_with_srcset():
    image = SizedImage.from_mapping(
        {
            "src": "/img/cover-800.jpg",
            "srcSet": "/img/cover-400.jpg 400w, /img/cover-800.jpg 800w",
            "sizes": "(max-width: 800px) 100vw, 800px",
            "aspectRatio": 1.5,
            "alt": "Cover",
        }
    )
    assert len(image.variants) == 2
    assert image.aspect_ratio == 1.5
    assert image.alt == "Cover"


def test_from_mapping_nested_processed_image():
    image = SizedImage.from_mapping(
        {
            "childImageSharp": {
                "sizes": {"srcSet": "/static/x-300.png 300w", "aspectRatio": 1.0}
            }
        }
    )
    assert image.src == "/static/x-300.png"
    assert image.aspect_ratio == 1.0


def test_from_mapping_single_src():
    image = SizedImage.from_mapping({"src": "/a.jpg", "width": 640, "height": 320})
    assert image.srcset == "/a.jpg 640w"
    assert image.aspect_ratio == 2.0

    with pytest.raises(ValueError):
        SizedImage.from_mapping({"src": "/a.jpg"})
    with pytest.raises(ValueError):
        SizedImage.from_mapping({})


def test_from_file_reads_dimensions(tmp_path):
    path = tmp_path / "cover.png"
    Image.new("RGB", (8, 6), color="red").save(path)

    image = SizedImage.from_file(path, "/images/cover.png", alt="A cover")
    assert image.src == "/images/cover.png"
    assert image.variants[0].width == 8
    assert image.variants[0].height == 6
    assert image.alt == "A cover"


def test_from_file_errors(tmp_path):
    with pytest.raises(ValueError):
        SizedImage.from_file(tmp_path / "missing.png", "/missing.png")

    bogus = tmp_path / "bogus.png"
    bogus.write_text("not an image", encoding="utf-8")
    with pytest.raises(ValueError):
        SizedImage.from_file(bogus, "/bogus.png")


def test_from_file_rejects_directory(tmp_path):
    (tmp_path / "img").mkdir()
    with pytest.raises(ValueError, match="Cannot read image"):
        SizedImage.from_file(tmp_path / "img", "/img")
