"""Tests for image_finder/page/image_urls.py"""

import pytest

from image_finder.page.image_urls import get_full_size_image_url


class TestGetFullSizeImageUrl:
    @pytest.mark.parametrize("thumbnail, expected", [
        ("https://cdn.modulus.co.il/img/food.jpg?w=100&h=100",
         "https://cdn.modulus.co.il/img/food.jpg"),
        ("https://www.gag-lachayot.co.il/wp/bone-300x300.jpg",
         "https://www.gag-lachayot.co.il/wp/bone.jpg"),
        ("https://www.gag-lachayot.co.il/wp/bone-300x300.webp?v=1",
         "https://www.gag-lachayot.co.il/wp/bone.webp?v=1"),
        ("https://www.all4pet.co.il/files/toy_small.png",
         "https://www.all4pet.co.il/files/toy.png"),
        ("https://d3m9l0v76dty0.cloudfront.net/system/photos/1/show/a.jpg",
         "https://d3m9l0v76dty0.cloudfront.net/system/photos/1/extra_large/a.jpg"),
        ("https://d3m9l0v76dty0.cloudfront.net/system/photos/1/index/a.jpg",
         "https://d3m9l0v76dty0.cloudfront.net/system/photos/1/extra_large/a.jpg"),
        ("https://d3m9l0v76dty0.cloudfront.net/system/photos/1/large/a.jpg",
         "https://d3m9l0v76dty0.cloudfront.net/system/photos/1/extra_large/a.jpg"),
        ("https://just4pet.co.il/images/tn_collar.jpg?ver=3",
         "https://just4pet.co.il/images/collar.jpg?ver=3"),
        ("https://just4pet.co.il/images/tn_collar.jpg",
         "https://just4pet.co.il/images/collar.jpg"),
    ])
    def test_host_rules(self, thumbnail, expected):
        assert get_full_size_image_url(thumbnail) == expected

    def test_cloudfront_without_known_segment_unchanged(self):
        url = "https://d3m9l0v76dty0.cloudfront.net/system/photos/1/original/a.jpg"
        assert get_full_size_image_url(url) == url

    def test_just4pet_without_prefix_unchanged(self):
        url = "https://just4pet.co.il/images/collar.jpg"
        assert get_full_size_image_url(url) == url

    def test_unknown_host_unchanged(self):
        url = "https://images.example.com/thumb/a.jpg?size=small"
        assert get_full_size_image_url(url) == url

    @pytest.mark.parametrize("value", ["", None, 42])
    def test_empty_or_non_string(self, value):
        assert get_full_size_image_url(value) == ""
