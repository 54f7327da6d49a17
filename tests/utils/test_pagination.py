"""Tests for paging helpers."""

from storefront.utils.pagination import clamp_limit, offset_for, total_pages


def test_clamp_limit():
    assert clamp_limit(None, 10, 50) == 10
    assert clamp_limit(0, 10, 50) == 1
    assert clamp_limit(75, 10, 50) == 50
    assert clamp_limit(25, 10, 50) == 25


def test_offset_for():
    assert offset_for(1, 10) == 0
    assert offset_for(3, 10) == 20
    assert offset_for(0, 10) == 0


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2
