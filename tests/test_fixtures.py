"""Tests for degraded-mode canned bundles."""

from __future__ import annotations

import json

import pytest

from siteaudit.audit import fixtures
from siteaudit.audit.fixtures import Bucket, classify


class TestClassify:
    @pytest.mark.parametrize(
        "url, bucket",
        [
            ("https://www.google.com/search", Bucket.COMPLEX),
            ("https://facebook.com", Bucket.COMPLEX),
            ("https://optimizemydata.com/services", Bucket.COMPLEX),
            ("https://example.com", Bucket.SIMPLE),
            ("https://someone.github.io/blog", Bucket.SIMPLE),
            ("https://acme.test", Bucket.DEFAULT),
        ],
    )
    def test_buckets(self, url, bucket) -> None:
        assert classify(url) is bucket

    def test_complex_marker_wins(self) -> None:
        assert classify("https://google.github.io/") is Bucket.COMPLEX


class TestCannedBundles:
    @pytest.mark.parametrize("url", ["https://google.com", "https://example.com", "https://acme.test"])
    def test_idempotent(self, url) -> None:
        for build in (
            fixtures.performance_for,
            fixtures.seo_for,
            fixtures.accessibility_for,
            fixtures.crawlability_for,
        ):
            first, second = build(url), build(url)
            assert first == second
            assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_performance_values(self) -> None:
        perf = fixtures.performance_for("https://example.com")
        assert perf.core_web_vitals.lcp == 800
        assert perf.metrics.dom_content_loaded == 600
        assert perf.metrics.load_complete == 1100
        assert perf.metrics.first_paint == 350

    def test_estimated_bundles_carry_notes(self) -> None:
        assert fixtures.performance_for("https://acme.test").note == fixtures.PERFORMANCE_NOTE
        assert fixtures.accessibility_for("https://acme.test").note == fixtures.ACCESSIBILITY_NOTE

    def test_accessibility_is_the_same_everywhere(self) -> None:
        assert fixtures.accessibility_for("https://google.com") == fixtures.accessibility_for(
            "https://acme.test"
        )
        bundle = fixtures.accessibility_for("https://acme.test")
        assert bundle.baseline == 98
        assert bundle.total_elements == 150

    def test_simple_and_default_share_seo(self) -> None:
        assert fixtures.seo_for("https://example.com") == fixtures.seo_for("https://acme.test")
        assert fixtures.seo_for("https://google.com") != fixtures.seo_for("https://acme.test")

    def test_crawlability_echoes_url(self) -> None:
        assert fixtures.crawlability_for("https://acme.test/x").url == "https://acme.test/x"

    def test_complex_crawlability_issue(self) -> None:
        bundle = fixtures.crawlability_for("https://www.google.com")
        assert [(i.type, i.message, i.severity) for i in bundle.issues] == [
            ("warning", "Links are not crawlable", "medium"),
        ]
        assert not bundle.has_viewport and not bundle.has_canonical

    @pytest.mark.parametrize("url", ["https://acme.test/page#frag", "https://google.com/#top"])
    def test_fragment_in_echoed_url_is_flagged(self, url) -> None:
        bundle = fixtures.crawlability_for(url)
        assert bundle.has_fragment is True
        assert bundle.issues[-1].message == "URL contains hash fragments"

    def test_no_fragment(self) -> None:
        assert fixtures.crawlability_for("https://acme.test/page").has_fragment is False
