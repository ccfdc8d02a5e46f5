"""Tests for the thumbcache data model."""

import dataclasses

import pytest

from thumbcache.models import (
    CacheRecord,
    CacheResult,
    CacheStatus,
    CropMode,
    SourceRef,
    ThumbnailOptions,
)


def make_record(**overrides) -> CacheRecord:
    fields = {
        "index": "b=imgsk=a.pngw=100",
        "image_bucket": "imgs",
        "image_key": "a.png",
        "image_etag": '"e1"',
        "thumb_bucket": "thumbs",
        "thumb_key": "t-1",
        "thumb_content_type": "image/png",
        "width": 100,
    }
    fields.update(overrides)
    return CacheRecord(**fields)


class TestThumbnailOptions:
    """Validation and present-option listing."""

    def test_defaults_are_absent(self):
        assert ThumbnailOptions().present() == []

    def test_crop_string_coerced(self):
        options = ThumbnailOptions(crop="North")
        assert options.crop is CropMode.NORTH

    def test_present_order(self):
        options = ThumbnailOptions(crop="Center", width=10, height=20)
        assert options.present() == [("width", 10), ("height", 20), ("crop", "Center")]

    @pytest.mark.parametrize("value", [0, -5, 1.5, "100", True])
    def test_rejects_bad_width(self, value):
        with pytest.raises(ValueError, match="width must be a positive integer"):
            ThumbnailOptions(width=value)

    def test_rejects_bad_height(self):
        with pytest.raises(ValueError, match="height"):
            ThumbnailOptions(height=0)

    def test_rejects_unknown_crop(self):
        with pytest.raises(ValueError, match="crop must be one of"):
            ThumbnailOptions(crop="South")

    def test_frozen(self):
        options = ThumbnailOptions(width=10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.width = 20


class TestCacheRecord:
    """Record helpers and serialization."""

    def test_source_and_destination(self):
        record = make_record()
        assert record.source == SourceRef("imgs", "a.png")
        assert record.destination == SourceRef("thumbs", "t-1")

    def test_options_roundtrip(self):
        record = make_record(height=50, crop=CropMode.NORTH)
        assert record.options == ThumbnailOptions(width=100, height=50, crop="North")

    def test_to_dict_omits_absent_options(self):
        data = make_record().to_dict()
        assert data == {
            "Index": "b=imgsk=a.pngw=100",
            "ImageBucket": "imgs",
            "ImageKey": "a.png",
            "ImageETag": '"e1"',
            "ThumbBucket": "thumbs",
            "ThumbKey": "t-1",
            "ThumbContentType": "image/png",
            "Width": 100,
        }
        assert "Height" not in data
        assert "Crop" not in data

    def test_to_dict_crop_value(self):
        data = make_record(crop=CropMode.CENTER).to_dict()
        assert data["Crop"] == "Center"


class TestCacheResult:
    def test_to_dict_includes_status(self):
        result = CacheResult(record=make_record(), status=CacheStatus.REFRESHED)
        data = result.to_dict()
        assert data["Status"] == "refreshed"
        assert data["ThumbKey"] == "t-1"

    def test_status_values(self):
        assert {s.value for s in CacheStatus} == {"created", "refreshed", "unchanged"}
