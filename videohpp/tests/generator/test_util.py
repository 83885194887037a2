"""Tests for identifier helpers."""

import pytest

from videohpp.generator.util import (
    is_hex_number,
    is_number,
    strip_postfix,
    strip_prefix,
    to_camel_case,
    to_upper_case,
)


def describe_numbers():
    def accepts_decimal_literals(expect):
        expect(is_number("0")) == True
        expect(is_number("32")) == True

    def rejects_non_decimal_text(expect):
        expect(is_number("")) == False
        expect(is_number("-1")) == False
        expect(is_number("0x10")) == False
        expect(is_number("STD_VIDEO_H264_CPB_CNT_LIST_SIZE")) == False

    def accepts_hex_literals(expect):
        expect(is_hex_number("0x7FFFFFFF")) == True
        expect(is_hex_number("0xab")) == True

    def rejects_malformed_hex_literals(expect):
        expect(is_hex_number("0x")) == False
        expect(is_hex_number("7F")) == False
        expect(is_hex_number("0xZZ")) == False


def describe_strip():
    def strips_matching_prefix(expect):
        expect(strip_prefix("StdVideoH264ProfileIdc", "StdVideo")) == "H264ProfileIdc"

    def keeps_value_without_prefix(expect):
        expect(strip_prefix("uint32_t", "StdVideo")) == "uint32_t"

    def strips_matching_postfix(expect):
        expect(strip_postfix("vulkan_video_codec_h264std.h", ".h")) == "vulkan_video_codec_h264std"

    def keeps_value_without_postfix(expect):
        expect(strip_postfix("stdint", ".h")) == "stdint"


def describe_to_upper_case():
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("StdVideoH264ChromaFormatIdc", "STD_VIDEO_H264_CHROMA_FORMAT_IDC"),
            ("StdVideoH265LevelIdc", "STD_VIDEO_H265_LEVEL_IDC"),
            ("StdVideoAV1ColorPrimaries", "STD_VIDEO_AV1_COLOR_PRIMARIES"),
            ("StdVideoVP9Profile", "STD_VIDEO_VP9_PROFILE"),
        ],
    )
    def converts_type_names(expect, name, expected):
        expect(to_upper_case(name)) == expected


def describe_to_camel_case():
    def converts_snake_case(expect):
        expect(to_camel_case("CHROMA_FORMAT_IDC")) == "ChromaFormatIdc"

    def keeps_digits(expect):
        expect(to_camel_case("H264_CPB_CNT_LIST_SIZE")) == "H264CpbCntListSize"
        expect(to_camel_case("420")) == "420"

    def joins_separated_numbers_by_default(expect):
        expect(to_camel_case("LEVEL_IDC_1_0")) == "LevelIdc10"

    def keeps_separated_numbers_separated_on_request(expect):
        expect(to_camel_case("LEVEL_IDC_1_0", True)) == "LevelIdc1_0"
