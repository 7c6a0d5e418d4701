"""Tests for stripping formatting artifacts from model output."""

import pytest

from app.services.response_normalizer import normalize_response


class TestNormalizeResponse:

    def test_unwraps_json_fence(self):
        raw = '```json\n[{"question_text": "A"}]\n```'
        assert normalize_response(raw) == '[{"question_text": "A"}]'

    def test_unwraps_plain_fence(self):
        raw = '```\n{"question_text": "A"}\n```'
        assert normalize_response(raw) == '{"question_text": "A"}'

    def test_keeps_surrounding_text_in_place(self):
        raw = 'Here you go:\n```json\n[1, 2]\n```\nEnjoy!'
        assert normalize_response(raw) == "Here you go:\n[1, 2]\n\nEnjoy!"

    def test_only_first_fence_is_removed(self):
        raw = "```json\n[1]\n```\n```json\n[2]\n```"
        assert normalize_response(raw) == "[1]\n\n```json\n[2]\n```"

    def test_each_pass_unwraps_one_more_fence(self):
        raw = "```json\n[1]\n```\n```json\n[2]\n```"
        once = normalize_response(raw)
        twice = normalize_response(once)
        assert twice == "[1]\n\n[2]"
        assert twice != once
        assert normalize_response(twice) == twice

    def test_trims_whitespace_without_fence(self):
        assert normalize_response("  \n [1, 2] \n") == "[1, 2]"

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input_gives_empty_string(self, raw):
        assert normalize_response(raw) == ""

    @pytest.mark.parametrize(
        "raw",
        [
            '```json\n[{"question_text": "A"}]\n```',
            "```JSON [1,2,3]```",
            "  plain text  ",
            'intro ```{"a": 1}``` outro',
        ],
    )
    def test_is_idempotent(self, raw):
        once = normalize_response(raw)
        assert normalize_response(once) == once
