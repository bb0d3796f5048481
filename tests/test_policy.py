"""Tests for pragma detection and the group admission rule."""

from __future__ import annotations

import pytest

from typesel.selector.policy import (
    IGNORE_PRAGMA,
    INCLUDE_PRAGMA,
    SelectionPolicy,
    Verdict,
    admit_group,
    has_pragma,
    is_ignored,
    needs_generation,
    type_verdict,
)


class TestPragmaTokens:
    def test_literal_values(self) -> None:
        assert INCLUDE_PRAGMA == "easyjson:json"
        assert IGNORE_PRAGMA == "easyjson:ignore"


class TestNeedsGeneration:
    def test_single_line(self) -> None:
        assert needs_generation("easyjson:json\n")

    def test_any_line_matches(self) -> None:
        doc = "User is a customer account.\neasyjson:json\n"
        assert needs_generation(doc)

    def test_prefix_match_allows_suffix(self) -> None:
        assert needs_generation("easyjson:json with extra words")

    def test_no_pragma(self) -> None:
        assert not needs_generation("User is a customer account.\n")

    def test_empty_and_none(self) -> None:
        assert not needs_generation("")
        assert not needs_generation(None)

    def test_case_sensitive(self) -> None:
        assert not needs_generation("EasyJSON:json\n")

    def test_leading_whitespace_is_not_trimmed(self) -> None:
        assert not needs_generation("  easyjson:json\n")
        assert not needs_generation("\teasyjson:json\n")

    def test_pragma_mid_line_does_not_match(self) -> None:
        assert not needs_generation("see easyjson:json for details")

    def test_ignore_pragma_is_not_inclusion(self) -> None:
        assert not needs_generation("easyjson:ignore\n")


class TestIsIgnored:
    def test_detects_ignore(self) -> None:
        assert is_ignored("Secret holds credentials.\neasyjson:ignore\n")

    def test_inclusion_is_not_ignore(self) -> None:
        assert not is_ignored("easyjson:json\n")

    def test_has_pragma_generic(self) -> None:
        assert has_pragma("a\nb:c\n", "b:")
        assert not has_pragma("a\n b:c\n", "b:")


class TestAdmitGroup:
    @pytest.mark.parametrize(
        ("explicit", "ignored", "expected"),
        [
            (False, False, Verdict.SKIP),
            (True, False, Verdict.DESCEND),
            (False, True, Verdict.SKIP),
            (True, True, Verdict.DESCEND),
        ],
    )
    def test_without_all_mode(self, explicit: bool, ignored: bool, expected: Verdict) -> None:
        assert admit_group(explicit, ignored, all_mode=False) is expected

    @pytest.mark.parametrize(
        ("explicit", "ignored", "expected"),
        [
            (False, False, Verdict.DESCEND),
            (True, False, Verdict.DESCEND),
            (False, True, Verdict.SKIP),
            (True, True, Verdict.SKIP),
        ],
    )
    def test_with_all_mode(self, explicit: bool, ignored: bool, expected: Verdict) -> None:
        assert admit_group(explicit, ignored, all_mode=True) is expected


class TestTypeVerdict:
    def test_explicit_selects(self) -> None:
        assert type_verdict(True) is Verdict.SELECT

    def test_otherwise_descends(self) -> None:
        assert type_verdict(False) is Verdict.DESCEND


class TestSelectionPolicy:
    def test_group_verdict_reports_explicit(self) -> None:
        policy = SelectionPolicy(all_mode=False)
        assert policy.group_verdict("easyjson:json\n") == (Verdict.DESCEND, True)
        assert policy.group_verdict("") == (Verdict.SKIP, False)

    def test_ignore_wins_in_all_mode(self) -> None:
        policy = SelectionPolicy(all_mode=True)
        verdict, explicit = policy.group_verdict("easyjson:json\neasyjson:ignore\n")
        assert verdict is Verdict.SKIP
        assert explicit is True
