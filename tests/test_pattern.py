"""Tests for respond pattern construction."""

import re

from rubo.pattern import build_respond_pattern, compile_pattern, is_anchored


def test_name_prefix_variants():
    regex = build_respond_pattern("Rubo", None, re.compile(r"PING$", re.IGNORECASE))
    assert regex.search("rubo ping")
    assert regex.search("@Rubo: ping")
    assert regex.search("Rubo,ping")
    assert not regex.search("rubo2 ping")
    assert not regex.search("say rubo ping")


def test_alias_offers_both_prefixes():
    regex = build_respond_pattern("Rubo", "/", re.compile(r"PING$", re.IGNORECASE))
    assert regex.search("/ ping")
    assert regex.search("/: ping")
    assert regex.search("rubo ping")


def test_metacharacters_in_name_are_literal():
    regex = build_respond_pattern("r.b+", "!?", r"go")
    assert regex.search("r.b+ go")
    assert regex.search("!? go")
    assert not regex.search("rubb go")
    assert not regex.search("! go")


def test_flags_are_preserved():
    regex = build_respond_pattern("Rubo", None, re.compile(r"ping", re.IGNORECASE))
    assert regex.flags & re.IGNORECASE
    plain = build_respond_pattern("Rubo", None, r"ping")
    assert not plain.flags & re.IGNORECASE
    assert not plain.search("rubo ping")


def test_user_groups_remain_addressable():
    regex = build_respond_pattern("Rubo", "/", r"echo (.*)$")
    match = regex.search("/echo hi there")
    assert match.group(1) == "hi there"


def test_anchored_user_pattern_can_never_match():
    regex = build_respond_pattern("Rubo", None, r"^ping")
    assert is_anchored(r"^ping")
    assert not regex.search("Rubo ping")


def test_is_anchored_accepts_compiled_patterns():
    assert is_anchored(re.compile(r"^x"))
    assert not is_anchored(re.compile(r"x^"))


def test_compile_pattern_passes_compiled_through():
    regex = re.compile("a")
    assert compile_pattern(regex) is regex
    assert compile_pattern("a", re.I).flags & re.I
