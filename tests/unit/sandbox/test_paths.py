"""Unit and property tests for sandbox path helpers."""

from __future__ import annotations

import string
from pathlib import Path, PurePosixPath

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from source_sandbox.sandbox.paths import (
    is_path_prefix,
    is_within_any,
    strip_file_scheme,
    weakly_canonical,
)

_segment = st.text(alphabet=string.ascii_letters + string.digits + "_-", min_size=1, max_size=8)
_segments = st.lists(_segment, min_size=1, max_size=5)


def _posix(segments: list[str]) -> PurePosixPath:
    return PurePosixPath("/", *segments)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("file://src/a.sol", "src/a.sol"),
        ("file:///abs/a.sol", "/abs/a.sol"),
        ("file://file://a.sol", "file://a.sol"),
        ("src/file://a.sol", "src/file://a.sol"),
        ("https://example.com/a.sol", "https://example.com/a.sol"),
        ("file://", ""),
        ("", ""),
    ],
)
def test_strip_file_scheme_removes_exactly_one_leading_prefix(raw: str, expected: str) -> None:
    assert strip_file_scheme(raw) == expected


@pytest.mark.unit
def test_is_path_prefix_distinguishes_directory_siblings_sharing_a_string_prefix() -> None:
    assert is_path_prefix("/project/src", "/project/src/a.sol")
    assert is_path_prefix("/project/src", "/project/src")
    assert not is_path_prefix("/project/src", "/project/src2")
    assert not is_path_prefix("/project/src", "/project/src2/a.sol")
    assert not is_path_prefix("/project/src/a.sol", "/project/src")


@pytest.mark.unit
def test_root_directory_contains_everything() -> None:
    assert is_path_prefix("/", "/etc/passwd")


@pytest.mark.unit
def test_is_within_any_requires_one_matching_directory() -> None:
    allowed = [Path("/project/lib"), Path("/project/src")]

    assert is_within_any("/project/src/a.sol", allowed)
    assert not is_within_any("/project/tests/a.sol", allowed)
    assert not is_within_any("/project/src/a.sol", [])


@pytest.mark.unit
@settings(max_examples=200, deadline=None)
@given(prefix=_segments, rest=st.lists(_segment, max_size=4))
def test_prefix_holds_for_any_descendant(prefix: list[str], rest: list[str]) -> None:
    assert is_path_prefix(_posix(prefix), _posix(prefix + rest))


@pytest.mark.unit
@settings(max_examples=200, deadline=None)
@given(prefix=_segments, suffix=_segment, rest=st.lists(_segment, max_size=3))
def test_prefix_never_matches_a_sibling_with_a_longer_name(
    prefix: list[str], suffix: str, rest: list[str]
) -> None:
    sibling = [*prefix[:-1], prefix[-1] + suffix, *rest]

    assert str(_posix(sibling)).startswith(str(_posix(prefix)))
    assert not is_path_prefix(_posix(prefix), _posix(sibling))


@pytest.mark.unit
def test_weakly_canonical_normalizes_missing_components(tmp_path: Path) -> None:
    root = tmp_path.resolve()

    assert weakly_canonical(root / "missing" / ".." / "y" / "./z.sol") == root / "y" / "z.sol"


@pytest.mark.unit
def test_weakly_canonical_resolves_existing_symlinks(tmp_path: Path) -> None:
    root = tmp_path.resolve()
    target = root / "real"
    target.mkdir()
    link = root / "alias"
    link.symlink_to(target, target_is_directory=True)

    assert weakly_canonical(link / "not-yet.sol") == target / "not-yet.sol"
