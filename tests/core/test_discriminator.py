"""Tests for the account discriminator scheme."""

from __future__ import annotations

import pytest

from shield_policy.core.discriminator import (
    AccountKind,
    discriminator_of,
    make_tag,
    read_tag,
    split_tag,
)
from shield_policy.errors import LayoutMismatch, UnknownDiscriminator


class TestTags:
    def test_policy_tags_match_deployed_bytes(self) -> None:
        assert make_tag(AccountKind.POLICY, 1) == 0x00
        assert make_tag(AccountKind.POLICY, 2) == 0x01

    def test_discriminator_stable_across_versions(self) -> None:
        tags = [make_tag(AccountKind.POLICY, v) for v in (1, 2)]
        assert {tag >> 4 for tag in tags} == {discriminator_of(AccountKind.POLICY)}

    def test_discriminators_injective(self) -> None:
        values = [discriminator_of(kind) for kind in AccountKind]
        assert len(values) == len(set(values))

    def test_split_round_trip(self) -> None:
        assert split_tag(make_tag(AccountKind.POLICY, 2)) == (AccountKind.POLICY, 2)

    @pytest.mark.parametrize("version", [0, 17])
    def test_unencodable_version(self, version: int) -> None:
        with pytest.raises(LayoutMismatch):
            make_tag(AccountKind.POLICY, version)


class TestReadTag:
    def test_reads_offset_zero(self) -> None:
        assert read_tag(bytes([0x01, 0xFF, 0xFF])) == (AccountKind.POLICY, 2)

    @pytest.mark.parametrize("tag", [0x10, 0x21, 0x7F, 0xFF])
    def test_unknown_kind(self, tag: int) -> None:
        with pytest.raises(UnknownDiscriminator) as exc_info:
            read_tag(bytes([tag]) + bytes(6))
        assert exc_info.value.tag == tag

    def test_empty_data(self) -> None:
        with pytest.raises(LayoutMismatch):
            read_tag(b"")
