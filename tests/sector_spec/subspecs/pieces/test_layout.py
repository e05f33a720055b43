"""Tests for resolving piece positions within a sector."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sector_spec.subspecs.fr32 import (
    FR32_CONVERTER,
    IDENTITY_CONVERTER,
    PaddedBytesAmount,
    UnpaddedBytesAmount,
)
from sector_spec.subspecs.pieces import (
    PieceLayout,
    PieceMetadata,
    compute_piece_layouts,
    get_padded_piece_padding,
    get_piece_by_key,
    get_piece_start,
    length_with_piece,
    piece_fits,
    slot_size,
    sum_piece_lengths,
)


def make_piece(key: str, num_bytes: int) -> PieceMetadata:
    """Build a piece record without a commitment."""
    return PieceMetadata(piece_key=key, num_bytes=UnpaddedBytesAmount(num_bytes))


@pytest.fixture
def pieces() -> list[PieceMetadata]:
    """Three pieces whose slots are 128, 512 and 128 bytes."""
    return [make_piece("x", 5), make_piece("y", 300), make_piece("z", 100)]


@st.composite
def piece_lists(draw: st.DrawFn, min_size: int = 1) -> list[PieceMetadata]:
    """Generate pieces with unique keys and positive sizes."""
    sizes = draw(
        st.lists(st.integers(min_value=1, max_value=5000), min_size=min_size, max_size=12)
    )
    return [make_piece(f"piece-{i}", size) for i, size in enumerate(sizes)]


class TestGetPieceStart:
    """Tests for start offsets looked up by key."""

    @pytest.mark.parametrize("key, expected", [("x", 0), ("y", 512), ("z", 1024)])
    def test_known_offsets(self, pieces: list[PieceMetadata], key: str, expected: int) -> None:
        """The second piece needs a 512-byte aligned slot, the third follows directly."""
        assert get_piece_start(pieces, key, IDENTITY_CONVERTER) == UnpaddedBytesAmount(expected)

    def test_missing_key(self, pieces: list[PieceMetadata]) -> None:
        """An unknown key yields None rather than an error."""
        assert get_piece_start(pieces, "missing", IDENTITY_CONVERTER) is None

    def test_empty_sequence(self) -> None:
        """Nothing can be found in an empty sector."""
        assert get_piece_start([], "x", IDENTITY_CONVERTER) is None

    def test_duplicate_keys_resolve_to_first(self) -> None:
        """Only the first occurrence of a key is addressable."""
        pieces = [make_piece("a", 5), make_piece("a", 300)]
        assert get_piece_start(pieces, "a", IDENTITY_CONVERTER) == UnpaddedBytesAmount(0)

    def test_fr32_offsets(self, pieces: list[PieceMetadata]) -> None:
        """
        Under Fr32 a 128-byte padded slot holds 127 unpadded bytes.

        Paddings are converted back rounding down, so the offsets are not
        the identity offsets scaled by 127/128.
        """
        assert get_piece_start(pieces, "x", FR32_CONVERTER) == UnpaddedBytesAmount(0)
        assert get_piece_start(pieces, "y", FR32_CONVERTER) == UnpaddedBytesAmount(508)
        assert get_piece_start(pieces, "z", FR32_CONVERTER) == UnpaddedBytesAmount(1016)

    def test_default_converter(self, pieces: list[PieceMetadata]) -> None:
        """Without an explicit converter the test environment default applies."""
        assert get_piece_start(pieces, "y") == UnpaddedBytesAmount(512)


class TestGetPieceByKey:
    """Tests for looking pieces up by key."""

    def test_found(self, pieces: list[PieceMetadata]) -> None:
        """The matching record itself is returned."""
        assert get_piece_by_key(pieces, "y") is pieces[1]

    def test_first_match_wins(self) -> None:
        """With duplicate keys the earliest piece is returned."""
        first = make_piece("dup", 10)
        pieces = [make_piece("other", 1), first, make_piece("dup", 20)]
        assert get_piece_by_key(pieces, "dup") is first

    @pytest.mark.parametrize("pieces", [[], [make_piece("x", 1)]])
    def test_absent(self, pieces: list[PieceMetadata]) -> None:
        """Misses yield None."""
        assert get_piece_by_key(pieces, "nope") is None


class TestSumPieceLengths:
    """Tests for the total padded length of a run of pieces."""

    def test_empty(self) -> None:
        """An empty sector has no length."""
        assert sum_piece_lengths([], IDENTITY_CONVERTER) == UnpaddedBytesAmount(0)

    def test_known_total(self, pieces: list[PieceMetadata]) -> None:
        """128 + 384 of left padding + 512 + 128."""
        assert sum_piece_lengths(pieces, IDENTITY_CONVERTER) == UnpaddedBytesAmount(1152)

    def test_order_matters(self) -> None:
        """Moving the large piece first removes the left padding in front of it."""
        small, large = make_piece("s", 5), make_piece("l", 300)
        assert sum_piece_lengths([small, large], IDENTITY_CONVERTER) == UnpaddedBytesAmount(1024)
        assert sum_piece_lengths([large, small], IDENTITY_CONVERTER) == UnpaddedBytesAmount(640)

    def test_accepts_iterators(self, pieces: list[PieceMetadata]) -> None:
        """Any iterable of pieces can be folded."""
        assert sum_piece_lengths(iter(pieces), IDENTITY_CONVERTER) == UnpaddedBytesAmount(1152)

    def test_does_not_mutate_input(self, pieces: list[PieceMetadata]) -> None:
        """Layout is derived data; the piece list is read-only."""
        snapshot = list(pieces)
        sum_piece_lengths(pieces, IDENTITY_CONVERTER)
        get_piece_start(pieces, "z", IDENTITY_CONVERTER)
        assert pieces == snapshot


class TestComputePieceLayouts:
    """Tests for resolving every piece in one pass."""

    def test_known_layout(self, pieces: list[PieceMetadata]) -> None:
        """Each entry carries the start and both paddings."""
        u = UnpaddedBytesAmount
        assert compute_piece_layouts(pieces, IDENTITY_CONVERTER) == [
            PieceLayout("x", start=u(0), num_bytes=u(5), left_padding=u(0), right_padding=u(123)),
            PieceLayout(
                "y", start=u(512), num_bytes=u(300), left_padding=u(384), right_padding=u(212)
            ),
            PieceLayout(
                "z", start=u(1024), num_bytes=u(100), left_padding=u(0), right_padding=u(28)
            ),
        ]

    def test_end_offsets(self, pieces: list[PieceMetadata]) -> None:
        """`end` follows the content and `slot_end` follows the right padding."""
        layout = compute_piece_layouts(pieces, IDENTITY_CONVERTER)[1]
        assert layout.end == UnpaddedBytesAmount(812)
        assert layout.slot_end == UnpaddedBytesAmount(1024)

    def test_duplicate_keys_each_get_an_entry(self) -> None:
        """Unlike keyed lookup, the full layout includes every duplicate."""
        layouts = compute_piece_layouts(
            [make_piece("a", 5), make_piece("a", 5)], IDENTITY_CONVERTER
        )
        assert [layout.start for layout in layouts] == [
            UnpaddedBytesAmount(0),
            UnpaddedBytesAmount(128),
        ]

    @given(generated=piece_lists(min_size=0))
    def test_agrees_with_keyed_lookup(self, generated: list[PieceMetadata]) -> None:
        """With unique keys, both ways of resolving a start offset match."""
        layouts = compute_piece_layouts(generated, IDENTITY_CONVERTER)
        for layout in layouts:
            assert get_piece_start(generated, layout.piece_key, IDENTITY_CONVERTER) == layout.start
        total = layouts[-1].slot_end if layouts else UnpaddedBytesAmount(0)
        assert sum_piece_lengths(generated, IDENTITY_CONVERTER) == total


class TestLayoutInvariants:
    """Property tests over arbitrary piece sequences."""

    @given(generated=piece_lists())
    def test_slots_are_aligned(self, generated: list[PieceMetadata]) -> None:
        """Both ends of every slot sit on a multiple of the slot size."""
        for layout in compute_piece_layouts(generated, IDENTITY_CONVERTER):
            slot = int(slot_size(layout.num_bytes, IDENTITY_CONVERTER))
            assert int(layout.start) % slot == 0
            assert int(layout.slot_end) % slot == 0
            assert int(layout.slot_end) - int(layout.start) == slot

    @given(generated=piece_lists())
    def test_offsets_increase_without_overlap(self, generated: list[PieceMetadata]) -> None:
        """Later pieces start after earlier ones end."""
        starts = [
            get_piece_start(generated, piece.piece_key, IDENTITY_CONVERTER) for piece in generated
        ]
        for i in range(1, len(generated)):
            previous_start, start = starts[i - 1], starts[i]
            assert previous_start is not None and start is not None
            assert previous_start + generated[i - 1].num_bytes <= start

    @given(generated=piece_lists(), extra=st.integers(min_value=1, max_value=5000))
    def test_appending_keeps_earlier_offsets(
        self, generated: list[PieceMetadata], extra: int
    ) -> None:
        """A piece's offset depends only on the pieces before it."""
        extended = [*generated, make_piece("appended", extra)]
        for piece in generated:
            assert get_piece_start(generated, piece.piece_key, IDENTITY_CONVERTER) == (
                get_piece_start(extended, piece.piece_key, IDENTITY_CONVERTER)
            )

    @given(generated=piece_lists())
    def test_fr32_layout_never_overlaps(self, generated: list[PieceMetadata]) -> None:
        """Under Fr32 each piece still starts at or after the end of the previous slot."""
        previous_slot_end = UnpaddedBytesAmount(0)
        for layout in compute_piece_layouts(generated, FR32_CONVERTER):
            assert layout.start >= previous_slot_end
            assert layout.slot_end >= layout.end
            previous_slot_end = layout.slot_end

    @given(generated=piece_lists())
    def test_fr32_slot_starts_are_aligned_when_padded(
        self, generated: list[PieceMetadata]
    ) -> None:
        """
        Under Fr32 every slot begins on a slot boundary of the padded sector.

        The unpadded running total may stop short of that boundary, so the
        boundary is measured from the padded length of the preceding slots.
        """
        for layout in compute_piece_layouts(generated, FR32_CONVERTER):
            preceding = layout.start - layout.left_padding
            left, right = get_padded_piece_padding(preceding, layout.num_bytes, FR32_CONVERTER)
            slot = slot_size(layout.num_bytes, FR32_CONVERTER)
            assert (FR32_CONVERTER.to_padded(preceding) + left) % slot == PaddedBytesAmount(0)
            assert FR32_CONVERTER.to_padded(layout.num_bytes) + right == slot


class TestPieceFits:
    """Tests for the capacity check."""

    def test_fits_exactly(self) -> None:
        """A slot ending exactly at capacity fits."""
        existing = [make_piece("x", 5)]
        assert piece_fits(
            existing, UnpaddedBytesAmount(128), UnpaddedBytesAmount(256), IDENTITY_CONVERTER
        )

    def test_padding_counts_against_capacity(self) -> None:
        """300 bytes need a 512-byte slot aligned at 512, ending at 1024."""
        existing = [make_piece("x", 5)]
        assert not piece_fits(
            existing, UnpaddedBytesAmount(300), UnpaddedBytesAmount(1023), IDENTITY_CONVERTER
        )
        assert piece_fits(
            existing, UnpaddedBytesAmount(300), UnpaddedBytesAmount(1024), IDENTITY_CONVERTER
        )

    def test_length_with_piece(self) -> None:
        """The appended piece contributes its slot and the alignment gap before it."""
        existing = [make_piece("x", 5)]
        assert length_with_piece(existing, UnpaddedBytesAmount(300), IDENTITY_CONVERTER) == (
            UnpaddedBytesAmount(1024)
        )
        assert length_with_piece([], UnpaddedBytesAmount(1), IDENTITY_CONVERTER) == (
            UnpaddedBytesAmount(128)
        )


class TestFr32Drift:
    """The unpadded running total under Fr32 does not stay slot aligned."""

    def test_total_falls_short_of_the_padded_boundary(self, pieces: list[PieceMetadata]) -> None:
        """
        The 512-byte slot of `y` ends at unpadded 1015, which pads to 1023.

        `z` then needs one padded byte of left padding to reach 1024.
        """
        y = compute_piece_layouts(pieces, FR32_CONVERTER)[1]
        assert y.slot_end == UnpaddedBytesAmount(1015)
        assert FR32_CONVERTER.to_padded(y.slot_end) == PaddedBytesAmount(1023)

        left, _ = get_padded_piece_padding(y.slot_end, UnpaddedBytesAmount(100), FR32_CONVERTER)
        assert left == PaddedBytesAmount(1)
        assert FR32_CONVERTER.to_padded(y.slot_end) + left == PaddedBytesAmount(1024)
