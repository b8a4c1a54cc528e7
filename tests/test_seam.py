"""Tests for the seam dynamic program, tracing and removal."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.seam import (cumulative_energy, trace_seam, dp_seam, seam_cost,
                            validate_seam, remove_seam, CumulativeTable)
from seamcarve.errors import EmptyImage, InvariantViolation


# ---------------------------------------------------------------------------
# 1. Cumulative energy table
# ---------------------------------------------------------------------------

class TestCumulativeEnergy:
    def test_worked_example_last_row(self, worked_energy):
        """The worked example's last row is [14, 19, 19, 13, 14]."""
        table = cumulative_energy(worked_energy)
        assert table.cost[-1].tolist() == [14.0, 19.0, 19.0, 13.0, 14.0]

    def test_worked_example_middle_row_and_offsets(self, worked_energy):
        table = cumulative_energy(worked_energy)
        assert table.cost[1].tolist() == [14.0, 11.0, 12.0, 10.0, 9.0]
        assert table.offsets[1].tolist() == [1, 1, 0, -1, -1]
        assert table.offsets[2].tolist() == [1, 0, 1, 1, 0]

    def test_first_row_copies_energy(self, worked_energy):
        table = cumulative_energy(worked_energy)
        assert torch.equal(table.cost[0], worked_energy[0])
        assert (table.offsets[0] == 0).all()

    def test_offsets_are_in_range(self):
        torch.manual_seed(42)
        table = cumulative_energy(torch.rand(30, 20))
        assert table.offsets.dtype == torch.int8
        assert table.offsets.min() >= -1 and table.offsets.max() <= 1

    def test_edges_never_point_outside(self):
        """Column 0 never takes offset -1 and the last column never takes +1."""
        torch.manual_seed(42)
        table = cumulative_energy(torch.rand(40, 10))
        assert (table.offsets[:, 0] >= 0).all()
        assert (table.offsets[:, -1] <= 0).all()

    def test_edge_columns_exclude_missing_neighbours(self):
        """At the borders only in-range neighbours are considered."""
        energy = torch.tensor([[0.0, 5.0],
                               [1.0, 1.0]])
        table = cumulative_energy(energy)
        assert table.cost[1].tolist() == [1.0, 1.0]
        assert table.offsets[1].tolist() == [0, -1]

    def test_tie_prefers_straight_up(self):
        """With all three candidates equal the seam goes straight up."""
        table = cumulative_energy(torch.zeros(3, 5))
        assert (table.offsets[1:] == 0).all()

    def test_tie_prefers_left_over_right(self):
        """When left and right tie below the center, the left one wins."""
        energy = torch.tensor([[1.0, 9.0, 1.0],
                               [0.0, 0.0, 0.0]])
        table = cumulative_energy(energy)
        assert table.offsets[1, 1].item() == -1

    def test_single_column(self):
        energy = torch.tensor([[1.0], [2.0], [3.0]])
        table = cumulative_energy(energy)
        assert table.cost[:, 0].tolist() == [1.0, 3.0, 6.0]
        assert (table.offsets == 0).all()

    def test_rejects_empty_and_wrong_rank(self):
        with pytest.raises(EmptyImage):
            cumulative_energy(torch.zeros(0, 4))
        with pytest.raises(ValueError):
            cumulative_energy(torch.zeros(2, 3, 4))

    def test_integer_energy_is_promoted(self):
        table = cumulative_energy(torch.tensor([[6, 5, 4, 8, 10], [9, 7, 8, 6, 1], [3, 8, 9, 4, 5]]))
        assert table.cost.is_floating_point()
        assert table.cost[-1].tolist() == [14.0, 19.0, 19.0, 13.0, 14.0]

    def test_input_not_modified(self, worked_energy):
        original = worked_energy.clone()
        cumulative_energy(worked_energy)
        assert torch.equal(worked_energy, original)


# ---------------------------------------------------------------------------
# 2. Seam tracing
# ---------------------------------------------------------------------------

class TestTraceSeam:
    def test_worked_example_seam(self, worked_energy):
        """Seam [3, 4, 3] visits energies 8, 1, 4 for a total of 13."""
        table = cumulative_energy(worked_energy)
        seam = trace_seam(table)
        assert seam.tolist() == [3, 4, 3]
        assert seam_cost(worked_energy, seam) == 13.0
        assert table.cost[-1, seam[-1]].item() == table.cost[-1].min().item() == 13.0

    def test_seam_follows_zero_energy_column(self):
        """Given an energy map that's zero in one column, the seam goes there."""
        energy = torch.ones(20, 20)
        energy[:, 10] = 0.0
        seam = dp_seam(energy)
        assert (seam == 10).all(), f"Expected all 10, got {seam.tolist()}"

    def test_seam_follows_diagonal_valley(self):
        """Seam should follow a diagonal zero-energy path."""
        H, W = 20, 30
        energy = torch.ones(H, W) * 10.0
        for i in range(H):
            energy[i, 5 + i] = 0.0
        seam = dp_seam(energy)
        assert seam.tolist() == [5 + i for i in range(H)]

    def test_finds_global_minimum_greedy_misses(self):
        """A cheap start that leads into an expensive row is avoided."""
        energy = torch.tensor([[0.0, 1.0, 1.0, 1.0],
                               [9.0, 9.0, 1.0, 1.0],
                               [9.0, 9.0, 9.0, 1.0]])
        seam = dp_seam(energy)
        assert seam_cost(energy, seam) == 3.0
        assert seam[-1].item() == 3

    def test_seam_continuity(self):
        """Adjacent seam indices must differ by at most 1."""
        torch.manual_seed(42)
        seam = dp_seam(torch.rand(50, 50))
        diffs = torch.abs(seam[1:] - seam[:-1])
        assert diffs.max() <= 1

    def test_seam_length_matches_height(self):
        seam = dp_seam(torch.rand(30, 40))
        assert seam.shape == (30,)
        assert seam.dtype == torch.long

    def test_minimality_matches_brute_force(self):
        """DP total equals the cheapest of all connected seams on a small grid."""
        torch.manual_seed(7)
        H, W = 4, 4
        energy = torch.randint(0, 10, (H, W)).float()

        best = float('inf')

        def walk(row, col, total):
            nonlocal best
            total += energy[row, col].item()
            if row == H - 1:
                best = min(best, total)
                return
            for nxt in (col - 1, col, col + 1):
                if 0 <= nxt < W:
                    walk(row + 1, nxt, total)

        for start in range(W):
            walk(0, start, 0.0)

        seam = dp_seam(energy)
        assert seam_cost(energy, seam) == best

    def test_last_row_tie_picks_leftmost(self):
        seam = dp_seam(torch.zeros(4, 6))
        assert seam.tolist() == [0, 0, 0, 0]

    def test_empty_table_is_invariant_violation(self):
        table = CumulativeTable(torch.zeros(0, 3), torch.zeros(0, 3, dtype=torch.int8))
        with pytest.raises(InvariantViolation):
            trace_seam(table)

    def test_single_row(self):
        seam = dp_seam(torch.tensor([[3.0, 1.0, 2.0]]))
        assert seam.tolist() == [1]


# ---------------------------------------------------------------------------
# 3. Seam removal
# ---------------------------------------------------------------------------

class TestRemoveSeam:
    def test_preserves_non_seam_pixels(self):
        """After removing a seam, remaining pixels should be the original values."""
        H, W = 4, 10
        image = torch.arange(W, dtype=torch.float32).unsqueeze(0).unsqueeze(0).expand(1, H, W).clone()
        seam = torch.full((H,), 5, dtype=torch.long)
        carved = remove_seam(image, seam)

        assert carved.shape == (1, H, W - 1)
        assert torch.equal(carved[0, 0, :5], torch.tensor([0., 1., 2., 3., 4.]))
        assert torch.equal(carved[0, 0, 5:], torch.tensor([6., 7., 8., 9.]))

    def test_with_varying_positions(self):
        """Seam that zigzags removes correct pixel from each row."""
        image = torch.arange(6, dtype=torch.float32).unsqueeze(0).unsqueeze(0).expand(1, 3, 6).clone()
        seam = torch.tensor([2, 3, 2])
        carved = remove_seam(image, seam)

        assert torch.equal(carved[0, 0], torch.tensor([0., 1., 3., 4., 5.]))
        assert torch.equal(carved[0, 1], torch.tensor([0., 1., 2., 4., 5.]))
        assert torch.equal(carved[0, 2], torch.tensor([0., 1., 3., 4., 5.]))

    def test_each_row_loses_exactly_one_pixel(self, random_rgb):
        """Every output row equals the input row with one element deleted."""
        energy = torch.rand(16, 24, generator=torch.Generator().manual_seed(3))
        seam = dp_seam(energy)
        carved = remove_seam(random_rgb, seam)

        assert carved.shape == (3, 16, 23)
        for i in range(16):
            col = seam[i].item()
            expected = torch.cat([random_rgb[:, i, :col], random_rgb[:, i, col + 1:]], dim=1)
            assert torch.equal(carved[:, i], expected), f"Row {i} mismatch"

    def test_preserves_dtype_and_leaves_input_untouched(self, random_rgb):
        original = random_rgb.clone()
        carved = remove_seam(random_rgb, torch.zeros(16, dtype=torch.long))
        assert carved.dtype == torch.uint8
        assert torch.equal(random_rgb, original)

    def test_grayscale_2d(self):
        image = torch.arange(12).view(3, 4)
        carved = remove_seam(image, torch.tensor([0, 1, 2]))
        assert carved.tolist() == [[1, 2, 3], [4, 6, 7], [8, 9, 11]]

    def test_removes_edge_columns(self):
        image = torch.arange(8).view(2, 4)
        assert remove_seam(image, torch.tensor([3, 3])).tolist() == [[0, 1, 2], [4, 5, 6]]
        assert remove_seam(image, torch.tensor([0, 0])).tolist() == [[1, 2, 3], [5, 6, 7]]

    def test_wrong_length_is_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            remove_seam(torch.rand(3, 5, 6), torch.zeros(4, dtype=torch.long))

    def test_out_of_range_is_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            remove_seam(torch.rand(3, 2, 6), torch.tensor([5, 6]))
        with pytest.raises(InvariantViolation):
            remove_seam(torch.rand(3, 2, 6), torch.tensor([-1, 0]))

    def test_disconnected_is_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            remove_seam(torch.rand(3, 2, 6), torch.tensor([0, 3]))

    def test_one_pixel_wide_is_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            remove_seam(torch.rand(3, 4, 1), torch.zeros(4, dtype=torch.long))


class TestValidateSeam:
    def test_accepts_valid_seam(self):
        validate_seam(torch.tensor([1, 2, 2, 1]), height=4, width=3)

    def test_rejects_2d_seam(self):
        with pytest.raises(InvariantViolation):
            validate_seam(torch.zeros(2, 2, dtype=torch.long), height=2, width=3)
