"""
Seam computation and removal.

A vertical seam is one column index per row, top to bottom, where indices of
adjacent rows differ by at most one. The minimum-energy seam is found with
dynamic programming (Avidan & Shamir 2007):

    M(i, j) = E(i, j) + min(M(i-1, j-1), M(i-1, j), M(i-1, j+1))

Horizontal seams are handled by the caller by transposing the image.
"""

from typing import NamedTuple

import torch

from .errors import EmptyImage, InvariantViolation
from .image import image_shape

# Candidate predecessor offsets, in tie-break order: straight up first, then
# left, then right. torch.min returns the first minimal index.
_CANDIDATE_OFFSETS = (0, -1, 1)


class CumulativeTable(NamedTuple):
    """Result of the seam dynamic program.

    cost: (H, W) minimal total energy of any seam ending at each pixel.
    offsets: (H, W) int8, column offset in {-1, 0, 1} of the chosen
        predecessor in the row above. Row 0 is all zeros.
    """
    cost: torch.Tensor
    offsets: torch.Tensor


def cumulative_energy(energy: torch.Tensor) -> CumulativeTable:
    """
    Build the cumulative cost table for vertical seams.

    Out-of-range neighbours (column -1 and column W) are never chosen.
    Equal candidates resolve to the smallest offset magnitude, then to
    the left neighbour.

    Args:
        energy: Energy map (H, W)

    Returns:
        CumulativeTable with cost and offsets, both (H, W)
    """
    if energy.dim() != 2:
        raise ValueError(f"Expected energy map of shape (H, W), got {tuple(energy.shape)}")
    H, W = energy.shape
    if H == 0 or W == 0:
        raise EmptyImage(f"Energy map has zero size: height={H}, width={W}")
    if not energy.is_floating_point():
        energy = energy.to(torch.get_default_dtype())

    cost = torch.empty_like(energy)
    offsets = torch.zeros((H, W), dtype=torch.int8, device=energy.device)
    offset_values = torch.tensor(_CANDIDATE_OFFSETS, dtype=torch.int8, device=energy.device)

    cost[0] = energy[0]

    for i in range(1, H):
        M_prev = cost[i - 1]

        # Neighbours that fall outside the image get +inf so they never win
        M_left = torch.full_like(M_prev, float('inf'))
        M_left[1:] = M_prev[:-1]
        M_right = torch.full_like(M_prev, float('inf'))
        M_right[:-1] = M_prev[1:]

        candidates = torch.stack([M_prev, M_left, M_right])
        best, choice = torch.min(candidates, dim=0)

        cost[i] = energy[i] + best
        offsets[i] = offset_values[choice]

    return CumulativeTable(cost, offsets)


def trace_seam(table: CumulativeTable) -> torch.Tensor:
    """
    Backtrack the minimum-cost seam through a cumulative table.

    The seam ends at the leftmost minimum of the last row and follows the
    stored offsets upward.

    Args:
        table: CumulativeTable from cumulative_energy

    Returns:
        Seam indices (H,) with one column index per row
    """
    cost, offsets = table
    if cost.dim() != 2 or cost.shape[0] == 0 or cost.shape[1] == 0:
        raise InvariantViolation(f"Cannot trace a seam through a table of shape {tuple(cost.shape)}")

    H = cost.shape[0]
    seam = torch.zeros(H, dtype=torch.long, device=cost.device)

    col = int(torch.argmin(cost[-1]).item())
    seam[-1] = col
    for i in range(H - 1, 0, -1):
        col += int(offsets[i, col].item())
        seam[i - 1] = col

    return seam


def dp_seam(energy: torch.Tensor) -> torch.Tensor:
    """Minimum-energy vertical seam of an energy map (H, W)."""
    return trace_seam(cumulative_energy(energy))


def seam_cost(energy: torch.Tensor, seam: torch.Tensor) -> float:
    """Total energy of the pixels on a vertical seam."""
    rows = torch.arange(energy.shape[0], device=energy.device)
    return energy[rows, seam.to(energy.device)].sum().item()


def validate_seam(seam: torch.Tensor, height: int, width: int) -> None:
    """
    Check that a seam can be removed from an image of the given size.

    Raises:
        InvariantViolation: if the seam is not one in-range column per row
            with adjacent indices at most one apart
    """
    if seam.dim() != 1 or seam.shape[0] != height:
        raise InvariantViolation(
            f"Seam of shape {tuple(seam.shape)} does not match image height {height}"
        )
    if seam.min() < 0 or seam.max() >= width:
        raise InvariantViolation(
            f"Seam indices must lie in [0, {width}), got [{seam.min().item()}, {seam.max().item()}]"
        )
    if height > 1 and (seam[1:] - seam[:-1]).abs().max() > 1:
        raise InvariantViolation("Seam is not connected: adjacent rows differ by more than one column")


def remove_seam(image: torch.Tensor, seam: torch.Tensor) -> torch.Tensor:
    """
    Remove a vertical seam from an image.

    Pixels left of the seam are copied unchanged, pixels right of it shift
    one column to the left. The input is not modified.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices (H,)

    Returns:
        Carved image with one column removed, same dtype as the input
    """
    C, H, W = image_shape(image)
    if W == 1:
        raise InvariantViolation("Cannot remove a seam from an image that is one pixel wide")
    validate_seam(seam, H, W)

    keep = torch.ones((H, W), dtype=torch.bool, device=image.device)
    keep[torch.arange(H, device=image.device), seam.to(image.device)] = False

    if image.dim() == 2:
        return image[keep].reshape(H, W - 1)

    return image[:, keep].reshape(C, H, W - 1)
