"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


# Energy grid of the textbook worked example (3 rows, 5 columns)
WORKED_EXAMPLE_ENERGY = [[6.0, 5.0, 4.0, 8.0, 10.0],
                         [9.0, 7.0, 8.0, 6.0, 1.0],
                         [3.0, 8.0, 9.0, 4.0, 5.0]]


@pytest.fixture
def worked_energy():
    """The 5x3 worked-example energy map."""
    return torch.tensor(WORKED_EXAMPLE_ENERGY)


@pytest.fixture
def random_rgb():
    """Seeded random 3x16x24 uint8 image."""
    generator = torch.Generator().manual_seed(42)
    return torch.randint(0, 256, (3, 16, 24), dtype=torch.uint8, generator=generator)


def make_uniform_image(H, W, color=(120, 60, 200)):
    """Solid-color uint8 RGB image (3, H, W)."""
    return torch.tensor(color, dtype=torch.uint8).view(3, 1, 1).expand(3, H, W).clone()


def make_gradient_image(H, W, channels=3):
    """Horizontal gradient: dark left, bright right."""
    grad = torch.linspace(0, 1, W).unsqueeze(0).expand(H, W)
    if channels > 0:
        return grad.unsqueeze(0).expand(channels, H, W).clone()
    return grad


def make_stripe_image(H, W, stripe_col, width=1, value=1.0):
    """Black grayscale image (1, H, W) with a bright vertical stripe
    covering columns [stripe_col, stripe_col + width)."""
    img = torch.zeros(1, H, W)
    img[0, :, stripe_col:stripe_col + width] = value
    return img


def make_index_image(H, W):
    """uint8 RGB image whose red channel is the column index and green the row index."""
    cols = torch.arange(W, dtype=torch.uint8).unsqueeze(0).expand(H, W)
    rows = torch.arange(H, dtype=torch.uint8).unsqueeze(1).expand(H, W)
    return torch.stack([cols, rows, torch.zeros(H, W, dtype=torch.uint8)]).clone()
