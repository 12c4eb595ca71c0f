"""
Tests for input sampling.
"""

import pytest

from rocketman.dodge_core.config_loader import load_config
from rocketman.dodge_core.entities import Player, PlayArea
from rocketman.dodge_core.input_sampler import InputSampler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def player(config):
    return Player.create(config.player, PlayArea(480, 720))


class TestKeyboard:
    """Held keys become per-frame deltas."""

    def test_no_input(self, player):
        intent = InputSampler().sample(player)
        assert not intent.is_absolute
        assert (intent.dx, intent.dy) == (0, 0)

    def test_each_direction(self, player):
        cases = {
            "ArrowLeft": (-5, 0),
            "ArrowRight": (5, 0),
            "ArrowUp": (0, -4),
            "ArrowDown": (0, 4),
        }
        for key, expected in cases.items():
            sampler = InputSampler()
            sampler.key_down(key)
            intent = sampler.sample(player)
            assert (intent.dx, intent.dy) == expected

    def test_legacy_names(self, player):
        sampler = InputSampler()
        sampler.key_down("Left")
        sampler.key_down("Up")
        intent = sampler.sample(player)
        assert (intent.dx, intent.dy) == (-5, -4)

    def test_opposite_keys_cancel(self, player):
        sampler = InputSampler()
        sampler.key_down("ArrowLeft")
        sampler.key_down("ArrowRight")
        assert sampler.sample(player).dx == 0

    def test_key_up_releases(self, player):
        sampler = InputSampler()
        sampler.key_down("ArrowLeft")
        sampler.key_up("ArrowLeft")
        assert sampler.sample(player).dx == 0
        assert not sampler.using_keyboard()


class TestPointer:
    """Pointer targets centre the player on the cursor."""

    def test_target_is_centred(self, player):
        sampler = InputSampler()
        sampler.set_pointer(200, 650)
        intent = sampler.sample(player)
        assert intent.is_absolute
        assert intent.target == (200 - 25, 650 - 35)
        assert intent.apply(0, 0) == (175, 615)

    def test_keyboard_discards_pointer(self, player):
        sampler = InputSampler()
        sampler.set_pointer(200, 650)
        sampler.key_down("ArrowRight")
        intent = sampler.sample(player)
        assert not intent.is_absolute
        assert intent.dx == 5
        assert sampler.pointer is None

        # Pointer does not come back on its own after the key is released
        sampler.key_up("ArrowRight")
        assert not sampler.sample(player).is_absolute

    def test_clear_pointer(self, player):
        sampler = InputSampler()
        sampler.set_pointer(10, 10)
        sampler.clear_pointer()
        assert not sampler.sample(player).is_absolute

    def test_reset(self, player):
        sampler = InputSampler()
        sampler.key_down("ArrowLeft")
        sampler.set_pointer(10, 10)
        sampler.reset()
        assert sampler.held_keys == set()
        assert sampler.pointer is None
