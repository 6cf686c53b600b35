"""Tests for the ready-made scenes."""

import numpy as np
import numpy.testing as npt
import pytest

from light2d import SCENES, SceneNode, get_scene
from light2d.scenes import LIGHT_EMISSIVE


def _p(*xy) -> np.ndarray:
    return np.array([list(xy)], dtype=float)


@pytest.mark.parametrize("name", sorted(SCENES))
def test_every_scene_builds(name):
    scene = get_scene(name)
    assert isinstance(scene, SceneNode)
    s = scene.evaluate(np.random.default_rng(0).random((10, 2)))
    assert s.signed_distance.shape == (10,)
    assert s.emissive.shape == (10, 3)
    # every scene contains at least one light
    phi = scene.evaluate(np.stack(np.meshgrid(np.linspace(-0.1, 1.1, 61),
                                              np.linspace(-0.1, 1.1, 61)), axis=-1))
    assert (phi.emissive[phi.signed_distance < 0] > 0).any()


def test_unknown_scene_raises():
    with pytest.raises(ValueError, match="glass"):
        get_scene("nope")


class TestGlassScene:
    def setup_method(self):
        self.scene = get_scene("glass")

    def test_four_corner_lamps(self):
        for corner in [(-0.05, -0.05), (1.05, -0.05), (-0.05, 1.05), (1.05, 1.05)]:
            s = self.scene.evaluate(_p(*corner))
            npt.assert_allclose(s.signed_distance, [-0.05], atol=1e-12)
            npt.assert_array_equal(s.emissive[0], [LIGHT_EMISSIVE] * 3)

    def test_prism_material(self):
        s = self.scene.evaluate(_p(0.75, 0.27))
        assert s.signed_distance[0] < 0
        assert s.refractive_index[0] == 1.5
        npt.assert_array_equal(s.absorption[0], [4.0, 1.0, 4.0])

    def test_empty_region(self):
        assert self.scene.distance(_p(0.9, 0.7))[0] > 0

    def test_notch_is_carved(self):
        # (0.16, 0.25) lies inside the horizontal bar and inside the top-left notch
        assert self.scene.distance(_p(0.16, 0.25))[0] > 0
