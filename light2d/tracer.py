"""Ray marching and Monte Carlo light transport.

:class:`Tracer` sphere-marches rays through a :class:`SceneNode`, turns each
hit into radiance (emission plus recursively traced reflection and
refraction, attenuated by Beer-Lambert absorption) and averages stratified
directions around a point to estimate the light arriving there.

Everything is vectorised over rays: a single :meth:`Tracer.trace` call
marches an array of rays together, and each recursion level issues at most
two batched sub-calls (refracted and reflected) for the rays that branch.

Example:
    >>> from light2d import RenderConfig, Tracer, get_scene
    >>> tracer = Tracer(get_scene("glass"), RenderConfig(samples=64, seed=0))
    >>> tracer.sample(0.5, 0.5)          # -> array([r, g, b])
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from ._common import as_points, dot
from .config import RenderConfig
from .optics import beer_lambert, fresnel, reflect, refract
from .scene import SceneNode, gradient

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


class Tracer:
    """Radiance estimator for one scene and one configuration.

    Args:
        scene: The scene tree to render.
        config: Marching, recursion and sampling constants.
        rng: Source of uniform draws for the pixel sampler.  Defaults to
            ``numpy.random.default_rng(config.seed)``.  A tracer is meant to
            be used by one thread; give each worker its own generator.
    """

    def __init__(
        self,
        scene: SceneNode,
        config: Optional[RenderConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.scene = scene
        self.config = config if config is not None else RenderConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def trace(self, origin: _Array, direction: _Array, depth: int = 0) -> _Array:
        """Radiance arriving at *origin* from *direction*.

        Args:
            origin: Ray origins, shape ``(..., 2)``.
            direction: Unit directions, broadcastable against *origin*.
            depth: Recursion depth of these rays; no secondary rays are
                spawned once it reaches ``config.max_depth``.

        Returns:
            Colours of shape ``(..., 3)``.
        """
        origin = as_points(origin)
        direction = as_points(direction)
        origin, direction = np.broadcast_arrays(origin, direction)
        batch = origin.shape[:-1]
        radiance = self._trace(origin.reshape(-1, 2), direction.reshape(-1, 2), depth)
        return radiance.reshape(batch + (3,))

    def sample(self, x: float, y: float, rng: Optional[np.random.Generator] = None) -> _Array:
        """Average radiance at the point ``(x, y)``; returns a ``(3,)`` colour."""
        return self.sample_points(np.array([[x, y]], dtype=float), rng=rng)[0]

    def sample_points(
        self, points: _Array, rng: Optional[np.random.Generator] = None
    ) -> _Array:
        """Stratified Monte Carlo estimate at each of *points*.

        The circle is split into ``config.samples`` equal buckets and one
        direction is drawn uniformly inside each bucket.

        Args:
            points: Query points, shape ``(..., 2)``.
            rng: Overrides the tracer's generator for this call.

        Returns:
            Mean radiance per point, shape ``(..., 3)``.
        """
        points = as_points(points)
        rng = rng if rng is not None else self.rng
        n = self.config.samples
        batch = points.shape[:-1]
        flat = points.reshape(-1, 2)

        jitter = rng.random((flat.shape[0], n))
        theta = 2.0 * np.pi * (np.arange(n) + jitter) / n
        directions = np.stack([np.cos(theta), np.sin(theta)], axis=-1)
        origins = np.broadcast_to(flat[:, None, :], directions.shape)
        logger.debug("Sampling %d points x %d directions", flat.shape[0], n)

        radiance = self._trace(origins.reshape(-1, 2), directions.reshape(-1, 2), 0)
        return radiance.reshape(flat.shape[0], n, 3).mean(axis=1).reshape(batch + (3,))

    # ------------------------------------------------------------------
    # Marching
    # ------------------------------------------------------------------

    def march(
        self, origin: _Array, direction: _Array, sign: _Array
    ) -> Tuple[_Array, _Array, _Array]:
        """Sphere-march ``(M, 2)`` rays until they reach a surface.

        *sign* is +1 for rays travelling outside solids and -1 for rays
        inside a medium; the step is the distance to the nearest boundary
        in that medium.

        Returns:
            ``(hit, t, position)``: a boolean mask of rays that reached a
            surface, the distance travelled and the final position.
        """
        cfg = self.config
        m = origin.shape[0]
        t = np.zeros(m)
        hit = np.zeros(m, dtype=bool)
        position = origin.copy()
        active = np.arange(m)

        for _ in range(cfg.max_step):
            if active.size == 0:
                break
            q = origin[active] + direction[active] * t[active, None]
            sd = self.scene.distance(q)
            reached = sd * sign[active] < cfg.epsilon

            done = active[reached]
            hit[done] = True
            position[done] = q[reached]

            active = active[~reached]
            t[active] += sd[~reached] * sign[active]
            active = active[t[active] <= cfg.max_distance]

        return hit, t, position

    # ------------------------------------------------------------------
    # Shading
    # ------------------------------------------------------------------

    def _trace(self, origin: _Array, direction: _Array, depth: int) -> _Array:
        cfg = self.config
        radiance = np.zeros((origin.shape[0], 3))
        if origin.shape[0] == 0:
            return radiance

        sign = np.where(self.scene.distance(origin) >= 0.0, 1.0, -1.0)
        hit, t, position = self.march(origin, direction, sign)
        idx = np.flatnonzero(hit)
        if idx.size == 0:
            return radiance

        p = position[idx]
        d = direction[idx]
        s = sign[idx]
        surface = self.scene.evaluate(p)
        total = np.array(surface.emissive, dtype=float)

        if depth < cfg.max_depth:
            scatters = (surface.reflectivity > 0.0) | (surface.refractive_index > 0.0)
            b = np.flatnonzero(scatters)
            if b.size:
                total[b] += self._scatter(
                    p[b],
                    d[b],
                    s[b],
                    surface.reflectivity[b],
                    surface.refractive_index[b],
                    depth,
                )

        radiance[idx] = total * beer_lambert(surface.absorption, t[idx])
        return radiance

    def _scatter(
        self,
        p: _Array,
        d: _Array,
        sign: _Array,
        reflectivity: _Array,
        eta: _Array,
        depth: int,
    ) -> _Array:
        """Reflected and refracted radiance for rays that hit at *p*."""
        bias = self.config.bias
        n = gradient(self.scene, p, self.config.epsilon) * sign[:, None]
        weight = np.array(reflectivity, dtype=float)
        out = np.zeros((p.shape[0], 3))

        r_idx = np.flatnonzero(eta > 0.0)
        if r_idx.size:
            leaving = sign[r_idx] < 0.0
            eta_r = eta[r_idx]
            eta_i = np.where(leaving, eta_r, 1.0)
            eta_t = np.where(leaving, 1.0, eta_r)
            ok, refracted = refract(d[r_idx], n[r_idx], eta_i / eta_t)

            weight[r_idx[~ok]] = 1.0

            k = r_idx[ok]
            if k.size:
                rd = refracted[ok]
                cos_i = -dot(d[k], n[k])
                cos_t = -dot(rd, n[k])
                r = fresnel(cos_i, cos_t, eta_i[ok], eta_t[ok])
                out[k] += (1.0 - r)[:, None] * self._trace(p[k] - n[k] * bias, rd, depth + 1)
                weight[k] = r

        m_idx = np.flatnonzero(weight > 0.0)
        if m_idx.size:
            out[m_idx] += weight[m_idx, None] * self._trace(
                p[m_idx] + n[m_idx] * bias,
                reflect(d[m_idx], n[m_idx]),
                depth + 1,
            )
        return out
