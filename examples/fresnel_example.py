"""Fresnel reflectance and total internal reflection at a glass surface.

Demonstrates: refract, fresnel
Output:       examples/fresnel_example.png

Physical identities verified:
    Normal incidence, air to glass -> R = ((1 - 1.5) / (1 + 1.5))^2 = 0.04
    Glass to air beyond asin(1 / 1.5) -> total internal reflection
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from light2d import fresnel, refract

_N = 1.5
_OUT = os.path.join(os.path.dirname(__file__), "fresnel_example.png")


def _reflectance(angles, eta_i, eta_t):
    normal = np.array([0.0, 1.0])
    d = np.stack([np.sin(angles), -np.cos(angles)], axis=-1)
    ok, r = refract(d, normal, eta_i / eta_t)
    cos_i = -(d @ normal)
    cos_t = -(r @ normal)
    refl = np.ones_like(angles)
    refl[ok] = fresnel(cos_i[ok], cos_t[ok], eta_i, eta_t)
    return refl, ok


def _render_png(angles, entering, leaving, out_path):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("  matplotlib not available, skipping PNG")
        return

    fig, ax = plt.subplots(figsize=(5, 3.5))
    ax.plot(np.degrees(angles), entering, label="air → glass")
    ax.plot(np.degrees(angles), leaving, label="glass → air")
    ax.set_xlabel("incidence angle (deg)")
    ax.set_ylabel("reflectance")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    print(f"  Saved: {out_path}")


def main():
    print("=" * 60)
    print(f"FRESNEL: refractive index {_N}")
    print("=" * 60)

    angles = np.linspace(0.0, np.pi / 2 - 1e-3, 181)
    entering, _ = _reflectance(angles, 1.0, _N)
    leaving, ok = _reflectance(angles, _N, 1.0)

    critical = np.degrees(angles[~ok][0])
    print(f"\nR at normal incidence   : {entering[0]:.4f}  (expected 0.0400)")
    print(f"First TIR angle         : {critical:.2f} deg  (expected > {np.degrees(np.arcsin(1 / _N)):.2f})")

    ok_all = abs(entering[0] - 0.04) < 1e-9 and critical > np.degrees(np.arcsin(1 / _N))
    print("\n" + ("PASSED PASSED" if ok_all else "FAILED FAILED"))

    _render_png(angles, entering, leaving, _OUT)


if __name__ == "__main__":
    main()
