from __future__ import annotations

import noise

# pnoise1 indexes its permutation table with ``i & 255``, so the lattice
# repeats every 256 cells. Wrapping the coordinate ourselves keeps the float32
# math inside the C extension precise far from the origin.
_LATTICE_PERIOD = 256.0
_GOLDEN = 0.6180339887498949


def hash_coords(seed: int, *coords: int) -> int:
    """Stable 32-bit mix of a seed and integer coordinates."""
    value = (seed * 668265263) & 0xFFFFFFFF
    for i, c in enumerate(coords):
        value ^= (int(c) * (374761393 + 2 * i)) & 0xFFFFFFFF
        value = ((value ^ (value >> 13)) * 1274126177) & 0xFFFFFFFF
    value ^= value >> 16
    return value & 0xFFFFFFFF


class NoiseField:
    """Seeded, continuous 1D coherent noise bounded by ``amplitude``."""

    def __init__(self, seed: int, scale: float, amplitude: float, octaves: int = 2,
                 persistence: float = 0.5, lacunarity: float = 2.0):
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.seed = seed
        self.scale = scale
        self.amplitude = amplitude
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity
        self.base = seed & 0xFF
        self.offset = ((seed >> 8) * _GOLDEN * _LATTICE_PERIOD) % _LATTICE_PERIOD

    def raw(self, x: float, scale: float | None = None) -> float:
        scale = self.scale if scale is None else scale
        if scale <= 0:
            raise ValueError("scale must be positive")
        u = (x / scale + self.offset) % _LATTICE_PERIOD
        n = noise.pnoise1(
            u,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            repeat=1024,
            base=self.base,
        )
        return max(-1.0, min(1.0, n))

    def noise(self, x: float, scale: float | None = None) -> float:
        return self.raw(x, scale) * self.amplitude

    __call__ = noise
