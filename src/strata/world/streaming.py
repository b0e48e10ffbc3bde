from __future__ import annotations

import logging
import math

from .active_region import ActiveRegion
from .config import WorldConfig
from .flora import FloraModel
from .grid import align_down, align_up

logger = logging.getLogger(__name__)


class StreamingController:
    """Slides the active window along with the avatar.

    After every reconcile the block keys are exactly the columns that
    ``blocks_in_range(Lmin, Lmax)`` emits and the tree keys are exactly the
    slots in ``[align_up(Lmin), align_down(Lmax)]``.
    """

    def __init__(self, region: ActiveRegion, flora: FloraModel, cfg: WorldConfig | None = None):
        self.region = region
        self.flora = flora
        self.terrain = region.terrain
        self.cfg = cfg or self.terrain.cfg
        self.block_size = self.cfg.block_size
        self.pitch = self.cfg.tree_pitch
        self.threshold = self.cfg.update_threshold
        self.min_limit = -self.cfg.window_pad
        self.max_limit = self.cfg.window_width + self.cfg.window_pad
        self.last_avatar_x = 0.0
        self.is_ready = False

    @property
    def window(self) -> tuple[float, float]:
        return self.min_limit, self.max_limit

    @property
    def width(self) -> float:
        return self.max_limit - self.min_limit

    def start(self, avatar_x: float) -> None:
        lo, hi = self.min_limit, self.max_limit
        self.region.add_in_range(math.floor(lo), math.floor(hi))
        self.flora.create_in_range(math.ceil(lo), math.floor(hi))
        self.last_avatar_x = avatar_x
        self.is_ready = True
        logger.info(
            "streaming window [%s, %s]: %d block(s), %d tree(s)",
            lo, hi, len(self.region), len(self.flora),
        )

    def tick(self, avatar_x: float) -> bool:
        if not self.is_ready:
            return False
        dx = avatar_x - self.last_avatar_x
        if abs(dx) < self.threshold:
            return False

        if dx > 0:
            self._moved_right(dx)
        else:
            self._moved_left(dx)

        self.min_limit += dx
        self.max_limit += dx
        self.last_avatar_x = avatar_x
        logger.debug(
            "reconciled dx=%.1f window=[%.1f, %.1f] blocks=%d trees=%d",
            dx, self.min_limit, self.max_limit, len(self.region), len(self.flora),
        )
        return True

    def _first_slot(self, min_limit: float) -> int:
        return align_up(math.ceil(min_limit), self.pitch)

    def _last_slot(self, max_limit: float) -> int:
        return align_down(math.floor(max_limit), self.pitch)

    def _add_band(self, lo: float, hi: float) -> None:
        self.region.add_in_range(math.floor(lo), math.floor(hi))
        # Slots are integers: round the band inward so none outside it appears.
        self.flora.create_in_range(math.ceil(lo), math.floor(hi))

    def _moved_right(self, dx: float) -> None:
        new_min, new_max = self.min_limit + dx, self.max_limit + dx
        self._add_band(self.max_limit, new_max)

        b = self.block_size
        old_first, _ = self.terrain.column_span(self.min_limit, self.max_limit)
        new_first, _ = self.terrain.column_span(new_min, new_max)
        self.region.remove_in_range(old_first - b, new_first)
        self.flora.remove_trees_outside_range(self._first_slot(self.min_limit) - self.pitch,
                                              self._first_slot(new_min))

    def _moved_left(self, dx: float) -> None:
        new_min, new_max = self.min_limit + dx, self.max_limit + dx
        self._add_band(new_min, self.min_limit)

        b = self.block_size
        _, old_last = self.terrain.column_span(self.min_limit, self.max_limit)
        _, new_last = self.terrain.column_span(new_min, new_max)
        self.region.remove_in_range(new_last, old_last + b)
        self.flora.remove_trees_outside_range(self._last_slot(new_max),
                                              self._last_slot(self.max_limit) + self.pitch)

    def teardown(self) -> None:
        blocks = self.region.clear()
        trees = self.flora.clear()
        self.is_ready = False
        logger.info("streaming teardown: released %d block(s), %d tree(s)", blocks, trees)
