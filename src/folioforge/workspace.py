"""Composition root wiring config, the animation store and the portfolio."""

from __future__ import annotations

import logging
import random
from pathlib import Path

from folioforge.config import AppConfig, load_config
from folioforge.models.particles import ParticleConfig
from folioforge.models.portfolio import Portfolio
from folioforge.motion import AnimatedElement
from folioforge.particles.engine import ParticleSystem
from folioforge.store import AnimationStore, StoreLoadError

logger = logging.getLogger(__name__)

PORTFOLIO_FILENAME = "portfolio.json"


class Workspace:
    """Owns the process-wide animation store and the user's portfolio.

    The store is loaded from ``config.animations_file`` on construction and
    written back after every change.  A corrupt store file is logged and
    replaced by an empty store.
    """

    def __init__(self, config: AppConfig | None = None, *, autosave: bool = True) -> None:
        self.config = config or load_config()
        self.store = self._load_store()
        self.particle_config = ParticleConfig()
        self._unsubscribe = self.store.subscribe(self._autosave) if autosave else None

    @property
    def portfolio_file(self) -> Path:
        return self.config.config_dir / PORTFOLIO_FILENAME

    def _load_store(self) -> AnimationStore:
        path = self.config.animations_file
        try:
            store = AnimationStore.load(path)
        except StoreLoadError as exc:
            logger.warning("Ignoring unreadable animation store %s: %s", path, exc)
            return AnimationStore()
        logger.debug("Loaded %d section(s) from %s", len(store.section_ids), path)
        return store

    def _autosave(self, store: AnimationStore) -> None:
        path = self.config.animations_file
        try:
            store.save(path)
        except OSError as exc:
            logger.warning("Could not save animation store %s: %s", path, exc)

    def save_store(self) -> Path:
        return self.store.save(self.config.animations_file)

    # ── Portfolio ───────────────────────────────────────────
    def load_portfolio(self, path: Path | None = None) -> Portfolio:
        """Load the portfolio; the default location yields an empty one if absent."""
        if path is None:
            if not self.portfolio_file.exists():
                return Portfolio()
            path = self.portfolio_file
        return Portfolio.load(path)

    def save_portfolio(self, portfolio: Portfolio, path: Path | None = None) -> Path:
        saved = portfolio.save(path or self.portfolio_file)
        logger.info("Saved portfolio -> %s", saved)
        return saved

    # ── Factories ───────────────────────────────────────────
    def element(
        self,
        section_id: str,
        *,
        extra_delay: float = 0.0,
        gate_on_view: bool = True,
    ) -> AnimatedElement:
        """An :class:`AnimatedElement` bound to this workspace's store."""
        return AnimatedElement(
            self.store, section_id, extra_delay=extra_delay, gate_on_view=gate_on_view,
        )

    def particle_system(
        self,
        config: ParticleConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> ParticleSystem:
        """A particle system sized to the configured canvas."""
        system = ParticleSystem(config or self.particle_config, rng=rng)
        system.resize(self.config.particles.width, self.config.particles.height)
        return system

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
