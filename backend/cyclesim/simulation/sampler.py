"""Market/event sampler — the only source of randomness in a cycle.

Every draw goes through the ``random.Random`` passed in, in a fixed order:
event firing roll, event pick (only if fired), market noise.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog, LifeEventDef

QUIET_MONTH_LABEL = "Quiet month"
QUIET_MONTH_KEY = "none"


@dataclass(frozen=True)
class CycleDraw:
    """Market return and life event drawn for one cycle."""
    market_return: float
    event: LifeEventDef | None

    @property
    def event_label(self) -> str:
        return self.event.label if self.event else QUIET_MONTH_LABEL

    @property
    def event_key(self) -> str:
        return self.event.key if self.event else QUIET_MONTH_KEY


def pick_life_event(
    rng: random.Random,
    last_event_key: str | None,
    catalog: Catalog = DEFAULT_CATALOG,
    probability: float = 0.22,
) -> LifeEventDef | None:
    """Fire an event with fixed probability, never repeating last cycle's event."""
    if rng.random() >= probability:
        return None
    available = [e for e in catalog.life_events if e.key != last_event_key]
    if not available:
        return None
    return available[int(rng.random() * len(available)) % len(available)]


def base_market_return(decision: Decision, catalog: Catalog = DEFAULT_CATALOG) -> float:
    """Expected monthly return for the decision's climate and risk profile."""
    market = catalog.market(decision.market_mode)
    risk = catalog.risk(decision.risk_profile)
    return market.base_return * risk.risk_multiplier


def sample_cycle(
    decision: Decision,
    last_event_key: str | None,
    rng: random.Random,
    catalog: Catalog = DEFAULT_CATALOG,
    config: EngineConfig | None = None,
) -> CycleDraw:
    """Draw one market return and at most one life event."""
    config = config or EngineConfig()
    event = pick_life_event(rng, last_event_key, catalog, config.event_probability)
    noise = (rng.random() - 0.5) * config.market_noise
    shock = event.market_shock if event else 0.0
    return CycleDraw(
        market_return=base_market_return(decision, catalog) + noise + shock,
        event=event,
    )
