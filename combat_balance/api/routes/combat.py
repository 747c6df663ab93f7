"""POST /api/v1/combat/simulate — run a Monte Carlo balance simulation."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException

from combat_balance.api.dependencies import get_limits
from combat_balance.api.schemas import (
    ScenarioSchema,
    SimConfigSchema,
    SimulateRequest,
    SimulateResponse,
    TuningSchema,
)
from combat_balance.config import DEFAULT_TUNING, ApiLimits, CombatSimConfig, TuningOverrides
from combat_balance.core.abilities import get_ability
from combat_balance.core.gear import get_gear
from combat_balance.core.models import CombatScenario, EnemyEntry
from combat_balance.engine.monte_carlo import run_combat_simulation
from combat_balance.errors import CombatSimError
from combat_balance.utils.report import result_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/combat")


def _to_scenario(schema: ScenarioSchema) -> CombatScenario:
    gear = get_gear(schema.player_gear) if isinstance(schema.player_gear, str) else schema.player_gear
    abilities = tuple(
        get_ability(a) if isinstance(a, str) else a
        for a in schema.player_abilities
    )
    return CombatScenario(
        player_level=schema.player_level,
        player_gear=gear,
        player_abilities=abilities,
        enemies=tuple(
            EnemyEntry(archetype_id=e.archetype_id, level=e.level, count=e.count)
            for e in schema.enemies
        ),
        name=schema.name,
    )


def _to_tuning(schema: TuningSchema | None) -> TuningOverrides:
    if schema is None:
        return DEFAULT_TUNING
    return replace(DEFAULT_TUNING, **schema.model_dump(exclude_none=True))


def _to_config(schema: SimConfigSchema | None, limits: ApiLimits) -> CombatSimConfig:
    schema = schema or SimConfigSchema()
    iterations = min(schema.iterations or limits.default_iterations, limits.max_iterations)
    duration = min(
        schema.max_fight_duration_sec or limits.default_fight_duration_sec,
        limits.max_fight_duration_sec,
    )
    seed = schema.seed if schema.seed is not None else random.randrange(limits.max_random_seed)
    return CombatSimConfig(
        iterations=iterations,
        seed=seed,
        max_fight_duration_sec=duration,
        rng_mode=schema.rng_mode,
        num_workers=schema.num_workers,
    )


@router.post("/simulate", response_model=SimulateResponse)
def simulate(
    body: SimulateRequest,
    limits: ApiLimits = Depends(get_limits),
) -> SimulateResponse:
    if not body.scenario.enemies:
        raise HTTPException(status_code=400, detail="Scenario with at least one enemy group is required")

    try:
        scenario = _to_scenario(body.scenario)
        tuning = _to_tuning(body.tuning)
        config = _to_config(body.config, limits)
        result = run_combat_simulation(scenario, tuning, config)
    except CombatSimError as exc:
        logger.info("Rejected simulation request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return SimulateResponse(
        result=result_to_dict(result, max_fights=limits.fight_sample_limit),
        total_fights=len(result.fights),
    )
