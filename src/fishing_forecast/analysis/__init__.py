"""Cross-datasource joins and composite scores.

Each module combines outputs from 2+ datasources into enriched structures
that renderers and serializers can consume directly. This is the domain
logic layer.

Dependency rule: analysis/ imports from datasources/ models and pure
functions only. It never fetches data or produces HTML.

Modules:
  - fishing_score: weather snapshot + tide reading -> score, condition, reasons
  - timeline: weather + tide + moon phase -> ordered ScoredPoint timeline

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function.
2. Rules:
   - Never call fetch functions here.
   - No I/O, no HTTP, no Prefect decorators.
   - Return dataclasses that ``serialization.py`` can turn into dicts.
3. Wire into ``flows/forecast.py`` and add tests in ``tests/test_{name}.py``.
"""

from fishing_forecast.analysis.fishing_score import (
    FishingCondition,
    FishingScore,
    calculate_score,
    determine_condition,
    generate_reasons,
    score,
)
from fishing_forecast.analysis.timeline import (
    ForecastTimeline,
    ScoredPoint,
    build_from_payloads,
    build_timeline,
)

__all__ = [
    "FishingCondition",
    "FishingScore",
    "ForecastTimeline",
    "ScoredPoint",
    "build_from_payloads",
    "build_timeline",
    "calculate_score",
    "determine_condition",
    "generate_reasons",
    "score",
]
