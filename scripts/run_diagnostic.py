"""scripts/run_diagnostic.py

Run one brand through the Memory Score engine and print the diagnostic.

Pipeline
--------
1. Load metric inputs           → sample brand or a JSON file
2. Score every stage            → StageScorer
3. Aggregate                    → geometric mean + status bands
4. Project decay                → DecayProjector (rate/horizon from settings)
5. Compare                      → competitor vector or flat benchmark
6. Print table (or JSON report)

Usage
-----
    python scripts/run_diagnostic.py
    python scripts/run_diagnostic.py --benchmark 60 --json
    python scripts/run_diagnostic.py --flat
    python scripts/run_diagnostic.py --catalog framework --metrics brand.json
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import structlog

from memory_score.config import get_settings
from memory_score.models.catalog import (
    CATALOGS,
    SAMPLE_COMPETITOR_SCORES,
    SAMPLE_FRAMEWORK_METRICS,
    SAMPLE_METRICS,
)
from memory_score.models.presentation import STAGE_PRESENTATION
from memory_score.models.report import DiagnosticReport
from memory_score.scoring.engine import MemoryScoreEngine

# ── logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s %(name)s %(message)s",
    stream=sys.stderr,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)
log = structlog.get_logger("run_diagnostic")

_SAMPLES = {"diagnostic": SAMPLE_METRICS, "framework": SAMPLE_FRAMEWORK_METRICS}


def run(
    catalog: str,
    metrics_path: Optional[str] = None,
    benchmark: Optional[int] = None,
    competitor: str = "Competitor A",
) -> DiagnosticReport:
    """Score the sample brand (or ``metrics_path``) and compare it."""
    if metrics_path:
        with open(metrics_path) as f:
            metrics = json.load(f)
    else:
        metrics = _SAMPLES[catalog]

    engine = MemoryScoreEngine(stages=CATALOGS[catalog])
    if benchmark is not None:
        reference = engine.flat_reference(benchmark)
    else:
        reference = engine.competitor_reference(competitor, SAMPLE_COMPETITOR_SCORES)
    return engine.diagnose(metrics, reference)


def _print_table(report: DiagnosticReport) -> None:
    """Pretty-print the diagnostic."""
    gaps = {g.stage_id: g for g in report.comparison.gaps} if report.comparison else {}
    header = f"{'Stage':<12}  {'Score':>5}  {'Status':<9}  {'Ref':>5}  {'Gap':>5}"
    print("\n" + "=" * len(header))
    print(header)
    print("=" * len(header))
    for s in report.stages:
        name = STAGE_PRESENTATION[s.stage_id].short_name if s.stage_id in STAGE_PRESENTATION else s.stage_id
        g = gaps.get(s.stage_id)
        ref = f"{g.reference_score:>5}" if g else f"{'-':>5}"
        gap = f"{g.gap:>+5}" if g else f"{'-':>5}"
        print(f"{name:<12}  {s.score:>5}  {s.status.value:<9}  {ref}  {gap}")
    print("=" * len(header))
    print(f"Memory Score: {report.overall.value} ({report.overall.status.value}), "
          f"arithmetic mean {report.overall.arithmetic_mean:.1f}")

    decay = "  ".join(f"t{p.offset}={p.projected_score}" for p in report.decay.points)
    print(f"Decay @ {report.decay.rate:.0%}/period: {decay}")
    if report.decay.below_threshold:
        print(f"  Warning: below {report.decay.threshold} from offset {report.decay.first_breach_offset}")
    elif report.decay.periods_until_below is not None:
        print(f"  Drops below {report.decay.threshold} after {report.decay.periods_until_below} periods")

    print("Priority stages: " + ", ".join(report.priority_stages))
    for stage_id in report.priority_stages:
        presentation = STAGE_PRESENTATION.get(stage_id)
        if presentation:
            print(f"  {presentation.short_name}: {presentation.interventions[0]}")


if __name__ == "__main__":
    import argparse

    settings = get_settings()
    parser = argparse.ArgumentParser(description=f"{settings.app_name}: run a brand diagnostic")
    parser.add_argument("--catalog", choices=sorted(CATALOGS), default=settings.stage_catalog)
    parser.add_argument("--metrics", help="JSON file of stage id → signal key → raw value")
    parser.add_argument("--benchmark", type=int, help="Compare against this flat benchmark")
    parser.add_argument("--flat", action="store_true", help="Compare against the configured flat benchmark")
    parser.add_argument("--competitor", default="Competitor A", help="Competitor label")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    args = parser.parse_args()
    if args.flat and args.benchmark is None:
        args.benchmark = settings.flat_benchmark

    log.info("diagnostic_started", catalog=args.catalog, metrics=args.metrics or "sample")
    result = run(args.catalog, args.metrics, args.benchmark, args.competitor)
    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        _print_table(result)
