"""Batch runner: fly a series of missions and compare both analyses."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from survivorship.domain.analysis import BiasAnalysis
from survivorship.domain.types import MissionType
from survivorship.rules.ruleset import Ruleset, RulesError
from survivorship.sim.campaign import Campaign


def _parse_point(value: str) -> tuple[float, float]:
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {value!r}") from exc
    return x, y


def _format_analysis(title: str, analysis: BiasAnalysis, *, limit: int = 8) -> list[str]:
    lines = [f"{title} (confidence {analysis.confidence:.0%})", f"  {analysis.reasoning}"]
    for placement in analysis.recommendations[:limit]:
        lines.append(f"  - ({placement.x:g}, {placement.y:g}) {placement.priority.value}")
    hidden = len(analysis.recommendations) - limit
    if hidden > 0:
        lines.append(f"  ... {hidden} more")
    return lines


def _analysis_payload(analysis: BiasAnalysis) -> dict:
    payload = asdict(analysis)
    for rec in payload["recommendations"]:
        rec["priority"] = rec["priority"].value
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="survivorship-sim",
        description="Fly missions and contrast survivor-only analysis with the full picture.",
    )
    parser.add_argument("--seed", type=int, default=1, help="Campaign seed (default: %(default)s).")
    parser.add_argument("--missions", type=int, default=10, help="Missions to fly (default: %(default)s).")
    parser.add_argument("--difficulty", type=float, default=1.0, help="Mission difficulty (default: %(default)s).")
    parser.add_argument("--aircraft", type=int, default=10, help="Aircraft per mission (default: %(default)s).")
    parser.add_argument(
        "--type",
        dest="mission_type",
        choices=[t.value for t in MissionType],
        default=MissionType.BOMBING.value,
        help="Mission type (default: %(default)s).",
    )
    parser.add_argument(
        "--armor",
        type=_parse_point,
        action="append",
        default=[],
        metavar="X,Y",
        help="Armor placement; repeat for several.",
    )
    parser.add_argument("--rules", type=Path, default=None, help="Alternate rules JSON file.")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each mission.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        rules = Ruleset.load(args.rules) if args.rules else Ruleset.default()
    except RulesError as exc:
        parser.error(str(exc))

    campaign = Campaign.new(seed=args.seed, rules=rules)
    for x, y in args.armor:
        campaign.add_armor(x, y)
    try:
        for _ in range(args.missions):
            campaign.launch_mission(MissionType(args.mission_type), args.difficulty, args.aircraft)
    except ValueError as exc:
        parser.error(str(exc))

    stats = campaign.analyzer.stats()
    biased = campaign.analyzer.biased_analysis()
    correct = campaign.analyzer.correct_analysis()

    if args.json:
        print(
            json.dumps(
                {
                    "stats": asdict(stats),
                    "biased": _analysis_payload(biased),
                    "correct": _analysis_payload(correct),
                },
                indent=2,
            )
        )
        return 0

    print(
        f"Missions: {campaign.mission_count}  returned: {stats.returned}  "
        f"lost: {stats.lost}  survival: {stats.survival_rate:.1%}"
    )
    print()
    print("\n".join(_format_analysis("Survivor-only analysis", biased)))
    print()
    print("\n".join(_format_analysis("Full-population analysis", correct)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
