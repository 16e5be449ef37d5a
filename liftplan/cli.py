"""
Command line front end for the generation engine.

Reads and writes JSON documents in the data directory (``LIFTPLAN_DATA_DIR``,
default ``~/.liftplan``): session history, the split plan and progression
state.

Usage examples:
    # Per-muscle set targets for Monday of the stored plan
    liftplan targets --day 0

    # Targets for a template plan without touching stored data
    liftplan targets --split push_pull_legs --training-days 6 --day 2

    # Plan today's session
    liftplan generate

    # Plan a bodyweight session for a date with a fixed duration
    liftplan generate --date 2026-10-21 --duration 40 --equipment bodyweight

    # Record a finished session and update progression
    liftplan complete --file session.json

    # Weekly muscle volume against the plan's weekly targets
    liftplan volume

    # Search the catalog
    liftplan catalog --query press --muscle triceps
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from liftplan.catalog.exercise_catalog import default_catalog
from liftplan.config.generation_config_loader import (
    GenerationConfigLoadError,
    get_generation_config,
)
from liftplan.config.settings import get_settings
from liftplan.core.exceptions import DomainError, ValidationError
from liftplan.core.logging import (
    add_log_context,
    clear_log_context,
    configure_logging,
    get_logger,
)
from liftplan.models.enums import (
    Difficulty,
    Equipment,
    EquipmentFilter,
    MuscleGroup,
    SplitType,
)
from liftplan.models.session import WorkoutSession
from liftplan.models.split_plan import SplitPlan
from liftplan.repositories.persistence import JsonFilePersistence
from liftplan.repositories.progress_repository import ProgressRepository
from liftplan.repositories.session_repository import SessionRepository
from liftplan.repositories.settings_repository import SettingsRepository
from liftplan.services.muscle_tracker import calculate_weekly_volume
from liftplan.services.progression_engine import ProgressionEngine
from liftplan.services.session_planner import SessionPlanner
from liftplan.services.volume_engine import recommended_duration, targets_for_day
from liftplan.services.workout_generator import WorkoutGenerator

logger = get_logger(__name__)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _parse_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{text}' (expected YYYY-MM-DD)")


def _parse_muscle(text: str) -> MuscleGroup:
    try:
        return MuscleGroup.parse(text)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(e.message)


def _persistence(args) -> JsonFilePersistence:
    data_dir = Path(args.data_dir) if args.data_dir else get_settings().data_dir
    return JsonFilePersistence(data_dir)


def _load_plan(args, settings_repo: SettingsRepository) -> SplitPlan:
    if args.split is not None:
        return SplitPlan.apply_template(args.split, args.training_days)
    return settings_repo.load_plan()


def targets_command(args) -> int:
    """Handle targets command."""
    persistence = _persistence(args)
    plan = _load_plan(args, SettingsRepository(persistence))
    day_index = args.day if args.day is not None else plan.day_index_for_date(date.today())
    if not 0 <= day_index < len(plan.days):
        print(f"\n❌ Day {day_index} is outside the plan (0-{len(plan.days) - 1})")
        return 1

    day = plan.days[day_index]
    targets = targets_for_day(plan, day)
    _print_json(
        {
            "split_type": plan.split_type.value,
            "training_days": plan.training_days,
            "day_index": day_index,
            "day_type": day.day_type.value,
            "recommended_duration": recommended_duration(plan, day),
            "targets": {muscle.value: round(sets, 2) for muscle, sets in targets.items()},
        }
    )
    return 0


def generate_command(args) -> int:
    """Handle generate command."""
    persistence = _persistence(args)
    settings_repo = SettingsRepository(persistence)
    plan = _load_plan(args, settings_repo)
    history = SessionRepository(persistence).fetch_all()
    catalog = default_catalog()

    generator = WorkoutGenerator(catalog, ProgressRepository(persistence))
    planner = SessionPlanner(
        generator, default_duration_minutes=get_settings().default_duration_minutes
    )
    on = args.date or date.today()
    duration = args.duration or settings_repo.preferred_duration()

    add_log_context(command="generate", date=on.isoformat())
    planned = planner.plan_session(
        plan,
        on,
        history,
        duration_minutes=duration,
        equipment=args.equipment,
        preferred_exercise_names=args.prefer or (),
    )

    workout = planned.workout
    if workout.is_empty:
        print(f"\n❌ {workout.reasoning}")
        return 1

    _print_json(
        {
            "date": on.isoformat(),
            "day_type": planned.day.day_type.value,
            "duration_minutes": planned.duration_minutes,
            "estimated_duration": workout.estimated_duration,
            "strategy": workout.strategy.value if workout.strategy else None,
            "coverage": None if workout.coverage is None else round(workout.coverage, 3),
            "reasoning": workout.reasoning,
            "exercises": [
                {
                    "name": log.name,
                    "sets": len(log.sets),
                    "reps": log.sets[0].reps if log.sets else None,
                    "weight": log.sets[0].weight if log.sets else None,
                }
                for log in workout.exercises
            ],
            "attempts": [
                {"duration_minutes": a.duration_minutes, "coverage": round(a.coverage, 3)}
                for a in planned.attempts
            ],
        }
    )
    return 0


def complete_command(args) -> int:
    """Handle complete command."""
    try:
        session = WorkoutSession.model_validate_json(Path(args.file).read_text(encoding="utf-8"))
    except OSError as e:
        print(f"\n❌ Cannot read {args.file}: {e}")
        return 1
    except PydanticValidationError as e:
        print(f"\n❌ Invalid session file {args.file}:\n{e}")
        return 1

    persistence = _persistence(args)
    add_log_context(command="complete", session_id=str(session.id))

    SessionRepository(persistence).save(session)
    engine = ProgressionEngine(ProgressRepository(persistence), default_catalog())
    updates = engine.record_session_completion(session)

    print(f"\n✅ Session saved ({session.completed_set_count}/{session.total_sets} sets completed)")
    for update in updates:
        progress = update.progress
        print(
            f"   {update.name}: {update.action.value} "
            f"{progress.last_weight:g} -> {progress.next_weight:g} lb"
        )
    return 0


def volume_command(args) -> int:
    """Handle volume command."""
    persistence = _persistence(args)
    plan = _load_plan(args, SettingsRepository(persistence))
    history = SessionRepository(persistence).fetch_all()

    volumes = calculate_weekly_volume(history, default_catalog(), datetime.now())
    rows = []
    for muscle in MuscleGroup:
        target = plan.weekly_targets.get(muscle, 0.0)
        volume = volumes.get(muscle)
        sets = volume.sets if volume else 0.0
        rows.append(
            {
                "muscle": muscle.value,
                "sets": round(sets, 1),
                "target": target,
                "total_volume": round(volume.total_volume, 1) if volume else 0.0,
                "progress_pct": round(volume.progress(target), 1) if volume else 0.0,
            }
        )
    _print_json(rows)
    return 0


def catalog_command(args) -> int:
    """Handle catalog command."""
    catalog = default_catalog()
    matches = catalog.search(args.query or "")
    matches = catalog.filter(
        muscles=args.muscle or (),
        equipment=args.equipment,
        difficulty=args.difficulty,
        source=matches,
    )

    print(f"\n=== Exercises ({len(matches)}) ===")
    for exercise in matches:
        primary = ", ".join(m.display_name for m in exercise.primary_muscles)
        print(f"  {exercise.name} ({exercise.equipment.value}, {primary})")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="liftplan",
        description="Workout generation and volume allocation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  liftplan targets --day 0
  liftplan generate --date 2026-10-21 --duration 40
  liftplan complete --file session.json
  liftplan volume
  liftplan catalog --query curl
        """,
    )
    parser.add_argument("--data-dir", help="Data directory (default: LIFTPLAN_DATA_DIR)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--console-logs", action="store_true", help="Human-readable log output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_plan_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--split",
            type=SplitType,
            choices=[s.value for s in SplitType],
            help="Use a template plan instead of the stored plan",
        )
        sub.add_argument(
            "--training-days", type=int, default=4, choices=range(1, 8), help="Training days for --split"
        )

    # targets command
    targets_parser = subparsers.add_parser("targets", help="Per-muscle set targets for a day")
    add_plan_arguments(targets_parser)
    targets_parser.add_argument("--day", type=int, help="Day slot 0-6 (default: today)")
    targets_parser.set_defaults(func=targets_command)

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Plan a session for a date")
    add_plan_arguments(generate_parser)
    generate_parser.add_argument("--date", type=_parse_date, help="YYYY-MM-DD (default: today)")
    generate_parser.add_argument("--duration", type=int, help="Starting duration in minutes")
    generate_parser.add_argument(
        "--equipment",
        type=EquipmentFilter,
        choices=[e.value for e in EquipmentFilter],
        default=EquipmentFilter.BOTH,
    )
    generate_parser.add_argument(
        "--prefer", action="append", help="Familiar exercise name (repeatable)"
    )
    generate_parser.set_defaults(func=generate_command)

    # complete command
    complete_parser = subparsers.add_parser(
        "complete", help="Record a finished session and update progression"
    )
    complete_parser.add_argument("--file", "-f", required=True, help="Session JSON file")
    complete_parser.set_defaults(func=complete_command)

    # volume command
    volume_parser = subparsers.add_parser("volume", help="Weekly muscle volume")
    add_plan_arguments(volume_parser)
    volume_parser.set_defaults(func=volume_command)

    # catalog command
    catalog_parser = subparsers.add_parser("catalog", help="Search the exercise catalog")
    catalog_parser.add_argument("--query", "-q", help="Name substring")
    catalog_parser.add_argument(
        "--muscle", type=_parse_muscle, action="append", help="Muscle (repeatable)"
    )
    catalog_parser.add_argument("--equipment", type=Equipment, choices=[e.value for e in Equipment])
    catalog_parser.add_argument("--difficulty", type=Difficulty, choices=[d.value for d in Difficulty])
    catalog_parser.set_defaults(func=catalog_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(level=args.log_level, json_output=False if args.console_logs else None)

    try:
        get_generation_config()
        return args.func(args)
    except GenerationConfigLoadError as e:
        logger.error("generation_config_invalid", error=str(e), **e.details)
        print(f"\n❌ Invalid generation config: {e}")
        return 1
    except DomainError as e:
        logger.error("command_failed", code=e.code, error=e.message)
        print(f"\n❌ {e.message}")
        return 1
    finally:
        clear_log_context()


if __name__ == "__main__":
    sys.exit(main())
