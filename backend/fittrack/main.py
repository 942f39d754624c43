"""
FitTrack - command line interface.

Examples:
    fittrack log cardio 30 --intensity intense --notes "Intervals"
    fittrack checkin 4 high
    fittrack goal --minutes 45 --calories 600
    fittrack today
    fittrack progress --period month --json
"""
import argparse
import asyncio
import json
import sys
from datetime import datetime, time
from typing import List, Optional

from fittrack import __version__
from fittrack.core.config import settings
from fittrack.core.database import create_engine, create_session_factory, init_db
from fittrack.core.exceptions import FitTrackError
from fittrack.core.logging import get_logger, setup_logging
from fittrack.models.records import (
    ENERGY_LABELS,
    EXERCISE_LABELS,
    INTENSITY_LABELS,
    EnergyLevel,
    ExerciseCategory,
    Intensity,
)
from fittrack.services.analytics import (
    Period,
    day_bounds,
    filter_window,
    format_date,
    format_duration,
    format_time,
    group_by_date,
)
from fittrack.services.storage import KeyValueStore
from fittrack.services.tracker import FitnessTracker

logger = get_logger(__name__)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="fittrack",
        description="Log workouts and check-ins, and view daily/weekly/monthly statistics.",
        epilog="Example: fittrack log cardio 30 --intensity moderate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--db",
        default=settings.DATABASE_URL,
        help=f"Database URL (default: {settings.DATABASE_URL})",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        help="Treat this ISO timestamp as the current time",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    subparsers = parser.add_subparsers(dest="command", required=True)

    log = subparsers.add_parser("log", help="Log a workout")
    log.add_argument("category", choices=[c.value for c in ExerciseCategory])
    log.add_argument("duration", type=int, help="Duration in minutes")
    log.add_argument(
        "--intensity",
        choices=[i.value for i in Intensity],
        default=Intensity.MODERATE.value,
    )
    log.add_argument("--notes", default="")
    log.add_argument("--at", type=datetime.fromisoformat, help="When the workout happened")

    checkin = subparsers.add_parser("checkin", help="Record a mood/energy check-in")
    checkin.add_argument("mood", type=int, choices=range(1, 6))
    checkin.add_argument("energy", choices=[e.value for e in EnergyLevel])
    checkin.add_argument("--notes", default="")
    checkin.add_argument("--at", type=datetime.fromisoformat, help="When the check-in happened")

    goal = subparsers.add_parser("goal", help="Show or set the daily goal")
    goal.add_argument("--minutes", type=int)
    goal.add_argument("--calories", type=int)

    subparsers.add_parser("today", help="Show today's summary and goal progress")

    progress = subparsers.add_parser("progress", help="Show statistics for a period")
    progress.add_argument(
        "--period",
        choices=[Period.WEEK.value, Period.MONTH.value, "all"],
        default=Period.WEEK.value,
    )
    progress.add_argument(
        "--distinct-days",
        action="store_true",
        help="Count each day at most once in the streak",
    )

    listing = subparsers.add_parser("list", help="List workouts by day")
    listing.add_argument("--date", type=lambda s: datetime.strptime(s, "%Y-%m-%d").date())

    delete = subparsers.add_parser("delete", help="Delete a workout")
    delete.add_argument("workout_id")

    subparsers.add_parser("reset", help="Delete all data")

    return parser


# =============================================================================
# COMMANDS
# =============================================================================

def _emit(args: argparse.Namespace, payload, text: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print(text)


def _workout_line(workout, tz) -> str:
    notes = f" - {workout.notes}" if workout.notes else ""
    return (
        f"  {format_time(workout.timestamp_millis, tz)}  "
        f"{EXERCISE_LABELS[workout.exercise_category]:<12}"
        f"{format_duration(workout.duration_minutes):>7}  "
        f"{INTENSITY_LABELS[workout.intensity]:<9}"
        f"{workout.calories:>5} cal  [{workout.id[:8]}]{notes}"
    )


async def _run(args: argparse.Namespace) -> int:
    engine = create_engine(args.db)
    try:
        await init_db(engine)
        kv = KeyValueStore(create_session_factory(engine))

        clock = (lambda: args.now) if args.now else None
        tracker = FitnessTracker(kv, clock=clock)
        await tracker.load()

        return await COMMANDS[args.command](tracker, args)
    finally:
        await engine.dispose()


async def cmd_log(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    workout = await tracker.add_workout(
        args.category,
        args.duration,
        args.intensity,
        notes=args.notes,
        timestamp=args.at,
    )
    _emit(
        args,
        workout.to_dict(),
        f"Logged {EXERCISE_LABELS[workout.exercise_category]} "
        f"({format_duration(workout.duration_minutes)}, {workout.calories} cal) "
        f"id={workout.id}",
    )
    return 0


async def cmd_checkin(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    check_in = await tracker.add_check_in(
        args.mood,
        args.energy,
        notes=args.notes,
        timestamp=args.at,
    )
    _emit(
        args,
        check_in.to_dict(),
        f"Checked in: mood {check_in.mood}/5, energy {ENERGY_LABELS[check_in.energy]}",
    )
    return 0


async def cmd_goal(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    goal = tracker.daily_goal
    if args.minutes is not None or args.calories is not None:
        goal = await tracker.set_daily_goal(
            args.minutes if args.minutes is not None else goal.target_minutes,
            args.calories if args.calories is not None else goal.target_calories,
        )

    _emit(
        args,
        goal.to_dict(),
        f"Daily goal: {format_duration(goal.target_minutes)}, {goal.target_calories} cal",
    )
    return 0


async def cmd_today(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    summary = tracker.today_summary()
    progress = tracker.today_progress()
    check_in = tracker.today_check_in()
    goal = tracker.daily_goal

    lines = [
        f"Today, {format_date(tracker.now(), tracker.tz)}",
        f"  Workouts: {summary.count}",
        f"  Minutes:  {summary.total_minutes} / {goal.target_minutes} "
        f"({progress.minutes_progress:.0%})",
        f"  Calories: {summary.total_calories} / {goal.target_calories} "
        f"({progress.calories_progress:.0%})",
    ]
    if progress.achieved:
        lines.append("  Goal reached!")
    if check_in:
        lines.append(
            f"  Check-in: mood {check_in.mood}/5, energy {ENERGY_LABELS[check_in.energy]}"
        )

    _emit(
        args,
        {
            "summary": summary.to_dict(),
            "goal": goal.to_dict(),
            "progress": progress.to_dict(),
            "checkIn": check_in.to_dict() if check_in else None,
        },
        "\n".join(lines),
    )
    return 0


async def cmd_progress(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    period = None if args.period == "all" else args.period
    stats = tracker.stats(period, distinct_days=args.distinct_days)

    lines = [
        f"Progress ({args.period})",
        f"  Workouts:     {stats.total_workouts}",
        f"  Total time:   {format_duration(stats.total_minutes)}",
        f"  Calories:     {stats.total_calories}",
        f"  Avg duration: {format_duration(stats.average_duration)}",
        f"  Streak:       {stats.current_streak} day(s)",
        "  Breakdown:",
    ]
    lines.extend(
        f"    {EXERCISE_LABELS[category]:<12}{count}"
        for category, count in stats.exercise_breakdown.items()
    )

    _emit(args, stats.to_dict(), "\n".join(lines))
    return 0


async def cmd_list(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    workouts = sorted(tracker.workouts, key=lambda w: w.timestamp_millis, reverse=True)
    if args.date:
        day = datetime.combine(args.date, time.min)
        workouts = filter_window(workouts, day_bounds(day, tracker.tz))

    lines = []
    for items in group_by_date(workouts, tracker.tz).values():
        lines.append(format_date(items[0].timestamp_millis, tracker.tz))
        lines.extend(_workout_line(w, tracker.tz) for w in items)

    _emit(args, [w.to_dict() for w in workouts], "\n".join(lines) or "No workouts logged")
    return 0


async def cmd_delete(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    deleted = await tracker.delete_workout(args.workout_id)
    _emit(
        args,
        {"id": args.workout_id, "deleted": deleted},
        f"Deleted {args.workout_id}" if deleted else f"No workout with id {args.workout_id}",
    )
    return 0 if deleted else 1


async def cmd_reset(tracker: FitnessTracker, args: argparse.Namespace) -> int:
    await tracker.reset()
    _emit(args, {"reset": True}, "All data cleared")
    return 0


COMMANDS = {
    "log": cmd_log,
    "checkin": cmd_checkin,
    "goal": cmd_goal,
    "today": cmd_today,
    "progress": cmd_progress,
    "list": cmd_list,
    "delete": cmd_delete,
    "reset": cmd_reset,
}


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = create_parser().parse_args(argv)
    setup_logging()
    logger.debug("Running command", command=args.command)

    try:
        return asyncio.run(_run(args))
    except (FitTrackError, ValueError) as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
