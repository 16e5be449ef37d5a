"""Built-in exercise table."""
from __future__ import annotations

from liftplan.models.enums import Difficulty, Equipment, ExerciseFocus, MuscleGroup
from liftplan.models.exercise import Exercise

M = MuscleGroup
E = Equipment
BEGINNER = Difficulty.BEGINNER
ADVANCED = Difficulty.ADVANCED
MOBILITY = ExerciseFocus.MOBILITY


def _ex(
    name: str,
    primary: list[MuscleGroup],
    secondary: list[MuscleGroup] | None = None,
    *,
    equipment: Equipment,
    compound: bool,
    difficulty: Difficulty = Difficulty.INTERMEDIATE,
    focus: ExerciseFocus = ExerciseFocus.STRENGTH,
) -> Exercise:
    return Exercise(
        name=name,
        primary_muscles=tuple(primary),
        secondary_muscles=tuple(secondary or ()),
        equipment=equipment,
        is_compound=compound,
        difficulty=difficulty,
        focus=focus,
    )


DEFAULT_EXERCISES: tuple[Exercise, ...] = (
    # Chest
    _ex("Bench Press", [M.CHEST_LOWER], [M.TRICEPS, M.SHOULDER_FRONT], equipment=E.BARBELL, compound=True),
    _ex("Incline Bench Press", [M.CHEST_UPPER], [M.SHOULDER_FRONT, M.TRICEPS], equipment=E.BARBELL, compound=True),
    _ex("Dumbbell Press", [M.CHEST_LOWER], [M.TRICEPS, M.SHOULDER_FRONT], equipment=E.DUMBBELL, compound=True),
    _ex("Incline Dumbbell Press", [M.CHEST_UPPER], [M.SHOULDER_FRONT, M.TRICEPS], equipment=E.DUMBBELL, compound=True),
    _ex("Push-ups", [M.CHEST_LOWER], [M.TRICEPS, M.SHOULDER_FRONT], equipment=E.BODYWEIGHT, compound=True, difficulty=BEGINNER),
    _ex("Cable Fly", [M.CHEST_LOWER], equipment=E.CABLE, compound=False),
    _ex("Dumbbell Fly", [M.CHEST_LOWER], equipment=E.DUMBBELL, compound=False),
    # Back
    _ex("Deadlift", [M.BACK_THICKNESS, M.HAMSTRINGS, M.GLUTES], [M.ABS], equipment=E.BARBELL, compound=True, difficulty=ADVANCED),
    _ex("Barbell Row", [M.BACK_THICKNESS], [M.BICEPS, M.SHOULDER_REAR], equipment=E.BARBELL, compound=True),
    _ex("Pull-ups", [M.BACK_WIDTH], [M.BICEPS], equipment=E.BODYWEIGHT, compound=True),
    _ex("Lat Pulldown", [M.BACK_WIDTH], [M.BICEPS], equipment=E.CABLE, compound=True),
    _ex("Dumbbell Row", [M.BACK_THICKNESS], [M.BICEPS], equipment=E.DUMBBELL, compound=True),
    _ex("Seated Cable Row", [M.BACK_THICKNESS], [M.BICEPS], equipment=E.CABLE, compound=True),
    _ex("T-Bar Row", [M.BACK_THICKNESS], [M.BICEPS], equipment=E.BARBELL, compound=True),
    # Shoulders
    _ex("Overhead Press", [M.SHOULDER_FRONT], [M.SHOULDER_SIDE, M.TRICEPS], equipment=E.BARBELL, compound=True),
    _ex("Dumbbell Shoulder Press", [M.SHOULDER_FRONT], [M.SHOULDER_SIDE, M.TRICEPS], equipment=E.DUMBBELL, compound=True),
    _ex("Lateral Raise", [M.SHOULDER_SIDE], equipment=E.DUMBBELL, compound=False),
    _ex("Front Raise", [M.SHOULDER_FRONT], equipment=E.DUMBBELL, compound=False),
    _ex("Face Pull", [M.SHOULDER_REAR], [M.BACK_THICKNESS], equipment=E.CABLE, compound=False),
    _ex("Arnold Press", [M.SHOULDER_FRONT], [M.SHOULDER_SIDE, M.TRICEPS], equipment=E.DUMBBELL, compound=True),
    # Arms
    _ex("Barbell Curl", [M.BICEPS], equipment=E.BARBELL, compound=False),
    _ex("Dumbbell Curl", [M.BICEPS], equipment=E.DUMBBELL, compound=False),
    _ex("Hammer Curl", [M.BICEPS], equipment=E.DUMBBELL, compound=False),
    _ex("Preacher Curl", [M.BICEPS], equipment=E.DUMBBELL, compound=False),
    _ex("Tricep Pushdown", [M.TRICEPS], equipment=E.CABLE, compound=False),
    _ex("Skull Crusher", [M.TRICEPS], equipment=E.BARBELL, compound=False),
    _ex("Overhead Tricep Extension", [M.TRICEPS], equipment=E.DUMBBELL, compound=False),
    _ex("Dips", [M.CHEST_LOWER, M.TRICEPS], [M.SHOULDER_FRONT], equipment=E.BODYWEIGHT, compound=True),
    # Legs
    _ex("Squat", [M.QUADS], [M.GLUTES, M.ABS], equipment=E.BARBELL, compound=True),
    _ex("Front Squat", [M.QUADS], [M.GLUTES, M.ABS], equipment=E.BARBELL, compound=True, difficulty=ADVANCED),
    _ex("Leg Press", [M.QUADS], [M.GLUTES], equipment=E.MACHINE, compound=True),
    _ex("Romanian Deadlift", [M.HAMSTRINGS, M.GLUTES], [M.BACK_THICKNESS], equipment=E.BARBELL, compound=True),
    _ex("Leg Curl", [M.HAMSTRINGS], equipment=E.MACHINE, compound=False),
    _ex("Leg Extension", [M.QUADS], equipment=E.MACHINE, compound=False),
    _ex("Lunges", [M.QUADS, M.GLUTES], [M.ABS], equipment=E.DUMBBELL, compound=True),
    _ex("Bulgarian Split Squat", [M.QUADS, M.GLUTES], equipment=E.DUMBBELL, compound=True),
    _ex("Calf Raise", [M.CALVES], equipment=E.MACHINE, compound=False),
    # Core
    _ex("Plank", [M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER),
    _ex("Crunches", [M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER),
    _ex("Cable Crunch", [M.ABS], equipment=E.CABLE, compound=False),
    _ex("Hanging Leg Raise", [M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=ADVANCED),
    _ex("Russian Twist", [M.ABS], equipment=E.BODYWEIGHT, compound=False),
    # Mobility
    _ex("Scapular Push-up", [M.SHOULDER_REAR, M.SHOULDER_FRONT], [M.CHEST_UPPER], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Wall Slides", [M.SHOULDER_REAR, M.SHOULDER_SIDE], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Thoracic Rotation", [M.BACK_THICKNESS, M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Cat-Cow", [M.BACK_THICKNESS, M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Hip Airplane", [M.GLUTES, M.HAMSTRINGS], [M.ABS], equipment=E.BODYWEIGHT, compound=False, difficulty=ADVANCED, focus=MOBILITY),
    _ex("90/90 Hip Switch", [M.GLUTES, M.HAMSTRINGS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Deep Squat Hold", [M.QUADS, M.GLUTES, M.CALVES], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Ankle Dorsiflexion Drill", [M.CALVES], equipment=E.BAND, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Cossack Squat", [M.QUADS, M.GLUTES, M.HAMSTRINGS], equipment=E.BODYWEIGHT, compound=False, focus=MOBILITY),
    _ex("Dead Bug", [M.ABS], [M.GLUTES], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Bird Dog", [M.ABS, M.GLUTES], [M.BACK_THICKNESS], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Side Plank Reach", [M.ABS, M.SHOULDER_SIDE], equipment=E.BODYWEIGHT, compound=False, difficulty=BEGINNER, focus=MOBILITY),
    _ex("Goblet Squat Hold", [M.QUADS, M.GLUTES, M.ABS], equipment=E.DUMBBELL, compound=False, focus=MOBILITY),
    _ex("Farmer Carry", [M.BACK_THICKNESS, M.ABS, M.GLUTES], equipment=E.DUMBBELL, compound=True, focus=MOBILITY),
    _ex("Single-Arm Overhead Carry", [M.SHOULDER_SIDE, M.ABS, M.GLUTES], equipment=E.DUMBBELL, compound=False, focus=MOBILITY),
    _ex("Turkish Get-Up", [M.SHOULDER_FRONT, M.ABS, M.GLUTES], [M.HAMSTRINGS], equipment=E.DUMBBELL, compound=True, difficulty=ADVANCED, focus=MOBILITY),
)
