"""Generation services.

- **volume_engine**: Weekly split plan -> per-session muscle targets
- **training_profile**: History -> completion rates, recovery, streak, volume
- **strategy_selector**: Profile -> progressive / deload / balancing
- **exercise_selector**: Ranked scores -> selected exercises
- **set_allocator**: Greedy set allocation against muscle targets
- **progression_engine**: Weight progression after completed sessions
- **workout_generator**: End-to-end generation pipeline
- **session_planner**: Retry loop growing duration until targets are covered
- **muscle_tracker**: Weekly per-muscle set and tonnage totals

Import from the submodules directly; the scorer depends on
``generation_types`` and this package stays import-free to keep that
dependency one-way.
"""
