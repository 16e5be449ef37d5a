from liftplan.catalog.exercise_catalog import ExerciseCatalog, default_catalog

__all__ = ["ExerciseCatalog", "default_catalog"]
