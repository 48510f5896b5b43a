from mapmyride_sync.models.workout import StoredWorkout
from mapmyride_sync.models.workout_samples import StoredDistance, StoredPosition, StoredSpeed, StoredStep

__all__ = [
    "StoredWorkout",
    "StoredDistance",
    "StoredPosition",
    "StoredSpeed",
    "StoredStep",
]
