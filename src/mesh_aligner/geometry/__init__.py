from .points import (  # noqa: F401
    FLOATING_TOLERANCE,
    InvalidPointSetError,
    PointDistance,
    as_points,
    centroid,
    mean_ranked_delta,
    rank_point_distances,
)
from .rotations import euler_degrees, rotation_between  # noqa: F401
