# robonav

Building blocks for planar mobile-robot localization and control.

## Modules

- `robonav.math_util`: constants (`PI`, `TWO_PI`, `DEG_TO_RAD`, ...) and helpers
  such as `normalize_angle`, `normalize_angle_positive`,
  `shortest_angular_distance`, `lerp`, `sgn`, `in_range`, `approx_eq` and
  `approx_zero`.
- `robonav.vector2`: `Vector2`, an immutable 2D vector with arithmetic,
  `dot`, `cross`, `norm`, `rotated`, `normalized`, `lerp`, `angle_between`
  and `distance`.
- `robonav.transform`: `Transform`, an immutable planar pose `(x, y, theta)`
  with `rotated`, `lerp`, `distance_between` and arithmetic with other
  transforms, vectors and angles.
- `robonav.golden_search`: `golden_search(f, low, high, loop_num=5)`, which
  approximates the minimum of a unimodal function on an interval.
- `robonav.covariance_index`: `CovIndex`, an `IntEnum` giving the flat index
  of each entry (`X_X`, `Y_Y`, `YAW_YAW`, ...) of a row-major 6x6 pose
  covariance.
- `robonav.stop_watch`: `StopWatch`, with any number of named timers started
  by `tic(name)` and read by `toc(name, reset=False)`.
- `robonav.kalman_filter`: `KalmanFilter` with `init`, `init_state`,
  `predict`, `predict_state`, `update` and `update_with_prediction`.
  Wrong matrix shapes, a singular innovation covariance or a non-finite gain
  raise `KalmanFilterError`.
- `robonav.time_delay_kalman_filter`: `TimeDelayKalmanFilter`, which stacks
  the last `max_delay_step` states so measurements of a past state can be
  applied with `update_with_delay`.
- `robonav.velocity_limit_filter`: `VelocityLimitFilter`, which follows its
  input with a bounded rate of change, plus `StateHeldVelocityLimitFilter`,
  `ClampVelLimitFilter` and the building blocks `DiffPair` and `Integrator`.
- `robonav.kd_tree`: `VectorTree` and `VectorDataTree` for nearest-neighbour
  search, and `hash_vector` for hashing a vector of floats.
- `robonav.geometry`: the `Quaternion`, `Pose` and `Twist` value types,
  `make_pose`, `make_twist`, `yaw_from_quaternion`, `quaternion_from_yaw`,
  `pose_to_vector`, `twist_to_vector`, `pose_to_transform` and `rotate_2d`.
- `robonav.umap_image_sender`: `UmapImageSender`, a TCP client that sends a
  PNG edge image with a prior pose to a visual-map matching server and decodes
  the reply into a `UmapResult`. On failure or when `dead_time_ms` passes it
  logs a warning and returns `None`.
- `robonav.umap_client`: `UmapClient` (configured by `UmapClientConfig`),
  which keeps the latest image and pose, asks the server, and turns the reply
  into a `UmapPoseEstimate` with a covariance, compensating for replies that
  arrive late.
- `robonav.velocity_control`: `VelocityController`, a PI controller on the
  velocity error that returns a `Twist` command.
- `robonav.slam_bridge`: `SlamBridge`, which places odometry at a start pose,
  returns the resulting `StampedTransform`, and writes CSV logs of filtered,
  SLAM and visual-map poses.
- `robonav.markers`: `Marker` and `position_marker`, which builds a red
  cylinder marker at a pose in the map frame.

## Install

```
pip install .
```

## Examples

```python
import numpy as np
from robonav.kalman_filter import KalmanFilter
from robonav.math_util import normalize_angle
from robonav.vector2 import Vector2

kf = KalmanFilter()
kf.init(x=np.zeros((1, 1)), A=np.eye(1), B=np.eye(1), C=np.eye(1),
        Q=np.eye(1) * 0.01, R=np.eye(1) * 0.1, P=np.eye(1))
kf.predict(np.array([[1.0]]))
kf.update(np.array([[1.1]]))
print(kf.x, kf.P)

v = Vector2(1.0, 0.0).rotated(np.pi / 2)
print(normalize_angle(4.0), v.angle())
```

```python
from robonav.kd_tree import VectorTree
from robonav.velocity_limit_filter import VelocityLimitFilter

tree = VectorTree([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
print(tree.nearest((0.9, 1.2)))  # (1.0, 1.0)

flt = VelocityLimitFilter(v_max=1.0, ts=0.01)
outputs = [flt.filtering(10.0) for _ in range(100)]
```

```python
from robonav.slam_bridge import SlamBridge
from robonav.transform import Transform

with SlamBridge(start_pos=(1.0, 2.0, 0.0)) as bridge:
    tf = bridge.on_odom(Transform(0.5, 0.0, 0.1), z=0.0, stamp_ns=10, now_ns=20)
```

`SlamBridge` opens `pose_log.csv` and `vgm_log.csv` by default; pass
`pose_log_path` and `umap_log_path` to write elsewhere.

## What the package does not do

- It has no command-line programs and runs no nodes: the components
  (`UmapClient`, `SlamBridge`, `VelocityController`, `position_marker`) are
  plain objects that the caller feeds with readings and times, and whose
  results the caller publishes.
- It does no image processing. `UmapClient.on_image` takes an already encoded
  PNG edge image and the number of edge pixels in it.
- It does not look up transforms between frames. `SlamBridge.on_ekf_odom`
  is given the map pose, or `None` when it is not available.

## Tests

```
pip install .[test]
pytest
```