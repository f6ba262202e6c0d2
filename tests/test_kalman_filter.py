import numpy as np
import pytest

from robonav.kalman_filter import KalmanFilter, KalmanFilterError


def make_filter():
    return KalmanFilter(
        x=[0.0, 0.0],
        A=np.eye(2),
        B=np.eye(2),
        C=np.eye(2),
        Q=0.1 * np.eye(2),
        R=0.5 * np.eye(2),
        P=np.eye(2),
    )


def test_init_rejects_empty_matrix():
    kf = KalmanFilter()
    with pytest.raises(KalmanFilterError):
        kf.init([0.0], np.eye(1), np.zeros((0, 0)), np.eye(1), np.eye(1), np.eye(1), np.eye(1))


def test_init_state_rejects_empty():
    kf = KalmanFilter()
    with pytest.raises(KalmanFilterError):
        kf.init_state([], np.eye(1))


def test_predict_with_identity_adds_input_and_noise():
    kf = make_filter()
    u = np.array([[1.0], [2.0]])
    kf.predict(u)
    np.testing.assert_allclose(kf.x, u)
    np.testing.assert_allclose(kf.P, np.eye(2) + 0.1 * np.eye(2))


def test_predict_shape_mismatch_raises_and_keeps_state():
    kf = make_filter()
    before = kf.x.copy()
    with pytest.raises(KalmanFilterError):
        kf.predict([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(kf.x, before)


def test_predict_state_rejects_wrong_size():
    kf = make_filter()
    with pytest.raises(KalmanFilterError):
        kf.predict_state([1.0], np.eye(2))


def test_update_with_zero_noise_matches_measurement():
    kf = make_filter()
    y = np.array([[3.0], [-1.0]])
    kf.update(y, np.eye(2), np.zeros((2, 2)))
    np.testing.assert_allclose(kf.x, y, atol=1e-12)
    np.testing.assert_allclose(kf.P, np.zeros((2, 2)), atol=1e-12)


def test_update_moves_between_prior_and_measurement_and_shrinks_covariance():
    kf = make_filter()
    kf.update([2.0, 4.0])
    np.testing.assert_allclose(kf.x, np.array([[4.0 / 3.0], [8.0 / 3.0]]))
    np.testing.assert_allclose(kf.P, np.eye(2) / 3.0)


def test_update_singular_innovation_raises():
    kf = KalmanFilter()
    kf.init_state([0.0], [[0.0]])
    with pytest.raises(KalmanFilterError):
        kf.update([1.0], [[1.0]], [[0.0]])


def test_update_with_prediction_uses_given_prediction():
    kf = make_filter()
    kf.update_with_prediction([1.0, 1.0], [1.0, 1.0], np.eye(2), np.eye(2))
    np.testing.assert_allclose(kf.x, np.zeros((2, 1)))


def test_update_measurement_shape_mismatch_raises():
    kf = make_filter()
    with pytest.raises(KalmanFilterError):
        kf.update([1.0, 2.0, 3.0])