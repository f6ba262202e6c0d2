"""Planar robot geometry, Kalman and velocity filters, k-d trees and localization helpers."""

__version__ = "0.1.0"