"""Adaptive sampling subpackage.

This subpackage provides the pieces a lookup table is built from:

- `validate`: checks on the interval, step bounds and target precision
- `stepping`: the derivative-driven step rule and the forward-marching sampler
- `diagnostics`: optional per-sample record of a sampling run
- `batch_eval`: serial or parallel evaluation of a function on a grid

These components work together to support `LookupTable`, which stores the
sampled pairs and answers queries by exact hit or linear interpolation.
"""
