# -*- coding: utf-8 -*-
"""
Peak shapes used to synthesize and weight trace data.

Example:
    t = np.arange(20)
    peak = gaussian(t, x=10, w=2, h=100)
"""
import numpy as np
from numpy import exp


def gaussian(t, x=0.0, w=1.0, h=1.0):
    """
    Gaussian of height h centered at x with standard deviation w.
    """
    t = np.asarray(t, dtype=float)
    return h * exp(-0.5 * ((t - x) / w) ** 2)
