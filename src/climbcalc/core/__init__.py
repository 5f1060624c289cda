"""Core pipeline for climbcalc: IR, errors, settings, and the expression language."""
