"""
Core access-control logic.

This module is framework-agnostic - it doesn't import FastAPI, motor,
or any infrastructure concerns. Resources reach it through the accessor
protocol, so the rules can be tested against plain test doubles.
"""
