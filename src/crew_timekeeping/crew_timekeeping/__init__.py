"""Crew Timekeeping package.

Organized by feature modules (timeblocks, clock, segments, payroll, ...) with
a thin Flask controller layer on top of service/repository layers.
"""
