"""Attendance Analytics package.

This package is organized by feature modules (policy, scoring, attendance,
analytics, ...). The scoring and analytics modules are pure computation; the
repository/controller layers around them only move data in and out.
"""
