"""
HRMS report builder.

A Django application exposing a tenant-scoped custom report builder over the
HR entities (employees, attendance, leave, payroll, goals, reviews, training,
expenses, assets and recruitment).
"""

__version__ = "0.1.0"
