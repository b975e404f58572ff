"""
Daybook - Source Package

A personal productivity app with three independent pages:
free-form notes, a daily expense tracker and a work-hours timesheet.

DESIGN PRINCIPLES:
1. Each page owns its data; nothing is shared between pages
2. Every change is written through to storage immediately
3. Storage failures are reported, never fatal
4. Stored data is decoded into typed records at the boundary
"""

__version__ = "1.0.0"
__author__ = "Daybook Team"
