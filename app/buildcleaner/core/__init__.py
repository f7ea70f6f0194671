"""Core pipeline stages: rule resolution, scanning, planning, execution and reporting."""
