"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and the deadline text format
- task_store.py: in-memory project/task store + query/update helpers
"""
