# src/taskboard/tasks/__init__.py

"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskInsert, TaskUpdate, TaskFormData)
- task_service.py: data-access wrapper over the hosted "tasks" collection
"""
