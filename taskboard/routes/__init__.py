"""
Route blueprints for Taskboard.

- api: task CRUD endpoints and the health check
- accounts: registration and login
"""
