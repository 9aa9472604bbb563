"""Exercise tracker: a small HTTP API for logging workouts.

Users are registered by name; each user owns timestamped exercise
entries (description, duration in minutes, date) which can be read back
as a log filtered by date range and capped by count. `main.create_app`
builds the FastAPI application; `python -m exercise_tracker` serves it.
"""
