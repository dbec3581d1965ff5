"""SQLAlchemy persistence: engine, models and repositories."""
