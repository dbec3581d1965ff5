"""Use cases: orchestration of workflow rules over repositories and collaborators."""
