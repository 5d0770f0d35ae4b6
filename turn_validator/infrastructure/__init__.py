"""Infrastructure layer: supporting machinery with no validation logic."""
