"""HTTP blueprints for the planner application."""
