"""schemas: Input and output dataclasses for the itinerary planner."""
