"""Round-trip planner: geocode stops and resolve a multi-leg driving itinerary."""
