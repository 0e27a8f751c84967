"""Resource scheduling domain: resources, assignments, availability and utilization."""
