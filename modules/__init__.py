"""modules: Planning pipeline: tools, clustering, scheduling, recommendations."""
