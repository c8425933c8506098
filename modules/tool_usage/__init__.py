"""modules/tool_usage: Local arithmetic tools and external lookups."""
