"""modules/optimization: Intra-day route ordering."""
