"""Per-user stock watchlists and price alerts."""
