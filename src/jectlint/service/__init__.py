"""Host-side services built on the lint engine."""
