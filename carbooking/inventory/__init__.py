"""Car inventory."""
