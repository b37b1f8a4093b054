"""Users, login and the current session."""
